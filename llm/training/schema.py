"""
Training corpus and fine-tuning job schema.

Each corpus line is one TrainingRecord: a system turn with fixed
instructions, the user question and the assistant answer, in that order.
This is the supervised chat format the remote fine-tuning service expects.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

REQUIRED_ROLES = ("system", "user", "assistant")


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class TrainingRecord(BaseModel):
    """
    Single supervised fine-tuning sample.
    """

    messages: List[ChatMessage] = Field(min_length=3, max_length=3)

    @model_validator(mode="after")
    def _check_turn_order(self) -> "TrainingRecord":
        roles = tuple(message.role for message in self.messages)
        if roles != REQUIRED_ROLES:
            raise ValueError(f"messages must be ordered {REQUIRED_ROLES}, got {roles}")
        return self


class JobStatus(str, Enum):
    """
    Remote fine-tuning job states. The remote service is the only writer.
    """

    VALIDATING_FILES = "validating_files"
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


TERMINAL_STATUSES = frozenset({JobStatus.SUCCEEDED, JobStatus.FAILED, JobStatus.CANCELLED})


class FineTuneJob(BaseModel):
    """
    Snapshot of a remote job as observed by one poll.

    status is kept as the raw string so statuses added by the provider later
    are treated as non-terminal instead of failing validation.
    """

    id: str
    status: str
    fine_tuned_model: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in {status.value for status in TERMINAL_STATUSES}


class FineTuneResult(BaseModel):
    """
    Successful end-to-end fine-tuning run.
    """

    model_id: str
    job_id: str
    file_id: str
    valid_examples: int = Field(ge=0)


class CorpusReport(BaseModel):
    """
    Operator summary of one corpus-building run.
    """

    pages_scraped: int = Field(0, ge=0)
    pages_failed: int = Field(0, ge=0)
    examples_generated: int = Field(0, ge=0)
    examples_dropped: int = Field(0, ge=0)
    examples_written: int = Field(0, ge=0)
    total_cost: float = Field(0.0, ge=0.0)
    output_file: str
    skipped_reasons: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.examples_written == 0
