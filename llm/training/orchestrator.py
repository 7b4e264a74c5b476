"""
Remote fine-tuning job orchestration.

Uploads a validated corpus, creates a supervised fine-tuning job and polls it
until the remote service reports a terminal state. The orchestrator never
changes job state itself; stopping the process abandons the poll loop while
the remote job keeps running.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

import openai

from sitetune.core.config import FineTuneConfig
from sitetune.core.exceptions import (
    JobCreationError,
    PollLimitReachedError,
    TrainingCancelledError,
    TrainingFailedError,
    UploadError,
)

from .schema import FineTuneJob, FineTuneResult, JobStatus
from .validation import validate_corpus

logger = logging.getLogger("llm.training.orchestrator")


def job_from_response(job: Any) -> FineTuneJob:
    """
    Convert an SDK job object into a FineTuneJob snapshot.
    """

    status = getattr(job.status, "value", job.status)
    error = getattr(job, "error", None)
    message = getattr(error, "message", None) if error is not None else None
    return FineTuneJob(
        id=job.id,
        status=str(status),
        fine_tuned_model=getattr(job, "fine_tuned_model", None),
        error=message or None,
    )


@dataclass
class FineTuneOrchestrator:
    """
    Supervised fine-tuning workflow.

    - Uploads the corpus with purpose "fine-tune".
    - Creates the job.
    - Polls on a fixed interval with no wall-clock limit.

    max_polls exists for tests; production callers leave it unset.
    """

    client: Any
    model: str
    poll_interval: float = 30.0
    min_examples: int = 10
    sleep: Callable[[float], None] = time.sleep
    max_polls: Optional[int] = None

    @classmethod
    def from_config(cls, client: Any, settings: FineTuneConfig, **kwargs: Any) -> "FineTuneOrchestrator":
        return cls(
            client=client,
            model=settings.model,
            poll_interval=settings.poll_interval,
            min_examples=settings.min_examples,
            **kwargs,
        )

    def upload(self, path: Union[str, Path]) -> str:
        logger.info("Uploading training file %s...", path)
        try:
            with open(path, "rb") as f:
                uploaded = self.client.files.create(file=f, purpose="fine-tune")
        except (openai.OpenAIError, OSError) as exc:
            raise UploadError(f"Failed to upload {path}: {exc}") from exc

        logger.info("File uploaded: %s", uploaded.id)
        return uploaded.id

    def create_job(self, file_id: str) -> str:
        logger.info("Creating fine-tuning job with model: %s", self.model)
        try:
            job = self.client.fine_tuning.jobs.create(
                training_file=file_id,
                model=self.model,
                method={"type": "supervised"},
            )
        except openai.OpenAIError as exc:
            raise JobCreationError(f"Failed to create fine-tuning job: {exc}") from exc

        logger.info("Fine-tuning job created: %s", job.id)
        return job.id

    def wait_for_completion(self, job_id: str) -> str:
        """
        Poll the job until it reaches a terminal state.

        Returns:
            The fine-tuned model identifier

        Raises:
            TrainingFailedError: job failed (carries the remote message)
            TrainingCancelledError: job was cancelled
            PollLimitReachedError: max_polls was set and exhausted
        """

        logger.info("Monitoring fine-tuning job %s...", job_id)
        polls = 0

        while True:
            job = job_from_response(self.client.fine_tuning.jobs.retrieve(job_id))
            polls += 1
            logger.info("Status: %s", job.status)

            if job.status == JobStatus.SUCCEEDED.value:
                logger.info("Fine-tuning completed successfully: %s", job.fine_tuned_model)
                return job.fine_tuned_model or ""

            if job.status == JobStatus.FAILED.value:
                raise TrainingFailedError(job.error or "Unknown error")

            if job.status == JobStatus.CANCELLED.value:
                raise TrainingCancelledError("Fine-tuning was cancelled")

            if self.max_polls is not None and polls >= self.max_polls:
                raise PollLimitReachedError(f"Job {job_id} still {job.status} after {polls} polls")

            self.sleep(self.poll_interval)

    def run(self, path: Union[str, Path]) -> FineTuneResult:
        """
        Validate, upload, create and wait. Nothing is rolled back on failure.
        """

        valid_examples = validate_corpus(path, min_examples=self.min_examples)
        file_id = self.upload(path)
        job_id = self.create_job(file_id)
        model_id = self.wait_for_completion(job_id)
        return FineTuneResult(
            model_id=model_id,
            job_id=job_id,
            file_id=file_id,
            valid_examples=valid_examples,
        )
