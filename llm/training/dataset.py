"""
Corpus assembly.

Wraps accepted Q/A pairs into TrainingRecords and persists them as JSONL,
one self-contained JSON object per line.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Union

from llm.schema import TrainingExample

from .schema import ChatMessage, TrainingRecord

logger = logging.getLogger("llm.training.dataset")

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant. Answer questions accurately based on the website content."
)


def build_record(example: TrainingExample, system_prompt: str = DEFAULT_SYSTEM_PROMPT) -> TrainingRecord:
    """
    Build the three-turn training record for one Q/A pair.
    """

    return TrainingRecord(
        messages=[
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=example.question),
            ChatMessage(role="assistant", content=example.answer),
        ]
    )


def build_records(
    examples: Iterable[TrainingExample], system_prompt: str = DEFAULT_SYSTEM_PROMPT
) -> List[TrainingRecord]:
    return [build_record(example, system_prompt) for example in examples]


def serialize_record(record: TrainingRecord) -> str:
    """
    Serialize one record as a single JSONL line (no trailing newline).
    """

    return json.dumps(record.model_dump(), ensure_ascii=False)


def write_corpus(records: Iterable[TrainingRecord], path: Union[str, Path]) -> int:
    """
    Write records to ``path`` as JSONL, replacing any existing file.

    Returns:
        Number of records written. Zero means nothing was written and any
        existing file at ``path`` was left untouched.
    """

    lines = [serialize_record(record) for record in records]
    if not lines:
        logger.error("No training data to save!")
        return 0

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")

    logger.info("Saved %d examples to %s", len(lines), path)
    return len(lines)
