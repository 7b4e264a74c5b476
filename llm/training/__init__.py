"""
Corpus assembly, validation and remote fine-tuning.
"""

from .dataset import DEFAULT_SYSTEM_PROMPT, build_record, build_records, serialize_record, write_corpus
from .orchestrator import FineTuneOrchestrator, job_from_response
from .schema import (
    ChatMessage,
    CorpusReport,
    FineTuneJob,
    FineTuneResult,
    JobStatus,
    TERMINAL_STATUSES,
    TrainingRecord,
)
from .validation import MIN_EXAMPLES, load_corpus, parse_corpus_line, validate_corpus

__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "build_record",
    "build_records",
    "serialize_record",
    "write_corpus",
    "FineTuneOrchestrator",
    "job_from_response",
    "ChatMessage",
    "CorpusReport",
    "FineTuneJob",
    "FineTuneResult",
    "JobStatus",
    "TERMINAL_STATUSES",
    "TrainingRecord",
    "MIN_EXAMPLES",
    "load_corpus",
    "parse_corpus_line",
    "validate_corpus",
]
