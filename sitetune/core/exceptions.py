"""
Custom exceptions for the site fine-tuning pipeline.

These exceptions provide clear error semantics across the system.
Item-level errors (FetchError, RecordParseError) are absorbed by the stage
that raises them; everything else aborts the run.
"""

from __future__ import annotations


class SiteTuneError(Exception):
    """Base exception for pipeline failures."""
    pass


class ConfigurationError(SiteTuneError):
    """Raised when a required setting or credential is missing."""
    pass


class FetchError(SiteTuneError):
    """Raised when a single page cannot be downloaded."""
    pass


class NoContentError(SiteTuneError):
    """Raised when every configured page failed to download."""
    pass


class GenerationError(SiteTuneError):
    """Raised when the generation call fails or returns unusable content."""
    pass


class RecordParseError(SiteTuneError):
    """Raised when one corpus line or generated item is malformed."""
    pass


class NotFoundError(SiteTuneError):
    """Raised when the corpus file does not exist."""
    pass


class InsufficientDataError(SiteTuneError):
    """Raised when the corpus has fewer valid examples than required."""
    pass


class UploadError(SiteTuneError):
    """Raised when the corpus upload fails."""
    pass


class JobCreationError(SiteTuneError):
    """Raised when the fine-tuning job cannot be created."""
    pass


class TrainingFailedError(SiteTuneError):
    """Raised when the remote job ends in the failed state."""

    def __init__(self, message: str):
        super().__init__(f"Fine-tuning failed: {message}")
        self.message = message


class TrainingCancelledError(SiteTuneError):
    """Raised when the remote job ends in the cancelled state."""
    pass


class PollLimitReachedError(SiteTuneError):
    """Raised when a capped poll loop runs out of attempts."""
    pass


def hint_for(error: Exception) -> str | None:
    """
    Return an actionable operator hint for recognizable failures.
    """
    if isinstance(error, NotFoundError):
        return "Make sure the training file (default training_data.jsonl) exists in the current directory"
    if isinstance(error, ConfigurationError):
        return "Set OPENAI_API_KEY in your .env file"
    if isinstance(error, InsufficientDataError):
        return "Generate more examples (SITETUNE_GENERATION__TRAINING_EXAMPLES) or fix the skipped lines"
    return None
