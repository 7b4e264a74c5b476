"""
Core module: Configuration, logging, exception handling and tolerant filtering.
"""

from .config import (
    Config,
    FineTuneConfig,
    GenerationConfig,
    PageSource,
    ScraperConfig,
    config,
)
from .exceptions import (
    ConfigurationError,
    FetchError,
    GenerationError,
    InsufficientDataError,
    JobCreationError,
    NoContentError,
    NotFoundError,
    PollLimitReachedError,
    RecordParseError,
    SiteTuneError,
    TrainingCancelledError,
    TrainingFailedError,
    UploadError,
    hint_for,
)
from .filtering import FilterResult, filter_with_diagnostics

__all__ = [
    "Config",
    "FineTuneConfig",
    "GenerationConfig",
    "PageSource",
    "ScraperConfig",
    "config",
    "SiteTuneError",
    "ConfigurationError",
    "FetchError",
    "NoContentError",
    "GenerationError",
    "RecordParseError",
    "NotFoundError",
    "InsufficientDataError",
    "UploadError",
    "JobCreationError",
    "TrainingFailedError",
    "TrainingCancelledError",
    "PollLimitReachedError",
    "hint_for",
    "FilterResult",
    "filter_with_diagnostics",
]
