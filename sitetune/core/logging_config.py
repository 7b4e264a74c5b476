"""
Logging configuration for the pipeline scripts and the chat backend.

Each top-level package ("sitetune", "llm", "backend") gets a console handler
and a rotating file under logs_dir; module loggers propagate to them.
"""

import logging
import logging.handlers
from typing import Iterable, List, Optional

from .config import Config, config

PACKAGE_LOGGERS = ("sitetune", "llm", "backend")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(logger_name: str = "sitetune", settings: Optional[Config] = None) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        logger_name: Name of the logger (a top-level package)
        settings: Config providing log_level and logs_dir (defaults to the global config)

    Returns:
        Configured logger instance
    """
    settings = settings or config
    logger = logging.getLogger(logger_name)

    # Already configured by an earlier call
    if logger.handlers:
        return logger

    logger.setLevel(settings.log_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    settings.logs_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        settings.logs_dir / f"{logger_name}.log",
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger


def configure_package_logging(
    settings: Optional[Config] = None, names: Iterable[str] = PACKAGE_LOGGERS
) -> List[logging.Logger]:
    """Set up every package logger used by a command-line entry point."""
    return [setup_logging(name, settings) for name in names]
