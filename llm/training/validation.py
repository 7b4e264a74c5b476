"""
Corpus validation before upload.

Works on any JSONL file, not only the ones written by write_corpus, so the
checks are deliberately looser than TrainingRecord: a line only needs a
messages array with at least two entries including a user and an assistant
turn. Bad lines are skipped and counted; too few good lines is fatal.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from sitetune.core.exceptions import InsufficientDataError, NotFoundError, RecordParseError
from sitetune.core.filtering import FilterResult, filter_with_diagnostics

logger = logging.getLogger("llm.training.validation")

MIN_EXAMPLES = 10


def parse_corpus_line(line: Union[str, bytes]) -> Dict[str, Any]:
    """
    Parse and check one corpus line.

    Raises:
        RecordParseError: line is not UTF-8 JSON or lacks the required structure
    """

    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RecordParseError(f"invalid UTF-8 ({e.reason})") from e

    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise RecordParseError(f"invalid JSON ({e.msg})") from e

    if not isinstance(data, dict):
        raise RecordParseError("line is not a JSON object")

    messages = data.get("messages")
    if not isinstance(messages, list) or len(messages) < 2:
        raise RecordParseError("invalid structure: need a messages array with at least 2 entries")

    has_user = any(isinstance(m, dict) and m.get("role") == "user" for m in messages)
    has_assistant = any(isinstance(m, dict) and m.get("role") == "assistant" for m in messages)
    if not has_user or not has_assistant:
        raise RecordParseError("missing user or assistant message")

    return data


def _read_lines(path: Union[str, Path]) -> Tuple[Path, List[bytes]]:
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f"Training file not found: {path}")
    # Decoded per line so one bad byte sequence only costs its own line
    content = path.read_bytes()
    return path, [line for line in content.split(b"\n") if line.strip()]


def _parse_lines(lines: List[bytes]) -> FilterResult[Dict[str, Any]]:
    return filter_with_diagnostics(
        lines,
        parse_corpus_line,
        label=lambda index, _line: f"line {index}",
        errors=(RecordParseError,),
    )


def load_corpus(path: Union[str, Path]) -> FilterResult[Dict[str, Any]]:
    """
    Parse every non-blank line of a corpus file.

    Returns:
        FilterResult of parsed line objects; reasons carry 1-based line numbers

    Raises:
        NotFoundError: if the file does not exist
    """

    _, lines = _read_lines(path)
    return _parse_lines(lines)


def validate_corpus(path: Union[str, Path], min_examples: int = MIN_EXAMPLES) -> int:
    """
    Validate a corpus file and return the number of valid examples.

    Raises:
        NotFoundError: if the file does not exist
        InsufficientDataError: fewer than ``min_examples`` lines, or fewer
            than ``min_examples`` valid lines
    """

    logger.info("Validating training data format...")
    path, lines = _read_lines(path)

    if len(lines) < min_examples:
        raise InsufficientDataError(f"Need at least {min_examples} examples. Found: {len(lines)}")

    result = _parse_lines(lines)
    valid = len(result.accepted)

    if valid < min_examples:
        raise InsufficientDataError(f"Need at least {min_examples} valid examples. Found: {valid}")

    logger.info("Validation passed: %d valid examples (%d skipped) in %s", valid, result.skipped, path)
    return valid
