"""
Drop-and-log filtering shared by every stage that tolerates bad items.

A single malformed page, generated item or corpus line must not abort the
stage that processes it. Callers supply a conversion function that either
returns the accepted value or raises; the failures are counted and their
reasons kept for the operator report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, List, Tuple, Type, TypeVar

from pydantic import ValidationError

from .exceptions import SiteTuneError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# Errors treated as "this item is bad" rather than "the stage is broken".
ITEM_ERRORS: Tuple[Type[Exception], ...] = (SiteTuneError, ValidationError, ValueError, TypeError)


@dataclass
class FilterResult(Generic[T]):
    """
    Outcome of a tolerant pass over a sequence.

    Attributes:
        accepted: converted items, in input order
        skipped: number of items dropped
        reasons: one human-readable reason per dropped item
    """

    accepted: List[T] = field(default_factory=list)
    skipped: int = 0
    reasons: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.accepted) + self.skipped


def filter_with_diagnostics(
    items: Iterable[R],
    convert: Callable[[R], T],
    label: Callable[[int, R], str] = lambda index, _item: f"item {index}",
    errors: Tuple[Type[Exception], ...] = ITEM_ERRORS,
) -> FilterResult[T]:
    """
    Convert each item, dropping those whose conversion raises.

    Args:
        items: input sequence
        convert: returns the accepted value or raises one of ``errors``
        label: builds the diagnostic prefix for a dropped item (1-based index)
        errors: exception types absorbed as per-item failures

    Returns:
        FilterResult with accepted items, skipped count and reasons

    Notes:
        - Exceptions outside ``errors`` propagate unchanged
        - Every dropped item is logged at WARNING level
    """
    result: FilterResult[T] = FilterResult()

    for index, item in enumerate(items, start=1):
        try:
            result.accepted.append(convert(item))
        except errors as e:
            reason = f"{label(index, item)}: {_describe(e)}"
            logger.warning("Skipping %s", reason)
            result.skipped += 1
            result.reasons.append(reason)

    return result


def _describe(error: Exception) -> str:
    if isinstance(error, ValidationError):
        first = error.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ())) or "value"
        return f"{location}: {first.get('msg', 'invalid')}"
    return str(error) or type(error).__name__
