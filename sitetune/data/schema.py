"""
Structured page content for the training-data pipeline.

Every scraped page is reduced to an ExtractedContent record before it reaches
the generation prompt. Collections are bounded so the prompt size stays
predictable regardless of how large the source page is.

Design rationale:
- Minimal fields (only what the prompt formatter renders)
- Order-preserving collections, truncated to their caps
- Immutable once created
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from sitetune.core.config import PageSource

MAX_HEADINGS = 10
MAX_PARAGRAPHS = 15
MAX_LIST_ITEMS = 20


class ExtractedContent(BaseModel):
    """
    Canonical representation of one scraped page.

    Attributes:
        url: Source URL
        content_type: Label copied from the PageSource
        title: Text of the <title> element (may be empty)
        meta_description: content of <meta name="description"> (may be empty)
        headings: h1-h4 texts, at most 10
        paragraphs: <p> texts, at most 15
        list_items: <li> texts from ul/ol, at most 20
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1)
    content_type: str = Field(..., min_length=1)
    title: str = ""
    meta_description: str = ""
    headings: List[str] = Field(default_factory=list, max_length=MAX_HEADINGS)
    paragraphs: List[str] = Field(default_factory=list, max_length=MAX_PARAGRAPHS)
    list_items: List[str] = Field(default_factory=list, max_length=MAX_LIST_ITEMS)


__all__ = [
    "PageSource",
    "ExtractedContent",
    "MAX_HEADINGS",
    "MAX_PARAGRAPHS",
    "MAX_LIST_ITEMS",
]
