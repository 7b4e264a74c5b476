"""
HTML content extraction.

Converts a raw HTML document into a bounded ExtractedContent record.
Extraction is deterministic and never fails: a selector that matches nothing
simply yields an empty collection.

Design:
- Boilerplate (scripts, navigation, cookie banners, ads, buttons) is removed
  before any text is read so it cannot leak into the prompt
- Text is trimmed and length-filtered per element kind
- Collections keep document order and are truncated to their caps
"""

import logging
from typing import Callable, List

from bs4 import BeautifulSoup

from sitetune.data.schema import (
    MAX_HEADINGS,
    MAX_LIST_ITEMS,
    MAX_PARAGRAPHS,
    ExtractedContent,
    PageSource,
)

logger = logging.getLogger(__name__)

# Removed in this order before extraction.
BOILERPLATE_SELECTORS = (
    "script, style, nav, header, footer",
    '[class*="cookie"], [class*="popup"], [class*="ad"]',
    "button, .btn",
)

HEADING_SELECTOR = "h1, h2, h3, h4"
PARAGRAPH_SELECTOR = "p"
LIST_ITEM_SELECTOR = "ul li, ol li"


def _heading_ok(text: str) -> bool:
    return 3 < len(text) < 200


def _paragraph_ok(text: str) -> bool:
    return len(text) > 20


def _list_item_ok(text: str) -> bool:
    return 5 < len(text) < 200


def strip_boilerplate(soup: BeautifulSoup) -> int:
    """
    Remove non-content elements in place.

    Returns:
        Number of elements removed (nested matches are counted once)
    """
    removed = 0
    for selector in BOILERPLATE_SELECTORS:
        for element in soup.select(selector):
            # Already detached together with a matched ancestor
            if element.decomposed:
                continue
            element.decompose()
            removed += 1
    return removed


def _collect(
    soup: BeautifulSoup,
    selector: str,
    keep: Callable[[str], bool],
    limit: int,
) -> List[str]:
    texts = []
    for element in soup.select(selector):
        text = element.get_text().strip()
        if keep(text):
            texts.append(text)
    return texts[:limit]


def extract_content(
    html: str,
    source: PageSource,
    max_headings: int = MAX_HEADINGS,
    max_paragraphs: int = MAX_PARAGRAPHS,
    max_list_items: int = MAX_LIST_ITEMS,
) -> ExtractedContent:
    """
    Extract structured content from a page.

    Args:
        html: Raw HTML document
        source: PageSource the document was fetched from
        max_headings: cap on headings (at most 10)
        max_paragraphs: cap on paragraphs (at most 15)
        max_list_items: cap on list items (at most 20)

    Returns:
        ExtractedContent for the page

    Example:
        content = extract_content(html, PageSource(url=url, content_type="about"))
    """
    soup = BeautifulSoup(html or "", "html.parser")

    # Read before stripping so a matching class on <html> or <head> cannot drop them.
    title = " ".join(t.get_text().strip() for t in soup.select("title")).strip()
    meta = soup.select_one('meta[name="description"]')
    description = meta.get("content", "") if meta is not None else ""
    if isinstance(description, list):
        description = " ".join(description)

    removed = strip_boilerplate(soup)

    content = ExtractedContent(
        url=source.url,
        content_type=source.content_type,
        title=title,
        meta_description=description.strip(),
        headings=_collect(soup, HEADING_SELECTOR, _heading_ok, min(max_headings, MAX_HEADINGS)),
        paragraphs=_collect(soup, PARAGRAPH_SELECTOR, _paragraph_ok, min(max_paragraphs, MAX_PARAGRAPHS)),
        list_items=_collect(soup, LIST_ITEM_SELECTOR, _list_item_ok, min(max_list_items, MAX_LIST_ITEMS)),
    )

    logger.debug(
        "Extracted %s: %d headings, %d paragraphs, %d list items (%d boilerplate elements removed)",
        source.url,
        len(content.headings),
        len(content.paragraphs),
        len(content.list_items),
        removed,
    )
    return content
