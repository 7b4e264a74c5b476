"""
Sequential scrape driver.

Fetches each configured page in order, extracts its content and paces the
requests with a fixed delay. One failed page is skipped; a run where every
page fails is fatal.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Sequence

from sitetune.core.exceptions import FetchError, NoContentError
from sitetune.core.filtering import FilterResult, filter_with_diagnostics
from sitetune.data.extractor import extract_content
from sitetune.data.fetcher import PageFetcher
from sitetune.data.schema import (
    MAX_HEADINGS,
    MAX_LIST_ITEMS,
    MAX_PARAGRAPHS,
    ExtractedContent,
    PageSource,
)

logger = logging.getLogger(__name__)


def scrape_pages(
    sources: Sequence[PageSource],
    fetcher: PageFetcher,
    delay: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
    max_headings: int = MAX_HEADINGS,
    max_paragraphs: int = MAX_PARAGRAPHS,
    max_list_items: int = MAX_LIST_ITEMS,
) -> FilterResult[ExtractedContent]:
    """
    Fetch and extract every source, one at a time.

    Args:
        sources: pages to scrape, in prompt order
        fetcher: PageFetcher used for every request
        delay: seconds to wait after each request (success or failure)
        sleep: injectable sleep function
        max_headings, max_paragraphs, max_list_items: per-page extraction caps

    Returns:
        FilterResult whose accepted items are the extracted pages and whose
        reasons describe the pages that failed

    Raises:
        NoContentError: if no page could be fetched
    """
    logger.info("Starting scraper for %d URLs", len(sources))

    def _scrape(source: PageSource) -> ExtractedContent:
        try:
            html = fetcher.fetch(source.url)
        finally:
            sleep(delay)
        content = extract_content(
            html,
            source,
            max_headings=max_headings,
            max_paragraphs=max_paragraphs,
            max_list_items=max_list_items,
        )
        logger.info("Scraped: %s", content.title or source.url)
        return content

    result = filter_with_diagnostics(
        sources,
        _scrape,
        label=lambda _index, source: source.url,
        errors=(FetchError,),
    )

    if not result.accepted:
        raise NoContentError("No content scraped successfully")

    return result
