"""
Data module: page fetching, content extraction and prompt formatting.

Responsible for converting configured web pages into a single prompt block
for Q/A generation. Pipeline:

    PageSource (config)
        ↓
    Fetching (sitetune/data/fetcher.py)
        ↓
    Extraction (sitetune/data/extractor.py) → ExtractedContent
        ↓
    Formatting (sitetune/data/formatter.py) → prompt block
        ↓
    Ready for generation (llm/synthesizer.py)
"""

from sitetune.data.extractor import extract_content, strip_boilerplate
from sitetune.data.fetcher import PageFetcher
from sitetune.data.formatter import RECORD_SEPARATOR, format_content, format_contents
from sitetune.data.schema import ExtractedContent, PageSource
from sitetune.data.scraper import scrape_pages

__all__ = [
    # Schema
    "PageSource",
    "ExtractedContent",

    # Fetching
    "PageFetcher",
    "scrape_pages",

    # Extraction
    "extract_content",
    "strip_boilerplate",

    # Formatting
    "format_content",
    "format_contents",
    "RECORD_SEPARATOR",
]
