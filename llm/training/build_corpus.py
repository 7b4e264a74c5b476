"""
Training corpus builder.

Scrapes the configured pages, asks the generation model for Q/A pairs and
writes the resulting chat-format corpus to JSONL. Stages run strictly one
after another; a fatal error in any stage stops the run before anything is
written.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence, Union

from dotenv import load_dotenv

from llm.config import create_client
from llm.synthesizer import ExampleSynthesizer
from sitetune.core.config import Config, PageSource
from sitetune.core.exceptions import SiteTuneError, hint_for
from sitetune.core.logging_config import configure_package_logging
from sitetune.data import PageFetcher, format_contents, scrape_pages

from .dataset import build_records, write_corpus
from .schema import CorpusReport

logger = logging.getLogger("llm.training.build_corpus")


def build_training_corpus(
    sources: Sequence[PageSource],
    fetcher: PageFetcher,
    synthesizer: ExampleSynthesizer,
    output_file: Union[str, Path],
    count: Optional[int] = None,
    delay: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
    limits: Optional[Mapping[str, int]] = None,
) -> CorpusReport:
    """
    Run scrape -> format -> generate -> assemble -> write.

    ``limits`` holds the per-page extraction caps (see ScraperConfig.extract_limits).

    Raises:
        NoContentError: no page could be fetched
        GenerationError: the generation request failed
    """

    scraped = scrape_pages(sources, fetcher, delay=delay, sleep=sleep, **(limits or {}))
    content_block = format_contents(scraped.accepted)

    synthesis = synthesizer.synthesize(content_block, count=count)
    records = build_records(synthesis.examples)
    written = write_corpus(records, output_file)

    report = CorpusReport(
        pages_scraped=len(scraped.accepted),
        pages_failed=scraped.skipped,
        examples_generated=len(synthesis.examples),
        examples_dropped=synthesis.skipped,
        examples_written=written,
        total_cost=synthesis.total_cost,
        output_file=str(output_file),
        skipped_reasons=scraped.reasons + synthesis.reasons,
    )
    logger.info(
        "Scraped %d pages (%d failed), generated %d examples (%d dropped)",
        report.pages_scraped,
        report.pages_failed,
        report.examples_generated,
        report.examples_dropped,
    )
    for reason in report.skipped_reasons:
        logger.info("  - %s", reason)
    logger.info("Total cost: $%.4f", report.total_cost)
    return report


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scrape configured pages and generate a fine-tuning corpus")
    parser.add_argument("--output", type=Path, default=None, help="Corpus path (default: fine_tune.training_file)")
    parser.add_argument("--examples", type=int, default=None, help="Number of Q/A pairs to request")
    parser.add_argument(
        "--url",
        action="append",
        default=None,
        metavar="URL[=TYPE]",
        help="Page to scrape, optionally with a content type; repeatable (default: configured sources)",
    )
    return parser.parse_args(argv)


def _sources_from_args(urls: Optional[List[str]], settings: Config) -> List[PageSource]:
    if not urls:
        return list(settings.scraper.sources)
    sources = []
    for value in urls:
        url, _, content_type = value.partition("=")
        sources.append(PageSource(url=url, content_type=content_type or "general"))
    return sources


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    settings = Config()
    configure_package_logging(settings)
    args = _parse_args(argv)

    output_file = args.output or settings.fine_tune.training_file

    try:
        client = create_client(settings)
        report = build_training_corpus(
            sources=_sources_from_args(args.url, settings),
            fetcher=PageFetcher.from_config(settings.scraper),
            synthesizer=ExampleSynthesizer(client=client, settings=settings.generation),
            output_file=output_file,
            count=args.examples,
            delay=settings.scraper.request_delay,
            limits=settings.scraper.extract_limits(),
        )
    except SiteTuneError as exc:
        logger.error("Error: %s", exc)
        hint = hint_for(exc)
        if hint:
            logger.info("Tip: %s", hint)
        return 1

    if report.is_empty:
        logger.warning("No usable training data was generated; %s was not written", output_file)
        return 0

    logger.info("Scraping complete! %d examples saved to %s", report.examples_written, output_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
