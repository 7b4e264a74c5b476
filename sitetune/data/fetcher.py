"""
Page fetching over HTTP.

A thin wrapper around a requests session with a fixed timeout and
User-Agent. Any transport or HTTP status failure is reported as FetchError so
the scrape driver can skip the page and keep going.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from sitetune.core.config import ScraperConfig
from sitetune.core.exceptions import FetchError

logger = logging.getLogger(__name__)


class PageFetcher:
    """
    Fetches one page at a time.

    Args:
        session: requests-compatible session (anything with ``get``)
        timeout: socket timeout in seconds
        user_agent: User-Agent header sent with every request
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
        user_agent: str = ScraperConfig().user_agent,
    ):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.session.headers.update({"User-Agent": user_agent})

    @classmethod
    def from_config(cls, scraper_config: ScraperConfig, session: Optional[requests.Session] = None) -> "PageFetcher":
        return cls(
            session=session,
            timeout=scraper_config.request_timeout,
            user_agent=scraper_config.user_agent,
        )

    def fetch(self, url: str) -> str:
        """
        Download a page and return its body as text.

        Raises:
            FetchError: on timeout, connection failure or non-2xx status
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e

        logger.debug("Fetched %s (%d bytes)", url, len(response.text))
        return response.text
