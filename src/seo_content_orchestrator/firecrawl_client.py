"""
FireCrawl integration for competitor page scraping.

FireCrawl renders the page and returns markdown that keeps the heading
structure, which the extractor reads before collapsing the text.
"""

import logging
import os
from typing import Optional

from firecrawl import Firecrawl

from .errors import FireCrawlError
from .models import ScrapedPage

logger = logging.getLogger(__name__)


class FireCrawlClient:
    """
    Client for scraping competitor pages with FireCrawl.

    Implements the scraper interface used by ContentExtractor:
    ``scrape(url) -> ScrapedPage``.
    """

    def __init__(self, api_key: Optional[str] = None, timeout: float = 60.0):
        """
        Initialize the FireCrawl client.

        Args:
            api_key: FireCrawl API key. Falls back to FIRECRAWL_API_KEY env var.
            timeout: Scrape timeout in seconds.
        """
        self.api_key = api_key or os.environ.get("FIRECRAWL_API_KEY")
        self.timeout = timeout
        self._client = Firecrawl(api_key=self.api_key) if self.api_key else None

    @property
    def is_available(self) -> bool:
        """Check if FireCrawl is configured."""
        return self._client is not None

    def scrape(self, url: str) -> ScrapedPage:
        """
        Scrape a URL and return its markdown content and metadata.

        Args:
            url: URL to scrape.

        Returns:
            ScrapedPage with markdown content, title and description.

        Raises:
            FireCrawlError: If scraping fails or FireCrawl is unavailable.
        """
        if not self.is_available:
            raise FireCrawlError(
                "FireCrawl is not available. Set the FIRECRAWL_API_KEY environment variable."
            )

        try:
            result = self._client.scrape(
                url,
                formats=["markdown"],
                timeout=int(self.timeout * 1000),
            )
        except Exception as e:
            raise FireCrawlError(f"Failed to scrape URL with FireCrawl: {e}") from e

        return self._to_scraped_page(url, result)

    def _to_scraped_page(self, url: str, result) -> ScrapedPage:
        """Normalize SDK documents and plain dict responses."""
        if hasattr(result, "model_dump"):
            result = result.model_dump()
        if not isinstance(result, dict):
            raise FireCrawlError(f"Unexpected FireCrawl response type: {type(result).__name__}")

        metadata = result.get("metadata") or {}
        content = result.get("markdown") or result.get("content") or ""
        logger.debug(f"FireCrawl returned {len(content)} chars for {url}")

        return ScrapedPage(
            url=url,
            content=content,
            title=metadata.get("title") or result.get("title"),
            description=metadata.get("description") or result.get("description"),
        )
