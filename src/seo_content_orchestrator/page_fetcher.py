"""
Direct HTTP fetching of competitor pages.

Used when FireCrawl is not configured. Returns the raw HTML as page content
so the extractor can recover headings before stripping markup.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from .errors import PageFetchError
from .models import ScrapedPage

logger = logging.getLogger(__name__)


# Default headers for web requests
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


class HttpPageFetcher:
    """
    Fetch pages with requests and read title and meta description with
    BeautifulSoup.

    Implements the scraper interface used by ContentExtractor:
    ``scrape(url) -> ScrapedPage``.
    """

    def __init__(self, timeout: float = 60.0, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self._http = session or requests

    def scrape(self, url: str) -> ScrapedPage:
        """
        Fetch a URL and return its HTML with title and description.

        Raises:
            PageFetchError: If the URL is invalid or the request fails.
        """
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise PageFetchError(f"Invalid URL: {url}")

        try:
            response = self._http.get(url, headers=DEFAULT_HEADERS, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise PageFetchError(f"Failed to fetch URL: {e}") from e

        html = response.text or ""
        soup = BeautifulSoup(html, "lxml")

        title = None
        title_tag = soup.find("title")
        if title_tag:
            title = " ".join(title_tag.get_text(separator=" ", strip=True).split())

        description = None
        meta_desc_tag = soup.find("meta", attrs={"name": "description"})
        if meta_desc_tag and meta_desc_tag.get("content"):
            description = " ".join(meta_desc_tag["content"].split())

        logger.debug(f"Fetched {len(html)} chars from {url}")
        return ScrapedPage(url=url, content=html, title=title or None, description=description)
