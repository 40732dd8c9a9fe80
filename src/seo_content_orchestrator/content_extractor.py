"""
Competitor content extraction.

This module turns competitor URLs into CompetitorContent records:
- Scrapes each page through an injected scraper (FireCrawl or plain HTTP)
- Strips markup down to plain text
- Recovers headings, word count, LSI keywords and entities

Pages are fetched concurrently. A failed page is dropped and logged; the
batch only fails when no page could be extracted.
"""

import concurrent.futures
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional, Protocol

from .config import OrchestratorConfig
from .errors import ContentExtractionError, NoCompetitorDataError
from .models import CompetitorContent, ScrapedPage, SearchResult
from .serp_client import extract_domain
from .text_analysis import (
    clean_content,
    count_words,
    extract_entities,
    extract_headings,
    extract_lsi_keywords,
    extract_markdown_headings,
)

logger = logging.getLogger(__name__)


class PageScraper(Protocol):
    """Anything that can turn a URL into a ScrapedPage."""

    def scrape(self, url: str) -> ScrapedPage:
        ...


def select_competitor_urls(
    results: Iterable[SearchResult],
    excluded_domains: Iterable[str] = ("youtube.com",),
    limit: int = 5,
) -> list[str]:
    """
    Pick competitor URLs from ranked search results.

    Results without a URL or on an excluded domain (or its subdomains) are
    skipped; the first ``limit`` remaining URLs are kept in rank order.

    Raises:
        NoCompetitorDataError: If no URL survives.
    """
    excluded = [d.lower() for d in excluded_domains]
    urls: list[str] = []
    for result in results:
        if not result.url:
            continue
        domain = extract_domain(result.url)
        if any(domain == d or domain.endswith("." + d) for d in excluded):
            continue
        if result.url in urls:
            continue
        urls.append(result.url)
        if len(urls) >= limit:
            break

    if not urls:
        raise NoCompetitorDataError("No valid competitor URLs found")
    return urls


class ContentExtractor:
    """
    Extracts and measures competitor pages.

    Example:
        >>> extractor = ContentExtractor(FireCrawlClient(api_key))
        >>> competitors = extractor.extract_many(urls)
    """

    def __init__(self, scraper: PageScraper, config: Optional[OrchestratorConfig] = None):
        self.scraper = scraper
        self.config = config or OrchestratorConfig()

    def extract(self, url: str) -> CompetitorContent:
        """
        Scrape one URL and build its CompetitorContent.

        keyword_density is left at 0 and headings unoptimized; both are
        scored against the target keyword during benchmarking.

        Raises:
            ContentExtractionError: If the page cannot be scraped or is empty.
        """
        try:
            page = self.scraper.scrape(url)
        except Exception as e:
            raise ContentExtractionError(f"Failed to extract content from {url}: {e}") from e

        raw = page.content or ""
        content = clean_content(raw)
        if not content:
            raise ContentExtractionError(f"No content extracted from {url}")

        if self.config.legacy_heading_detection:
            headings = extract_markdown_headings(content)
        else:
            headings = extract_headings(raw)

        return CompetitorContent(
            url=url,
            title=page.title or "Untitled",
            content=content,
            word_count=count_words(content),
            headings=tuple(headings),
            lsi_keywords=tuple(extract_lsi_keywords(content, self.config.competitor_lsi_limit)),
            entities=tuple(extract_entities(content, self.config.competitor_entity_limit)),
            keyword_density=0.0,
            meta_description=page.description,
            extracted_at=datetime.now(timezone.utc).isoformat(),
        )

    def extract_many(self, urls: list[str]) -> list[CompetitorContent]:
        """
        Extract up to ``max_competitors`` URLs concurrently.

        Waits for every fetch to finish, successful or not. Successful
        records keep the order of ``urls``.

        Raises:
            NoCompetitorDataError: If every extraction failed.
        """
        urls = list(urls)[:self.config.max_competitors]
        if not urls:
            raise NoCompetitorDataError("No valid competitor URLs found")

        outcomes: dict[str, CompetitorContent] = {}
        failures: dict[str, Exception] = {}

        max_workers = min(self.config.max_workers, len(urls))
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = {pool.submit(self.extract, url): url for url in urls}
            for future in concurrent.futures.as_completed(futures):
                url = futures[future]
                try:
                    outcomes[url] = future.result()
                except ContentExtractionError as e:
                    failures[url] = e
                    logger.warning(f"Dropping competitor {url}: {e}")

        competitors = [outcomes[url] for url in urls if url in outcomes]
        if not competitors:
            raise NoCompetitorDataError(
                f"Failed to extract content from any competitor ({len(urls)} attempted)"
            )

        if failures:
            logger.warning(
                f"Partial extraction loss: {len(failures)}/{len(urls)} competitor pages failed"
            )
        logger.info(f"Successfully extracted {len(competitors)}/{len(urls)} competitor pages")
        return competitors
