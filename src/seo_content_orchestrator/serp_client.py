"""
Serper.dev integration for search engine results analysis.

This module issues one search per keyword and location and returns the
ranked organic results. Location is free text mapped to a Google domain and
country code through static lookup tables.
"""

import logging
import os
import time
from typing import Iterable, Optional
from urllib.parse import urlparse

import requests

from .errors import NoResultsError, SerpClientError
from .models import SearchResult, SerpAnalysis

logger = logging.getLogger(__name__)


SERPER_SEARCH_URL = "https://google.serper.dev/search"

# Regional domain mapping
GOOGLE_DOMAINS = {
    "united states": "google.com",
    "usa": "google.com",
    "us": "google.com",
    "united arab emirates": "google.ae",
    "uae": "google.ae",
    "united kingdom": "google.co.uk",
    "uk": "google.co.uk",
    "australia": "google.com.au",
    "au": "google.com.au",
    "canada": "google.ca",
    "ca": "google.ca",
    "germany": "google.de",
    "de": "google.de",
    "france": "google.fr",
    "fr": "google.fr",
    "india": "google.co.in",
    "in": "google.co.in",
    "singapore": "google.com.sg",
    "sg": "google.com.sg",
    "japan": "google.co.jp",
    "jp": "google.co.jp",
    "brazil": "google.com.br",
    "br": "google.com.br",
}

# Country codes mapping
COUNTRY_CODES = {
    "united states": "us",
    "usa": "us",
    "us": "us",
    "united arab emirates": "ae",
    "uae": "ae",
    "united kingdom": "gb",
    "uk": "gb",
    "australia": "au",
    "au": "au",
    "canada": "ca",
    "ca": "ca",
    "germany": "de",
    "de": "de",
    "france": "fr",
    "fr": "fr",
    "india": "in",
    "in": "in",
    "singapore": "sg",
    "sg": "sg",
    "japan": "jp",
    "jp": "jp",
    "brazil": "br",
    "br": "br",
}

DEFAULT_GOOGLE_DOMAIN = "google.com"
DEFAULT_COUNTRY_CODE = "us"

NON_ORGANIC_INDICATORS = (
    "shopping.google",
    "ads.google",
    "youtube.com/ads",
    "sponsored",
    "ad |",
    "| ad",
)


def resolve_location(location: str) -> tuple[str, str]:
    """
    Map a free-text location to (google_domain, country_code).

    Unknown locations fall back to google.com / us.
    """
    normalized = (location or "").strip().lower()
    return (
        GOOGLE_DOMAINS.get(normalized, DEFAULT_GOOGLE_DOMAIN),
        COUNTRY_CODES.get(normalized, DEFAULT_COUNTRY_CODE),
    )


def extract_domain(url: str) -> str:
    """Extract the host of a URL without a leading 'www.'."""
    try:
        host = urlparse(url).hostname or ""
    except ValueError:
        return ""
    return host[4:] if host.startswith("www.") else host


def is_organic_result(item: dict) -> bool:
    """Check that a result is not an ad or shopping placement."""
    url = (item.get("link") or "").lower()
    title = (item.get("title") or "").lower()
    return not any(
        indicator in url or indicator in title
        for indicator in NON_ORGANIC_INDICATORS
    )


def assess_content_quality(item: dict) -> str:
    """
    Grade a result from the metadata the search API returns.

    Snippet over 50 chars +2, a date +1, sitelinks +2, a title of 21-69
    chars +1. Four or more is high, two or more medium, else low.
    """
    score = 0
    snippet = item.get("snippet") or ""
    if len(snippet) > 50:
        score += 2
    if item.get("date"):
        score += 1
    if item.get("sitelinks"):
        score += 2
    if 20 < len(item.get("title") or "") < 70:
        score += 1

    if score >= 4:
        return "high"
    if score >= 2:
        return "medium"
    return "low"


def build_stub_analysis(keyword: str, location: str) -> SerpAnalysis:
    """
    Degraded single-result analysis for development runs.

    Only used when the configuration explicitly allows it; production runs
    fail instead.
    """
    google_domain, country_code = resolve_location(location)
    slug = "-".join(keyword.lower().split())
    url = f"https://example.com/{slug}"
    return SerpAnalysis(
        keyword=keyword,
        location=(location or "").strip().lower(),
        google_domain=google_domain,
        country_code=country_code,
        results=[
            SearchResult(
                title=f"{keyword} - Example Result",
                url=url,
                snippet=f"Placeholder result for {keyword}.",
                position=1,
                domain=extract_domain(url),
                content_quality="low",
            )
        ],
        total_results=1,
        is_stub=True,
    )


class SerperClient:
    """
    Client for the Serper.dev Google search API.

    One POST per analysis; no retries. Transport errors and unusable
    responses raise SerpClientError, an empty organic list raises
    NoResultsError.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the Serper client.

        Args:
            api_key: Serper API key. Falls back to SERPER_API_KEY env var.
            timeout: Request timeout in seconds.
            session: Optional requests session (shared connection pool).
        """
        self.api_key = api_key or os.environ.get("SERPER_API_KEY")
        self.timeout = timeout
        self._http = session or requests

    @property
    def is_available(self) -> bool:
        """Check if the client has credentials."""
        return bool(self.api_key)

    def analyze(
        self,
        keyword: str,
        location: str,
        num_results: int = 5,
        exclude_domains: Iterable[str] = (),
        only_organic: bool = True,
    ) -> SerpAnalysis:
        """
        Search for a keyword in a location and return ranked organic results.

        Args:
            keyword: Search query. Must be non-empty.
            location: Free-text country or region name.
            num_results: Number of results to keep after filtering.
            exclude_domains: Domains to drop from the results.
            only_organic: Drop ads and shopping placements.

        Returns:
            SerpAnalysis with at least one result.

        Raises:
            ValueError: If keyword is empty.
            SerpClientError: If the API call fails or returns malformed data.
            NoResultsError: If no organic result survives.
        """
        keyword = (keyword or "").strip()
        if not keyword:
            raise ValueError("keyword must be a non-empty string")
        if not self.is_available:
            raise SerpClientError(
                "Serper is not configured. Set the SERPER_API_KEY environment variable."
            )

        google_domain, country_code = resolve_location(location)
        payload = {
            "q": keyword,
            "gl": country_code,
            "num": max(num_results * 2, 10),  # extra results for filtering
        }
        headers = {
            "X-API-KEY": self.api_key,
            "Content-Type": "application/json",
        }

        logger.info(f"Searching '{keyword}' on {google_domain} (gl={country_code})")
        started = time.monotonic()
        try:
            response = self._http.post(
                SERPER_SEARCH_URL,
                headers=headers,
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise SerpClientError(f"Search request failed: {e}") from e
        except ValueError as e:
            raise SerpClientError(f"Search response was not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise SerpClientError("Search response has an unexpected shape")

        organic = data.get("organic") or []
        if not isinstance(organic, list):
            raise SerpClientError("Search response has an unexpected shape: 'organic' is not a list")
        excluded = {d.lower() for d in exclude_domains}
        results = self._process_results(organic, excluded, only_organic, num_results)
        if not results:
            raise NoResultsError(f"No SERP results found for '{keyword}'")

        try:
            info = data.get("searchInformation") or {}
            search_time = info.get("searchTime")
            if search_time is None:
                search_time = round(time.monotonic() - started, 3)
            total_results = int(info.get("totalResults") or len(organic))
            related_queries = [
                r["query"] for r in data.get("relatedSearches") or []
                if r.get("query")
            ]
            people_also_ask = [
                {"question": q["question"], "snippet": q.get("snippet")}
                for q in data.get("peopleAlsoAsk") or []
                if q.get("question")
            ]
            search_time = float(search_time)
        except (AttributeError, TypeError, ValueError) as e:
            raise SerpClientError(f"Search response has an unexpected shape: {e}") from e

        return SerpAnalysis(
            keyword=keyword,
            location=(location or "").strip().lower(),
            google_domain=google_domain,
            country_code=country_code,
            results=results,
            total_results=total_results,
            search_time=search_time,
            related_queries=related_queries,
            people_also_ask=people_also_ask,
        )

    def _process_results(
        self,
        organic: list,
        excluded: set[str],
        only_organic: bool,
        limit: int,
    ) -> list[SearchResult]:
        """Filter and rank raw organic items."""
        results: list[SearchResult] = []
        for rank, item in enumerate(organic, start=1):
            link = item.get("link") if isinstance(item, dict) else None
            if not isinstance(link, str) or not link:
                continue

            domain = extract_domain(link)
            if domain in excluded:
                continue

            organic_flag = is_organic_result(item)
            if only_organic and not organic_flag:
                continue

            results.append(SearchResult(
                title=item.get("title") or "",
                url=link,
                snippet=item.get("snippet") or "",
                position=int(item.get("position") or rank),
                domain=domain,
                is_organic=organic_flag,
                content_quality=assess_content_quality(item),
            ))
            if len(results) >= limit:
                break

        return results
