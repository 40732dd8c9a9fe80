"""
Pytest fixtures and configuration for SEO Content Orchestrator tests.
"""

import pytest

from seo_content_orchestrator.config import OrchestratorConfig
from seo_content_orchestrator.errors import LLMClientError, PageFetchError
from seo_content_orchestrator.models import ScrapedPage


class FakeScraper:
    """Scraper returning canned pages; URLs in ``failing`` raise."""

    def __init__(self, pages: dict, failing=()):
        self.pages = pages
        self.failing = set(failing)
        self.calls: list[str] = []

    def scrape(self, url: str) -> ScrapedPage:
        self.calls.append(url)
        if url in self.failing or url not in self.pages:
            raise PageFetchError(f"Failed to fetch URL: {url}")
        return ScrapedPage(url=url, content=self.pages[url], title=f"Title of {url}")


class FakeLLMClient:
    """LLM client returning a fixed article, or raising when ``error`` is set."""

    model = "fake-model"

    def __init__(self, content: str = "", error: Exception = None):
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    def complete(self, system: str, prompt: str, max_tokens: int = 4096) -> str:
        self.calls.append({"system": system, "prompt": prompt, "max_tokens": max_tokens})
        if self.error:
            raise self.error
        return self.content


@pytest.fixture(autouse=True)
def clear_api_keys(monkeypatch):
    """Keep real credentials out of every test."""
    for name in ("SERPER_API_KEY", "FIRECRAWL_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config() -> OrchestratorConfig:
    return OrchestratorConfig(
        serper_api_key="test-serper-key",
        anthropic_api_key="test-anthropic-key",
    )


@pytest.fixture
def competitor_markdown() -> str:
    """Competitor page as FireCrawl markdown."""
    return """# Running Shoes Buying Guide

Choosing running shoes starts with your gait. Nike and Adidas both publish
fit guides, and the American Podiatric Medical Association (APMA) reviews
footwear every year since 2019.

## Best Running Shoes for Trail Running

Trail running shoes need grip. Cushioning matters for long distances and
running shoes wear out after about 500 miles.

## Our Company History

We started selling footwear in a small shop.
"""


@pytest.fixture
def competitor_html() -> str:
    """Competitor page as raw HTML."""
    return """<!DOCTYPE html>
<html>
<head>
    <title>Running Shoes | Expert Reviews</title>
    <meta name="description" content="Honest running shoes reviews.">
    <style>body { color: red; }</style>
    <script>var tracking = "running shoes";</script>
</head>
<body>
    <nav><a href="/">Home</a> <a href="/shop">Shop</a></nav>
    <h1>Running Shoes Reviews</h1>
    <p>We tested twenty running shoes on road and trail.</p>
    <h2>How We Test</h2>
    <p>Every pair runs 100 miles before we score cushioning and grip.</p>
    <footer>Copyright Shoe Lab</footer>
</body>
</html>"""


@pytest.fixture
def generated_article() -> str:
    """Article as the LLM would return it."""
    return """# Running Shoes: How to Pick the Right Pair

Running shoes shape every mile you run. This guide explains cushioning, grip and fit.

## Best Running Shoes for Beginners

Start with a neutral pair. Nike and Adidas both make good entry models.
You'll want a thumb's width of room at the toe.

## Caring for Your Running Shoes

Rotate two pairs. Replace them after about 500 miles.

## Trail Versus Road

Trail models add grip. Road models save weight.
"""


@pytest.fixture
def serper_response() -> dict:
    """Search API payload with ads and an excluded domain mixed in."""
    return {
        "organic": [
            {
                "title": "The 10 Best Running Shoes of the Year, Tested",
                "link": "https://www.runnersworld.com/best-running-shoes",
                "snippet": "We tested dozens of running shoes on road and trail to find the best pairs for every runner.",
                "position": 1,
                "date": "Mar 1, 2026",
                "sitelinks": [{"title": "Trail", "link": "https://www.runnersworld.com/trail"}],
            },
            {
                "title": "Running shoes video review",
                "link": "https://www.youtube.com/watch?v=abc",
                "snippet": "Video.",
                "position": 2,
            },
            {
                "title": "Sponsored - Buy running shoes",
                "link": "https://shopping.google.com/running",
                "snippet": "Ad.",
                "position": 3,
            },
            {
                "title": "Running Shoes Guide",
                "link": "https://example.org/guide",
                "snippet": "Short.",
            },
        ],
        "searchInformation": {"totalResults": "1230000", "searchTime": 0.42},
        "relatedSearches": [{"query": "best running shoes for flat feet"}],
        "peopleAlsoAsk": [{"question": "How often should you replace running shoes?", "snippet": "Every 500 miles."}],
    }


@pytest.fixture
def fake_scraper_factory():
    return FakeScraper


@pytest.fixture
def fake_llm_factory():
    return FakeLLMClient


@pytest.fixture
def llm_error() -> LLMClientError:
    return LLMClientError("LLM API call failed: overloaded")
