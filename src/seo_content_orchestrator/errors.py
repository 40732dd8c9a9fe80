"""
Exception hierarchy for the content orchestrator.

Upstream failures (SERP, scraping, LLM) are fatal to a run. A single
competitor extraction failure is not: the extractor logs it and continues,
and only an empty competitor set aborts the pipeline.
"""

from typing import Optional


class SeoOrchestratorError(Exception):
    """Base class for all orchestrator errors."""
    pass


class UpstreamAPIError(SeoOrchestratorError):
    """Raised when an external service call fails or returns an unusable shape."""
    pass


class SerpClientError(UpstreamAPIError):
    """Raised when the search API request fails."""
    pass


class NoResultsError(UpstreamAPIError):
    """Raised when the search API returns no organic results."""
    pass


class FireCrawlError(UpstreamAPIError):
    """Raised when FireCrawl operations fail."""
    pass


class PageFetchError(UpstreamAPIError):
    """Raised when a direct HTTP page fetch fails."""
    pass


class LLMClientError(UpstreamAPIError):
    """Raised when LLM operations fail."""
    pass


class ContentGenerationError(UpstreamAPIError):
    """Raised when the AI generator cannot produce content."""
    pass


class ContentExtractionError(SeoOrchestratorError):
    """Raised when content extraction fails for a single competitor URL."""
    pass


class NoCompetitorDataError(SeoOrchestratorError):
    """Raised when no competitor page could be used for benchmarking."""
    pass


class PipelineError(SeoOrchestratorError):
    """
    Stage-qualified failure raised by the orchestrator.

    Attributes:
        stage: The PipelineStage that failed.
        cause: The original exception.
    """

    def __init__(self, stage, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.stage = stage
        self.cause = cause
        if message is None:
            message = f"{stage.description} failed: {cause}"
        super().__init__(message)
