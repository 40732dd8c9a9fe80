"""
SEO Content Orchestrator

A competitor-benchmarked content generation pipeline that:
- Analyzes the search results for a keyword and location
- Extracts and measures the top competitor pages
- Generates an article written against the competitor benchmarks
- Validates the article and derives its meta tags
"""

__version__ = "1.0.0"
__author__ = "SEO Content Orchestrator Team"

from .config import OrchestratorConfig

from .errors import (
    SeoOrchestratorError,
    UpstreamAPIError,
    SerpClientError,
    NoResultsError,
    FireCrawlError,
    PageFetchError,
    LLMClientError,
    ContentGenerationError,
    ContentExtractionError,
    NoCompetitorDataError,
    PipelineError,
)

from .models import (
    PipelineStage,
    SearchResult,
    SerpAnalysis,
    Heading,
    ScrapedPage,
    CompetitorContent,
    Benchmarks,
    QualityAnalysis,
    ContentGenerationRequest,
    GeneratedContent,
    ValidationResult,
    MetaTags,
    ContentSignals,
    StageTiming,
    ContentCustomizations,
    GenerationOptions,
    OptimizedContentRequest,
    OptimizedContentResult,
)

# Pipeline stages
from .serp_client import SerperClient, build_stub_analysis
from .firecrawl_client import FireCrawlClient
from .page_fetcher import HttpPageFetcher
from .content_extractor import ContentExtractor, select_competitor_urls
from .benchmarks import (
    calculate_benchmarks,
    aggregate_benchmarks,
    generate_keyword_variations,
    format_competitor_insights,
    generate_competitor_insights,
)
from .llm_client import LLMClient, create_llm_client
from .content_generator import AIContentGenerator
from .validator import validate_content, density_accuracy
from .meta_tags import generate_meta_tags

# Heuristic scorers
from .quality import QualityWeights, analyze_quality
from .signals import (
    FreshnessWeights,
    IntentWeights,
    calculate_freshness_score,
    find_outdated_indicators,
    analyze_intent_alignment,
    analyze_content_signals,
)

from .orchestrator import UnifiedContentOrchestrator, generate_optimized_content

__all__ = [
    # Configuration
    "OrchestratorConfig",
    # Errors
    "SeoOrchestratorError",
    "UpstreamAPIError",
    "SerpClientError",
    "NoResultsError",
    "FireCrawlError",
    "PageFetchError",
    "LLMClientError",
    "ContentGenerationError",
    "ContentExtractionError",
    "NoCompetitorDataError",
    "PipelineError",
    # Models
    "PipelineStage",
    "SearchResult",
    "SerpAnalysis",
    "Heading",
    "ScrapedPage",
    "CompetitorContent",
    "Benchmarks",
    "QualityAnalysis",
    "ContentGenerationRequest",
    "GeneratedContent",
    "ValidationResult",
    "MetaTags",
    "ContentSignals",
    "StageTiming",
    "ContentCustomizations",
    "GenerationOptions",
    "OptimizedContentRequest",
    "OptimizedContentResult",
    # Pipeline stages
    "SerperClient",
    "build_stub_analysis",
    "FireCrawlClient",
    "HttpPageFetcher",
    "ContentExtractor",
    "select_competitor_urls",
    "calculate_benchmarks",
    "aggregate_benchmarks",
    "generate_keyword_variations",
    "format_competitor_insights",
    "generate_competitor_insights",
    "LLMClient",
    "create_llm_client",
    "AIContentGenerator",
    "validate_content",
    "density_accuracy",
    "generate_meta_tags",
    # Heuristic scorers
    "QualityWeights",
    "analyze_quality",
    "FreshnessWeights",
    "IntentWeights",
    "calculate_freshness_score",
    "find_outdated_indicators",
    "analyze_intent_alignment",
    "analyze_content_signals",
    # Orchestration
    "UnifiedContentOrchestrator",
    "generate_optimized_content",
]
