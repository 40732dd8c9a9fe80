"""
Data models for the SEO content orchestrator.

This module defines all the core data structures that flow through the
pipeline. Derived records (Benchmarks, ValidationResult) are frozen; the
report types serialize to the camelCase shape consumed by API callers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional


ContentType = Literal["service_page", "blog_post", "product_page", "landing_page"]
Tone = Literal["professional", "casual", "authoritative", "friendly"]
TargetAudience = Literal["business_owners", "consumers", "professionals", "general"]
RiskLevel = Literal["low", "medium", "high"]

CONTENT_TYPES = ("service_page", "blog_post", "product_page", "landing_page")
TONES = ("professional", "casual", "authoritative", "friendly")
TARGET_AUDIENCES = ("business_owners", "consumers", "professionals", "general")

MAX_KEYWORD_LENGTH = 100


class PipelineStage(Enum):
    """States of one orchestration run."""
    SERP_ANALYSIS = "serp_analysis"
    EXTRACTION = "extraction"
    BENCHMARKING = "benchmarking"
    GENERATION = "generation"
    VALIDATION = "validation"
    META_TAGGING = "meta_tagging"
    DONE = "done"
    FAILED = "failed"

    @property
    def description(self) -> str:
        """Human-readable stage name used in error messages."""
        return _STAGE_DESCRIPTIONS[self]


_STAGE_DESCRIPTIONS = {
    PipelineStage.SERP_ANALYSIS: "SERP analysis",
    PipelineStage.EXTRACTION: "Competitor extraction",
    PipelineStage.BENCHMARKING: "Benchmark calculation",
    PipelineStage.GENERATION: "Content generation",
    PipelineStage.VALIDATION: "Content validation",
    PipelineStage.META_TAGGING: "Meta tag generation",
    PipelineStage.DONE: "Pipeline",
    PipelineStage.FAILED: "Pipeline",
}


# =============================================================================
# SERP
# =============================================================================


@dataclass(frozen=True)
class SearchResult:
    """A single ranked organic search result."""
    title: str
    url: str
    snippet: str = ""
    position: int = 0
    domain: str = ""
    is_organic: bool = True
    content_quality: RiskLevel = "medium"

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "url": self.url,
            "snippet": self.snippet,
            "position": self.position,
            "domain": self.domain,
            "isOrganic": self.is_organic,
            "contentQuality": self.content_quality,
        }


@dataclass
class SerpAnalysis:
    """Result of one search query."""
    keyword: str
    location: str
    google_domain: str
    country_code: str
    results: list[SearchResult] = field(default_factory=list)
    total_results: int = 0
    search_time: float = 0.0
    related_queries: list[str] = field(default_factory=list)
    people_also_ask: list[dict] = field(default_factory=list)
    is_stub: bool = False


# =============================================================================
# Competitor content
# =============================================================================


@dataclass(frozen=True)
class Heading:
    """A heading recovered from page content."""
    level: int
    text: str
    optimized: bool = False


@dataclass(frozen=True)
class ScrapedPage:
    """Raw page returned by a scraping provider."""
    url: str
    content: str
    title: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class CompetitorContent:
    """
    Extracted content of one competitor page.

    keyword_density and the heading optimized flags are zero/False until the
    benchmark phase scores the record against the target keyword.
    """
    url: str
    title: str
    content: str
    word_count: int
    headings: tuple[Heading, ...] = ()
    lsi_keywords: tuple[str, ...] = ()
    entities: tuple[str, ...] = ()
    keyword_density: float = 0.0
    meta_description: Optional[str] = None
    extracted_at: str = ""

    @property
    def heading_count(self) -> int:
        return len(self.headings)

    @property
    def optimized_heading_count(self) -> int:
        return sum(1 for h in self.headings if h.optimized)

    def to_summary(self) -> dict:
        """Competitor row of the report."""
        return {
            "url": self.url,
            "title": self.title,
            "wordCount": self.word_count,
            "keywordDensity": self.keyword_density,
            "headingCount": self.heading_count,
            "optimizedHeadings": self.optimized_heading_count,
        }


@dataclass(frozen=True)
class Benchmarks:
    """Averaged competitor metrics used as generation targets."""
    average_word_count: int
    average_headings: int
    average_keyword_density: float
    average_optimized_headings: int
    lsi_keywords: tuple[str, ...] = ()
    entities: tuple[str, ...] = ()
    variations: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "averageWordCount": self.average_word_count,
            "averageHeadings": self.average_headings,
            "averageKeywordDensity": self.average_keyword_density,
            "averageOptimizedHeadings": self.average_optimized_headings,
            "lsiKeywords": list(self.lsi_keywords),
            "entities": list(self.entities),
            "variations": list(self.variations),
        }


# =============================================================================
# Generation
# =============================================================================


@dataclass(frozen=True)
class QualityAnalysis:
    """Heuristic quality scores of generated content (0-100 each)."""
    readability_score: float
    human_writing_score: float
    ai_detection_risk: RiskLevel
    eeat_score: float
    nlp_friendliness: float
    grammar_score: float
    overall_score: float

    def to_dict(self) -> dict:
        return {
            "readabilityScore": self.readability_score,
            "humanWritingScore": self.human_writing_score,
            "aiDetectionRisk": self.ai_detection_risk,
            "eeAtScore": self.eeat_score,
            "nlpFriendliness": self.nlp_friendliness,
            "grammarScore": self.grammar_score,
            "overallScore": self.overall_score,
        }


@dataclass(frozen=True)
class ContentGenerationRequest:
    """Everything the AI generator needs to write one article."""
    keyword: str
    industry: str
    target_audience: str
    tone: str
    word_count: int
    target_keyword_density: float
    target_optimized_headings_count: int
    lsi_keywords: tuple[str, ...] = ()
    entities: tuple[str, ...] = ()
    variations: tuple[str, ...] = ()
    content_type: str = "service_page"
    competitor_insights: str = ""
    company_name: Optional[str] = None
    location: Optional[str] = None
    website_url: Optional[str] = None
    related_queries: tuple[str, ...] = ()
    questions: tuple[str, ...] = ()
    include_images: bool = False
    include_internal_links: bool = False
    include_outbound_links: bool = False
    optimize_for_featured_snippets: bool = False


@dataclass(frozen=True)
class GeneratedContent:
    """Article text returned by the generator plus its quality analysis."""
    content: str
    quality_analysis: QualityAnalysis
    word_count: int = 0
    model: str = ""


@dataclass(frozen=True)
class ValidationResult:
    """Generated content re-measured against the benchmarks."""
    actual_density: float
    density_accuracy: float
    heading_optimization: int
    lsi_keywords_used: int
    entities_integrated: int


@dataclass(frozen=True)
class MetaTags:
    """Title, description and keywords derived from generated content."""
    title: str
    description: str
    keywords: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "keywords": list(self.keywords),
        }


@dataclass(frozen=True)
class ContentSignals:
    """Freshness and search-intent signals of the generated article."""
    freshness_score: float
    outdated_indicators: tuple[str, ...] = ()
    intent_alignment: dict = field(default_factory=dict)
    dominant_intent: str = "informational"

    def to_dict(self) -> dict:
        return {
            "freshnessScore": self.freshness_score,
            "outdatedIndicators": list(self.outdated_indicators),
            "intentAlignment": dict(self.intent_alignment),
            "dominantIntent": self.dominant_intent,
        }


# =============================================================================
# Request / result
# =============================================================================


@dataclass
class ContentCustomizations:
    """Caller-supplied voice and targeting options."""
    tone: Tone = "professional"
    target_audience: TargetAudience = "business_owners"
    word_count: Optional[int] = None
    industry: Optional[str] = None
    company_name: Optional[str] = None
    website_url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.tone not in TONES:
            raise ValueError(f"tone must be one of {', '.join(TONES)}, got '{self.tone}'")
        if self.target_audience not in TARGET_AUDIENCES:
            raise ValueError(
                f"target_audience must be one of {', '.join(TARGET_AUDIENCES)}, "
                f"got '{self.target_audience}'"
            )
        if self.word_count is not None and self.word_count < 1:
            raise ValueError(f"word_count must be >= 1, got {self.word_count}")


@dataclass
class GenerationOptions:
    """Feature switches for one request. All default to enabled."""
    include_images: bool = True
    include_internal_links: bool = True
    include_outbound_links: bool = True
    generate_meta_tags: bool = True
    optimize_for_featured_snippets: bool = True


@dataclass
class OptimizedContentRequest:
    """Input of one orchestration run."""
    keyword: str
    location: str
    content_type: ContentType = "service_page"
    customizations: ContentCustomizations = field(default_factory=ContentCustomizations)
    options: GenerationOptions = field(default_factory=GenerationOptions)

    def __post_init__(self) -> None:
        """Normalize and validate the request."""
        self.keyword = (self.keyword or "").strip()
        self.location = (self.location or "").strip().lower()
        if not self.keyword:
            raise ValueError("Keyword is required and must be a non-empty string")
        if len(self.keyword) > MAX_KEYWORD_LENGTH:
            raise ValueError(f"Keyword must be {MAX_KEYWORD_LENGTH} characters or less")
        if not self.location:
            raise ValueError("Location is required and must be a non-empty string")
        if self.content_type not in CONTENT_TYPES:
            raise ValueError(
                f"content_type must be one of {', '.join(CONTENT_TYPES)}, "
                f"got '{self.content_type}'"
            )


@dataclass(frozen=True)
class StageTiming:
    """Wall-clock duration of one pipeline stage."""
    stage: PipelineStage
    duration_ms: int


@dataclass
class OptimizedContentResult:
    """Aggregate report returned to the caller. Never persisted by the core."""
    content: str
    meta_tags: MetaTags
    validation: ValidationResult
    benchmarks: Benchmarks
    competitors: list[CompetitorContent]
    insights: list[str]
    quality_analysis: QualityAnalysis
    content_signals: ContentSignals
    processing_time: int
    generation_id: str
    stage_timings: list[StageTiming] = field(default_factory=list)
    related_queries: list[str] = field(default_factory=list)
    people_also_ask: list[dict] = field(default_factory=list)

    @property
    def seo_metrics(self) -> dict:
        return {
            "keywordDensity": self.validation.actual_density,
            "targetDensity": self.benchmarks.average_keyword_density,
            "densityAccuracy": self.validation.density_accuracy,
            "headingOptimization": self.validation.heading_optimization,
            "readabilityScore": self.quality_analysis.readability_score,
            "overallScore": self.quality_analysis.overall_score,
            "lsiKeywordsUsed": self.validation.lsi_keywords_used,
            "entitiesIntegrated": self.validation.entities_integrated,
        }

    def to_dict(self) -> dict:
        """Serialize to the report shape returned to API callers."""
        quality = self.quality_analysis
        return {
            "content": self.content,
            "metaTags": self.meta_tags.to_dict(),
            "seoMetrics": self.seo_metrics,
            "benchmarks": self.benchmarks.to_dict(),
            "competitorAnalysis": {
                "topCompetitors": [c.to_summary() for c in self.competitors],
                "averageMetrics": {
                    "wordCount": self.benchmarks.average_word_count,
                    "keywordDensity": self.benchmarks.average_keyword_density,
                    "headingCount": self.benchmarks.average_headings,
                    "optimizedHeadings": self.benchmarks.average_optimized_headings,
                },
                "insights": list(self.insights),
            },
            "qualityAnalysis": {
                "humanWritingScore": quality.human_writing_score,
                "aiDetectionRisk": quality.ai_detection_risk,
                "eeAtScore": quality.eeat_score,
                "nlpFriendliness": quality.nlp_friendliness,
                "grammarScore": quality.grammar_score,
                "overallQuality": quality.overall_score,
            },
            "contentSignals": self.content_signals.to_dict(),
            "serpInsights": {
                "relatedQueries": list(self.related_queries),
                "peopleAlsoAsk": [dict(q) for q in self.people_also_ask],
            },
            "processingTime": self.processing_time,
            "generationId": self.generation_id,
            "stageTimings": {t.stage.value: t.duration_ms for t in self.stage_timings},
        }
