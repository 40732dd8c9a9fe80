"""
Unified content orchestration.

This module runs the full pipeline for one request:
- SERP analysis for the keyword and location
- Concurrent competitor extraction
- Benchmark calculation
- AI content generation against the benchmarks
- Validation of the generated content
- Meta tag generation

Stages run strictly in order with no retries. A failing stage aborts the run
with a PipelineError naming the stage.
"""

import logging
import random
import string
import time
from typing import Callable, Optional, TypeVar

from .benchmarks import (
    aggregate_benchmarks,
    format_competitor_insights,
    generate_competitor_insights,
    score_competitors,
)
from .config import OrchestratorConfig
from .content_extractor import ContentExtractor, select_competitor_urls
from .content_generator import AIContentGenerator
from .errors import PipelineError, UpstreamAPIError
from .firecrawl_client import FireCrawlClient
from .llm_client import LLMClient
from .meta_tags import fallback_meta_tags, generate_meta_tags
from .models import (
    Benchmarks,
    ContentGenerationRequest,
    OptimizedContentRequest,
    OptimizedContentResult,
    PipelineStage,
    SerpAnalysis,
    StageTiming,
)
from .page_fetcher import HttpPageFetcher
from .serp_client import SerperClient, build_stub_analysis
from .signals import analyze_content_signals
from .validator import validate_content

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ID_ALPHABET = string.digits + string.ascii_lowercase


def new_generation_id(now_ms: Optional[int] = None) -> str:
    """Run id of the form gen-<epoch ms>-<9 base36 chars>."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"gen-{now_ms}-{suffix}"


class UnifiedContentOrchestrator:
    """
    Runs SERP analysis through meta tagging for one request at a time.

    Collaborators are injected; use from_config() to build the default set.

    Example:
        >>> orchestrator = UnifiedContentOrchestrator.from_config(OrchestratorConfig.from_env())
        >>> result = orchestrator.generate_optimized_content(
        ...     OptimizedContentRequest(keyword="movers", location="usa")
        ... )
    """

    def __init__(
        self,
        serp_client: SerperClient,
        extractor: ContentExtractor,
        generator: AIContentGenerator,
        config: Optional[OrchestratorConfig] = None,
    ):
        self.serp_client = serp_client
        self.extractor = extractor
        self.generator = generator
        self.config = config or OrchestratorConfig()

    @classmethod
    def from_config(cls, config: Optional[OrchestratorConfig] = None) -> "UnifiedContentOrchestrator":
        """
        Build the orchestrator with the default collaborators.

        Competitor pages go through FireCrawl when a key is configured,
        otherwise through a direct HTTP fetch.

        Raises:
            LLMClientError: If no Anthropic API key is available.
        """
        config = config or OrchestratorConfig.from_env()
        timeout = config.request_timeout

        if config.has_firecrawl:
            scraper = FireCrawlClient(api_key=config.firecrawl_api_key, timeout=timeout)
        else:
            logger.info("FireCrawl not configured; fetching competitor pages directly")
            scraper = HttpPageFetcher(timeout=timeout)

        llm_client = LLMClient(
            api_key=config.anthropic_api_key,
            model=config.llm_model,
            temperature=config.llm_temperature,
            timeout=timeout,
        )
        return cls(
            serp_client=SerperClient(api_key=config.serper_api_key, timeout=timeout),
            extractor=ContentExtractor(scraper, config),
            generator=AIContentGenerator(llm_client),
            config=config,
        )

    def generate_optimized_content(self, request: OptimizedContentRequest) -> OptimizedContentResult:
        """
        Run the whole pipeline for one request.

        Raises:
            PipelineError: If any stage fails. ``.stage`` names the stage and
                ``.cause`` holds the original exception.
        """
        started = time.perf_counter()
        generation_id = new_generation_id()
        timings: list[StageTiming] = []
        keyword = request.keyword
        logger.info(f"[{generation_id}] Starting content generation for '{keyword}' in {request.location}")

        serp = self._run_stage(PipelineStage.SERP_ANALYSIS, timings, self._analyze_serp, request)
        competitors = self._run_stage(PipelineStage.EXTRACTION, timings, self._extract_competitors, serp)
        competitors, benchmarks = self._run_stage(
            PipelineStage.BENCHMARKING, timings, self._benchmark, competitors, keyword,
        )
        generated = self._run_stage(
            PipelineStage.GENERATION, timings,
            self._generate, request, benchmarks, len(competitors), serp,
        )
        validation, signals = self._run_stage(
            PipelineStage.VALIDATION, timings, self._validate, generated.content, keyword, benchmarks,
        )
        meta_tags = self._run_stage(
            PipelineStage.META_TAGGING, timings, self._build_meta_tags, request, generated.content,
        )

        processing_time = int((time.perf_counter() - started) * 1000)
        logger.info(f"[{generation_id}] Content generation completed in {processing_time}ms")

        return OptimizedContentResult(
            content=generated.content,
            meta_tags=meta_tags,
            validation=validation,
            benchmarks=benchmarks,
            competitors=competitors,
            insights=generate_competitor_insights(competitors, benchmarks),
            quality_analysis=generated.quality_analysis,
            content_signals=signals,
            processing_time=processing_time,
            generation_id=generation_id,
            stage_timings=timings,
            related_queries=list(serp.related_queries),
            people_also_ask=list(serp.people_also_ask),
        )

    def _run_stage(
        self,
        stage: PipelineStage,
        timings: list[StageTiming],
        func: Callable[..., T],
        *args,
    ) -> T:
        """Run one stage, record its duration and wrap its failure."""
        logger.info(f"{stage.description} started")
        started = time.perf_counter()
        try:
            result = func(*args)
        except Exception as e:
            logger.error(f"{stage.description} failed: {e}")
            raise PipelineError(stage, e) from e

        duration_ms = int((time.perf_counter() - started) * 1000)
        timings.append(StageTiming(stage=stage, duration_ms=duration_ms))
        logger.info(f"{stage.description} completed in {duration_ms}ms")
        return result

    def _analyze_serp(self, request: OptimizedContentRequest) -> SerpAnalysis:
        try:
            return self.serp_client.analyze(
                request.keyword,
                request.location,
                num_results=self.config.serp_num_results,
                exclude_domains=self.config.excluded_domains,
            )
        except UpstreamAPIError as e:
            if not self.config.allow_serp_stub:
                raise
            logger.warning(f"SERP analysis failed ({e}); substituting development stub results")
            return build_stub_analysis(request.keyword, request.location)

    def _extract_competitors(self, serp: SerpAnalysis):
        urls = select_competitor_urls(
            serp.results,
            excluded_domains=self.config.excluded_domains,
            limit=self.config.max_competitors,
        )
        logger.info(f"Extracting {len(urls)} competitor pages")
        return self.extractor.extract_many(urls)

    def _benchmark(self, competitors, keyword: str):
        scored = score_competitors(competitors, keyword, self.config.strip_token_punctuation)
        return scored, aggregate_benchmarks(scored, keyword, self.config)

    def _generate(self, request, benchmarks, competitor_count, serp):
        return self.generator.generate(
            self._build_generation_request(request, benchmarks, competitor_count, serp)
        )

    def _build_generation_request(
        self,
        request: OptimizedContentRequest,
        benchmarks: Benchmarks,
        competitor_count: int,
        serp: SerpAnalysis,
    ) -> ContentGenerationRequest:
        custom = request.customizations
        options = request.options
        return ContentGenerationRequest(
            keyword=request.keyword,
            industry=custom.industry or self.config.default_industry,
            target_audience=custom.target_audience,
            tone=custom.tone,
            word_count=custom.word_count or benchmarks.average_word_count,
            target_keyword_density=benchmarks.average_keyword_density,
            target_optimized_headings_count=benchmarks.average_optimized_headings,
            lsi_keywords=benchmarks.lsi_keywords,
            entities=benchmarks.entities,
            variations=benchmarks.variations,
            content_type=request.content_type,
            competitor_insights=format_competitor_insights(benchmarks, competitor_count),
            company_name=custom.company_name,
            location=request.location,
            website_url=custom.website_url,
            related_queries=tuple(serp.related_queries),
            questions=tuple(q["question"] for q in serp.people_also_ask),
            include_images=options.include_images,
            include_internal_links=options.include_internal_links,
            include_outbound_links=options.include_outbound_links,
            optimize_for_featured_snippets=options.optimize_for_featured_snippets,
        )

    def _validate(self, content: str, keyword: str, benchmarks: Benchmarks):
        validation = validate_content(
            content, keyword, benchmarks, strip_punctuation=self.config.strip_token_punctuation
        )
        return validation, analyze_content_signals(content)

    def _build_meta_tags(self, request: OptimizedContentRequest, content: str):
        if not request.options.generate_meta_tags:
            return fallback_meta_tags(request.keyword)
        return generate_meta_tags(content, request.keyword, self.config)


def generate_optimized_content(
    request: OptimizedContentRequest,
    config: Optional[OrchestratorConfig] = None,
) -> OptimizedContentResult:
    """
    Convenience wrapper: build a default orchestrator and run one request.

    Example:
        >>> result = generate_optimized_content(
        ...     OptimizedContentRequest(keyword="movers", location="usa")
        ... )
    """
    return UnifiedContentOrchestrator.from_config(config).generate_optimized_content(request)
