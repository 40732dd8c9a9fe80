# -*- coding: utf-8 -*-
"""
Centralized configuration for the SEO content orchestrator.

This module provides a unified configuration dataclass that controls
pipeline limits, provider credentials, benchmark caps and the
development-only affordances of the orchestrator.
"""

import os
from dataclasses import dataclass, field
from typing import Literal, Optional


# - "production": upstream failures are always fatal.
# - "development": a degraded single-result SERP stub may replace a failed search.
Environment = Literal["production", "development"]


@dataclass
class OrchestratorConfig:
    """
    Central configuration for content orchestration behavior.

    Attributes:
        serper_api_key: API key for the Serper search API.
        firecrawl_api_key: API key for FireCrawl. When absent, competitor
            pages are fetched directly over HTTP.
        anthropic_api_key: API key for the Anthropic Messages API.
        llm_model: Model identifier used for article generation.
        llm_temperature: Sampling temperature for article generation.
        request_timeout: Timeout in seconds for every outbound HTTP call.
            There is no other per-task timeout in the pipeline.

        serp_num_results: Number of organic results kept from the search.
        max_competitors: Maximum competitor URLs fetched per run.
        max_workers: Size of the extraction thread pool.
        excluded_domains: Domains never used as competitors.

        competitor_lsi_limit: LSI keywords kept per competitor page.
        competitor_entity_limit: Entities kept per competitor page.
        benchmark_lsi_cap: LSI keywords kept after merging all competitors.
        benchmark_entity_cap: Entities kept after merging all competitors.
        variation_cap: Maximum keyword variations.

        meta_title_max_length: Titles longer than this are truncated with "...".
        meta_description_max_length: Descriptions longer than this are truncated.
        meta_keyword_count: Maximum meta keywords including the primary keyword.

        default_industry: Industry sent to the generator when the request has none.

        allow_serp_stub: Substitute a single-result stub when the search fails.
            Development affordance only, never enabled by ``production()``.
        legacy_heading_detection: Detect Markdown headings on the cleaned
            (whitespace-collapsed) text instead of the raw scraped source.
        strip_token_punctuation: Trim leading and trailing punctuation from
            words before matching the keyword. Disable to compare raw
            whitespace-separated tokens, so "running shoes." does not count.
    """

    # Provider credentials
    serper_api_key: Optional[str] = None
    firecrawl_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    # LLM
    llm_model: str = "claude-sonnet-4-20250514"
    llm_temperature: float = 0.7
    request_timeout: float = 60.0

    # SERP and extraction limits
    serp_num_results: int = 5
    max_competitors: int = 5
    max_workers: int = 5
    excluded_domains: tuple[str, ...] = field(default=("youtube.com",))

    # Per-page text heuristics
    competitor_lsi_limit: int = 20
    competitor_entity_limit: int = 10

    # Benchmark merge caps
    benchmark_lsi_cap: int = 15
    benchmark_entity_cap: int = 10
    variation_cap: int = 8

    # Meta tags
    meta_title_max_length: int = 60
    meta_description_max_length: int = 160
    meta_keyword_count: int = 10

    default_industry: str = "general"

    environment: Environment = "production"
    allow_serp_stub: bool = False
    legacy_heading_detection: bool = False
    strip_token_punctuation: bool = True

    @property
    def is_development(self) -> bool:
        """Check if running with development affordances."""
        return self.environment == "development"

    @property
    def has_firecrawl(self) -> bool:
        """Check if FireCrawl credentials are configured."""
        return bool(self.firecrawl_api_key)

    def __post_init__(self):
        """Validate configuration values."""
        if self.environment not in ("production", "development"):
            raise ValueError(
                f"environment must be 'production' or 'development', "
                f"got '{self.environment}'"
            )
        if self.allow_serp_stub and self.environment == "production":
            raise ValueError("allow_serp_stub is only permitted in development")
        if self.serp_num_results < 1:
            raise ValueError(f"serp_num_results must be >= 1, got {self.serp_num_results}")
        if self.max_competitors < 1:
            raise ValueError(f"max_competitors must be >= 1, got {self.max_competitors}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be > 0, got {self.request_timeout}")
        if not 0.0 <= self.llm_temperature <= 1.0:
            raise ValueError(
                f"llm_temperature must be between 0 and 1, got {self.llm_temperature}"
            )
        for name in (
            "competitor_lsi_limit",
            "competitor_entity_limit",
            "benchmark_lsi_cap",
            "benchmark_entity_cap",
            "variation_cap",
            "meta_keyword_count",
        ):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        if self.meta_title_max_length < 4 or self.meta_description_max_length < 4:
            raise ValueError("meta length limits must leave room for the '...' suffix")
        self.excluded_domains = tuple(d.lower() for d in self.excluded_domains)

    @classmethod
    def from_env(cls, **overrides) -> "OrchestratorConfig":
        """Create config with credentials read from environment variables.

        Reads SERPER_API_KEY, FIRECRAWL_API_KEY and ANTHROPIC_API_KEY.
        Explicit overrides win over the environment.
        """
        defaults = {
            "serper_api_key": os.environ.get("SERPER_API_KEY"),
            "firecrawl_api_key": os.environ.get("FIRECRAWL_API_KEY"),
            "anthropic_api_key": os.environ.get("ANTHROPIC_API_KEY"),
        }
        defaults.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**defaults)

    @classmethod
    def production(cls, **overrides) -> "OrchestratorConfig":
        """Create config with production defaults.

        Every upstream failure is fatal and the SERP stub is disabled.
        """
        defaults = {
            "environment": "production",
            "allow_serp_stub": False,
        }
        defaults.update(overrides)
        return cls.from_env(**defaults)

    @classmethod
    def development(cls, **overrides) -> "OrchestratorConfig":
        """Create config with development defaults.

        A failed search is replaced with a degraded single-result stub so the
        rest of the pipeline can be exercised without a search API key.
        """
        defaults = {
            "environment": "development",
            "allow_serp_stub": True,
        }
        defaults.update(overrides)
        return cls.from_env(**defaults)
