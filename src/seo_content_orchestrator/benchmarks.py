"""
Competitor benchmark calculation.

Scores each extracted competitor against the target keyword, then averages
the per-page metrics into the targets the generator writes against.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from .config import OrchestratorConfig
from .errors import NoCompetitorDataError
from .models import Benchmarks, CompetitorContent
from .text_analysis import calculate_keyword_density, is_heading_optimized, round_half_up

logger = logging.getLogger(__name__)


# Domain-specific keyword substitutions
KEYWORD_SUBSTITUTIONS: dict[str, tuple[str, ...]] = {
    "movers": ("moving companies", "relocation services", "moving services"),
}


def score_competitor(
    competitor: CompetitorContent, keyword: str, strip_punctuation: bool = True
) -> CompetitorContent:
    """Return a copy with keyword density and heading optimized flags filled in."""
    return replace(
        competitor,
        keyword_density=calculate_keyword_density(competitor.content, keyword, strip_punctuation),
        headings=tuple(
            replace(h, optimized=is_heading_optimized(h.text, keyword))
            for h in competitor.headings
        ),
    )


def score_competitors(
    competitors: Sequence[CompetitorContent], keyword: str, strip_punctuation: bool = True
) -> list[CompetitorContent]:
    """Score every competitor against the keyword."""
    return [score_competitor(c, keyword, strip_punctuation) for c in competitors]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _merge_unique(groups, cap: int) -> tuple[str, ...]:
    """Union of term lists in first-seen order, capped after the merge."""
    merged: dict[str, None] = {}
    for group in groups:
        for term in group:
            merged.setdefault(term, None)
    return tuple(list(merged)[:cap])


def generate_keyword_variations(keyword: str, cap: int = 8) -> list[str]:
    """
    Build keyword variations from a small fixed rule set.

    Identity, naive plural, reversed word order for multi-word keywords, and
    the substitutions in KEYWORD_SUBSTITUTIONS.
    """
    variations: dict[str, None] = {keyword: None, keyword + "s": None}

    words = keyword.split()
    if len(words) > 1:
        variations.setdefault(" ".join(reversed(words)), None)

    for term, replacements in KEYWORD_SUBSTITUTIONS.items():
        if term in keyword:
            for replacement in replacements:
                variations.setdefault(keyword.replace(term, replacement, 1), None)

    return list(variations)[:cap]


def calculate_benchmarks(
    competitors: Sequence[CompetitorContent],
    keyword: str,
    config: Optional[OrchestratorConfig] = None,
) -> Benchmarks:
    """
    Average competitor metrics into generation targets.

    Args:
        competitors: Successfully extracted competitors (scored or not).
        keyword: Target keyword.
        config: Caps for the merged term lists.

    Returns:
        Benchmarks with integer averages for word and heading counts and a
        2-decimal average keyword density.

    Raises:
        NoCompetitorDataError: If competitors is empty.
    """
    config = config or OrchestratorConfig()
    scored = score_competitors(competitors, keyword, config.strip_token_punctuation)
    return aggregate_benchmarks(scored, keyword, config)


def aggregate_benchmarks(
    scored: Sequence[CompetitorContent],
    keyword: str,
    config: Optional[OrchestratorConfig] = None,
) -> Benchmarks:
    """
    Average already-scored competitors.

    Uses each record's keyword_density and heading optimized flags as they
    are; calculate_benchmarks scores first and then calls this.
    """
    if not scored:
        raise NoCompetitorDataError("Cannot calculate benchmarks without competitor data")
    config = config or OrchestratorConfig()

    benchmarks = Benchmarks(
        average_word_count=int(round_half_up(_mean([c.word_count for c in scored]))),
        average_headings=int(round_half_up(_mean([c.heading_count for c in scored]))),
        average_keyword_density=round_half_up(_mean([c.keyword_density for c in scored]), 2),
        average_optimized_headings=int(
            round_half_up(_mean([c.optimized_heading_count for c in scored]))
        ),
        lsi_keywords=_merge_unique((c.lsi_keywords for c in scored), config.benchmark_lsi_cap),
        entities=_merge_unique((c.entities for c in scored), config.benchmark_entity_cap),
        variations=tuple(generate_keyword_variations(keyword, config.variation_cap)),
    )
    logger.info(
        f"Benchmarks from {len(scored)} competitors: "
        f"{benchmarks.average_word_count} words, "
        f"{benchmarks.average_keyword_density}% density, "
        f"{benchmarks.average_optimized_headings} optimized headings"
    )
    return benchmarks


def format_competitor_insights(benchmarks: Benchmarks, competitor_count: int) -> str:
    """Summarize benchmarks as prompt text for the generator."""
    return "\n".join([
        f"Based on analysis of top {competitor_count} competitors:",
        f"- Average word count: {benchmarks.average_word_count}",
        f"- Average keyword density: {benchmarks.average_keyword_density}%",
        f"- Average headings: {benchmarks.average_headings}",
        f"- Average optimized headings: {benchmarks.average_optimized_headings}",
        f"- Key LSI keywords: {', '.join(benchmarks.lsi_keywords[:5])}",
        f"- Important entities: {', '.join(benchmarks.entities[:3])}",
    ])


def generate_competitor_insights(
    competitors: Sequence[CompetitorContent], benchmarks: Benchmarks
) -> list[str]:
    """Plain-language insight sentences for the report."""
    insights = [
        f"Top {len(competitors)} competitors average {benchmarks.average_word_count} words per page",
        f"Optimal keyword density is {benchmarks.average_keyword_density}% based on top performers",
        f"Successful pages use {benchmarks.average_optimized_headings} keyword-optimized headings",
        f"Common LSI keywords: {', '.join(benchmarks.lsi_keywords[:3])}",
    ]
    if benchmarks.entities:
        insights.append(f"Important entities to include: {', '.join(benchmarks.entities[:2])}")
    return insights
