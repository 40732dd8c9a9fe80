"""
Freshness and search-intent signals of an article.

Rule-based scorers over phrase lists. Weights live in small frozen
dataclasses so each rule can be tuned and tested on its own.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .models import ContentSignals
from .text_analysis import round_half_up


OUTDATED_KEYWORDS = (
    "last year", "in 2020", "in 2021", "in 2022", "previously", "formerly",
    "recently announced", "upcoming", "soon to be released", "planned for",
)

CURRENT_PHRASES = (
    "as of today", "current trends", "latest developments", "recent studies",
    "new research", "updated guidelines", "current best practices",
)

UPDATE_NEEDED_PHRASES = (
    "will be released", "is planned", "is expected", "upcoming",
    "in the near future", "beta version", "under development",
)

INTENT_INDICATORS: dict[str, tuple[str, ...]] = {
    "informational": (
        "what is", "how to", "guide", "tutorial", "learn", "understand",
        "definition", "meaning", "explanation", "overview", "introduction",
        "steps", "process", "method", "technique", "tips", "advice",
    ),
    "commercial": (
        "best", "top", "review", "compare", "vs", "versus", "alternative",
        "rating", "recommendation", "pros and cons", "features", "benefits",
        "price", "cost", "cheap", "affordable", "discount", "deal",
    ),
    "navigational": (
        "login", "sign in", "account", "dashboard", "contact", "about us",
        "support", "help center", "official", "website", "homepage",
        "location", "address", "phone", "email", "hours",
    ),
    "transactional": (
        "buy", "purchase", "order", "shop", "cart", "checkout", "payment",
        "subscribe", "download", "free trial", "get started", "sign up",
        "book now", "reserve", "apply", "join", "register",
    ),
}

# Structural markers that add a flat boost to an intent
INTENT_STRUCTURE_MARKERS: dict[str, tuple[str, ...]] = {
    "informational": ("table of contents", "introduction"),
    "commercial": ("$", "price", "rating"),
    "navigational": ("contact", "location"),
    "transactional": ("buy now", "add to cart"),
}

_YEAR_RE = re.compile(r"\b(20\d{2})\b")
_STATISTICS_RE = re.compile(r"\d+%|\d+\s*(?:percent|million|billion|thousand)")


@dataclass(frozen=True)
class FreshnessWeights:
    base: float = 50
    current_language_bonus: float = 20
    multiple_current_bonus: float = 5
    outdated_language_penalty: float = 30
    updated_within_30_days: float = 20
    updated_within_90_days: float = 10
    updated_within_180_days: float = -10
    updated_later: float = -20
    old_year_penalty: float = 15
    stale_statistics_penalty: float = 10


@dataclass(frozen=True)
class IntentWeights:
    match_multiplier: float = 10
    informational_boost: float = 10
    commercial_boost: float = 15
    navigational_boost: float = 20
    transactional_boost: float = 25

    def boost_for(self, intent: str) -> float:
        return getattr(self, f"{intent}_boost")


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def _old_years(content: str, current_year: int) -> list[str]:
    return [y for y in _YEAR_RE.findall(content) if int(y) < current_year - 1]


def calculate_freshness_score(
    content: str,
    last_updated: Optional[datetime] = None,
    now: Optional[datetime] = None,
    weights: Optional[FreshnessWeights] = None,
) -> float:
    """
    Score how current an article reads, 0-100.

    Args:
        content: Article text.
        last_updated: When the article was last revised, if known.
        now: Reference time; defaults to the current UTC time.
        weights: Rule weights.
    """
    weights = weights or FreshnessWeights()
    now = _now(now)
    content_lower = content.lower()
    score = weights.base

    current_count = sum(1 for phrase in CURRENT_PHRASES if phrase in content_lower)
    has_current = current_count > 0
    if has_current:
        score += weights.current_language_bonus
        if current_count >= 2:
            score += weights.multiple_current_bonus
    if any(keyword in content_lower for keyword in OUTDATED_KEYWORDS):
        score -= weights.outdated_language_penalty

    if last_updated is not None:
        days = (now - last_updated).days
        if days < 30:
            score += weights.updated_within_30_days
        elif days < 90:
            score += weights.updated_within_90_days
        elif days < 180:
            score += weights.updated_within_180_days
        else:
            score += weights.updated_later

    if _old_years(content, now.year):
        score -= weights.old_year_penalty

    if _STATISTICS_RE.search(content) and not has_current:
        score -= weights.stale_statistics_penalty

    return round_half_up(max(0.0, min(100.0, score)), 1)


def find_outdated_indicators(content: str, now: Optional[datetime] = None) -> list[str]:
    """Human-readable reasons the article may be outdated, de-duplicated in order."""
    content_lower = content.lower()
    indicators: dict[str, None] = {}

    for keyword in OUTDATED_KEYWORDS:
        if keyword in content_lower:
            indicators.setdefault(f'Outdated time reference: "{keyword}"', None)

    for year in _old_years(content, _now(now).year):
        indicators.setdefault(f"Outdated year reference: {year}", None)

    for phrase in UPDATE_NEEDED_PHRASES:
        if phrase in content_lower:
            indicators.setdefault(f'Potentially outdated future reference: "{phrase}"', None)

    return list(indicators)


def analyze_intent_alignment(
    content: str, weights: Optional[IntentWeights] = None
) -> dict[str, float]:
    """
    Score how strongly the article serves each search intent, 0-100.

    A single-word indicator counts once when present as a token; a phrase
    counts its word count when present as a substring.
    """
    weights = weights or IntentWeights()
    content_lower = content.lower()
    words = set(content_lower.split())
    total_words = len(content_lower.split())

    scores: dict[str, float] = {}
    for intent, indicators in INTENT_INDICATORS.items():
        matches = 0
        for indicator in indicators:
            size = len(indicator.split())
            if size == 1:
                matches += 1 if indicator in words else 0
            elif indicator in content_lower:
                matches += size
        score = min(100.0, matches / total_words * 100 * weights.match_multiplier) if total_words else 0.0

        if any(marker in content_lower for marker in INTENT_STRUCTURE_MARKERS[intent]):
            score += weights.boost_for(intent)
        scores[intent] = round_half_up(min(100.0, score), 1)

    return scores


def dominant_intent(alignment: dict[str, float]) -> str:
    """Highest-scoring intent; ties resolve in INTENT_INDICATORS order."""
    if not alignment:
        return "informational"
    return max(INTENT_INDICATORS, key=lambda intent: alignment.get(intent, 0.0))


def analyze_content_signals(
    content: str,
    now: Optional[datetime] = None,
    freshness_weights: Optional[FreshnessWeights] = None,
    intent_weights: Optional[IntentWeights] = None,
) -> ContentSignals:
    """Run the freshness and intent scorers over one article."""
    alignment = analyze_intent_alignment(content, intent_weights)
    return ContentSignals(
        freshness_score=calculate_freshness_score(content, now=now, weights=freshness_weights),
        outdated_indicators=tuple(find_outdated_indicators(content, now)),
        intent_alignment=alignment,
        dominant_intent=dominant_intent(alignment),
    )
