"""
Heuristic quality scoring of generated articles.

Each rule is a pure function returning a 0-100 score so it can be tested on
its own; analyze_quality combines them with explicit weights. These are
rule tables over string matches, not statistical models.
"""

import re
from dataclasses import dataclass
from statistics import mean, pstdev
from typing import Optional

from .models import QualityAnalysis
from .text_analysis import round_half_up


# Phrases that read as machine-written
AI_CLICHE_PHRASES = (
    "meticulous", "navigating", "complexities", "realm", "bespoke", "tailored",
    "delve", "in today's fast-paced world", "unlock the power", "game-changer",
)

# Signals of experience, expertise, authority and trust
EEAT_SIGNALS = (
    "years", "experience", "certified", "licensed", "projects",
    "testimonial", "guarantee", "warranty", "rated", "trusted",
    "qualified", "professional", "expert", "award", "accredited",
)

PASSIVE_INDICATORS = (
    "is done", "was made", "are built", "were created",
    "is provided", "was completed", "are offered", "is known",
    "is located", "was established", "are designed", "is recommended",
)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_HEADING_PREFIX_RE = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_WORD_RE = re.compile(r"[A-Za-z']+")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")
_CONTRACTION_RE = re.compile(r"\b\w+'(?:s|t|re|ve|ll|d|m)\b", re.IGNORECASE)
_REPEATED_WORD_RE = re.compile(r"\b(\w+)\s+\1\b", re.IGNORECASE)
_STATISTIC_RE = re.compile(r"\d+(?:\.\d+)?\s*(?:%|percent\b)", re.IGNORECASE)


@dataclass(frozen=True)
class QualityWeights:
    """Weights of each rule in the overall score."""
    readability: float = 0.20
    human_writing: float = 0.25
    eeat: float = 0.20
    nlp_friendliness: float = 0.15
    grammar: float = 0.20

    def __post_init__(self):
        values = (self.readability, self.human_writing, self.eeat,
                  self.nlp_friendliness, self.grammar)
        if any(v < 0 for v in values):
            raise ValueError("quality weights must be non-negative")
        if sum(values) <= 0:
            raise ValueError("at least one quality weight must be positive")


def _plain_text(content: str) -> str:
    return _HEADING_PREFIX_RE.sub("", content or "")


def split_sentences(content: str) -> list[str]:
    """Split on sentence-ending punctuation, dropping empty fragments."""
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(_plain_text(content)) if s.strip()]


def count_syllables(word: str) -> int:
    """Approximate syllables as vowel groups, ignoring a silent trailing 'e'."""
    word = word.lower()
    if word.endswith("e") and len(word) > 2 and not word.endswith("le"):
        word = word[:-1]
    return max(1, len(_VOWEL_GROUP_RE.findall(word)))


def _clamp(score: float) -> float:
    return max(0.0, min(100.0, score))


def readability_score(content: str) -> float:
    """Flesch reading ease, clamped to 0-100."""
    sentences = split_sentences(content)
    words = _WORD_RE.findall(_plain_text(content))
    if not sentences or not words:
        return 0.0
    syllables = sum(count_syllables(w) for w in words)
    score = (
        206.835
        - 1.015 * (len(words) / len(sentences))
        - 84.6 * (syllables / len(words))
    )
    return round_half_up(_clamp(score), 1)


def human_writing_score(content: str) -> float:
    """
    Score how human the prose reads.

    Base 50; up to +30 for varied sentence length (coefficient of
    variation), up to +20 for contractions, -5 per cliché phrase.
    """
    sentences = split_sentences(content)
    if not sentences:
        return 0.0

    lengths = [len(s.split()) for s in sentences]
    score = 50.0
    if len(lengths) > 1 and mean(lengths) > 0:
        variation = pstdev(lengths) / mean(lengths)
        score += min(30.0, variation * 60)

    contractions = len(_CONTRACTION_RE.findall(content))
    score += min(20.0, contractions / len(sentences) * 40)

    content_lower = content.lower()
    score -= 5 * sum(1 for phrase in AI_CLICHE_PHRASES if phrase in content_lower)
    return round_half_up(_clamp(score), 1)


def ai_detection_risk(human_score: float) -> str:
    """Map the human-writing score to a risk level."""
    if human_score >= 70:
        return "low"
    if human_score >= 50:
        return "medium"
    return "high"


def eeat_score(content: str) -> float:
    """
    Score experience, expertise, authority and trust signals.

    8 points per distinct signal word, +10 for statistics, +10 for cited
    sources ("according to", "study", "research").
    """
    content_lower = (content or "").lower()
    score = 8.0 * sum(1 for signal in EEAT_SIGNALS if signal in content_lower)
    if _STATISTIC_RE.search(content_lower):
        score += 10
    if any(marker in content_lower for marker in ("according to", "study", "research")):
        score += 10
    return round_half_up(_clamp(score), 1)


def nlp_friendliness_score(content: str, max_sentence_words: int = 20) -> float:
    """
    Share of short sentences, penalized for passive constructions.

    Percentage of sentences with at most ``max_sentence_words`` words,
    minus 5 per passive indicator.
    """
    sentences = split_sentences(content)
    if not sentences:
        return 0.0
    short = sum(1 for s in sentences if len(s.split()) <= max_sentence_words)
    score = short / len(sentences) * 100
    content_lower = content.lower()
    score -= 5 * sum(1 for p in PASSIVE_INDICATORS if p in content_lower)
    return round_half_up(_clamp(score), 1)


def grammar_score(content: str) -> float:
    """
    Surface grammar checks.

    100 minus 5 per repeated word, double space, or sentence starting with a
    lower-case letter.
    """
    text = _plain_text(content)
    if not text.strip():
        return 0.0
    issues = len(_REPEATED_WORD_RE.findall(text))
    issues += len(re.findall(r"[^\s] {2,}[^\s]", text))
    issues += sum(1 for s in split_sentences(text) if s[0].islower())
    return round_half_up(_clamp(100.0 - 5 * issues), 1)


def analyze_quality(content: str, weights: Optional[QualityWeights] = None) -> QualityAnalysis:
    """Run every rule and combine them into a weighted overall score."""
    weights = weights or QualityWeights()

    readability = readability_score(content)
    human = human_writing_score(content)
    eeat = eeat_score(content)
    nlp = nlp_friendliness_score(content)
    grammar = grammar_score(content)

    total_weight = (weights.readability + weights.human_writing + weights.eeat
                    + weights.nlp_friendliness + weights.grammar)
    overall = (
        readability * weights.readability
        + human * weights.human_writing
        + eeat * weights.eeat
        + nlp * weights.nlp_friendliness
        + grammar * weights.grammar
    ) / total_weight

    return QualityAnalysis(
        readability_score=readability,
        human_writing_score=human,
        ai_detection_risk=ai_detection_risk(human),
        eeat_score=eeat,
        nlp_friendliness=nlp,
        grammar_score=grammar,
        overall_score=round_half_up(overall, 1),
    )
