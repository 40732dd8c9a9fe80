"""
Text heuristics shared by extraction, benchmarking and validation.

Every function here is pure: the same text and keyword always produce the
same numbers, so competitor pages and generated content are measured with
exactly the same rules.
"""

import re
import string
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal

from bs4 import BeautifulSoup

from .models import Heading


# Blocks removed wholesale before tag stripping
BLOCK_TAGS = ("script", "style", "nav", "header", "footer")
_BLOCK_TAG_PATTERNS = [
    re.compile(rf"<{tag}[^>]*>[\s\S]*?</{tag}>", re.IGNORECASE)
    for tag in BLOCK_TAGS
]
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"[^\w]")

MARKDOWN_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$", re.MULTILINE)
_HTML_HEADING_RE = re.compile(r"<h[1-6][\s>]", re.IGNORECASE)

STOPWORDS = frozenset({
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
    "that", "this", "from", "your", "have", "will", "they", "their", "there",
    "what", "which", "when", "where", "been", "were", "into", "also", "than",
    "then", "them", "some", "only", "other", "about", "more", "most", "such",
    "these", "those", "would", "could", "should",
})

ENTITY_PATTERNS = (
    re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+\b"),  # proper nouns (names, places)
    re.compile(r"\b[A-Z]{2,}\b"),  # acronyms
    re.compile(r"\b\d{4}\b"),  # years
)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round like a spreadsheet: 0.5 always goes away from zero."""
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def clean_content(raw_content: str) -> str:
    """
    Reduce scraped markup to plain text.

    Removes script, style, nav, header and footer blocks, replaces every
    remaining tag with a space and collapses whitespace.
    """
    text = raw_content or ""
    for pattern in _BLOCK_TAG_PATTERNS:
        text = pattern.sub("", text)
    text = _TAG_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def count_words(content: str) -> int:
    """Count whitespace-separated tokens."""
    return len(content.split())


def extract_markdown_headings(content: str) -> list[Heading]:
    """Recover headings from Markdown '#' prefixes at line starts."""
    return [
        Heading(level=len(match.group(1)), text=match.group(2).strip())
        for match in MARKDOWN_HEADING_RE.finditer(content or "")
    ]


def extract_html_headings(raw_html: str) -> list[Heading]:
    """Recover <h1>-<h6> elements in document order, skipping page chrome."""
    soup = BeautifulSoup(raw_html, "lxml")
    for block in soup.find_all(list(BLOCK_TAGS)):
        block.decompose()
    headings = []
    for tag in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
        text = _WHITESPACE_RE.sub(" ", tag.get_text(" ")).strip()
        if text:
            headings.append(Heading(level=int(tag.name[1]), text=text))
    return headings


def extract_headings(raw_content: str) -> list[Heading]:
    """
    Recover headings from the raw scraped source, before any tag stripping.

    Markdown headings come first, then HTML heading elements when the source
    contains any.
    """
    headings = extract_markdown_headings(raw_content)
    if raw_content and _HTML_HEADING_RE.search(raw_content):
        headings.extend(extract_html_headings(raw_content))
    return headings


def top_terms(content: str, limit: int) -> list[str]:
    """
    Rank terms by frequency.

    Tokens are lower-cased and stripped of non-word characters; only tokens
    longer than three characters that are not stopwords count. Ties keep
    first-seen order.
    """
    counts: Counter = Counter()
    for word in content.lower().split():
        clean = _NON_WORD_RE.sub("", word)
        if len(clean) > 3 and clean not in STOPWORDS:
            counts[clean] += 1
    return [term for term, _ in counts.most_common(limit)]


def extract_lsi_keywords(content: str, limit: int = 20) -> list[str]:
    """Approximate LSI keywords as the most frequent content terms."""
    return top_terms(content, limit)


def extract_entities(content: str, limit: int = 10) -> list[str]:
    """Collect proper-noun pairs, acronyms and years, de-duplicated in order."""
    entities: dict[str, None] = {}
    for pattern in ENTITY_PATTERNS:
        for match in pattern.findall(content):
            entities.setdefault(match, None)
    return list(entities)[:limit]


def _normalize_token(token: str, strip_punctuation: bool) -> str:
    # "shoes." matches "shoes" unless raw token comparison is requested
    return token.strip(string.punctuation) if strip_punctuation else token


def count_phrase_occurrences(content: str, keyword: str, strip_punctuation: bool = True) -> int:
    """
    Count exact, case-insensitive occurrences of a keyword phrase over word windows.

    With strip_punctuation=False tokens are compared exactly as split on
    whitespace, so a keyword followed by a full stop does not match.
    """
    words = [_normalize_token(w, strip_punctuation) for w in content.lower().split()]
    target = [_normalize_token(w, strip_punctuation) for w in keyword.lower().split()]
    target = [w for w in target if w]
    if not target or len(words) < len(target):
        return 0

    size = len(target)
    return sum(
        1 for i in range(len(words) - size + 1)
        if words[i:i + size] == target
    )


def calculate_keyword_density(content: str, keyword: str, strip_punctuation: bool = True) -> float:
    """
    Keyword density as a percentage, rounded to 2 decimals.

    density = phrase occurrences / total word count x 100
    """
    total_words = count_words(content or "")
    if total_words == 0 or not (keyword or "").strip():
        return 0.0
    occurrences = count_phrase_occurrences(content, keyword, strip_punctuation)
    return round_half_up(occurrences / total_words * 100, 2)


def is_heading_optimized(heading_text: str, keyword: str) -> bool:
    """A heading is optimized when it contains the keyword, case-insensitively."""
    return keyword.lower() in heading_text.lower()


def count_optimized_headings(content: str, keyword: str) -> int:
    """Count Markdown headings of a document that contain the keyword."""
    return sum(
        1 for match in MARKDOWN_HEADING_RE.finditer(content)
        if is_heading_optimized(match.group(0), keyword)
    )


def count_terms_used(content: str, terms, case_sensitive: bool = False) -> int:
    """Count how many of the given terms appear anywhere in the content."""
    if case_sensitive:
        return sum(1 for term in terms if term in content)
    content_lower = content.lower()
    return sum(1 for term in terms if term.lower() in content_lower)
