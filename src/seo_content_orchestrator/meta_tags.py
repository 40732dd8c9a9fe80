"""
Meta tag generation from generated article text.
"""

import re
from typing import Optional

from .config import OrchestratorConfig
from .models import MetaTags
from .text_analysis import top_terms

META_TERM_COUNT = 8

_H1_RE = re.compile(r"^# (.+)$", re.MULTILINE)
_HEADING_PREFIX_RE = re.compile(r"^#{1,6}\s+", re.MULTILINE)


def fallback_title(keyword: str) -> str:
    return f"{keyword} - Professional Services"


def _truncate(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return text[:max_length - 3] + "..."
    return text


def generate_title(content: str, keyword: str, max_length: int = 60) -> str:
    """First level-one heading, else a keyword fallback."""
    match = _H1_RE.search(content)
    title = match.group(1).strip() if match else fallback_title(keyword)
    return _truncate(title, max_length)


def generate_description(content: str, keyword: str, max_length: int = 160) -> str:
    """
    First sentence mentioning the keyword, else the first two sentences.

    Heading markers are stripped before splitting so a heading does not
    run into the sentence after it.
    """
    text = _HEADING_PREFIX_RE.sub("", content)
    sentences = [s.strip() for s in text.split(".") if s.strip()]

    keyword_lower = keyword.lower()
    keyword_sentence = next((s for s in sentences if keyword_lower in s.lower()), None)
    if keyword_sentence:
        description = keyword_sentence + "."
    else:
        description = ". ".join(sentences[:2])
        if description:
            description += "."
    return _truncate(" ".join(description.split()), max_length)


def generate_meta_tags(
    content: str, keyword: str, config: Optional[OrchestratorConfig] = None
) -> MetaTags:
    """Build title, description and keyword tags for an article."""
    config = config or OrchestratorConfig()
    keywords = [keyword] + [
        term for term in top_terms(content, META_TERM_COUNT) if term != keyword.lower()
    ]
    return MetaTags(
        title=generate_title(content, keyword, config.meta_title_max_length),
        description=generate_description(content, keyword, config.meta_description_max_length),
        keywords=tuple(keywords[:config.meta_keyword_count]),
    )


def fallback_meta_tags(keyword: str) -> MetaTags:
    """Meta tags used when content analysis is switched off."""
    return MetaTags(title=fallback_title(keyword), description="", keywords=(keyword,))
