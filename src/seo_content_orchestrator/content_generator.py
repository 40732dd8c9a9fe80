"""
AI content generation against competitor benchmarks.

Builds a structured brief from the benchmarks, asks the LLM for a complete
Markdown article, and scores the result with the local quality heuristics.
"""

import logging
from typing import Optional

from .errors import ContentGenerationError, LLMClientError
from .llm_client import LLMClient
from .models import ContentGenerationRequest, GeneratedContent
from .quality import QualityWeights, analyze_quality
from .text_analysis import count_words

logger = logging.getLogger(__name__)


MIN_MAX_TOKENS = 1024
MAX_MAX_TOKENS = 8192

CONTENT_TYPE_LABELS = {
    "service_page": "service page",
    "blog_post": "blog post",
    "product_page": "product page",
    "landing_page": "landing page",
}

GENERATION_SYSTEM_PROMPT = """You are an expert SEO content writer who writes pages that outrank the current top search results.

KEYWORD PLACEMENT:
- The primary keyword MUST appear in the H1 and within the first 100 words
- Use the primary keyword in subheadings (H2/H3) up to the requested count
- Hit the target keyword density as closely as you can, never by stuffing
- Use keywords as COMPLETE PHRASES - never split or reorder them

CONTENT RULES - MUST FOLLOW:
1. Write for people first: clear, specific and useful
2. Work the supporting keywords and entities in where they fit naturally
3. Vary sentence length; prefer short sentences and active voice
4. Show experience and expertise with concrete detail, not vague claims
5. Do not invent statistics, awards, certifications or testimonials

OUTPUT FORMAT:
- Return ONLY the article in Markdown
- Start with a single '# ' H1 heading, use '## ' and '### ' for sections
- Do NOT include any explanation or commentary"""


def calculate_max_tokens(word_count: int) -> int:
    """Response budget for an article of ``word_count`` words."""
    return int(max(MIN_MAX_TOKENS, min(MAX_MAX_TOKENS, word_count * 1.5 + 512)))


def build_generation_prompt(request: ContentGenerationRequest) -> str:
    """Turn a generation request into the user prompt."""
    content_label = CONTENT_TYPE_LABELS.get(request.content_type, request.content_type)
    lines = [
        f"Write a {content_label} targeting the keyword: {request.keyword}",
        "",
        f"Industry: {request.industry}",
        f"Target audience: {request.target_audience.replace('_', ' ')}",
        f"Tone: {request.tone}",
        f"Length: about {request.word_count} words",
    ]
    if request.company_name:
        lines.append(f"Company: {request.company_name}")
    if request.location:
        lines.append(f"Location: {request.location}")

    lines += [
        "",
        "SEO TARGETS:",
        f"- Keyword density: {request.target_keyword_density}%",
        f"- Headings containing \"{request.keyword}\": {request.target_optimized_headings_count}",
    ]
    if request.variations:
        lines.append(f"- Keyword variations: {', '.join(request.variations)}")
    if request.lsi_keywords:
        lines.append(f"- Supporting keywords: {', '.join(request.lsi_keywords)}")
    if request.entities:
        lines.append(f"- Entities to mention: {', '.join(request.entities)}")
    if request.related_queries:
        lines.append(f"- Related searches to cover: {', '.join(request.related_queries)}")

    features = []
    if request.optimize_for_featured_snippets:
        features.append("- Answer the main question in a 40-60 word paragraph right after the H1")
        if request.questions:
            features.append(f"- Add an FAQ section answering: {'; '.join(request.questions)}")
    if request.include_images:
        features.append("- Mark image placements as ![descriptive alt text](image) where a visual helps")
    if request.include_internal_links:
        target = f" on {request.website_url}" if request.website_url else ""
        features.append(f"- Add 2-3 internal links to related pages{target}")
    if request.include_outbound_links:
        features.append("- Link to 1-2 authoritative external sources")
    if features:
        lines += ["", "CONTENT FEATURES:"] + features

    if request.competitor_insights:
        lines += ["", "COMPETITOR ANALYSIS:", request.competitor_insights]

    lines += ["", "Return only the Markdown article."]
    return "\n".join(lines)


class AIContentGenerator:
    """
    Generates articles through an LLMClient.

    Example:
        >>> generator = AIContentGenerator(LLMClient(api_key))
        >>> generated = generator.generate(request)
    """

    def __init__(self, llm_client: LLMClient, quality_weights: Optional[QualityWeights] = None):
        self.llm_client = llm_client
        self.quality_weights = quality_weights or QualityWeights()

    def generate(self, request: ContentGenerationRequest) -> GeneratedContent:
        """
        Generate one article.

        Raises:
            ContentGenerationError: If the LLM call fails or returns no text.
        """
        prompt = build_generation_prompt(request)
        max_tokens = calculate_max_tokens(request.word_count)
        logger.info(
            f"Generating ~{request.word_count} words for '{request.keyword}' "
            f"(max_tokens={max_tokens})"
        )

        try:
            content = self.llm_client.complete(
                system=GENERATION_SYSTEM_PROMPT,
                prompt=prompt,
                max_tokens=max_tokens,
            )
        except LLMClientError as e:
            raise ContentGenerationError(str(e)) from e

        content = (content or "").strip()
        if not content:
            raise ContentGenerationError("LLM returned empty content")

        return GeneratedContent(
            content=content,
            quality_analysis=analyze_quality(content, self.quality_weights),
            word_count=count_words(content),
            model=getattr(self.llm_client, "model", ""),
        )
