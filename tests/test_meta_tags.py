"""Tests for meta tag generation."""

from seo_content_orchestrator.config import OrchestratorConfig
from seo_content_orchestrator.meta_tags import (
    fallback_meta_tags,
    generate_description,
    generate_meta_tags,
    generate_title,
)


class TestTitle:
    """Tests for the meta title."""

    def test_uses_first_h1(self, generated_article):
        assert generate_title(generated_article, "running shoes") == (
            "Running Shoes: How to Pick the Right Pair"
        )

    def test_ignores_h2(self):
        assert generate_title("## Section\n\nText.", "movers") == "movers - Professional Services"

    def test_truncates_long_title(self):
        title = generate_title("# " + "x" * 80, "kw")

        assert len(title) == 60
        assert title.endswith("...")
        assert title[:57] == "x" * 57

    def test_exactly_max_length_kept(self):
        assert generate_title("# " + "y" * 60, "kw") == "y" * 60


class TestDescription:
    """Tests for the meta description."""

    def test_first_sentence_with_keyword(self):
        content = "We love the outdoors. Our movers in Dubai are fast. Call now."

        assert generate_description(content, "movers") == "Our movers in Dubai are fast."

    def test_heading_does_not_join_sentence(self, generated_article):
        description = generate_description(generated_article, "running shoes")

        assert not description.startswith("#")
        assert "running shoes" in description.lower()

    def test_falls_back_to_two_sentences(self):
        content = "First sentence here. Second sentence here. Third one."

        assert generate_description(content, "movers") == "First sentence here. Second sentence here."

    def test_truncates_long_description(self):
        content = "movers " + "word " * 60 + "end."
        description = generate_description(content, "movers")

        assert len(description) == 160
        assert description.endswith("...")

    def test_empty_content(self):
        assert generate_description("", "movers") == ""


class TestMetaTags:
    """Tests for the combined meta tags."""

    def test_keywords_lead_with_keyword(self, generated_article):
        tags = generate_meta_tags(generated_article, "running shoes")

        assert tags.keywords[0] == "running shoes"
        assert 1 < len(tags.keywords) <= 10

    def test_keyword_not_repeated_in_terms(self):
        tags = generate_meta_tags("shoes shoes shoes boots boots", "shoes")

        assert tags.keywords == ("shoes", "boots")

    def test_respects_config_lengths(self, generated_article):
        config = OrchestratorConfig(meta_title_max_length=20, meta_keyword_count=2)
        tags = generate_meta_tags(generated_article, "running shoes", config)

        assert len(tags.title) == 20
        assert len(tags.keywords) == 2

    def test_fallback(self):
        tags = fallback_meta_tags("movers")

        assert tags.title == "movers - Professional Services"
        assert tags.description == ""
        assert tags.keywords == ("movers",)
