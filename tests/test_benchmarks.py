"""Tests for competitor benchmark calculation."""

import pytest

from seo_content_orchestrator.benchmarks import (
    aggregate_benchmarks,
    calculate_benchmarks,
    format_competitor_insights,
    generate_competitor_insights,
    generate_keyword_variations,
    score_competitor,
)
from seo_content_orchestrator.config import OrchestratorConfig
from seo_content_orchestrator.errors import NoCompetitorDataError
from seo_content_orchestrator.models import Benchmarks, CompetitorContent, Heading


def _competitor(word_count=100, density=0.0, headings=(), lsi=(), entities=(), content="text"):
    return CompetitorContent(
        url=f"https://site{word_count}.com",
        title="Competitor",
        content=content,
        word_count=word_count,
        headings=tuple(headings),
        lsi_keywords=tuple(lsi),
        entities=tuple(entities),
        keyword_density=density,
    )


class TestScoring:
    """Tests for the second pass over extracted competitors."""

    def test_fills_density_and_flags(self):
        competitor = _competitor(
            content="running shoes for trail running",
            headings=[
                Heading(2, "Best Running Shoes for Trail Running"),
                Heading(2, "Our Company History"),
            ],
        )

        scored = score_competitor(competitor, "running shoes")

        assert scored.keyword_density == 20.0
        assert [h.optimized for h in scored.headings] == [True, False]

    def test_does_not_mutate_input(self):
        competitor = _competitor(content="shoes", headings=[Heading(1, "shoes")])

        score_competitor(competitor, "shoes")

        assert competitor.keyword_density == 0.0
        assert competitor.headings[0].optimized is False


class TestAggregateBenchmarks:
    """Tests for averaging scored competitors."""

    def test_word_count_and_density_example(self):
        scored = [
            _competitor(1200, 1.2),
            _competitor(800, 0.8),
            _competitor(1500, 2.0),
        ]

        benchmarks = aggregate_benchmarks(scored, "running shoes")

        assert benchmarks.average_word_count == 1167
        assert benchmarks.average_keyword_density == 1.33

    def test_density_is_mean_of_competitor_densities(self):
        densities = [0.4, 1.2, 3.1]
        scored = [_competitor(100 + i, d) for i, d in enumerate(densities)]

        benchmarks = aggregate_benchmarks(scored, "kw")

        assert benchmarks.average_keyword_density == 1.57

    def test_heading_averages_round_half_up(self):
        scored = [
            _competitor(headings=[Heading(2, "a", True), Heading(2, "b")]),
            _competitor(headings=[Heading(2, "c", True)]),
        ]

        benchmarks = aggregate_benchmarks(scored, "kw")

        assert benchmarks.average_headings == 2  # 1.5 rounds up
        assert benchmarks.average_optimized_headings == 1

    def test_merges_and_caps_terms(self):
        scored = [
            _competitor(lsi=[f"a{i}" for i in range(10)], entities=["Nike", "APMA"]),
            _competitor(lsi=[f"a{i}" for i in range(5, 20)], entities=["APMA", "2019"]),
        ]

        benchmarks = aggregate_benchmarks(scored, "kw")

        assert benchmarks.lsi_keywords == tuple(f"a{i}" for i in range(15))
        assert benchmarks.entities == ("Nike", "APMA", "2019")

    def test_custom_caps(self):
        config = OrchestratorConfig(benchmark_lsi_cap=2, benchmark_entity_cap=1)
        scored = [_competitor(lsi=["x", "y", "z"], entities=["A", "B"])]

        benchmarks = aggregate_benchmarks(scored, "kw", config)

        assert benchmarks.lsi_keywords == ("x", "y")
        assert benchmarks.entities == ("A",)

    def test_empty_raises(self):
        with pytest.raises(NoCompetitorDataError):
            aggregate_benchmarks([], "kw")


class TestCalculateBenchmarks:
    """Tests for scoring plus averaging."""

    def test_scores_before_averaging(self):
        competitors = [
            _competitor(4, content="running shoes are great",
                        headings=[Heading(2, "Running Shoes Guide")]),
            _competitor(4, content="buy new running shoes",
                        headings=[Heading(2, "About Us")]),
        ]

        benchmarks = calculate_benchmarks(competitors, "running shoes")

        assert benchmarks.average_keyword_density == 25.0
        assert benchmarks.average_optimized_headings == 1  # 0.5 rounds up
        assert benchmarks.variations[:2] == ("running shoes", "running shoess")

    def test_empty_raises(self):
        with pytest.raises(NoCompetitorDataError):
            calculate_benchmarks([], "kw")


class TestKeywordVariations:
    """Tests for rule-based keyword variations."""

    def test_single_word(self):
        assert generate_keyword_variations("shoes") == ["shoes", "shoess"]

    def test_multi_word_reversed(self):
        assert generate_keyword_variations("running shoes") == [
            "running shoes", "running shoess", "shoes running",
        ]

    def test_movers_substitutions(self):
        variations = generate_keyword_variations("movers dubai")

        assert variations == [
            "movers dubai",
            "movers dubais",
            "dubai movers",
            "moving companies dubai",
            "relocation services dubai",
            "moving services dubai",
        ]

    def test_cap(self):
        assert len(generate_keyword_variations("movers in dubai", cap=4)) == 4


class TestInsights:
    """Tests for insight text."""

    @pytest.fixture
    def benchmarks(self):
        return Benchmarks(
            average_word_count=1167,
            average_headings=8,
            average_keyword_density=1.33,
            average_optimized_headings=3,
            lsi_keywords=("cushioning", "grip", "fit", "trail", "road", "weight"),
            entities=("Nike", "Adidas", "APMA", "2019"),
        )

    def test_prompt_summary(self, benchmarks):
        text = format_competitor_insights(benchmarks, 3)

        assert text.splitlines()[0] == "Based on analysis of top 3 competitors:"
        assert "- Average keyword density: 1.33%" in text
        assert "- Key LSI keywords: cushioning, grip, fit, trail, road" in text
        assert "- Important entities: Nike, Adidas, APMA" in text

    def test_report_sentences(self, benchmarks):
        insights = generate_competitor_insights([object()] * 3, benchmarks)

        assert insights[0] == "Top 3 competitors average 1167 words per page"
        assert insights[-1] == "Important entities to include: Nike, Adidas"

    def test_no_entity_sentence_without_entities(self, benchmarks):
        from dataclasses import replace

        insights = generate_competitor_insights([], replace(benchmarks, entities=()))

        assert len(insights) == 4
