"""Tests for content validation against benchmarks."""

import pytest

from seo_content_orchestrator.models import Benchmarks
from seo_content_orchestrator.validator import density_accuracy, validate_content


class TestDensityAccuracy:
    """Tests for the density accuracy score."""

    def test_perfect_at_equality(self):
        assert density_accuracy(1.33, 1.33) == 100.0

    def test_ten_points_per_percentage_point(self):
        assert density_accuracy(2.0, 1.5) == 95.0
        assert density_accuracy(1.0, 1.5) == 95.0

    def test_non_increasing_with_distance(self):
        scores = [density_accuracy(1.0 + diff, 1.0) for diff in (0, 0.5, 1, 2, 5, 9, 12)]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.parametrize("actual", [11.0, 25.0, 100.0])
    def test_floor_at_zero(self, actual):
        assert density_accuracy(actual, 1.0) == 0.0


class TestValidateContent:
    """Tests for re-measuring generated content."""

    @pytest.fixture
    def benchmarks(self):
        return Benchmarks(
            average_word_count=60,
            average_headings=4,
            average_keyword_density=4.0,
            average_optimized_headings=2,
            lsi_keywords=("cushioning", "grip", "weight", "arch support"),
            entities=("Nike", "Adidas", "Brooks"),
        )

    def test_measures_article(self, generated_article, benchmarks):
        result = validate_content(generated_article, "running shoes", benchmarks)

        assert result.actual_density > 0
        assert result.heading_optimization == 3
        assert result.lsi_keywords_used == 3
        assert result.entities_integrated == 2
        assert result.density_accuracy == density_accuracy(result.actual_density, 4.0)

    def test_entities_are_case_sensitive(self, benchmarks):
        result = validate_content("nike and adidas shoes", "shoes", benchmarks)

        assert result.entities_integrated == 0

    def test_lsi_keywords_case_insensitive(self, benchmarks):
        result = validate_content("GRIP and Arch Support", "shoes", benchmarks)

        assert result.lsi_keywords_used == 2
