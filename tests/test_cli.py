"""Tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from seo_content_orchestrator.cli import main
from seo_content_orchestrator.errors import PipelineError, SerpClientError
from seo_content_orchestrator.models import (
    Benchmarks,
    ContentSignals,
    MetaTags,
    PipelineStage,
    QualityAnalysis,
    ValidationResult,
    OptimizedContentResult,
)


@pytest.fixture
def result() -> OptimizedContentResult:
    return OptimizedContentResult(
        content="# Running Shoes\n\nBody.",
        meta_tags=MetaTags("Running Shoes", "Body.", ("running shoes",)),
        validation=ValidationResult(1.2, 99.0, 2, 4, 1),
        benchmarks=Benchmarks(1167, 8, 1.33, 3),
        competitors=[],
        insights=["Top 3 competitors average 1167 words per page"],
        quality_analysis=QualityAnalysis(60.0, 70.0, "low", 40.0, 80.0, 100.0, 68.5),
        content_signals=ContentSignals(50.0),
        processing_time=321,
        generation_id="gen-1-abcdefghi",
    )


class TestCli:
    """Tests for the seo-orchestrate command."""

    @patch("seo_content_orchestrator.cli.UnifiedContentOrchestrator")
    def test_success_writes_report(self, mock_orchestrator, result, tmp_path):
        mock_orchestrator.from_config.return_value.generate_optimized_content.return_value = result
        output = tmp_path / "report.json"

        outcome = CliRunner().invoke(
            main, ["-k", "running shoes", "-l", "usa", "--tone", "friendly", "-o", str(output)]
        )

        assert outcome.exit_code == 0, outcome.output
        assert "Competitor Benchmarks" in outcome.output
        report = json.loads(output.read_text())
        assert report["generationId"] == "gen-1-abcdefghi"

        request = mock_orchestrator.from_config.return_value.generate_optimized_content.call_args.args[0]
        assert request.keyword == "running shoes"
        assert request.customizations.tone == "friendly"
        config = mock_orchestrator.from_config.call_args.args[0]
        assert config.environment == "production"

    @patch("seo_content_orchestrator.cli.UnifiedContentOrchestrator")
    def test_dev_flag_uses_development_config(self, mock_orchestrator, result):
        mock_orchestrator.from_config.return_value.generate_optimized_content.return_value = result

        outcome = CliRunner().invoke(main, ["-k", "movers", "-l", "uae", "--dev"])

        assert outcome.exit_code == 0, outcome.output
        assert mock_orchestrator.from_config.call_args.args[0].allow_serp_stub is True

    @patch("seo_content_orchestrator.cli.UnifiedContentOrchestrator")
    def test_generation_options(self, mock_orchestrator, result):
        mock_orchestrator.from_config.return_value.generate_optimized_content.return_value = result

        outcome = CliRunner().invoke(main, [
            "-k", "movers", "-l", "usa", "--website-url", "https://movers.example",
            "--no-images", "--no-links", "--no-meta-tags",
        ])

        assert outcome.exit_code == 0, outcome.output
        request = mock_orchestrator.from_config.return_value.generate_optimized_content.call_args.args[0]
        assert request.customizations.website_url == "https://movers.example"
        assert request.options.include_images is False
        assert request.options.include_internal_links is False
        assert request.options.include_outbound_links is False
        assert request.options.generate_meta_tags is False
        assert request.options.optimize_for_featured_snippets is True

    @patch("seo_content_orchestrator.cli.UnifiedContentOrchestrator")
    def test_pipeline_error_exits_nonzero(self, mock_orchestrator):
        mock_orchestrator.from_config.return_value.generate_optimized_content.side_effect = (
            PipelineError(PipelineStage.SERP_ANALYSIS, SerpClientError("down"))
        )

        outcome = CliRunner().invoke(main, ["-k", "movers", "-l", "usa"])

        assert outcome.exit_code == 1
        assert "SERP analysis failed: down" in outcome.output

    def test_invalid_keyword_exits_nonzero(self):
        outcome = CliRunner().invoke(main, ["-k", "k" * 101, "-l", "usa"])

        assert outcome.exit_code == 1
        assert "Invalid request" in outcome.output

    def test_missing_anthropic_key_reported(self):
        outcome = CliRunner().invoke(main, ["-k", "movers", "-l", "usa"])

        assert outcome.exit_code == 1
        assert "ANTHROPIC_API_KEY" in outcome.output

    def test_rejects_unknown_content_type(self):
        outcome = CliRunner().invoke(main, ["-k", "movers", "-l", "usa", "--content-type", "memo"])

        assert outcome.exit_code == 2
