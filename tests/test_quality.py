"""Tests for heuristic quality scoring."""

import pytest

from seo_content_orchestrator.quality import (
    QualityWeights,
    ai_detection_risk,
    analyze_quality,
    count_syllables,
    eeat_score,
    grammar_score,
    human_writing_score,
    nlp_friendliness_score,
    readability_score,
    split_sentences,
)


class TestHelpers:
    """Tests for sentence and syllable helpers."""

    def test_split_sentences_drops_heading_markers(self):
        assert split_sentences("# Title\nOne. Two! Three?") == ["Title\nOne", "Two", "Three"]

    @pytest.mark.parametrize("word,expected", [
        ("cat", 1),
        ("running", 2),
        ("cushioning", 3),
        ("make", 1),
        ("table", 2),
    ])
    def test_count_syllables(self, word, expected):
        assert count_syllables(word) == expected


class TestRules:
    """Tests for each scoring rule on its own."""

    def test_readability_prefers_short_words(self):
        simple = "The cat sat. The dog ran. We had fun."
        dense = "Comprehensive organizational methodologies necessitate interdisciplinary collaboration."
        assert readability_score(simple) > readability_score(dense)

    def test_readability_bounds(self):
        assert 0.0 <= readability_score("Antidisestablishmentarianism.") <= 100.0
        assert readability_score("") == 0.0

    def test_human_writing_rewards_variation_and_contractions(self):
        flat = "This is a sentence here. This is a sentence here. This is a sentence here."
        varied = "Stop. We've tested these shoes on every trail we could find this year. They're good."
        assert human_writing_score(varied) > human_writing_score(flat)

    def test_human_writing_penalizes_cliches(self):
        plain = "We fit shoes in the world of custom made footwear. You run."
        cliche = "We fit shoes in the realm of bespoke tailored footwear. You run."
        assert human_writing_score(cliche) < human_writing_score(plain)

    @pytest.mark.parametrize("score,risk", [(85, "low"), (70, "low"), (55, "medium"), (20, "high")])
    def test_ai_detection_risk(self, score, risk):
        assert ai_detection_risk(score) == risk

    def test_eeat_signals(self):
        content = "Our certified experts have 20 years of experience. According to a 2025 study, 75% agree."
        assert eeat_score(content) == 8 * 4 + 10 + 10  # years, experience, certified, expert

    def test_eeat_capped(self):
        content = " ".join([
            "years experience certified licensed projects testimonial guarantee",
            "warranty rated trusted qualified professional expert award accredited",
            "50% according to",
        ])
        assert eeat_score(content) == 100.0

    def test_nlp_friendliness(self):
        short = "Short one. Another short one."
        long_sentence = " ".join(["word"] * 30) + "."
        assert nlp_friendliness_score(short) == 100.0
        assert nlp_friendliness_score(short + " " + long_sentence) == pytest.approx(66.7)

    def test_nlp_passive_penalty(self):
        assert nlp_friendliness_score("The work is done. It was made well.") == 90.0

    def test_grammar_issues(self):
        assert grammar_score("This is fine. So is this.") == 100.0
        assert grammar_score("This is is wrong.  and lower case.") == 85.0


class TestWeights:
    """Tests for the weight configuration."""

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError):
            QualityWeights(grammar=-0.1)

    def test_all_zero_rejected(self):
        with pytest.raises(ValueError):
            QualityWeights(0, 0, 0, 0, 0)

    def test_single_weight_selects_rule(self, generated_article):
        weights = QualityWeights(readability=0, human_writing=0, eeat=0, nlp_friendliness=0, grammar=1)
        analysis = analyze_quality(generated_article, weights)

        assert analysis.overall_score == analysis.grammar_score


class TestAnalyzeQuality:
    """Tests for the combined analysis."""

    def test_scores_in_range(self, generated_article):
        analysis = analyze_quality(generated_article)

        for value in (
            analysis.readability_score,
            analysis.human_writing_score,
            analysis.eeat_score,
            analysis.nlp_friendliness,
            analysis.grammar_score,
            analysis.overall_score,
        ):
            assert 0.0 <= value <= 100.0
        assert analysis.ai_detection_risk in ("low", "medium", "high")

    def test_deterministic(self, generated_article):
        assert analyze_quality(generated_article) == analyze_quality(generated_article)
