"""Tests for the Rap-profile dimension analyzers."""

import pytest

from lyric_grader.analysis.rap import (
    analyze_breath_control,
    analyze_credibility,
    analyze_enunciation,
    analyze_flow,
    analyze_rap,
    analyze_stress_patterns,
    calculate_rhyme_density,
    count_flow_switches,
    detect_punchlines,
)
from lyric_grader.analysis.tables import RAP_WEIGHTS
from lyric_grader.analysis.text import clean_text


class TestFlow:
    """Tests for flow analysis."""

    def test_flow_switches(self):
        """A switch is a jump of more than two syllables from the current flow."""
        assert count_flow_switches([8, 8, 12, 12, 6]) == 2
        assert count_flow_switches([8, 9, 10, 8]) == 0
        assert count_flow_switches([]) == 0

    def test_identical_lines_are_consistent(self):
        """Zero variance gives full rhythm and pocket scores."""
        subscores, metrics = analyze_flow(["run it back", "run it back", "run it back"])

        assert subscores["syllable_pattern"] == 85.0
        assert subscores["rhythm_consistency"] == 100.0
        assert subscores["pocket_riding"] == 100.0
        assert subscores["delivery"] == 70.0
        assert metrics["syllable_variance"] == 0.0
        assert metrics["avg_syllables"] == 3.0

    def test_single_line_rhythm_is_neutral(self):
        """A single bar has no rhythm to compare against."""
        subscores, _ = analyze_flow(["one bar only"])
        assert subscores["rhythm_consistency"] == 50.0

    def test_stress_patterns(self):
        """Share of lines with an even word count."""
        assert analyze_stress_patterns(["two words", "three words here"]) == 50.0
        assert analyze_stress_patterns([]) == 0.0


class TestRhymeScheme:
    """Tests for rap rhyme measurements."""

    def test_rhyme_density(self):
        """Adjacent bars with rhyming end words count toward density."""
        assert calculate_rhyme_density(["I spit fire and ice", "My rhymes precise and nice"]) == 100.0
        assert calculate_rhyme_density(["I spit fire and ice", "Walking alone"]) == 0.0

    def test_rhyme_density_needs_two_lines(self):
        """A single bar has no density."""
        assert calculate_rhyme_density(["just one"]) == 0.0


class TestWordplay:
    """Tests for rap wordplay measurements."""

    def test_punchlines(self):
        """A setup bar followed by a payoff bar is a punchline."""
        assert detect_punchlines(["when they doubt me", "now they shout me"]) == 50.0

    def test_no_punchlines_without_lines(self):
        """No bars means no punchlines."""
        assert detect_punchlines([]) == 0.0


class TestTechnique:
    """Tests for technique and authenticity measurements."""

    def test_enunciation(self):
        """Five points off per consonant cluster."""
        assert analyze_enunciation("strength") == 90.0
        assert analyze_enunciation("a e i o u") == 100.0

    def test_breath_control(self):
        """Bars much longer than average lose points."""
        assert analyze_breath_control([]) == 100.0
        assert analyze_breath_control(["short", "short", "a much much longer bar here"]) == pytest.approx(90.0)

    def test_credibility(self):
        """Rap clichés per line reduce credibility."""
        assert analyze_credibility("", []) == 100.0
        assert analyze_credibility("stack paper", ["stack paper", "keep going"]) == 25.0


class TestAnalyzeRap:
    """Tests for the combined Rap analysis."""

    def test_breakdown_covers_every_weighted_dimension(self, rap_verse):
        """Every rap dimension is scored within 0-100."""
        analysis = analyze_rap(clean_text(rap_verse))

        assert list(analysis.breakdown) == list(RAP_WEIGHTS)
        for score in analysis.breakdown.values():
            assert 0 <= score.value <= 100

    def test_metrics(self, rap_verse):
        """Syllable and rhyme metrics are reported alongside the breakdown."""
        metrics = analyze_rap(clean_text(rap_verse)).metrics

        assert set(metrics) == {
            "avg_syllables",
            "syllable_variance",
            "stress_patterns",
            "rhyme_complexity",
        }
        assert metrics["avg_syllables"] > 0

    def test_unweighted_wordplay_subscores_are_kept(self, rap_verse):
        """Wordplay reports density and punchlines even though they carry no weight."""
        wordplay = analyze_rap(clean_text(rap_verse)).breakdown["wordplay"]

        assert "density" in wordplay.subscores
        assert "punchlines" in wordplay.subscores
        assert wordplay.value == pytest.approx(
            sum(
                wordplay.subscores[key] * weight
                for key, weight in RAP_WEIGHTS["wordplay"].subcriteria.items()
            )
        )
