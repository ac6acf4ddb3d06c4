"""Tests for JSON export of analysis results."""

from datetime import datetime, timezone
import json
from pathlib import Path

import pytest

from lyric_grader.config import configure
from lyric_grader.errors import InputError
from lyric_grader.export import (
    default_export_path,
    export_filename,
    read_export,
    to_camel_case,
    to_export_dict,
    to_snake_case,
    write_export,
)
from lyric_grader.models.analysis import AnalysisProfile

TIMESTAMP = "2024-06-10T12:00:00+00:00"


class TestCaseConversion:
    """Tests for key case conversion."""

    def test_to_camel_case(self):
        """snake_case keys become camelCase."""
        assert to_camel_case("lyrical_content") == "lyricalContent"
        assert to_camel_case("rhyme_scheme_pattern") == "rhymeSchemePattern"
        assert to_camel_case("flow") == "flow"

    def test_to_snake_case(self):
        """camelCase keys become snake_case."""
        assert to_snake_case("lyricalContent") == "lyrical_content"
        assert to_snake_case("flow") == "flow"


class TestExportDict:
    """Tests for to_export_dict."""

    def test_top_level_keys(self, love_result):
        """The export carries every part of the analysis."""
        data = to_export_dict(love_result, TIMESTAMP)

        assert set(data) == {
            "timestamp",
            "grade",
            "score",
            "profile",
            "breakdown",
            "subscores",
            "feedback",
            "improvements",
            "strengths",
            "weaknesses",
            "songPurpose",
            "metadata",
            "emotion",
            "rapAnalysis",
        }
        assert data["timestamp"] == TIMESTAMP
        assert data["profile"] == "general"

    def test_breakdown_is_flattened(self, love_result):
        """Dimension scores are exported as camelCase name -> value."""
        data = to_export_dict(love_result, TIMESTAMP)

        assert data["breakdown"]["lyricalContent"] == love_result.breakdown["lyrical_content"].value
        assert "wordChoice" in data["subscores"]["wordplay"]

    def test_enums_and_nested_keys(self, love_result):
        """Priorities become lowercase names and nested keys are camelCase."""
        data = to_export_dict(love_result, TIMESTAMP)

        assert data["improvements"][0]["priority"] == "critical"
        assert "lineByLine" in data["feedback"]
        assert "specificIssues" in data["feedback"]
        assert data["feedback"]["specificIssues"][0]["severity"] == "high"
        assert data["metadata"]["rhymeSchemePattern"] == love_result.metadata.rhyme_scheme_pattern
        assert data["songPurpose"]["primary"] == "love_song"

    def test_is_json_serializable(self, rap_result):
        """The export of a rap analysis serializes to JSON."""
        data = to_export_dict(rap_result, TIMESTAMP)

        text = json.dumps(data)

        assert '"profile": "rap"' in text
        assert "rapMetrics" in text

    def test_rap_analysis(self, rap_result, love_result):
        """Rap exports carry the flow metrics; General exports leave them null."""
        rap = to_export_dict(rap_result, TIMESTAMP)
        general = to_export_dict(love_result, TIMESTAMP)

        assert rap["rapAnalysis"]["avgSyllables"] == rap_result.rap_analysis["avg_syllables"]
        assert "rhymeComplexity" in rap["rapAnalysis"]
        assert general["rapAnalysis"] is None
        assert general["emotion"]["primary"] == "love"

    def test_fallback_result(self):
        """A failed analysis still exports."""
        from lyric_grader.pipeline import analyze_lyrics

        data = to_export_dict(analyze_lyrics(""), TIMESTAMP)

        assert data["grade"] == "F"
        assert data["breakdown"] == {}
        assert data["songPurpose"] is None
        assert data["emotion"] is None
        assert data["rapAnalysis"] is None


class TestFiles:
    """Tests for write_export, read_export and export_filename."""

    def test_round_trip(self, love_result, tmp_path: Path):
        """A written export reads back with snake_case dimension names."""
        path = write_export(love_result, tmp_path / "nested" / "analysis.json", TIMESTAMP)

        exported = read_export(path)

        assert exported.timestamp == TIMESTAMP
        assert exported.grade == love_result.grade
        assert exported.score == pytest.approx(love_result.overall_score)
        assert exported.profile is AnalysisProfile.GENERAL
        assert exported.breakdown == pytest.approx(
            {name: score.value for name, score in love_result.breakdown.items()}
        )
        assert "word_choice" in exported.subscores["wordplay"]
        assert exported.strengths == love_result.strengths

    def test_round_trip_rap_analysis(self, rap_result, tmp_path: Path):
        """Rap metrics read back with snake_case names."""
        path = write_export(rap_result, tmp_path / "rap.json", TIMESTAMP)

        exported = read_export(path)

        assert exported.rap_analysis == pytest.approx(rap_result.rap_analysis)
        assert exported.emotion["primary"] == rap_result.emotion.primary

    def test_non_ascii_is_preserved(self, love_result, tmp_path: Path):
        """Accented issue names are written as-is."""
        path = write_export(love_result, tmp_path / "analysis.json", TIMESTAMP)
        assert "CLICHÉS" in path.read_text(encoding="utf-8")

    def test_filename(self, love_result):
        """File names carry the grade and a millisecond timestamp."""
        now = datetime(2024, 6, 10, tzinfo=timezone.utc)

        assert export_filename(love_result, now) == f"song-analysis-{love_result.grade}-1717977600000.json"

    def test_default_path_uses_output_dir(self, love_result, tmp_path: Path):
        """Without a directory the configured output_dir is used."""
        configure(output_dir=tmp_path / "exports")
        now = datetime(2024, 6, 10, tzinfo=timezone.utc)

        path = default_export_path(love_result, now=now)

        assert path == tmp_path / "exports" / export_filename(love_result, now)

    def test_default_path_in_given_directory(self, love_result, tmp_path: Path):
        """An explicit directory wins over the configured one."""
        path = default_export_path(love_result, tmp_path)

        assert path.parent == tmp_path
        assert path.name.startswith(f"song-analysis-{love_result.grade}-")

    def test_missing_file(self, tmp_path: Path):
        """Reading a missing export is an input error."""
        with pytest.raises(InputError, match="Cannot read export"):
            read_export(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path):
        """Malformed exports are rejected."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(InputError, match="not valid JSON"):
            read_export(path)

    def test_missing_keys(self, tmp_path: Path):
        """Exports without the required keys are rejected."""
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"grade": "B", "score": 80}))

        with pytest.raises(InputError, match="missing profile, breakdown"):
            read_export(path)

    def test_unknown_profile(self, tmp_path: Path):
        """Unknown profiles are rejected."""
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({"grade": "B", "score": 80, "profile": "jazz", "breakdown": {}}))

        with pytest.raises(InputError, match="unknown profile"):
            read_export(path)
