"""Tests for the command line interface."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from lyric_grader.cli.main import main
from lyric_grader.config import configure
from lyric_grader.errors import GenerationFailedError
from lyric_grader.models.remix import (
    GenerationJob,
    GenerationState,
    GenerationStatus,
    Transcription,
)


class TestGradeCommand:
    """Tests for `lyric-grader grade`."""

    def test_grade_text(self, love_song):
        """Grading inline text prints the grade and breakdown."""
        result = CliRunner().invoke(main, ["grade", "--text", love_song, "--quiet"])

        assert result.exit_code == 0, result.output
        assert "Grade:" in result.output
        assert "Profile: General" in result.output
        assert "Breakdown" in result.output
        assert "A+ Excellence" in result.output

    def test_grade_file(self, tmp_path: Path, rap_verse):
        """Lyrics files are loaded and graded."""
        path = tmp_path / "verse.txt"
        path.write_text(rap_verse, encoding="utf-8")

        result = CliRunner().invoke(main, ["grade", str(path), "-q"])

        assert result.exit_code == 0, result.output
        assert "Profile: Rap/Hip-Hop" in result.output

    def test_grade_stdin(self, love_song):
        """A dash reads lyrics from stdin."""
        result = CliRunner().invoke(main, ["grade", "-", "-q"], input=love_song)

        assert result.exit_code == 0, result.output
        assert "Grade:" in result.output

    def test_stage_progress(self, love_song):
        """Without --quiet each stage is listed."""
        result = CliRunner().invoke(main, ["grade", "--text", love_song])

        assert "preprocess" in result.output
        assert "recommendations" in result.output

    def test_line_breakdown(self, love_song):
        """--lines adds the line-by-line table."""
        result = CliRunner().invoke(main, ["grade", "--text", love_song, "-q", "--lines"])

        assert "Line by line" in result.output

    def test_export(self, love_song, tmp_path: Path):
        """--export writes the JSON analysis."""
        path = tmp_path / "out" / "analysis.json"

        result = CliRunner().invoke(
            main, ["grade", "--text", love_song, "-q", "--export", str(path)]
        )

        assert result.exit_code == 0, result.output
        assert "Exported:" in result.output
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["profile"] == "general"

    def test_save_to_output_dir(self, love_song, tmp_path: Path):
        """--save writes a timestamped export into the configured output directory."""
        configure(output_dir=tmp_path)

        result = CliRunner().invoke(main, ["grade", "--text", love_song, "-q", "--save"])

        assert result.exit_code == 0, result.output
        exports = list(tmp_path.glob("song-analysis-*.json"))
        assert len(exports) == 1
        assert json.loads(exports[0].read_text(encoding="utf-8"))["profile"] == "general"

    def test_export_into_directory(self, love_song, tmp_path: Path):
        """--export with a directory names the file automatically."""
        result = CliRunner().invoke(
            main, ["grade", "--text", love_song, "-q", "--export", str(tmp_path)]
        )

        assert result.exit_code == 0, result.output
        assert len(list(tmp_path.glob("song-analysis-*.json"))) == 1

    def test_rap_metrics_are_shown(self, rap_verse):
        """Rap results show syllables per line and rhyme complexity."""
        result = CliRunner().invoke(main, ["grade", "--text", rap_verse, "-q"])

        assert result.exit_code == 0, result.output
        assert "Rap metrics:" in result.output
        assert "rhyme complexity" in result.output
        assert "Emotion:" in result.output

    def test_empty_text_fails(self):
        """Blank lyrics exit with an error."""
        result = CliRunner().invoke(main, ["grade", "--text", "   ", "-q"])

        assert result.exit_code == 1
        assert "Analysis failed!" in result.output
        assert "No lyrics to analyze" in result.output

    def test_missing_input(self):
        """Neither a file nor --text is an error."""
        result = CliRunner().invoke(main, ["grade"])

        assert result.exit_code == 1
        assert "LYRICS_FILE or --text is required" in result.output

    def test_unsupported_file(self, tmp_path: Path):
        """Unsupported lyric files are reported."""
        path = tmp_path / "song.pdf"
        path.write_text("x")

        result = CliRunner().invoke(main, ["grade", str(path)])

        assert result.exit_code == 1
        assert "Unsupported lyrics file" in result.output


class TestRemixCommand:
    """Tests for `lyric-grader remix`."""

    def test_dry_run(self, love_song):
        """--dry-run prints the directive without contacting the provider."""
        with patch("lyric_grader.remix.SunoClient.from_settings") as from_settings:
            result = CliRunner().invoke(main, ["remix", "--text", love_song, "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Style: romantic-pop" in result.output
        assert "Prompt: Create an improved version with" in result.output
        from_settings.assert_not_called()

    def test_style_override(self, love_song):
        """--style replaces the automatic style."""
        result = CliRunner().invoke(
            main, ["remix", "--text", love_song, "--dry-run", "--style", "indie-folk"]
        )

        assert "Style: indie-folk" in result.output

    def test_generate_and_wait(self, love_song):
        """Without --dry-run a job is submitted and awaited."""
        client = MagicMock()
        client.generate.side_effect = lambda lyrics, directive: GenerationJob("job-9", directive)
        client.wait_for_completion.return_value = GenerationStatus(
            state=GenerationState.COMPLETED, audio_url="https://cdn.test/song.mp3"
        )

        with patch("lyric_grader.remix.SunoClient.from_settings", return_value=client):
            result = CliRunner().invoke(main, ["remix", "--text", love_song])

        assert result.exit_code == 0, result.output
        assert "Submitted job job-9" in result.output
        assert "Audio: https://cdn.test/song.mp3" in result.output
        client.generate.assert_called_once()
        assert client.generate.call_args.args[0] == love_song

    def test_no_wait(self, love_song):
        """--no-wait stops after submitting."""
        client = MagicMock()
        client.generate.side_effect = lambda lyrics, directive: GenerationJob("job-9", directive)

        with patch("lyric_grader.remix.SunoClient.from_settings", return_value=client):
            result = CliRunner().invoke(main, ["remix", "--text", love_song, "--no-wait"])

        assert result.exit_code == 0, result.output
        client.wait_for_completion.assert_not_called()

    def test_generation_failure(self, love_song):
        """Provider failures exit with an error."""
        client = MagicMock()
        client.generate.side_effect = lambda lyrics, directive: GenerationJob("job-9", directive)
        client.wait_for_completion.side_effect = GenerationFailedError("Content policy violation")

        with patch("lyric_grader.remix.SunoClient.from_settings", return_value=client):
            result = CliRunner().invoke(main, ["remix", "--text", love_song])

        assert result.exit_code == 1
        assert "Content policy violation" in result.output

    def test_unconfigured_provider(self, love_song):
        """A missing Suno key is reported without a traceback."""
        configure(suno_api_key=None)

        result = CliRunner().invoke(main, ["remix", "--text", love_song])

        assert result.exit_code == 1
        assert "Suno API not configured" in result.output


class TestTranscribeCommand:
    """Tests for `lyric-grader transcribe`."""

    def test_transcribe(self, audio_file: Path, tmp_path: Path):
        """The transcription is printed and saved, markers intact."""
        transcriber = MagicMock()
        transcriber.transcribe.return_value = Transcription(
            text="[Verse 1]\nhello world", language="en", duration=12.0, confidence=90
        )
        output = tmp_path / "lyrics.txt"

        with patch(
            "lyric_grader.transcription.WhisperTranscriber.from_settings",
            return_value=transcriber,
        ):
            result = CliRunner().invoke(
                main, ["transcribe", str(audio_file), "--structure", "-o", str(output)]
            )

        assert result.exit_code == 0, result.output
        assert "[Verse 1]" in result.output
        assert "Confidence: 90%" in result.output
        assert output.read_text(encoding="utf-8") == "[Verse 1]\nhello world\n"
        assert transcriber.transcribe.call_args.kwargs["include_structure"] is True

    def test_transcribe_and_grade(self, audio_file: Path, love_song):
        """--grade runs the analysis on the transcription."""
        transcriber = MagicMock()
        transcriber.transcribe.return_value = Transcription(text=love_song, language="en")

        with patch(
            "lyric_grader.transcription.WhisperTranscriber.from_settings",
            return_value=transcriber,
        ):
            result = CliRunner().invoke(main, ["transcribe", str(audio_file), "--grade"])

        assert result.exit_code == 0, result.output
        assert "Grade:" in result.output

    def test_missing_audio(self, tmp_path: Path):
        """A missing audio file is reported."""
        configure(groq_api_key="key")

        result = CliRunner().invoke(main, ["transcribe", str(tmp_path / "missing.mp3")])

        assert result.exit_code == 1
        assert "No audio file found" in result.output


class TestInfoCommand:
    """Tests for `lyric-grader info`."""

    def test_info(self):
        """Configuration and key status are shown."""
        configure(groq_api_key="key", suno_api_key=None)

        result = CliRunner().invoke(main, ["info"])

        assert result.exit_code == 0
        assert "Configuration" in result.output
        assert "Groq (transcription): configured" in result.output
        assert "Suno (generation): not configured" in result.output

    def test_remix_options(self):
        """Styles and personas are listed for both profiles."""
        result = CliRunner().invoke(main, ["info"])

        assert result.exit_code == 0, result.output
        assert "Remix options" in result.output
        assert "romantic-pop" in result.output
        assert "modern-hip-hop" in result.output

    def test_check_lists_models(self):
        """--check verifies the Groq key and lists Whisper models."""
        configure(groq_api_key="key")
        transcriber = MagicMock()
        transcriber.validate_api_key.return_value = True
        transcriber.supported_models.return_value = ["whisper-large-v3"]

        with patch(
            "lyric_grader.transcription.WhisperTranscriber.from_settings",
            return_value=transcriber,
        ):
            result = CliRunner().invoke(main, ["info", "--check"])

        assert result.exit_code == 0, result.output
        assert "Groq key accepted" in result.output
        assert "Whisper models: whisper-large-v3" in result.output

    def test_check_rejected_key(self):
        """A rejected key is reported and no models are listed."""
        transcriber = MagicMock()
        transcriber.validate_api_key.return_value = False

        with patch(
            "lyric_grader.transcription.WhisperTranscriber.from_settings",
            return_value=transcriber,
        ):
            result = CliRunner().invoke(main, ["info", "--check"])

        assert "Groq key rejected or missing" in result.output
        transcriber.supported_models.assert_not_called()

    def test_version(self):
        """--version prints the program version."""
        result = CliRunner().invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "lyric-grader" in result.output
