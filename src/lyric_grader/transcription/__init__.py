"""Speech-to-text provider client."""

from lyric_grader.transcription.whisper import WhisperTranscriber, format_transcription

__all__ = ["WhisperTranscriber", "format_transcription"]
