"""Lyric Grader - rule-based lyric grading with remix and transcription helpers."""

__version__ = "0.1.0"
