"""Remix directive building and the generation provider client."""

from lyric_grader.remix.prompt import (
    available_personas,
    available_styles,
    build_remix_directive,
    detect_emotional_tone,
    explain_improvements,
    generate_remix_prompt,
    select_persona,
    select_style,
)
from lyric_grader.remix.suno import SunoClient

__all__ = [
    "SunoClient",
    "available_personas",
    "available_styles",
    "build_remix_directive",
    "detect_emotional_tone",
    "explain_improvements",
    "generate_remix_prompt",
    "select_persona",
    "select_style",
]
