"""Pipeline module for Lyric Grader."""

from lyric_grader.pipeline.base import AnalysisStage
from lyric_grader.pipeline.orchestrator import (
    Pipeline,
    analyze_lyrics,
    create_default_pipeline,
    fallback_result,
    validate_lyrics,
)

__all__ = [
    "AnalysisStage",
    "Pipeline",
    "analyze_lyrics",
    "create_default_pipeline",
    "fallback_result",
    "validate_lyrics",
]
