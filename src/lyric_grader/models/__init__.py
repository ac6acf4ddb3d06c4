"""Data models for Lyric Grader."""

from lyric_grader.models.analysis import (
    AnalysisMetadata,
    AnalysisProfile,
    AnalysisResult,
    ClicheHit,
    DimensionFeedback,
    DimensionScore,
    EmotionProfile,
    ExportedAnalysis,
    Feedback,
    FeedbackIssue,
    Improvement,
    LineBreakdown,
    LineFinding,
    PairFinding,
    Priority,
    RapLineMetrics,
    RepeatedWord,
    Section,
    SongPurpose,
    SpecificIssue,
    StructureInfo,
    TextStats,
)
from lyric_grader.models.pipeline import AnalysisContext, StageResult
from lyric_grader.models.remix import (
    EmotionalTone,
    GenerationJob,
    GenerationState,
    GenerationStatus,
    Persona,
    RemixDirective,
    RemixStyle,
    Transcription,
)

__all__ = [
    "AnalysisContext",
    "AnalysisMetadata",
    "AnalysisProfile",
    "AnalysisResult",
    "ClicheHit",
    "DimensionFeedback",
    "DimensionScore",
    "EmotionProfile",
    "EmotionalTone",
    "ExportedAnalysis",
    "Feedback",
    "FeedbackIssue",
    "GenerationJob",
    "GenerationState",
    "GenerationStatus",
    "Improvement",
    "LineBreakdown",
    "LineFinding",
    "PairFinding",
    "Persona",
    "Priority",
    "RapLineMetrics",
    "RemixDirective",
    "RemixStyle",
    "RepeatedWord",
    "Section",
    "SongPurpose",
    "SpecificIssue",
    "StageResult",
    "StructureInfo",
    "TextStats",
    "Transcription",
]
