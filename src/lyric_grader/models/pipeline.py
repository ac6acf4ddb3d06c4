"""Pipeline processing models for Lyric Grader.

These models track state as lyric text moves through the analysis stages.
"""

from dataclasses import dataclass, field

from lyric_grader.models.analysis import (
    AnalysisProfile,
    DimensionScore,
    EmotionProfile,
    Feedback,
    Improvement,
    SongPurpose,
    StructureInfo,
    TextStats,
)


@dataclass
class AnalysisContext:
    """Mutable state passed through pipeline stages.

    Created fresh for every analysis; never shared between runs.
    """

    # Input
    lyrics: str

    # Preprocess (Stage 1)
    clean_text: str = ""
    lines: list[str] = field(default_factory=list)  # non-empty raw lines
    stats: TextStats | None = None
    structure: StructureInfo = field(default_factory=StructureInfo)

    # Classification (Stage 2)
    rap_score: int = 0
    profile: AnalysisProfile | None = None
    song_purpose: SongPurpose | None = None

    # Dimension analysis (Stage 3)
    breakdown: dict[str, DimensionScore] = field(default_factory=dict)
    rhyme_pattern: str = ""
    emotion: EmotionProfile | None = None
    # Extra rap measurements (average syllables, variance, rhyme complexity)
    rap_metrics: dict[str, float] = field(default_factory=dict)

    # Scoring (Stage 4)
    overall_score: float | None = None
    grade: str | None = None

    # Feedback (Stage 5)
    feedback: Feedback | None = None

    # Recommendations (Stage 6)
    improvements: list[Improvement] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)


@dataclass
class StageResult:
    """Result of a pipeline stage execution."""

    success: bool
    stage_name: str
    duration_seconds: float = 0.0
    error_message: str | None = None
    warnings: list[str] = field(default_factory=list)
