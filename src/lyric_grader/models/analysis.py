"""Core analysis data models for Lyric Grader.

These models represent the grading output that gets rendered by the CLI and
exported to JSON.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Literal


class AnalysisProfile(str, Enum):
    """Which weight table and dimension set a run uses."""

    GENERAL = "general"
    RAP = "rap"

    @property
    def label(self) -> str:
        return "Rap/Hip-Hop" if self is AnalysisProfile.RAP else "General"


class Priority(IntEnum):
    """Improvement priority and issue severity. Lower sorts first."""

    CRITICAL = 0
    HIGH = 1
    MEDIUM = 2
    LOW = 3


@dataclass
class TextStats:
    """Basic counts over the cleaned lyric text."""

    line_count: int
    word_count: int
    unique_words: int
    average_line_length: float  # words per line
    vocabulary_richness: float  # unique / total, 0.0-1.0


@dataclass
class Section:
    """A song section marker such as ``[Verse 1]`` or ``[Chorus]``."""

    type: str  # "verse", "chorus", "bridge", "intro", "outro", ...
    label: str  # marker text as written
    line: int  # 1-indexed line of the marker in the raw lyrics


@dataclass
class StructureInfo:
    """Sections detected in the raw lyrics."""

    sections: list[Section] = field(default_factory=list)

    @property
    def detected(self) -> bool:
        return len(self.sections) > 0

    @property
    def has_verse(self) -> bool:
        return any(s.type == "verse" for s in self.sections)

    @property
    def has_chorus(self) -> bool:
        return any(s.type == "chorus" for s in self.sections)

    @property
    def has_bridge(self) -> bool:
        return any(s.type == "bridge" for s in self.sections)


@dataclass
class EmotionProfile:
    """Keyword-based emotion reading of the lyrics."""

    primary: str  # "joy", "sadness", "anger", "love", "fear"
    range: int  # number of emotions with at least one hit
    intensity: int  # total keyword hits


@dataclass
class SongPurpose:
    """Best-matching song purpose category."""

    primary: str  # e.g. "love_song", "diss_track"
    score: int
    scores: dict[str, int] = field(default_factory=dict)  # every category
    confidence: Literal["high", "medium", "low"] = "low"


@dataclass
class DimensionScore:
    """Score for one graded dimension, built from weighted sub-criteria."""

    name: str  # e.g. "lyrical_content"
    value: float  # 0-100
    subscores: dict[str, float] = field(default_factory=dict)  # each 0-100


@dataclass
class FeedbackIssue:
    """A problem found in one dimension, with an example fix."""

    issue: str
    example: str


@dataclass
class DimensionFeedback:
    """Feedback for one dimension."""

    summary: str
    score: float
    issues: list[FeedbackIssue] = field(default_factory=list)


@dataclass
class ClicheHit:
    """A cliché found on a specific line."""

    line: int  # 1-indexed
    text: str
    cliche: str
    suggestion: str = ""


@dataclass
class LineFinding:
    """An issue tied to a single line."""

    line: int  # 1-indexed
    text: str
    issue: str
    suggestion: str
    term: str | None = None  # offending word, when there is one


@dataclass
class PairFinding:
    """An issue spanning two consecutive lines."""

    lines: tuple[int, int]  # 1-indexed
    text: tuple[str, str]
    issue: str
    suggestion: str


@dataclass
class RepeatedWord:
    """A word used more often than it should be."""

    word: str
    count: int
    suggestion: str


Finding = ClicheHit | LineFinding | PairFinding | RepeatedWord


@dataclass
class SpecificIssue:
    """A category of concrete issues with up to three examples."""

    type: str  # e.g. "CLICHÉS", "FLOW PROBLEMS"
    severity: Priority
    count: int
    examples: list[Finding] = field(default_factory=list)
    fix: str = ""


@dataclass
class RapLineMetrics:
    """Per-line counts used by the rap line breakdown."""

    syllables: int
    internal_rhymes: int
    multisyllabic_words: int
    rap_vocab: int


@dataclass
class LineBreakdown:
    """Heuristic critique of a single lyric line."""

    line_number: int  # 1-indexed among non-empty lines
    text: str
    score: int  # 0-100
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    rap_metrics: RapLineMetrics | None = None


@dataclass
class Feedback:
    """All generated feedback for one analysis."""

    overall: str
    dimensions: dict[str, DimensionFeedback] = field(default_factory=dict)
    specific_issues: list[SpecificIssue] = field(default_factory=list)
    line_by_line: list[LineBreakdown] = field(default_factory=list)


@dataclass
class Improvement:
    """A suggested change on the way to an A+."""

    category: str
    priority: Priority
    issue: str
    suggestion: str
    examples: list[str] = field(default_factory=list)


@dataclass
class AnalysisMetadata:
    """Summary facts shown alongside the grade."""

    word_count: int = 0
    unique_words: int = 0
    average_line_length: float = 0.0
    structure_detected: bool = False
    rhyme_scheme_pattern: str = ""
    genre: str = ""


@dataclass
class AnalysisResult:
    """Root analysis object, rendered by the CLI and exported to JSON."""

    profile: AnalysisProfile
    overall_score: float
    grade: str
    breakdown: dict[str, DimensionScore] = field(default_factory=dict)
    feedback: Feedback = field(default_factory=lambda: Feedback(overall=""))
    improvements: list[Improvement] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    song_purpose: SongPurpose | None = None
    stats: TextStats | None = None
    metadata: AnalysisMetadata = field(default_factory=AnalysisMetadata)
    emotion: EmotionProfile | None = None
    # Flow measurements (avg_syllables, syllable_variance, stress_patterns,
    # rhyme_complexity); None for the General profile
    rap_analysis: dict[str, float] | None = None

    # Input and diagnostics
    lyrics: str = ""
    rap_score: int = 0
    warnings: list[str] = field(default_factory=list)  # collected from stages
    error: str | None = None  # set only on the fallback result

    @property
    def failed(self) -> bool:
        return self.error is not None

    def score_of(self, dimension: str) -> float | None:
        """Value of a dimension, or None when the profile does not grade it."""
        score = self.breakdown.get(dimension)
        return score.value if score is not None else None


@dataclass
class ExportedAnalysis:
    """An analysis read back from its JSON export.

    Keys of ``breakdown`` and ``subscores`` are restored to snake_case; the
    nested feedback, improvement and metadata objects stay as plain dicts.
    """

    timestamp: str
    grade: str
    score: float
    profile: AnalysisProfile
    breakdown: dict[str, float] = field(default_factory=dict)
    subscores: dict[str, dict[str, float]] = field(default_factory=dict)
    feedback: dict = field(default_factory=dict)
    improvements: list[dict] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    song_purpose: dict | None = None
    metadata: dict = field(default_factory=dict)
    emotion: dict | None = None
    rap_analysis: dict[str, float] | None = None
