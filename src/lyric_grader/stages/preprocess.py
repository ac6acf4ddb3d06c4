"""Preprocess stage - validates input and derives the cleaned text views."""

from lyric_grader.analysis.text import (
    actual_lines,
    calculate_basic_stats,
    clean_text,
    identify_sections,
)
from lyric_grader.errors import EmptyLyricsError
from lyric_grader.models.analysis import StructureInfo
from lyric_grader.models.pipeline import AnalysisContext, StageResult
from lyric_grader.pipeline.base import AnalysisStage
from lyric_grader.pipeline.orchestrator import validate_lyrics


class PreprocessStage(AnalysisStage):
    """Stage 1: Preprocess.

    Rejects blank input, then builds:
    - CleanText (markers, timestamps and stray symbols removed, lowercased)
    - the non-empty raw lines
    - basic word statistics
    - section markers such as [Verse 1] found in the raw text
    """

    @property
    def name(self) -> str:
        return "preprocess"

    def execute(self, context: AnalysisContext) -> StageResult:
        warnings: list[str] = []

        try:
            validate_lyrics(context.lyrics)
        except EmptyLyricsError as e:
            return self._fail(str(e))

        context.clean_text = clean_text(context.lyrics)
        context.lines = actual_lines(context.lyrics)
        context.stats = calculate_basic_stats(context.clean_text, context.lines)
        context.structure = StructureInfo(sections=identify_sections(context.lyrics))

        if context.stats.word_count == 0:
            warnings.append("No words left after removing markers and symbols")

        warnings.append(
            f"{context.stats.line_count} lines, {context.stats.word_count} words"
        )
        if context.structure.detected:
            warnings.append(f"Found {len(context.structure.sections)} section markers")

        return self._ok(warnings)
