"""Recommendations stage - improvements, strengths and weaknesses."""

from lyric_grader.analysis.recommendations import (
    generate_improvements,
    identify_strengths,
    identify_weaknesses,
)
from lyric_grader.models.pipeline import AnalysisContext, StageResult
from lyric_grader.pipeline.base import AnalysisStage


class RecommendationsStage(AnalysisStage):
    """Stage 6: Recommendations."""

    @property
    def name(self) -> str:
        return "recommendations"

    def execute(self, context: AnalysisContext) -> StageResult:
        context.improvements = generate_improvements(context.breakdown, context.song_purpose)
        context.strengths = identify_strengths(context.breakdown)
        context.weaknesses = identify_weaknesses(context.breakdown)
        return self._ok()
