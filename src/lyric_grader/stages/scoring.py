"""Scoring stage - weighted overall score and letter grade."""

from lyric_grader.analysis.grading import calculate_overall_score, grade_for_score
from lyric_grader.models.pipeline import AnalysisContext, StageResult
from lyric_grader.pipeline.base import AnalysisStage


class ScoringStage(AnalysisStage):
    """Stage 4: Scoring."""

    @property
    def name(self) -> str:
        return "scoring"

    def execute(self, context: AnalysisContext) -> StageResult:
        if context.profile is None or not context.breakdown:
            return self._fail("No dimension scores to combine")

        context.overall_score = calculate_overall_score(context.breakdown, context.profile)
        context.grade = grade_for_score(context.overall_score)

        return self._ok([f"Grade {context.grade} ({context.overall_score:.1f})"])
