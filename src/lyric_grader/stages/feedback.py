"""Feedback stage - summaries, concrete issues and the line-by-line breakdown."""

from lyric_grader.analysis.feedback import generate_feedback
from lyric_grader.models.pipeline import AnalysisContext, StageResult
from lyric_grader.pipeline.base import AnalysisStage


class FeedbackStage(AnalysisStage):
    """Stage 5: Feedback.

    Critique is written against the raw lyric so quoted lines and line
    numbers match what the writer submitted.
    """

    @property
    def name(self) -> str:
        return "feedback"

    def execute(self, context: AnalysisContext) -> StageResult:
        if context.profile is None or context.grade is None or context.overall_score is None:
            return self._fail("Lyric has not been graded")

        context.feedback = generate_feedback(
            context.lyrics,
            context.profile,
            context.breakdown,
            context.grade,
            context.overall_score,
            context.structure,
        )

        warnings = [
            f"{issue.type}: {issue.count}" for issue in context.feedback.specific_issues
        ]
        return self._ok(warnings)
