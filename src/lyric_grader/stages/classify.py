"""Classify stage - picks the grading profile and the song purpose."""

from lyric_grader.analysis.genre import detect_song_purpose, profile_for_score, rap_score
from lyric_grader.models.pipeline import AnalysisContext, StageResult
from lyric_grader.pipeline.base import AnalysisStage


class ClassifyStage(AnalysisStage):
    """Stage 2: Classification.

    Scores rap indicators on the raw lyric. At or above the threshold the
    lyric is graded with the Rap profile, otherwise with the General one.
    """

    @property
    def name(self) -> str:
        return "classify"

    def execute(self, context: AnalysisContext) -> StageResult:
        context.rap_score = rap_score(context.lyrics)
        context.profile = profile_for_score(context.rap_score)
        context.song_purpose = detect_song_purpose(context.lyrics)

        return self._ok(
            [
                f"Profile: {context.profile.label} (rap score {context.rap_score})",
                f"Purpose: {context.song_purpose.primary} "
                f"({context.song_purpose.confidence} confidence)",
            ]
        )
