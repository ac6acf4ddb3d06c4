"""Dimensions stage - runs the analyzers of the selected profile."""

from lyric_grader.analysis.general import analyze_general, detect_emotions
from lyric_grader.analysis.rap import analyze_rap
from lyric_grader.analysis.text import detect_rhyme_pattern, split_lines
from lyric_grader.models.analysis import AnalysisProfile
from lyric_grader.models.pipeline import AnalysisContext, StageResult
from lyric_grader.pipeline.base import AnalysisStage


class DimensionsStage(AnalysisStage):
    """Stage 3: Dimension analysis.

    Produces one DimensionScore per dimension of the profile. The end-rhyme
    pattern goes into the result metadata and the emotion reading onto the
    result for both profiles; Rap lyrics also record their flow metrics.
    """

    @property
    def name(self) -> str:
        return "dimensions"

    def execute(self, context: AnalysisContext) -> StageResult:
        if context.profile is None or context.stats is None:
            return self._fail("Text was not preprocessed and classified")

        if context.profile is AnalysisProfile.RAP:
            rap = analyze_rap(context.clean_text)
            context.breakdown = rap.breakdown
            context.rap_metrics = rap.metrics
            context.rhyme_pattern = detect_rhyme_pattern(split_lines(context.clean_text))
            context.emotion = detect_emotions(context.clean_text)
        else:
            general = analyze_general(context.clean_text, context.stats, context.structure)
            context.breakdown = general.breakdown
            context.rhyme_pattern = general.rhyme_pattern
            context.emotion = general.emotion

        return self._ok(
            [f"Scored {len(context.breakdown)} dimensions ({context.profile.label})"]
        )
