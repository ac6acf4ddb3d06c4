"""Pipeline orchestrator for Lyric Grader."""

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from lyric_grader.errors import AnalysisFailure, EmptyLyricsError
from lyric_grader.models.analysis import (
    AnalysisMetadata,
    AnalysisProfile,
    AnalysisResult,
    Feedback,
)
from lyric_grader.models.pipeline import AnalysisContext, StageResult
from lyric_grader.pipeline.base import AnalysisStage

FALLBACK_FEEDBACK = "Unable to analyze lyrics. Please check the input and try again."
FALLBACK_WEAKNESS = "Analysis failed"


def validate_lyrics(lyrics: str | None) -> str:
    """Reject missing or blank lyrics before analysis.

    Raises:
        EmptyLyricsError: If there is nothing to analyze.
    """
    if lyrics is None or not lyrics.strip():
        raise EmptyLyricsError()
    return lyrics


def fallback_result(lyrics: str, error: str) -> AnalysisResult:
    """Degraded result returned when analysis cannot complete."""
    return AnalysisResult(
        profile=AnalysisProfile.GENERAL,
        overall_score=0,
        grade="F",
        breakdown={},
        feedback=Feedback(overall=FALLBACK_FEEDBACK),
        improvements=[],
        strengths=[],
        weaknesses=[FALLBACK_WEAKNESS],
        lyrics=lyrics,
        error=error,
    )


class Pipeline:
    """Orchestrates the execution of analysis stages."""

    def __init__(self, stages: list[AnalysisStage], console: Console | None = None) -> None:
        """Initialize the pipeline.

        Args:
            stages: Ordered list of stages to execute.
            console: Console for per-stage progress output. Silent when None.
        """
        self.stages = stages
        self.console = console

    def analyze(self, lyrics: str) -> AnalysisResult:
        """Run every stage on a lyric.

        Never raises for bad input: if any stage fails, the fallback result
        is returned with the failure recorded in ``error``.
        """
        context = AnalysisContext(lyrics=lyrics or "")
        warnings: list[str] = []

        for stage in self.stages:
            stage_result = self._run_stage(stage, context)

            if not stage_result.success:
                failure = AnalysisFailure(stage.name, stage_result.error_message or "")
                return fallback_result(context.lyrics, str(failure))

            warnings.extend(stage_result.warnings)

        return self._build_result(context, warnings)

    def _run_stage(self, stage: AnalysisStage, context: AnalysisContext) -> StageResult:
        """Run one stage, showing a spinner and a status line when a console is set."""
        if self.console is None:
            return stage.run(context)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        ) as progress:
            progress.add_task(f"[cyan]{stage.name}[/cyan]...", total=None)
            stage_result = stage.run(context)

        if stage_result.success:
            self.console.print(
                f"  [green]{stage.name}[/green] "
                f"({stage_result.duration_seconds:.1f}s)"
            )
        else:
            self.console.print(
                f"  [red]{stage.name}[/red] failed: "
                f"{stage_result.error_message}"
            )

        return stage_result

    def _build_result(self, context: AnalysisContext, warnings: list[str]) -> AnalysisResult:
        """Assemble the final result from a fully processed context."""
        if context.profile is None or context.overall_score is None or context.grade is None:
            failure = AnalysisFailure("pipeline", "stages did not produce a grade")
            return fallback_result(context.lyrics, str(failure))

        stats = context.stats
        metadata = AnalysisMetadata(
            word_count=stats.word_count if stats else 0,
            unique_words=stats.unique_words if stats else 0,
            average_line_length=stats.average_line_length if stats else 0.0,
            structure_detected=context.structure.detected,
            rhyme_scheme_pattern=context.rhyme_pattern,
            genre=context.profile.label,
        )

        return AnalysisResult(
            profile=context.profile,
            overall_score=context.overall_score,
            grade=context.grade,
            breakdown=context.breakdown,
            feedback=context.feedback or Feedback(overall=""),
            improvements=context.improvements,
            strengths=context.strengths,
            weaknesses=context.weaknesses,
            song_purpose=context.song_purpose,
            stats=stats,
            metadata=metadata,
            emotion=context.emotion,
            rap_analysis=(
                dict(context.rap_metrics) if context.profile is AnalysisProfile.RAP else None
            ),
            lyrics=context.lyrics,
            rap_score=context.rap_score,
            warnings=warnings,
        )


def create_default_pipeline(console: Console | None = None) -> Pipeline:
    """Create a pipeline with all default stages.

    Args:
        console: Optional console for per-stage progress output.

    Returns:
        Configured Pipeline instance.
    """
    from lyric_grader.stages import (
        ClassifyStage,
        DimensionsStage,
        FeedbackStage,
        PreprocessStage,
        RecommendationsStage,
        ScoringStage,
    )

    stages: list[AnalysisStage] = [
        PreprocessStage(),
        ClassifyStage(),
        DimensionsStage(),
        ScoringStage(),
        FeedbackStage(),
        RecommendationsStage(),
    ]

    return Pipeline(stages, console)


def analyze_lyrics(lyrics: str, console: Console | None = None) -> AnalysisResult:
    """Grade a lyric with the default pipeline."""
    return create_default_pipeline(console).analyze(lyrics)
