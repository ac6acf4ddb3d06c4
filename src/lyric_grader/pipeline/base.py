"""Base class for analysis stages."""

from abc import ABC, abstractmethod
import time

from lyric_grader.models.pipeline import AnalysisContext, StageResult


class AnalysisStage(ABC):
    """One step of lyric analysis.

    Subclasses read what earlier stages left on the AnalysisContext, add
    their own fields to it, and report the outcome as a StageResult.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short stage name used in progress output and error messages."""
        ...

    @abstractmethod
    def execute(self, context: AnalysisContext) -> StageResult:
        """Do the stage's work on ``context``.

        Args:
            context: Shared analysis state, mutated in place.

        Returns:
            StageResult with success flag, warnings or an error message.
        """
        ...

    def run(self, context: AnalysisContext) -> StageResult:
        """Call execute() and record how long it took.

        Any exception raised by execute() is turned into a failed
        StageResult, so a broken stage degrades the analysis instead of
        aborting the caller.
        """
        started = time.perf_counter()
        try:
            outcome = self.execute(context)
        except Exception as e:
            outcome = self._fail(f"Unexpected error: {e}")
        outcome.duration_seconds = time.perf_counter() - started
        return outcome

    def _ok(self, warnings: list[str] | None = None) -> StageResult:
        return StageResult(success=True, stage_name=self.name, warnings=warnings or [])

    def _fail(self, message: str) -> StageResult:
        return StageResult(success=False, stage_name=self.name, error_message=message)
