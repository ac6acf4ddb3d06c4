"""Exception hierarchy for Lyric Grader.

The analysis core never lets these escape from ``Pipeline.analyze``; they are
raised by input validation helpers and by the provider clients.
"""


class LyricGraderError(Exception):
    """Base class for all Lyric Grader errors."""


class InputError(LyricGraderError):
    """Input rejected before analysis."""


class EmptyLyricsError(InputError):
    """Lyric text is empty or whitespace only."""

    def __init__(self, message: str = "No lyrics to analyze") -> None:
        super().__init__(message)


class AnalysisFailure(LyricGraderError):
    """A pipeline stage failed; the caller receives the fallback result instead."""

    def __init__(self, stage_name: str, message: str) -> None:
        super().__init__(f"{stage_name}: {message}")
        self.stage_name = stage_name


class ProviderError(LyricGraderError):
    """An external provider (transcription or generation) request failed."""

    def __init__(
        self, message: str, status_code: int | None = None, request_sent: bool = True
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        # False only when the connection could not be opened at all
        self.request_sent = request_sent

    @property
    def is_client_error(self) -> bool:
        """True for 4xx responses, which are not worth retrying."""
        return self.status_code is not None and 400 <= self.status_code < 500


class ProviderNotConfiguredError(ProviderError):
    """No API key configured for the provider."""


class AudioFileError(LyricGraderError):
    """Audio file is missing, too large, or of an unsupported type."""


class GenerationFailedError(ProviderError):
    """The generation provider reported the job as failed."""


class GenerationTimeoutError(ProviderError):
    """The generation job did not complete within the polling budget."""
