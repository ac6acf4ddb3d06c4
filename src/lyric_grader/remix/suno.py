"""Client for the Suno generation API."""

import base64
from collections.abc import Callable
from pathlib import Path
from typing import Any

from lyric_grader.client import ProviderClient
from lyric_grader.config import Settings, get_settings
from lyric_grader.errors import (
    AudioFileError,
    GenerationFailedError,
    GenerationTimeoutError,
    ProviderError,
)
from lyric_grader.models.analysis import AnalysisResult
from lyric_grader.models.remix import (
    GenerationJob,
    GenerationState,
    GenerationStatus,
    Persona,
    RemixDirective,
    RemixStyle,
)
from lyric_grader.remix.prompt import build_remix_directive

# Progress shown while a job is still running never passes this
MAX_REPORTED_PROGRESS = 90

# Called with (attempt, percent) after each non-terminal status check
ProgressCallback = Callable[[int, float], None]


class SunoClient(ProviderClient):
    """Submits remix jobs and polls them until the audio is ready."""

    provider_name = "Suno API"

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.sunoapi.org/v1",
        quality: str = "high",
        weirdness: float = 0.5,
        cover_weirdness: float = 0.65,
        audio_influence: float = 0.85,
        poll_interval: float = 5.0,
        max_poll_attempts: int = 60,
        **kwargs: Any,
    ) -> None:
        super().__init__(api_key, base_url, **kwargs)
        self.quality = quality
        self.weirdness = weirdness
        self.cover_weirdness = cover_weirdness
        self.audio_influence = audio_influence
        self.poll_interval = poll_interval
        self.max_poll_attempts = max_poll_attempts

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> "SunoClient":
        settings = settings or get_settings()
        return cls(
            api_key=settings.suno_api_key,
            base_url=settings.suno_base_url,
            quality=settings.generation_quality,
            weirdness=settings.generation_weirdness,
            cover_weirdness=settings.cover_weirdness,
            audio_influence=settings.audio_influence,
            poll_interval=settings.poll_interval,
            max_poll_attempts=settings.max_poll_attempts,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
            **kwargs,
        )

    def generate(self, lyrics: str, directive: RemixDirective) -> GenerationJob:
        """Request a new song from lyrics."""
        payload = {
            "lyrics": lyrics,
            "prompt": directive.prompt,
            "persona": directive.persona.value,
            "style": directive.style.value,
            "weirdness": self.weirdness,
            "quality": self.quality,
        }
        data = self.request_json(
            "POST", "generate", "Suno API error", idempotent=False, json=payload
        )
        return GenerationJob(job_id=_job_id(data), directive=directive)

    def cover(self, audio_path: Path, directive: RemixDirective) -> GenerationJob:
        """Request a remix of an existing recording."""
        audio_path = Path(audio_path)
        if not audio_path.is_file():
            raise AudioFileError(f"Audio file not found: {audio_path}")

        payload = {
            "audio_base64": base64.b64encode(audio_path.read_bytes()).decode("ascii"),
            "prompt": directive.prompt,
            "persona": directive.persona.value,
            "style": directive.style.value,
            "weirdness": self.cover_weirdness,
            "audio_influence": self.audio_influence,
        }
        data = self.request_json(
            "POST", "upload-and-cover-audio", "Suno API error", idempotent=False, json=payload
        )
        return GenerationJob(job_id=_job_id(data), directive=directive)

    def check_status(self, job_id: str) -> GenerationStatus:
        data = self.request_json("GET", f"status/{job_id}", "Status check failed")

        raw_state = data.get("status")
        try:
            state = GenerationState(raw_state)
        except ValueError as e:
            raise ProviderError(f"Status check failed: unknown status {raw_state!r}") from e

        return GenerationStatus(
            state=state,
            audio_url=data.get("audio_url"),
            error=data.get("error"),
        )

    def wait_for_completion(
        self,
        job_id: str,
        on_progress: ProgressCallback | None = None,
    ) -> GenerationStatus:
        """Poll a job until it completes.

        Args:
            job_id: Identifier returned by generate() or cover().
            on_progress: Receives the attempt number and an estimated
                percentage (capped at 90) while the job is running.

        Returns:
            The completed status, carrying the audio URL.

        Raises:
            GenerationFailedError: If the provider reports the job as failed.
            GenerationTimeoutError: If the job is still running after
                ``max_poll_attempts`` checks.
        """
        for attempt in range(1, self.max_poll_attempts + 1):
            status = self.check_status(job_id)

            if status.state is GenerationState.COMPLETED:
                return status
            if status.state is GenerationState.FAILED:
                raise GenerationFailedError(status.error or "Generation failed")

            if on_progress is not None:
                percent = min(MAX_REPORTED_PROGRESS, attempt / self.max_poll_attempts * 100)
                on_progress(attempt, percent)

            if attempt < self.max_poll_attempts:
                self.sleep(self.poll_interval)

        raise GenerationTimeoutError("Generation timeout - please try again")

    def submit_remix(
        self,
        result: AnalysisResult,
        audio_path: Path | None = None,
        style: RemixStyle | None = None,
        persona: Persona | None = None,
    ) -> GenerationJob:
        """Build a directive from an analysis and submit it.

        With ``audio_path`` the recording is remixed; otherwise a new song is
        generated from the analyzed lyrics.
        """
        directive = build_remix_directive(result, style=style, persona=persona)
        if audio_path is not None:
            return self.cover(audio_path, directive)
        return self.generate(result.lyrics, directive)


def _job_id(data: dict[str, Any]) -> str:
    job_id = data.get("id")
    if not job_id:
        raise ProviderError("Suno API error: response did not include a job id")
    return str(job_id)
