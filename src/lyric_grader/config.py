"""Configuration management for Lyric Grader."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Only the provider clients and the CLI read these. The grading weights,
    thresholds and keyword tables are fixed constants in
    ``lyric_grader.analysis.tables``.
    """

    model_config = SettingsConfigDict(
        env_prefix="LYRIC_GRADER_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Directories
    output_dir: Path = Field(
        default=Path("./output"),
        description="Default output directory for exported analyses and transcriptions",
    )

    # Transcription provider (Groq Whisper)
    groq_api_key: str | None = Field(
        default=None,
        description="API key for the Groq transcription endpoint",
    )
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        description="Base URL of the OpenAI-compatible Groq API",
    )
    whisper_model: str = Field(
        default="whisper-large-v3-turbo",
        description="Whisper model used for audio transcription",
    )
    max_upload_size: int = Field(
        default=25 * 1024 * 1024,
        description="Largest audio file accepted by the transcription endpoint, in bytes",
    )

    # Generation provider (Suno)
    suno_api_key: str | None = Field(
        default=None,
        description="API key for the Suno generation endpoint",
    )
    suno_base_url: str = Field(
        default="https://api.sunoapi.org/v1",
        description="Base URL of the Suno API",
    )
    generation_quality: str = Field(
        default="high",
        description="Quality tier requested for generated songs",
    )
    generation_weirdness: float = Field(
        default=0.5,
        description="Creativity setting for generation from lyrics (0.0-1.0)",
    )
    cover_weirdness: float = Field(
        default=0.65,
        description="Creativity setting when remixing an uploaded recording (0.0-1.0)",
    )
    audio_influence: float = Field(
        default=0.85,
        description="How closely a cover remix follows the uploaded recording (0.0-1.0)",
    )

    # Network behaviour
    request_timeout: float = Field(
        default=60.0,
        description="Timeout for a single HTTP request, in seconds",
    )
    max_retries: int = Field(
        default=3,
        description="Attempts per provider request before giving up",
    )
    retry_delay: float = Field(
        default=1.0,
        description="Initial retry delay in seconds, doubled after each failed attempt",
    )
    poll_interval: float = Field(
        default=5.0,
        description="Seconds between generation status checks",
    )
    max_poll_attempts: int = Field(
        default=60,
        description="Status checks before a generation job is considered timed out",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(**overrides: object) -> Settings:
    """Configure settings with overrides. Useful for testing."""
    global _settings
    _settings = Settings(**overrides)  # type: ignore[arg-type]
    return _settings
