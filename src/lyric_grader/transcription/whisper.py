"""Audio transcription through Groq's OpenAI-compatible Whisper endpoint."""

from collections.abc import Callable
from pathlib import Path
import re
from typing import Any, Literal

from lyric_grader.client import ProviderClient
from lyric_grader.config import Settings, get_settings
from lyric_grader.errors import AudioFileError, ProviderError
from lyric_grader.models.remix import Transcription

SUPPORTED_EXTENSIONS = frozenset({".mp3", ".wav", ".m4a", ".aac", ".ogg", ".flac", ".webm"})
SUPPORTED_FORMATS_LABEL = "MP3, WAV, M4A, AAC, OGG, FLAC, WebM"

# Used for words that carry no confidence of their own
DEFAULT_WORD_CONFIDENCE = 0.8

# Section markers placed every ``lines_per_section`` lines
STRUCTURE_MARKERS = ("[Verse 1]", "[Chorus]", "[Verse 2]", "[Bridge]")
MIN_LINES_PER_SECTION = 4

Timestamping = Literal["none", "line"]

# Called with (percent, message) as the transcription advances
TranscriptionProgress = Callable[[int, str], None]


def format_timestamp(seconds: float) -> str:
    """Format seconds as ``[MM:SS]``."""
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"[{minutes:02d}:{secs:02d}]"


def format_file_size(size: int) -> str:
    if size == 0:
        return "0 Bytes"
    units = ("Bytes", "KB", "MB", "GB")
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


def add_line_timestamps(text: str, words: list[dict[str, Any]]) -> str:
    """Prefix each non-blank line with the start time of its first word.

    Word positions are advanced by the number of whitespace tokens on each
    line, so the alignment is approximate when the provider splits words
    differently.
    """
    if not words:
        return text

    output: list[str] = []
    word_index = 0
    for line in text.split("\n"):
        if not line.strip():
            output.append("")
            continue

        if word_index < len(words):
            timestamp = format_timestamp(float(words[word_index].get("start", 0)))
            output.append(f"{timestamp} {line}")
            word_index += len(line.split())
        else:
            output.append(line)

    return "\n".join(output)


def add_song_structure(text: str) -> str:
    """Insert verse/chorus/bridge markers at even breaks through the lyric."""
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        return text

    lines_per_section = max(MIN_LINES_PER_SECTION, len(lines) // 4)
    output: list[str] = []
    for i, line in enumerate(lines):
        section, offset = divmod(i, lines_per_section)
        if offset == 0 and section < len(STRUCTURE_MARKERS):
            if section > 0:
                output.append("")
            output.append(STRUCTURE_MARKERS[section])
        output.append(line)

    return "\n".join(output)


def clean_transcription(text: str) -> str:
    """Normalize spacing while keeping line breaks intact."""
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"([.!?])[ \t]*([a-z])", r"\1 \2", text)
    return text.strip()


def estimate_confidence(data: dict[str, Any]) -> int:
    """Confidence 0-100 from word scores, or from text length when absent."""
    words = data.get("words") or []
    if words:
        total = sum(word.get("confidence") or DEFAULT_WORD_CONFIDENCE for word in words)
        return round(total / len(words) * 100)

    text = data.get("text") or ""
    if len(text) > 100:
        return 85
    if len(text) > 50:
        return 75
    return 65


def format_transcription(
    data: dict[str, Any],
    timestamping: Timestamping = "none",
    include_structure: bool = False,
) -> Transcription:
    """Turn a verbose_json response into a Transcription."""
    text = data.get("text") or ""

    if timestamping == "line" and data.get("words"):
        text = add_line_timestamps(text, data["words"])

    if include_structure:
        text = add_song_structure(text)

    return Transcription(
        text=clean_transcription(text),
        language=data.get("language") or "unknown",
        duration=float(data.get("duration") or 0.0),
        confidence=estimate_confidence(data),
    )


class WhisperTranscriber(ProviderClient):
    """Uploads audio files and formats the returned transcription."""

    provider_name = "Groq API"

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.groq.com/openai/v1",
        model: str = "whisper-large-v3-turbo",
        max_file_size: int = 25 * 1024 * 1024,
        **kwargs: Any,
    ) -> None:
        super().__init__(api_key, base_url, **kwargs)
        self.model = model
        self.max_file_size = max_file_size

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, **kwargs: Any
    ) -> "WhisperTranscriber":
        settings = settings or get_settings()
        return cls(
            api_key=settings.groq_api_key,
            base_url=settings.groq_base_url,
            model=settings.whisper_model,
            max_file_size=settings.max_upload_size,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
            **kwargs,
        )

    def validate_audio_file(self, path: Path) -> Path:
        """Check that an audio file exists, fits the upload limit and has a supported type.

        Raises:
            AudioFileError: Describing the first problem found.
        """
        path = Path(path)
        if not path.is_file():
            raise AudioFileError(f"No audio file found at {path}")

        size = path.stat().st_size
        limit_mb = self.max_file_size // (1024 * 1024)
        if size > self.max_file_size:
            raise AudioFileError(
                f"File size ({format_file_size(size)}) exceeds the {limit_mb}MB limit"
            )

        if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            raise AudioFileError(
                f"Unsupported file type: {path.suffix or 'unknown'}. "
                f"Supported formats: {SUPPORTED_FORMATS_LABEL}"
            )

        return path

    def transcribe(
        self,
        path: Path,
        language: str | None = None,
        timestamping: Timestamping = "none",
        include_structure: bool = False,
        on_progress: TranscriptionProgress | None = None,
    ) -> Transcription:
        """Transcribe an audio file.

        Args:
            path: Audio file to upload.
            language: ISO language hint; auto-detected when None.
            timestamping: "line" prefixes each line with ``[MM:SS]``.
            include_structure: Insert verse/chorus/bridge markers.
            on_progress: Optional (percent, message) callback.

        Raises:
            AudioFileError: If the file fails validation.
            ProviderNotConfiguredError: If no API key is set.
            ProviderError: If the request fails.
        """

        def report(percent: int, message: str) -> None:
            if on_progress is not None:
                on_progress(percent, message)

        report(10, "Validating audio file...")
        path = self.validate_audio_file(path)
        self.require_configured()

        report(25, "Preparing audio file...")
        fields: list[tuple[str, str]] = [("model", self.model)]
        if language:
            fields.append(("language", language))
        fields.append(("temperature", "0"))
        fields.append(("response_format", "verbose_json"))
        if timestamping == "line":
            fields.append(("timestamp_granularities[]", "word"))
        audio = path.read_bytes()

        report(50, "Uploading and transcribing...")
        data = self.request_json(
            "POST",
            "audio/transcriptions",
            "Transcription failed",
            data=fields,
            files={"file": (path.name, audio)},
        )

        report(80, "Processing transcription...")
        transcription = format_transcription(data, timestamping, include_structure)

        report(100, "Transcription complete!")
        return transcription

    def validate_api_key(self) -> bool:
        """Whether the configured key is accepted by the provider."""
        if not self.is_configured:
            return False
        try:
            self._send("GET", "models", "Key check failed")
        except ProviderError:
            return False
        return True

    def supported_models(self) -> list[str]:
        """Whisper model ids offered by the provider, or the configured one."""
        try:
            data = self.request_json("GET", "models", "Model listing failed")
        except ProviderError:
            return [self.model]

        models = [
            str(entry["id"])
            for entry in data.get("data", [])
            if "whisper" in str(entry.get("id", ""))
        ]
        return models or [self.model]
