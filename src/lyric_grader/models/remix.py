"""Models exchanged with the generation and transcription providers."""

from dataclasses import dataclass, field
from enum import Enum


class RemixStyle(str, Enum):
    """Style tags understood by the generation provider."""

    # Rap
    MODERN_HIP_HOP = "modern-hip-hop"
    AGGRESSIVE_HIP_HOP = "aggressive-hip-hop"
    TRAP_PARTY = "trap-party"
    CONSCIOUS_RAP = "conscious-rap"
    TECHNICAL_RAP = "technical-rap"
    OLD_SCHOOL_RAP = "old-school-rap"
    MELODIC_RAP = "melodic-rap"

    # General
    CONTEMPORARY_POP = "contemporary-pop"
    ROMANTIC_POP = "romantic-pop"
    EMOTIONAL_BALLAD = "emotional-ballad"
    DANCE_POP = "dance-pop"
    UPLIFTING_ROCK = "uplifting-rock"
    ALTERNATIVE_ROCK = "alternative-rock"
    INDIE_FOLK = "indie-folk"
    RNB_SOUL = "r&b-soul"


class Persona(str, Enum):
    """Vocal persona tags understood by the generation provider."""

    # Rap
    AGGRESSIVE_MALE_RAPPER = "aggressive_male_rapper"
    CONFIDENT_MALE_RAPPER = "confident_male_rapper"
    SMOOTH_MALE_RAPPER = "smooth_male_rapper"
    VERSATILE_MALE_RAPPER = "versatile_male_rapper"
    FEMALE_RAPPER = "female_rapper"

    # General
    ROMANTIC_MALE_SINGER = "romantic_male_singer"
    SOULFUL_FEMALE_SINGER = "soulful_female_singer"
    EMOTIONAL_SINGER = "emotional_singer"
    ENERGETIC_SINGER = "energetic_singer"
    VERSATILE_SINGER = "versatile_singer"


class EmotionalTone(str, Enum):
    """Coarse tone used to pick a persona."""

    CONFIDENT = "confident"
    SMOOTH = "smooth"
    TENDER = "tender"
    BALANCED = "balanced"


@dataclass
class RemixDirective:
    """Configuration handed to the generation provider."""

    prompt: str
    style: RemixStyle
    persona: Persona
    improvements: list[str] = field(default_factory=list)  # human-readable summary


class GenerationState(str, Enum):
    """Job states reported by the generation provider."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (GenerationState.COMPLETED, GenerationState.FAILED)


@dataclass
class GenerationJob:
    """A submitted generation request."""

    job_id: str
    directive: RemixDirective
    estimated_time: str = "2-3 minutes"


@dataclass
class GenerationStatus:
    """One status poll result."""

    state: GenerationState
    audio_url: str | None = None
    error: str | None = None


@dataclass
class Transcription:
    """Formatted speech-to-text result."""

    text: str
    language: str = "unknown"
    duration: float = 0.0  # seconds
    confidence: int = 0  # 0-100
