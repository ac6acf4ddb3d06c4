"""Build the remix directive handed to the generation provider.

Everything here is a pure function of an AnalysisResult; no network access.
"""

from types import MappingProxyType

from lyric_grader.models.analysis import AnalysisProfile, AnalysisResult
from lyric_grader.models.remix import EmotionalTone, Persona, RemixDirective, RemixStyle

# Dimensions scoring below this get an improvement phrase
REMIX_THRESHOLD = 70
# Below this overall score, production and vocal upgrades are requested too
PRODUCTION_THRESHOLD = 80
TECHNICAL_RAP_THRESHOLD = 80

RAP_PHRASES: tuple[tuple[str, str], ...] = (
    ("flow", "tighter flow with consistent rhythm"),
    ("rhyme_scheme", "more complex internal rhymes"),
    ("wordplay", "clever wordplay and punchlines"),
    ("technical", "better syllable patterns and delivery"),
)
GENERAL_PHRASES: tuple[tuple[str, str], ...] = (
    ("structure", "clearer verse-chorus structure"),
    ("emotion", "more emotional depth and authenticity"),
    ("rhyme_scheme", "natural-sounding rhyme schemes"),
)
PURPOSE_PHRASES = MappingProxyType(
    {
        "love_song": "romantic melody with heartfelt vocals",
        "diss_track": "aggressive beat with sharp delivery",
        "party_anthem": "high-energy beat with infectious hooks",
        "sad_ballad": "melancholic melody with emotional vocals",
        "motivational": "uplifting beat with powerful vocals",
    }
)
PRODUCTION_PHRASES = ("professional production quality", "enhanced vocal performance")

RAP_FOCUS = "Focus on tight rap delivery, complex rhyme patterns, and hard-hitting beats."
GENERAL_FOCUS = "Focus on melodic vocals, clear song structure, and emotional connection."

RAP_STYLES: tuple[RemixStyle, ...] = (
    RemixStyle.MODERN_HIP_HOP,
    RemixStyle.AGGRESSIVE_HIP_HOP,
    RemixStyle.TRAP_PARTY,
    RemixStyle.CONSCIOUS_RAP,
    RemixStyle.TECHNICAL_RAP,
    RemixStyle.OLD_SCHOOL_RAP,
    RemixStyle.MELODIC_RAP,
)
GENERAL_STYLES: tuple[RemixStyle, ...] = (
    RemixStyle.CONTEMPORARY_POP,
    RemixStyle.ROMANTIC_POP,
    RemixStyle.EMOTIONAL_BALLAD,
    RemixStyle.DANCE_POP,
    RemixStyle.UPLIFTING_ROCK,
    RemixStyle.ALTERNATIVE_ROCK,
    RemixStyle.INDIE_FOLK,
    RemixStyle.RNB_SOUL,
)
RAP_PERSONAS: tuple[Persona, ...] = (
    Persona.AGGRESSIVE_MALE_RAPPER,
    Persona.CONFIDENT_MALE_RAPPER,
    Persona.SMOOTH_MALE_RAPPER,
    Persona.VERSATILE_MALE_RAPPER,
    Persona.FEMALE_RAPPER,
)
GENERAL_PERSONAS: tuple[Persona, ...] = (
    Persona.ROMANTIC_MALE_SINGER,
    Persona.SOULFUL_FEMALE_SINGER,
    Persona.EMOTIONAL_SINGER,
    Persona.ENERGETIC_SINGER,
    Persona.VERSATILE_SINGER,
)

GENERAL_STYLE_BY_PURPOSE = MappingProxyType(
    {
        "love_song": RemixStyle.ROMANTIC_POP,
        "sad_ballad": RemixStyle.EMOTIONAL_BALLAD,
        "party_anthem": RemixStyle.DANCE_POP,
        "motivational": RemixStyle.UPLIFTING_ROCK,
        "social_commentary": RemixStyle.ALTERNATIVE_ROCK,
    }
)

# Checked in order; the first tone with a keyword in the lyric wins
TONE_KEYWORDS: tuple[tuple[EmotionalTone, tuple[str, ...]], ...] = (
    (EmotionalTone.CONFIDENT, ("confident", "boss", "king")),
    (EmotionalTone.SMOOTH, ("smooth", "cool", "chill")),
    (EmotionalTone.TENDER, ("tender", "gentle", "soft")),
)


def _purpose(result: AnalysisResult) -> str:
    return result.song_purpose.primary if result.song_purpose else ""


def _below(result: AnalysisResult, dimension: str, threshold: float) -> bool:
    """Whether a dimension is graded and scores below the threshold."""
    score = result.score_of(dimension)
    return score is not None and score < threshold


def generate_remix_prompt(result: AnalysisResult) -> str:
    """Natural-language instruction listing what the remix should improve."""
    if result.profile is AnalysisProfile.RAP:
        phrases, focus = RAP_PHRASES, RAP_FOCUS
    else:
        phrases, focus = GENERAL_PHRASES, GENERAL_FOCUS

    improvements = [
        phrase for dimension, phrase in phrases if _below(result, dimension, REMIX_THRESHOLD)
    ]

    purpose_phrase = PURPOSE_PHRASES.get(_purpose(result))
    if purpose_phrase:
        improvements.append(purpose_phrase)

    if result.overall_score < PRODUCTION_THRESHOLD:
        improvements.extend(PRODUCTION_PHRASES)

    return f"Create an improved version with {', '.join(improvements)}. {focus}"


def detect_emotional_tone(lyrics: str) -> EmotionalTone:
    lowered = lyrics.lower()
    for tone, keywords in TONE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return tone
    return EmotionalTone.BALANCED


def select_style(result: AnalysisResult) -> RemixStyle:
    purpose = _purpose(result)

    if result.profile is AnalysisProfile.RAP:
        if purpose == "diss_track":
            return RemixStyle.AGGRESSIVE_HIP_HOP
        if purpose == "party_anthem":
            return RemixStyle.TRAP_PARTY
        if purpose == "storytelling":
            return RemixStyle.CONSCIOUS_RAP
        technical = result.score_of("technical")
        if technical is not None and technical > TECHNICAL_RAP_THRESHOLD:
            return RemixStyle.TECHNICAL_RAP
        return RemixStyle.MODERN_HIP_HOP

    return GENERAL_STYLE_BY_PURPOSE.get(purpose, RemixStyle.CONTEMPORARY_POP)


def select_persona(result: AnalysisResult) -> Persona:
    purpose = _purpose(result)
    tone = detect_emotional_tone(result.lyrics)

    if result.profile is AnalysisProfile.RAP:
        if purpose == "diss_track":
            return Persona.AGGRESSIVE_MALE_RAPPER
        if tone is EmotionalTone.CONFIDENT:
            return Persona.CONFIDENT_MALE_RAPPER
        if tone is EmotionalTone.SMOOTH:
            return Persona.SMOOTH_MALE_RAPPER
        return Persona.VERSATILE_MALE_RAPPER

    if purpose == "love_song":
        if tone is EmotionalTone.TENDER:
            return Persona.ROMANTIC_MALE_SINGER
        return Persona.SOULFUL_FEMALE_SINGER
    if purpose == "sad_ballad":
        return Persona.EMOTIONAL_SINGER
    if purpose == "party_anthem":
        return Persona.ENERGETIC_SINGER
    return Persona.VERSATILE_SINGER


def explain_improvements(result: AnalysisResult) -> list[str]:
    """Markdown bullet text describing what the remix changes."""
    improvements: list[str] = []

    if result.profile is AnalysisProfile.RAP:
        if _below(result, "flow", REMIX_THRESHOLD):
            improvements.append(
                "🌊 **Flow Enhancement**: Tightened rhythm patterns and syllable "
                "consistency for smoother delivery"
            )
        if _below(result, "rhyme_scheme", REMIX_THRESHOLD):
            improvements.append(
                "🎯 **Rhyme Upgrade**: Added internal rhymes and multisyllabic patterns "
                "for technical complexity"
            )
        if _below(result, "wordplay", REMIX_THRESHOLD):
            improvements.append(
                "🧠 **Wordplay Boost**: Enhanced metaphors, punchlines, and clever word "
                "combinations"
            )
    else:
        if _below(result, "structure", REMIX_THRESHOLD):
            improvements.append(
                "🏗️ **Structure Fix**: Clearer verse-chorus organization with smooth transitions"
            )
        if _below(result, "emotion", REMIX_THRESHOLD):
            improvements.append(
                "❤️ **Emotional Depth**: Enhanced emotional authenticity and connection"
            )

    if _below(result, "technical", REMIX_THRESHOLD):
        improvements.append(
            "⚙️ **Technical Polish**: Improved syllable patterns and vocal delivery"
        )

    improvements.append(
        "🎵 **Production Quality**: Professional mixing, mastering, and instrumental arrangement"
    )
    improvements.append(
        "🎤 **Vocal Performance**: Enhanced delivery style matching the song's purpose "
        "and emotion"
    )
    return improvements


def available_styles(profile: AnalysisProfile) -> tuple[RemixStyle, ...]:
    return RAP_STYLES if profile is AnalysisProfile.RAP else GENERAL_STYLES


def available_personas(profile: AnalysisProfile) -> tuple[Persona, ...]:
    return RAP_PERSONAS if profile is AnalysisProfile.RAP else GENERAL_PERSONAS


def build_remix_directive(
    result: AnalysisResult,
    style: RemixStyle | None = None,
    persona: Persona | None = None,
) -> RemixDirective:
    """Assemble the full remix configuration.

    Args:
        result: A completed analysis.
        style: Style to use instead of the automatic choice.
        persona: Persona to use instead of the automatic choice.
    """
    return RemixDirective(
        prompt=generate_remix_prompt(result),
        style=style or select_style(result),
        persona=persona or select_persona(result),
        improvements=explain_improvements(result),
    )
