"""Improvement suggestions, strengths and weaknesses derived from a breakdown."""

from dataclasses import dataclass
from typing import Mapping

from lyric_grader.models.analysis import DimensionScore, Improvement, Priority, SongPurpose

STRENGTH_THRESHOLD = 85
WEAKNESS_THRESHOLD = 70
DEFAULT_STRENGTH = "Shows potential for improvement across all areas"


@dataclass(frozen=True)
class ImprovementRule:
    """Suggest an improvement when a dimension scores below a threshold."""

    dimension: str
    below: float
    category: str
    priority: Priority
    issue: str
    suggestion: str
    examples: tuple[str, ...]


IMPROVEMENT_RULES: tuple[ImprovementRule, ...] = (
    ImprovementRule(
        "lyrical_content", 90, "Lyrical Content", Priority.HIGH,
        "Content lacks depth and originality",
        "Develop more unique perspectives, avoid clichés, and add personal experiences "
        "or fresh metaphors",
        (
            'Instead of "broken heart" try "heart like shattered glass, reflecting '
            'fragments of what we used to be"',
        ),
    ),
    ImprovementRule(
        "structure", 85, "Song Structure", Priority.HIGH,
        "Poor organization and flow",
        "Follow proven structures: Verse-Chorus-Verse-Chorus-Bridge-Chorus, "
        "ensure smooth transitions",
        (
            "Add transitional lines between sections",
            "Use consistent meter and rhythm patterns",
        ),
    ),
    ImprovementRule(
        "rhyme_scheme", 80, "Rhyme Scheme", Priority.MEDIUM,
        "Inconsistent or forced rhymes",
        "Develop natural-sounding rhymes, experiment with internal rhymes and slant rhymes",
        (
            "Use ABAB or AABB patterns consistently",
            'Try internal rhymes: "I find my mind in a bind"',
        ),
    ),
    ImprovementRule(
        "wordplay", 75, "Wordplay", Priority.MEDIUM,
        "Limited use of literary devices",
        "Incorporate metaphors, similes, alliteration, and clever word choices",
        ('Add metaphors: "Life is a highway" → "Life is a maze with no exit signs"',),
    ),
)

TECHNICAL_RULE = ImprovementRule(
    "technical", 70, "Technical Execution", Priority.LOW,
    "Inconsistent rhythm and syllable count",
    "Count syllables per line, maintain consistent meter, practice reading aloud",
    (
        "Keep verses at 8-10 syllables per line",
        "Use stressed/unstressed syllable patterns",
    ),
)

EMOTION_THRESHOLD = 80

# Emotion advice keyed by song purpose; anything else gets the default
_DEFAULT_EMOTION_ADVICE = (
    "Write from personal experience, use specific details, show don't tell emotions",
    ('Instead of "I\'m sad" try "Rain tastes like the tears I can\'t cry anymore"',),
)
_DISS_ADVICE = (
    "Channel your anger and frustration into specific, cutting lines that expose your target",
    ('Instead of "you\'re fake" try "You switch faces more than a broken TV channel"',),
)
_NARRATIVE_ADVICE = (
    "Develop the emotional journey of your characters, not necessarily your own experience",
    ('Show character emotions through actions: "His hands trembled as he read the letter"',),
)
_PARTY_ADVICE = (
    "Focus on energy and excitement rather than deep personal emotions",
    ('Create infectious energy: "Feel the bass drop, hearts stop, then we rise up"',),
)
EMOTION_ADVICE: Mapping[str, tuple[str, tuple[str, ...]]] = {
    "diss_track": _DISS_ADVICE,
    "fictional_narrative": _NARRATIVE_ADVICE,
    "storytelling": _NARRATIVE_ADVICE,
    "party_anthem": _PARTY_ADVICE,
}

EXCELLENCE = Improvement(
    category="A+ Excellence",
    priority=Priority.CRITICAL,
    issue="Missing elements for top-tier songwriting",
    suggestion=(
        "To achieve A+: Create a unique voice, tell a compelling story, use sophisticated "
        "wordplay, evoke strong emotions, and maintain perfect technical execution"
    ),
    examples=[
        "Develop a signature style that's recognizably yours",
        "Create vivid scenes that listeners can visualize",
        "Use unexpected but perfect word combinations",
        "Make every line serve the song's purpose",
    ],
)

STRENGTHS: tuple[tuple[str, str], ...] = (
    ("lyrical_content", "Strong lyrical content with good depth and originality"),
    ("structure", "Well-organized structure with smooth flow"),
    ("flow", "Locked-in flow that rides the beat"),
    ("rhyme_scheme", "Excellent rhyme scheme with creative patterns"),
    ("wordplay", "Sophisticated wordplay and literary devices"),
    ("emotion", "Authentic emotional impact and connection"),
    ("technical", "Strong technical execution and rhythm"),
    ("authenticity", "Distinctive, credible voice"),
)

WEAKNESSES: tuple[tuple[str, str], ...] = (
    ("lyrical_content", "Lyrical content needs significant improvement - lacks originality and depth"),
    ("structure", "Song structure is poorly organized with weak transitions"),
    ("rhyme_scheme", "Rhyme scheme is inconsistent and often forced"),
    ("wordplay", "Limited wordplay and literary devices"),
    ("emotion", "Lacks emotional authenticity and impact"),
    ("technical", "Technical execution needs work - rhythm and meter issues"),
)


def _from_rule(rule: ImprovementRule) -> Improvement:
    return Improvement(
        category=rule.category,
        priority=rule.priority,
        issue=rule.issue,
        suggestion=rule.suggestion,
        examples=list(rule.examples),
    )


def generate_improvements(
    breakdown: Mapping[str, DimensionScore],
    song_purpose: SongPurpose | None = None,
) -> list[Improvement]:
    """Prioritized suggestions for reaching an A+.

    Only dimensions present in the breakdown are considered. The A+
    Excellence entry is always included. Ordering is by priority, stable
    within a priority.
    """
    improvements: list[Improvement] = []

    for rule in IMPROVEMENT_RULES:
        dimension = breakdown.get(rule.dimension)
        if dimension is not None and dimension.value < rule.below:
            improvements.append(_from_rule(rule))

    emotion = breakdown.get("emotion")
    if emotion is not None and emotion.value < EMOTION_THRESHOLD:
        purpose = song_purpose.primary if song_purpose else ""
        suggestion, examples = EMOTION_ADVICE.get(purpose, _DEFAULT_EMOTION_ADVICE)
        improvements.append(
            Improvement(
                category="Emotional Impact",
                priority=Priority.HIGH,
                issue="Lacks authentic emotional connection",
                suggestion=suggestion,
                examples=list(examples),
            )
        )

    technical = breakdown.get(TECHNICAL_RULE.dimension)
    if technical is not None and technical.value < TECHNICAL_RULE.below:
        improvements.append(_from_rule(TECHNICAL_RULE))

    improvements.append(
        Improvement(
            category=EXCELLENCE.category,
            priority=EXCELLENCE.priority,
            issue=EXCELLENCE.issue,
            suggestion=EXCELLENCE.suggestion,
            examples=list(EXCELLENCE.examples),
        )
    )

    return sorted(improvements, key=lambda improvement: improvement.priority)


def identify_strengths(breakdown: Mapping[str, DimensionScore]) -> list[str]:
    strengths = [
        text
        for name, text in STRENGTHS
        if name in breakdown and breakdown[name].value >= STRENGTH_THRESHOLD
    ]
    return strengths or [DEFAULT_STRENGTH]


def identify_weaknesses(breakdown: Mapping[str, DimensionScore]) -> list[str]:
    return [
        text
        for name, text in WEAKNESSES
        if name in breakdown and breakdown[name].value < WEAKNESS_THRESHOLD
    ]
