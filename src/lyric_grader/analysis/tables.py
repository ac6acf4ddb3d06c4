"""Fixed keyword tables, weights and thresholds used by the grading engine.

Everything here is immutable and loaded once at import. Ordered collections
are tuples because several heuristics depend on iteration order (first match
wins, first three examples, argmax tie-breaks). The numeric constants are
uncalibrated heuristics carried over unchanged; retune only with product input.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

# Overall score = sum(dimension value * weight) * SCORE_SCALE. The scale makes
# the overall figure unit-inconsistent with the 0-100 dimension values; kept
# for parity with published grades.
SCORE_SCALE = 100

# Rap classification
RAP_SCORE_THRESHOLD = 15
RAP_KEYWORD_POINTS = 2
SHORT_LINE_MAX_WORDS = 8
SHORT_LINE_RATIO = 0.6
SHORT_LINE_POINTS = 5
ADJACENT_RHYME_RATIO = 0.3
ADJACENT_RHYME_POINTS = 8
REPEATED_LINE_POINTS = 3
FIRST_PERSON_RATIO = 0.5
FIRST_PERSON_POINTS = 4

# Sub-criteria the analyzers do not measure yet
PLACEHOLDER_SCORE = 75

# Feedback is only itemized below this dimension score
FEEDBACK_ISSUE_THRESHOLD = 90


@dataclass(frozen=True)
class DimensionWeights:
    """Weight of a dimension in the overall score and of its sub-criteria."""

    weight: float
    subcriteria: Mapping[str, float]


def _table(entries: dict[str, tuple[float, dict[str, float]]]) -> Mapping[str, DimensionWeights]:
    return MappingProxyType(
        {
            name: DimensionWeights(weight, MappingProxyType(dict(subs)))
            for name, (weight, subs) in entries.items()
        }
    )


GENERAL_WEIGHTS = _table(
    {
        "lyrical_content": (
            0.25,
            {"originality": 0.3, "depth": 0.25, "storytelling": 0.25, "imagery": 0.2},
        ),
        "structure": (0.20, {"organization": 0.4, "flow": 0.3, "transitions": 0.3}),
        "rhyme_scheme": (0.15, {"consistency": 0.4, "creativity": 0.35, "naturalness": 0.25}),
        "wordplay": (
            0.15,
            {"metaphors": 0.3, "word_choice": 0.3, "cleverness": 0.25, "alliteration": 0.15},
        ),
        "emotion": (0.15, {"authenticity": 0.4, "impact": 0.35, "consistency": 0.25}),
        "technical": (0.10, {"syllable_count": 0.3, "rhythm": 0.4, "pronunciation": 0.3}),
    }
)

RAP_WEIGHTS = _table(
    {
        "lyrical_content": (
            0.20,
            {"originality": 0.25, "storytelling": 0.25, "wordplay": 0.25, "punchlines": 0.25},
        ),
        "flow": (
            0.25,
            {
                "syllable_pattern": 0.3,
                "rhythm_consistency": 0.3,
                "delivery": 0.25,
                "pocket_riding": 0.15,
            },
        ),
        "rhyme_scheme": (
            0.20,
            {"internal_rhymes": 0.4, "multisyllabic_rhymes": 0.3, "rhyme_density": 0.3},
        ),
        "wordplay": (
            0.15,
            {
                "metaphors": 0.25,
                "double_entendres": 0.25,
                "alliteration": 0.2,
                "puns": 0.15,
                "vocabulary": 0.15,
            },
        ),
        "technical": (
            0.15,
            {
                "syllable_count": 0.25,
                "stress_patterns": 0.25,
                "breath_control": 0.25,
                "enunciation": 0.25,
            },
        ),
        "authenticity": (0.05, {"voice": 0.5, "credibility": 0.5}),
    }
)

# Descending; first threshold <= score wins
GRADE_THRESHOLDS: tuple[tuple[str, float], ...] = (
    ("A+", 95),
    ("A", 90),
    ("A-", 87),
    ("B+", 83),
    ("B", 80),
    ("B-", 77),
    ("C+", 73),
    ("C", 70),
    ("C-", 67),
    ("D+", 63),
    ("D", 60),
    ("F", 0),
)

COMMON_WORDS = frozenset(
    """
    the be to of and a in that have i it for not on with he as you do at this
    but his by from they she or an will my one all would there their what so up
    out if about who get which go me when make can like time no just him know
    take people into year your good some could them see other than then now look
    only come its over think also back after use two how our work first well way
    even new want because any these give day most us
    """.split()
)

CLICHE_PHRASES: tuple[str, ...] = (
    "baby", "love me", "heart", "forever", "never let you go", "you and me",
    "meant to be", "destiny", "soul mate", "broken heart", "tears", "cry",
    "die for you", "angel", "heaven", "perfect", "beautiful", "amazing",
    "incredible", "unbelievable", "party all night", "turn up", "hands up",
    "feel the beat", "dance floor", "tonight", "live it up", "money", "cash",
    "bling", "swag", "haters", "fake friends",
)

CLICHE_REPLACEMENTS = MappingProxyType(
    {
        "broken heart": "heart like shattered glass",
        "forever": "until the stars burn out",
        "meant to be": "written in the constellations",
        "baby": "your name (be specific!)",
        "perfect": "flawless in your imperfections",
    }
)
DEFAULT_CLICHE_REPLACEMENT = "something more personal and unique"

RAP_KEYWORDS: tuple[str, ...] = (
    "bars", "flow", "rhyme", "beat", "mic", "spit", "drop", "verse", "hook",
    "freestyle", "cypher", "battle", "rap", "hip hop", "yo", "uh", "yeah",
    "check", "listen", "word", "real", "street", "hood", "game", "hustle",
    "grind", "stack", "paper", "bread", "dough", "green", "bands", "racks",
    "whip", "ride", "chain", "ice", "drip", "flex", "stuntin", "ballin",
    "player", "boss", "king", "queen", "crown", "throne", "empire", "dynasty",
    "legacy", "legend", "goat", "fire", "flames", "heat", "cold", "sick", "ill",
    "dope", "fresh", "clean", "smooth", "tight", "hard", "raw", "true", "facts",
    "straight", "no cap", "for real", "deadass", "lowkey", "highkey", "periodt",
    "slaps", "bangs", "hits different",
)

RAP_CLICHES: tuple[str, ...] = (
    "money over everything", "started from the bottom", "haters gonna hate",
    "keep it 100", "real recognize real", "stay woke", "get money",
    "stack paper", "hustle hard", "grind never stops", "came from nothing",
    "rags to riches", "self made", "no handouts", "trust nobody",
    "loyalty over royalty", "family first", "blood thicker than water",
    "ride or die", "day one", "og", "been there", "seen it all",
    "streets raised me", "concrete jungle", "urban legend", "king of the city",
    "run the game", "own the block", "top of the food chain",
)

AGGRESSIVE_WORDS: tuple[str, ...] = (
    "kill", "murder", "destroy", "dominate", "crush", "beast", "savage", "fire", "flames",
)

# Song purpose: category -> (points per keyword hit, keywords). Declaration
# order matters; the later category wins a tie.
PURPOSE_KEYWORDS: Mapping[str, tuple[int, tuple[str, ...]]] = MappingProxyType(
    {
        "love_song": (2, (
            "love", "heart", "kiss", "forever", "together", "romance", "baby",
            "honey", "darling", "beautiful", "gorgeous", "miss you", "need you",
            "want you",
        )),
        "diss_track": (3, (
            "fake", "weak", "trash", "pathetic", "loser", "clown", "wannabe",
            "fraud", "exposed", "destroyed", "murdered", "killed", "bodied",
            "you ain't", "you're not",
        )),
        "storytelling": (2, (
            "once upon", "back in", "remember when", "there was a", "he said",
            "she said", "then he", "then she", "chapter", "story", "tale",
        )),
        "party_anthem": (2, (
            "party", "dance", "club", "tonight", "turn up", "hands up",
            "everybody", "let's go", "feel the beat", "move your body",
            "celebration",
        )),
        "motivational": (2, (
            "never give up", "keep going", "believe", "dream", "achieve",
            "success", "winner", "champion", "overcome", "rise up", "fight",
        )),
        "sad_ballad": (2, (
            "cry", "tears", "pain", "hurt", "broken", "lonely", "empty", "lost",
            "gone", "goodbye", "sorry", "regret",
        )),
        "braggadocious": (2, (
            "best", "greatest", "king", "queen", "boss", "legend", "goat",
            "number one", "top of", "better than", "superior",
        )),
        "social_commentary": (2, (
            "society", "system", "government", "politics", "injustice",
            "freedom", "equality", "change the world", "wake up", "truth",
        )),
        "fictional_narrative": (3, (
            "character", "protagonist", "villain", "kingdom", "magic", "dragon",
            "princess", "hero", "quest", "adventure",
        )),
        "personal_experience": (3, (
            "my life", "i remember", "when i was", "my story", "i grew up",
            "my family", "my mother", "my father", "real talk", "true story",
        )),
    }
)

# Lyrical depth
ABSTRACT_WORDS: tuple[str, ...] = (
    "love", "life", "time", "soul", "heart", "mind", "dream", "hope", "fear", "pain",
)
CONCRETE_WORDS: tuple[str, ...] = (
    "rain", "street", "window", "car", "phone", "door", "light", "shadow", "fire", "water",
)

SENSORY_WORDS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "visual": ("see", "look", "watch", "bright", "dark", "color", "light", "shadow", "shine", "glow"),
        "auditory": ("hear", "sound", "loud", "quiet", "whisper", "scream", "music", "noise", "silence"),
        "tactile": ("feel", "touch", "soft", "hard", "warm", "cold", "smooth", "rough", "sharp"),
        "olfactory": ("smell", "scent", "fragrance", "aroma", "stink", "fresh"),
        "gustatory": ("taste", "sweet", "bitter", "sour", "salty", "flavor"),
    }
)

EMOTION_WORDS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "joy": ("happy", "joy", "smile", "laugh", "bright", "sunshine", "celebrate", "dance"),
        "sadness": ("sad", "cry", "tears", "pain", "hurt", "broken", "lonely", "empty"),
        "anger": ("angry", "mad", "rage", "hate", "fury", "fight", "scream", "burn"),
        "love": ("love", "heart", "kiss", "embrace", "forever", "together", "soul", "passion"),
        "fear": ("afraid", "scared", "fear", "terror", "nightmare", "dark", "shadow", "run"),
    }
)

# Rap wordplay
DOUBLE_ENTENDRE_WORDS: tuple[str, ...] = (
    "bank", "green", "paper", "bread", "dough", "ice", "rock", "blow", "hit", "shot",
)
PUN_INDICATORS: tuple[str, ...] = ("sound like", "sounds like", "play on words")
PUNCHLINE_SETUP_WORDS: tuple[str, ...] = ("when", "if", "but", "so", "then")
PUNCHLINE_PAYOFF_WORDS: tuple[str, ...] = ("that", "now", "boom", "bam", "pow")

# Rap issue detection uses a slightly different setup/payoff vocabulary
WEAK_PUNCHLINE_SETUP_WORDS: tuple[str, ...] = (
    "when", "if", "they say", "people think", "you might",
)
WEAK_PUNCHLINE_PAYOFF_WORDS: tuple[str, ...] = ("but", "so", "that's why", "boom", "bam")

# General issue detection
OBVIOUS_RHYME_PAIRS: tuple[tuple[str, str], ...] = (
    ("love", "above"),
    ("heart", "apart"),
    ("night", "light"),
    ("day", "way"),
    ("time", "rhyme"),
    ("true", "you"),
)
WEAK_VERBS: tuple[str, ...] = (
    "is", "was", "are", "were", "have", "has", "had", "do", "does", "did",
    "get", "got", "go", "went",
)
WEAK_VERB_LIMIT = 5
STRONG_VERB_SUGGESTIONS = MappingProxyType(
    {
        "is": "becomes, transforms, stands",
        "was": "existed, lived, breathed",
        "go": "rush, wander, escape, flee",
        "get": "grab, seize, discover, find",
        "have": "possess, hold, embrace, carry",
    }
)
DEFAULT_VERB_SUGGESTION = "use a more specific action word"
VAGUE_WORDS: tuple[str, ...] = (
    "thing", "stuff", "something", "anything", "everything", "nothing",
    "someone", "anyone", "everyone",
)

# Line-by-line breakdown
WEAK_MODIFIERS: tuple[str, ...] = ("very", "really", "quite", "pretty", "kind of", "sort of")
LINE_IMAGERY_WORDS: tuple[str, ...] = (
    "see", "hear", "feel", "taste", "smell", "touch", "bright", "dark", "loud", "quiet",
)
WEAK_RHYME_ENDINGS: tuple[str, ...] = ("me", "be", "see", "free", "we")

# Section markers like "[Verse 1]": label prefix -> section type.
# "pre-chorus" is listed before "chorus" so the longer prefix is tried first.
SECTION_MARKERS: tuple[tuple[str, str], ...] = (
    ("intro", "intro"),
    ("verse", "verse"),
    ("pre-chorus", "pre-chorus"),
    ("chorus", "chorus"),
    ("hook", "chorus"),
    ("refrain", "chorus"),
    ("bridge", "bridge"),
    ("outro", "outro"),
)
