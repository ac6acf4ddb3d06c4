"""Dimension analyzers for the General profile.

Every analyzer reads the cleaned lyric text and returns 0-100 sub-scores.
Sub-criteria without a real heuristic return PLACEHOLDER_SCORE.
"""

import re
from dataclasses import dataclass

from lyric_grader.analysis import tables
from lyric_grader.analysis.grading import score_dimension
from lyric_grader.analysis.text import (
    count_alliteration,
    count_keyword_hits,
    detect_rhyme_pattern,
    rhyme_consistency,
    split_lines,
    strip_non_word,
)
from lyric_grader.models.analysis import (
    DimensionScore,
    EmotionProfile,
    StructureInfo,
    TextStats,
)

_STORY_ELEMENTS = (
    re.compile(r"\b(he|she|they|i|we|you|him|her|them|me|us)\b", re.IGNORECASE),  # character
    re.compile(r"\b(in|at|on|under|over|through|across|behind|beside)\b", re.IGNORECASE),  # setting
    re.compile(r"\b(walk|run|drive|fly|dance|sing|cry|laugh|fight|love)\b", re.IGNORECASE),  # action
    re.compile(r"\b(when|then|now|before|after|while|during|until)\b", re.IGNORECASE),  # time
)

_METAPHOR_PATTERNS = (
    re.compile(r"is (a|an|the) ", re.IGNORECASE),
    re.compile(r"like (a|an|the) ", re.IGNORECASE),
    re.compile(r"as (a|an|the) ", re.IGNORECASE),
    re.compile(r"(heart|soul|mind|life) (is|was|becomes?) ", re.IGNORECASE),
)


@dataclass
class GeneralAnalysis:
    """Output of the General-profile analyzers."""

    breakdown: dict[str, DimensionScore]
    rhyme_pattern: str
    emotion: EmotionProfile


# Lyrical content


def evaluate_originality(text: str) -> float:
    """Penalize cliché density: 100 - 200 * (cliché hits / sentences), floored at 0."""
    cliche_count = count_keyword_hits(text, tables.CLICHE_PHRASES)
    sentences = len(re.split(r"[.!?]+", text))
    return max(0.0, 100 - cliche_count / max(sentences, 1) * 200)


def evaluate_depth(text: str, stats: TextStats) -> float:
    """Balance of abstract and concrete words plus vocabulary richness.

    Both halves contribute up to 50 points.
    """
    abstract = count_keyword_hits(text, tables.ABSTRACT_WORDS)
    concrete = count_keyword_hits(text, tables.CONCRETE_WORDS)
    balance = min(abstract, concrete) / max(abstract, concrete, 1)
    return balance * 50 + stats.vocabulary_richness * 50


def evaluate_storytelling(text: str) -> float:
    score = 0
    for pattern in _STORY_ELEMENTS:
        score += min(len(pattern.findall(text)) * 5, 25)
    return float(min(score, 100))


def evaluate_imagery(text: str) -> float:
    hits = sum(count_keyword_hits(text, words) for words in tables.SENSORY_WORDS.values())
    return float(min(hits * 10, 100))


def analyze_lyrical_content(text: str, stats: TextStats) -> DimensionScore:
    subscores = {
        "originality": evaluate_originality(text),
        "depth": evaluate_depth(text, stats),
        "storytelling": evaluate_storytelling(text),
        "imagery": evaluate_imagery(text),
    }
    return score_dimension(
        "lyrical_content", subscores, tables.GENERAL_WEIGHTS["lyrical_content"]
    )


# Structure


def analyze_structure(structure: StructureInfo) -> DimensionScore:
    # Section detection feeds feedback only; the scores are not measured yet.
    subscores = {
        "organization": tables.PLACEHOLDER_SCORE,
        "flow": tables.PLACEHOLDER_SCORE,
        "transitions": tables.PLACEHOLDER_SCORE,
    }
    return score_dimension("structure", subscores, tables.GENERAL_WEIGHTS["structure"])


# Rhyme scheme


def analyze_rhyme_scheme(pattern: str) -> DimensionScore:
    subscores = {
        "consistency": rhyme_consistency(pattern),
        "creativity": tables.PLACEHOLDER_SCORE,
        "naturalness": tables.PLACEHOLDER_SCORE,
    }
    return score_dimension("rhyme_scheme", subscores, tables.GENERAL_WEIGHTS["rhyme_scheme"])


# Wordplay


def detect_metaphors(text: str) -> float:
    count = sum(len(pattern.findall(text)) for pattern in _METAPHOR_PATTERNS)
    return float(min(count * 15, 100))


def detect_alliteration(text: str) -> float:
    return float(min(count_alliteration(text) * 10, 100))


def evaluate_word_choice(text: str) -> float:
    """Average of vocabulary uniqueness and the share of uncommon words."""
    words = [strip_non_word(word).lower() for word in re.split(r"\s+", text)]
    unique_words = set(words)
    common_count = sum(1 for word in words if word in tables.COMMON_WORDS)

    vocabulary = len(unique_words) / len(words) * 100
    sophistication = max(0.0, 100 - common_count / len(words) * 100)
    return (vocabulary + sophistication) / 2


def analyze_wordplay(text: str) -> DimensionScore:
    subscores = {
        "metaphors": detect_metaphors(text),
        "word_choice": evaluate_word_choice(text),
        "cleverness": tables.PLACEHOLDER_SCORE,
        "alliteration": detect_alliteration(text),
    }
    return score_dimension("wordplay", subscores, tables.GENERAL_WEIGHTS["wordplay"])


# Emotion


def detect_emotions(text: str) -> EmotionProfile:
    """Keyword reading of which emotions appear and how strongly.

    The primary emotion is the first one in table order with the most hits.
    """
    scores = {
        emotion: count_keyword_hits(text, words)
        for emotion, words in tables.EMOTION_WORDS.items()
    }
    primary = max(scores, key=lambda emotion: scores[emotion])

    return EmotionProfile(
        primary=primary,
        range=sum(1 for score in scores.values() if score > 0),
        intensity=sum(scores.values()),
    )


def analyze_emotion(text: str) -> DimensionScore:
    subscores = {
        "authenticity": tables.PLACEHOLDER_SCORE,
        "impact": tables.PLACEHOLDER_SCORE,
        "consistency": tables.PLACEHOLDER_SCORE,
    }
    return score_dimension("emotion", subscores, tables.GENERAL_WEIGHTS["emotion"])


# Technical


def analyze_technical(text: str) -> DimensionScore:
    subscores = {
        "syllable_count": tables.PLACEHOLDER_SCORE,
        "rhythm": tables.PLACEHOLDER_SCORE,
        "pronunciation": tables.PLACEHOLDER_SCORE,
    }
    return score_dimension("technical", subscores, tables.GENERAL_WEIGHTS["technical"])


def analyze_general(text: str, stats: TextStats, structure: StructureInfo) -> GeneralAnalysis:
    """Run every General-profile analyzer.

    Args:
        text: Cleaned lyric text.
        stats: Basic statistics of the lyric.
        structure: Sections found in the raw lyric.
    """
    pattern = detect_rhyme_pattern(split_lines(text))

    breakdown = {
        "lyrical_content": analyze_lyrical_content(text, stats),
        "structure": analyze_structure(structure),
        "rhyme_scheme": analyze_rhyme_scheme(pattern),
        "wordplay": analyze_wordplay(text),
        "emotion": analyze_emotion(text),
        "technical": analyze_technical(text),
    }

    return GeneralAnalysis(
        breakdown=breakdown,
        rhyme_pattern=pattern,
        emotion=detect_emotions(text),
    )
