"""Dimension analyzers for the Rap profile.

Flow and technique are measured from per-line syllable counts, so lines here
are the non-empty lines of the cleaned text. The coefficients (variance
multipliers, caps, floors) are uncalibrated heuristics.
"""

import re
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from lyric_grader.analysis import tables
from lyric_grader.analysis.general import evaluate_originality, evaluate_storytelling
from lyric_grader.analysis.grading import score_dimension
from lyric_grader.analysis.text import (
    count_alliteration,
    count_internal_rhymes,
    count_keyword_hits,
    count_syllables,
    lines_rhyme,
    split_lines,
    syllable_counts,
    variance,
    words_rhyme,
)
from lyric_grader.models.analysis import DimensionScore

# Flow
CONSISTENT_VARIANCE = 4
SYLLABLE_PATTERN_BASE = 85
SYLLABLE_PATTERN_FLOOR = 30
SYLLABLE_PATTERN_PENALTY = 5
RHYTHM_PENALTY = 10
POCKET_PENALTY = 8
DELIVERY_BASE = 70
DELIVERY_SWITCH_BONUS = 5
FLOW_SWITCH_DELTA = 2

# Technique
SYLLABLE_COUNT_PENALTY = 6
LONG_LINE_FACTOR = 1.5

_RAP_METAPHOR_PATTERNS = (
    re.compile(r"like (a|an|the) .*(king|beast|god|machine|weapon|fire|ice|storm)", re.IGNORECASE),
    re.compile(r"(flow|bars|rhymes) (like|as) ", re.IGNORECASE),
    re.compile(r"(spit|drop|serve) (fire|heat|flames|ice|cold)", re.IGNORECASE),
)
_COMPARISON_RE = re.compile(r"like|as|is a|becomes", re.IGNORECASE)
_CONSONANT_CLUSTER_RE = re.compile(r"[bcdfghjklmnpqrstvwxyz]{3,}", re.IGNORECASE)
_PERSONAL_PRONOUN_RE = re.compile(r"\b(i|me|my|mine)\b", re.IGNORECASE)


@dataclass
class RapAnalysis:
    """Output of the Rap-profile analyzers."""

    breakdown: dict[str, DimensionScore]
    metrics: dict[str, float]  # avg_syllables, syllable_variance, stress_patterns, rhyme_complexity


def _word_count(text: str) -> int:
    return len(re.split(r"\s+", text))


# Flow


def count_flow_switches(counts: Sequence[int]) -> int:
    """Count jumps of more than two syllables from the current flow."""
    if not counts:
        return 0

    switches = 0
    current = counts[0]
    for count in counts[1:]:
        if abs(count - current) > FLOW_SWITCH_DELTA:
            switches += 1
            current = count
    return switches


def analyze_stress_patterns(lines: Sequence[str]) -> float:
    """Percentage of lines with an even word count."""
    if not lines:
        return 0.0
    even = sum(1 for line in lines if len(line.split(" ")) % 2 == 0)
    return even / len(lines) * 100


def analyze_flow(lines: Sequence[str]) -> tuple[dict[str, float], dict[str, float]]:
    """Flow sub-scores and the raw syllable measurements behind them."""
    counts = syllable_counts(lines)
    spread = variance(counts)

    if spread < CONSISTENT_VARIANCE:
        syllable_pattern = float(SYLLABLE_PATTERN_BASE)
    else:
        syllable_pattern = max(
            float(SYLLABLE_PATTERN_FLOOR),
            SYLLABLE_PATTERN_BASE - spread * SYLLABLE_PATTERN_PENALTY,
        )

    if len(counts) < 2:
        rhythm_consistency = 50.0
    else:
        rhythm_consistency = max(0.0, 100 - spread * RHYTHM_PENALTY)

    subscores = {
        "syllable_pattern": syllable_pattern,
        "rhythm_consistency": rhythm_consistency,
        "delivery": float(
            min(100, DELIVERY_BASE + count_flow_switches(counts) * DELIVERY_SWITCH_BONUS)
        ),
        "pocket_riding": max(0.0, 100 - spread * POCKET_PENALTY),
    }
    metrics = {
        "avg_syllables": float(np.mean(counts)) if counts else 0.0,
        "syllable_variance": spread,
        "stress_patterns": analyze_stress_patterns(lines),
    }
    return subscores, metrics


# Rhyme scheme


def analyze_internal_rhymes(lines: Sequence[str]) -> float:
    """Rhyming word pairs inside lines, per 100 words, times 20 and capped."""
    rhyme_count = 0
    total_words = 0

    for line in lines:
        words = [word for word in line.split(" ") if len(word) > 2]
        total_words += len(words)
        for i in range(len(words) - 1):
            for j in range(i + 1, len(words)):
                if words_rhyme(words[i], words[j]):
                    rhyme_count += 1

    density = rhyme_count / total_words * 100 if total_words > 0 else 0.0
    return min(100.0, density * 20)


def analyze_multisyllabic_rhymes(lines: Sequence[str]) -> float:
    """Rhymes between words of more than one syllable at matching positions
    counted back from the end of adjacent lines."""
    if not lines:
        return 0.0

    count = 0
    for first, second in zip(lines, lines[1:]):
        words1 = first.split(" ")
        words2 = second.split(" ")
        for offset in range(1, min(len(words1), len(words2)) + 1):
            word1 = words1[-offset]
            word2 = words2[-offset]
            if word1 and word2 and count_syllables(word1) > 1 and words_rhyme(word1, word2):
                count += 1

    return min(100.0, count / len(lines) * 50)


def calculate_rhyme_density(lines: Sequence[str]) -> float:
    """Percentage of adjacent line pairs whose end words rhyme."""
    if len(lines) <= 1:
        return 0.0
    rhymes = sum(1 for first, second in zip(lines, lines[1:]) if lines_rhyme(first, second))
    return rhymes / (len(lines) - 1) * 100


def analyze_rhyme_scheme(lines: Sequence[str]) -> dict[str, float]:
    return {
        "internal_rhymes": analyze_internal_rhymes(lines),
        "multisyllabic_rhymes": analyze_multisyllabic_rhymes(lines),
        "rhyme_density": calculate_rhyme_density(lines),
    }


# Wordplay


def detect_rap_metaphors(text: str) -> float:
    count = sum(len(pattern.findall(text)) for pattern in _RAP_METAPHOR_PATTERNS)
    return float(min(100, count * 20))


def detect_double_entendres(text: str) -> float:
    return float(min(100, count_keyword_hits(text, tables.DOUBLE_ENTENDRE_WORDS) * 15))


def is_punchline(setup: str, payoff: str) -> bool:
    return any(word in setup for word in tables.PUNCHLINE_SETUP_WORDS) and any(
        word in payoff for word in tables.PUNCHLINE_PAYOFF_WORDS
    )


def detect_punchlines(lines: Sequence[str]) -> float:
    """Setup/payoff line pairs as a percentage of all lines."""
    if not lines:
        return 0.0
    count = sum(
        1
        for first, second in zip(lines, lines[1:])
        if is_punchline(first.lower(), second.lower())
    )
    return min(100.0, count / len(lines) * 100)


def analyze_rap_vocabulary(text: str) -> float:
    words = re.split(r"\s+", text.lower())
    richness = len(set(words)) / len(words)
    relevance = count_keyword_hits(text, tables.RAP_KEYWORDS) / len(words)
    return min(100.0, richness * 50 + relevance * 200)


def detect_puns(text: str) -> float:
    return float(min(100, count_keyword_hits(text, tables.PUN_INDICATORS) * 25))


def calculate_wordplay_density(text: str) -> float:
    """Comparisons, alliterations and internal rhymes per word, scaled by 500."""
    devices = (
        len(_COMPARISON_RE.findall(text))
        + count_alliteration(text)
        + count_internal_rhymes(text)
    )
    return min(100.0, devices / _word_count(text) * 500)


def analyze_wordplay(text: str, lines: Sequence[str]) -> dict[str, float]:
    return {
        "metaphors": detect_rap_metaphors(text),
        "double_entendres": detect_double_entendres(text),
        "punchlines": detect_punchlines(lines),
        "vocabulary": analyze_rap_vocabulary(text),
        "alliteration": float(min(count_alliteration(text) * 10, 100)),
        "puns": detect_puns(text),
        "density": calculate_wordplay_density(text),
    }


# Technique


def analyze_breath_control(lines: Sequence[str]) -> float:
    """Penalize lines more than half again as long as the average line."""
    if not lines:
        return 100.0
    average = sum(len(line) for line in lines) / len(lines)
    long_lines = sum(1 for line in lines if len(line) > average * LONG_LINE_FACTOR)
    return max(0.0, 100 - long_lines / len(lines) * 30)


def analyze_enunciation(text: str) -> float:
    """Deduct 5 points per run of three or more consonants, at most 50."""
    clusters = len(_CONSONANT_CLUSTER_RE.findall(text))
    return float(100 - min(50, clusters * 5))


def analyze_technical(text: str, lines: Sequence[str]) -> dict[str, float]:
    spread = variance(syllable_counts(lines))
    return {
        "syllable_count": max(0.0, 100 - spread * SYLLABLE_COUNT_PENALTY),
        "stress_patterns": analyze_stress_patterns(lines),
        "breath_control": analyze_breath_control(lines),
        "enunciation": analyze_enunciation(text),
    }


# Authenticity


def analyze_voice(text: str) -> float:
    pronouns = len(_PERSONAL_PRONOUN_RE.findall(text))
    return min(100.0, pronouns / _word_count(text) * 300)


def analyze_credibility(text: str, lines: Sequence[str]) -> float:
    if not lines:
        return 100.0
    cliches = count_keyword_hits(text, tables.RAP_CLICHES)
    return max(0.0, 100 - cliches / len(lines) * 150)


def analyze_authenticity(text: str, lines: Sequence[str]) -> dict[str, float]:
    return {
        "voice": analyze_voice(text),
        "credibility": analyze_credibility(text, lines),
    }


def analyze_rap(text: str) -> RapAnalysis:
    """Run every Rap-profile analyzer on cleaned lyric text."""
    lines = split_lines(text)
    weights = tables.RAP_WEIGHTS

    flow, metrics = analyze_flow(lines)
    rhyme = analyze_rhyme_scheme(lines)
    wordplay = analyze_wordplay(text, lines)

    lyrical_content = {
        "originality": evaluate_originality(text),
        "storytelling": evaluate_storytelling(text),
        "wordplay": wordplay["density"],
        "punchlines": wordplay["punchlines"],
    }

    breakdown = {
        "lyrical_content": score_dimension(
            "lyrical_content", lyrical_content, weights["lyrical_content"]
        ),
        "flow": score_dimension("flow", flow, weights["flow"]),
        "rhyme_scheme": score_dimension("rhyme_scheme", rhyme, weights["rhyme_scheme"]),
        "wordplay": score_dimension("wordplay", wordplay, weights["wordplay"]),
        "technical": score_dimension(
            "technical", analyze_technical(text, lines), weights["technical"]
        ),
        "authenticity": score_dimension(
            "authenticity", analyze_authenticity(text, lines), weights["authenticity"]
        ),
    }

    metrics["rhyme_complexity"] = sum(rhyme.values()) / 3
    return RapAnalysis(breakdown=breakdown, metrics=metrics)
