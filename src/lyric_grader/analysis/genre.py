"""Genre classification (General vs Rap) and song purpose detection."""

import re

from lyric_grader.analysis import tables
from lyric_grader.analysis.text import (
    count_keyword_hits,
    find_repeated_lines,
    split_lines,
    words_rhyme,
)
from lyric_grader.models.analysis import AnalysisProfile, SongPurpose

_FIRST_PERSON_RAP_RE = re.compile(r"\b(i|me|my|mine|myself)\b")
_FIRST_PERSON_RE = re.compile(r"\b(i|me|my|mine)\b")
_THIRD_PERSON_RE = re.compile(r"\b(he|she|they|him|her|them)\b")


def rap_score(lyrics: str) -> int:
    """Sum the rap indicator points for a lyric.

    Signals, in order: rap keywords (2 each), mostly short lines, rhyming
    adjacent words, repeated lines, aggressive vocabulary (1 each) and a
    first-person heavy voice.
    """
    lowered = lyrics.lower()
    lines = split_lines(lyrics)
    score = count_keyword_hits(lowered, tables.RAP_KEYWORDS) * tables.RAP_KEYWORD_POINTS

    if lines:
        short_lines = sum(
            1 for line in lines if len(line.split(" ")) <= tables.SHORT_LINE_MAX_WORDS
        )
        if short_lines / len(lines) > tables.SHORT_LINE_RATIO:
            score += tables.SHORT_LINE_POINTS

    adjacent_rhymes = 0
    for line in lines:
        words = line.split(" ")
        adjacent_rhymes += sum(
            1 for first, second in zip(words, words[1:]) if words_rhyme(first, second)
        )
    if adjacent_rhymes > len(lines) * tables.ADJACENT_RHYME_RATIO:
        score += tables.ADJACENT_RHYME_POINTS

    if find_repeated_lines(lines):
        score += tables.REPEATED_LINE_POINTS

    score += count_keyword_hits(lowered, tables.AGGRESSIVE_WORDS)

    first_person = len(_FIRST_PERSON_RAP_RE.findall(lowered))
    if first_person > len(lines) * tables.FIRST_PERSON_RATIO:
        score += tables.FIRST_PERSON_POINTS

    return score


def profile_for_score(score: int) -> AnalysisProfile:
    """Rap at or above the threshold, General below it."""
    if score >= tables.RAP_SCORE_THRESHOLD:
        return AnalysisProfile.RAP
    return AnalysisProfile.GENERAL


def select_profile(lyrics: str) -> AnalysisProfile:
    """Pick the grading profile for a lyric."""
    return profile_for_score(rap_score(lyrics))


def detect_rap_genre(lyrics: str) -> bool:
    return select_profile(lyrics) is AnalysisProfile.RAP


def detect_song_purpose(lyrics: str) -> SongPurpose:
    """Score every purpose category and return the best match.

    Ties go to the category declared later in the purpose table, so a lyric
    with no signals at all reads as personal experience.
    """
    lowered = lyrics.lower()
    scores = {
        purpose: points * count_keyword_hits(lowered, keywords)
        for purpose, (points, keywords) in tables.PURPOSE_KEYWORDS.items()
    }

    first_person = len(_FIRST_PERSON_RE.findall(lowered))
    third_person = len(_THIRD_PERSON_RE.findall(lowered))

    if third_person > first_person * 1.5:
        scores["storytelling"] += 5
        scores["fictional_narrative"] += 3
    elif first_person > third_person * 2:
        scores["personal_experience"] += 4

    primary = next(iter(scores))
    for purpose, score in scores.items():
        if score >= scores[primary]:
            primary = purpose

    top_score = scores[primary]
    if top_score > 8:
        confidence = "high"
    elif top_score > 4:
        confidence = "medium"
    else:
        confidence = "low"

    return SongPurpose(
        primary=primary,
        score=top_score,
        scores=scores,
        confidence=confidence,
    )
