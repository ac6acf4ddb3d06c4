"""Text feature extractors shared by the classifier, analyzers and feedback.

All functions are pure and operate on plain strings. Rhyme detection is a
spelling heuristic (shared suffixes and vowel skeletons), not phonetics.
"""

import re
from collections import Counter
from typing import Callable, Iterable, Sequence

import numpy as np

from lyric_grader.analysis.tables import SECTION_MARKERS
from lyric_grader.models.analysis import ClicheHit, Section, TextStats

VOWELS = "aeiou"
SYLLABLE_VOWELS = "aeiouy"

_MARKER_RE = re.compile(r"\[.*?\]")
_TIMESTAMP_RE = re.compile(r"\(\d{2}:\d{2}\)")
_DISALLOWED_RE = re.compile(r"[^\w\s.,!?;:'\"()-]", re.ASCII)
_NON_WORD_RE = re.compile(r"[^\w]", re.ASCII)
_NON_WORD_SPACE_RE = re.compile(r"[^\w\s]", re.ASCII)
_SECTION_RE = re.compile(r"^\s*\[([^\]]+)\]\s*$")


def clean_text(lyrics: str) -> str:
    """Strip section markers, (MM:SS) timestamps and stray symbols, then lowercase."""
    text = _MARKER_RE.sub("", lyrics)
    text = _TIMESTAMP_RE.sub("", text)
    text = _DISALLOWED_RE.sub("", text)
    return text.lower().strip()


def actual_lines(lyrics: str) -> list[str]:
    """Non-empty lines of the raw lyrics, split on LF or CRLF."""
    return [line for line in re.split(r"\r?\n", lyrics) if line.strip()]


def split_lines(text: str) -> list[str]:
    """Non-empty lines split on LF only."""
    return [line for line in text.split("\n") if line.strip()]


def strip_non_word(word: str) -> str:
    return _NON_WORD_RE.sub("", word)


def end_word(line: str) -> str:
    """Last whitespace token of a line, without punctuation, lowercased."""
    tokens = line.strip().split()
    if not tokens:
        return ""
    return strip_non_word(tokens[-1]).lower()


def calculate_basic_stats(text: str, lines: Sequence[str]) -> TextStats:
    """Word and vocabulary counts.

    Args:
        text: Cleaned lyric text (see clean_text).
        lines: Non-empty lines of the raw lyrics.
    """
    words = text.split()
    unique_words = {strip_non_word(word) for word in words}

    return TextStats(
        line_count=len(lines),
        word_count=len(words),
        unique_words=len(unique_words),
        average_line_length=len(words) / len(lines) if lines else 0.0,
        vocabulary_richness=len(unique_words) / len(words) if words else 0.0,
    )


def count_syllables(text: str) -> int:
    """Count vowel groups in a word or line. Never returns less than 1."""
    cleaned = _NON_WORD_SPACE_RE.sub("", text.lower())
    count = 0
    previous_was_vowel = False

    for char in cleaned:
        is_vowel = char in SYLLABLE_VOWELS
        if is_vowel and not previous_was_vowel:
            count += 1
        previous_was_vowel = is_vowel

    return max(1, count)


def phonetic_similarity(word1: str, word2: str) -> float:
    """Compare the vowel skeletons of two words.

    Returns 1.0 for identical skeletons, 0.7 when only the final vowel
    matches, 0.0 otherwise.
    """
    pattern1 = "".join(c for c in word1 if c in VOWELS)
    pattern2 = "".join(c for c in word2 if c in VOWELS)

    if pattern1 == pattern2:
        return 1.0
    if pattern1[-1:] == pattern2[-1:]:
        return 0.7
    return 0.0


def words_rhyme(word1: str, word2: str) -> bool:
    """Whether two words rhyme by shared ending or identical vowel skeleton."""
    if len(word1) < 2 or len(word2) < 2:
        return False

    return (
        word1[-2:] == word2[-2:]
        or word1[-3:] == word2[-3:]
        or phonetic_similarity(word1, word2) > 0.7
    )


def lines_rhyme(line1: str, line2: str) -> bool:
    """Whether the last space-separated words of two lines rhyme."""
    last1 = strip_non_word(line1.split(" ")[-1]).lower()
    last2 = strip_non_word(line2.split(" ")[-1]).lower()
    return bool(last1 and last2 and words_rhyme(last1, last2))


def detect_rhyme_pattern(lines: Iterable[str]) -> str:
    """Assign rhyme letters (A, B, C, ...) to line endings.

    Each end word takes the letter of the first earlier end word it rhymes
    with; otherwise it opens a new letter. Lines without a word contribute
    nothing to the pattern.
    """
    rhyme_map: dict[str, str] = {}
    current_letter = "A"
    pattern: list[str] = []

    for line in lines:
        word = end_word(line)
        if not word:
            continue

        for rhyme_word, letter in rhyme_map.items():
            if words_rhyme(word, rhyme_word):
                pattern.append(letter)
                break
        else:
            rhyme_map[word] = current_letter
            pattern.append(current_letter)
            current_letter = chr(ord(current_letter) + 1)

    return "".join(pattern)


def rhyme_consistency(pattern: str) -> float:
    """Score how many rhyme letters are reused, 0-100. Empty pattern scores 50."""
    if not pattern:
        return 50.0

    counts = Counter(pattern)
    rhyme_groups = sum(1 for count in counts.values() if count > 1)
    return min(rhyme_groups / len(pattern) * 200, 100.0)


def variance(values: Sequence[float]) -> float:
    """Population variance; 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.var(np.asarray(values, dtype=float)))


def syllable_counts(lines: Iterable[str]) -> list[int]:
    return [count_syllables(line) for line in lines]


def count_alliteration(text: str) -> int:
    """Count adjacent word pairs that start with the same character."""
    words = [strip_non_word(word).lower() for word in re.split(r"\s+", text)]
    return sum(
        1
        for first, second in zip(words, words[1:])
        if first and second and first[0] == second[0]
    )


def _rhyming_pairs(words: Sequence[str]) -> int:
    count = 0
    for i in range(len(words) - 1):
        for j in range(i + 1, len(words)):
            if words_rhyme(words[i], words[j]):
                count += 1
    return count


def count_line_internal_rhymes(line: str) -> int:
    """Rhyming pairs among the words of one line longer than two characters."""
    return _rhyming_pairs([word for word in line.split(" ") if len(word) > 2])


def count_internal_rhymes(text: str) -> int:
    """Rhyming word pairs within each line, summed over all lines."""
    return sum(_rhyming_pairs(line.split(" ")) for line in text.split("\n"))


def count_multisyllabic_words(line: str) -> int:
    return sum(1 for word in line.split(" ") if count_syllables(word) > 2)


def count_keyword_hits(text: str, keywords: Iterable[str]) -> int:
    """Number of keywords that occur anywhere in the lowercased text."""
    lowered = text.lower()
    return sum(1 for keyword in keywords if keyword in lowered)


def find_cliches(text: str, cliches: Iterable[str]) -> list[str]:
    """Cliché phrases present anywhere in the text, in table order."""
    lowered = text.lower()
    return [cliche for cliche in cliches if cliche in lowered]


def find_cliches_with_lines(
    text: str,
    cliches: Iterable[str],
    suggest: Callable[[str], str],
) -> list[ClicheHit]:
    """Locate clichés line by line.

    Lines are counted over the raw text, blank lines included, so line
    numbers match what the writer sees. A line yields one hit per cliché it
    contains.
    """
    cliche_list = tuple(cliches)
    found: list[ClicheHit] = []

    for index, line in enumerate(text.split("\n")):
        lowered = line.lower()
        for cliche in cliche_list:
            if cliche in lowered:
                found.append(
                    ClicheHit(
                        line=index + 1,
                        text=line.strip(),
                        cliche=cliche,
                        suggestion=suggest(cliche),
                    )
                )

    return found


def find_repeated_lines(lines: Iterable[str]) -> list[tuple[str, int]]:
    """Lines (trimmed, lowercased, longer than 5 chars) that occur more than once."""
    counts: Counter[str] = Counter()
    for line in lines:
        cleaned = line.strip().lower()
        if len(cleaned) > 5:
            counts[cleaned] += 1

    return [(line, count) for line, count in counts.items() if count > 1]


def identify_sections(lyrics: str) -> list[Section]:
    """Find section marker lines such as ``[Verse 1]`` or ``[Chorus]``.

    Brackets holding anything other than a known section name (timestamps,
    production notes) are ignored.
    """
    sections: list[Section] = []

    for index, line in enumerate(re.split(r"\r?\n", lyrics)):
        match = _SECTION_RE.match(line)
        if not match:
            continue

        label = match.group(1).strip()
        lowered = label.lower()
        for prefix, section_type in SECTION_MARKERS:
            if lowered.startswith(prefix):
                sections.append(Section(type=section_type, label=label, line=index + 1))
                break

    return sections
