"""Feedback generation: grade summary, per-dimension critique, concrete issues
and a line-by-line breakdown.

Dimension critiques come from fixed catalogs of (sub-score, threshold,
issue, example) rules. Issues are only itemized for dimensions scoring below
FEEDBACK_ISSUE_THRESHOLD.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Mapping

from lyric_grader.analysis import tables
from lyric_grader.analysis.text import (
    count_keyword_hits,
    count_line_internal_rhymes,
    count_multisyllabic_words,
    count_syllables,
    end_word,
    find_cliches,
    find_cliches_with_lines,
    split_lines,
    strip_non_word,
    syllable_counts,
    variance,
)
from lyric_grader.models.analysis import (
    AnalysisProfile,
    ClicheHit,
    DimensionFeedback,
    DimensionScore,
    Feedback,
    FeedbackIssue,
    LineBreakdown,
    LineFinding,
    PairFinding,
    Priority,
    RapLineMetrics,
    RepeatedWord,
    SpecificIssue,
    StructureInfo,
)

MAX_ISSUE_EXAMPLES = 3
FLOW_ISSUE_VARIANCE = 6


@dataclass(frozen=True)
class IssueRule:
    """Emit an issue when a sub-score falls below a threshold."""

    subscore: str
    below: float
    issue: str
    example: str


# Summary lines for scores >= 90, >= 80, >= 70 and below 70
SummaryTiers = tuple[str, str, str, str]


GENERAL_SUMMARIES: Mapping[str, SummaryTiers] = {
    "lyrical_content": (
        "🏆 EXCEPTIONAL: Outstanding lyrical content with masterful depth and originality.",
        "✅ STRONG: Good lyrical foundation, but missing that spark of genius.",
        "⚠️ MEDIOCRE: Relies on tired themes and predictable phrases.",
        "❌ WEAK: Generic, clichéd content that won't stand out.",
    ),
    "structure": (
        "🏆 PERFECT STRUCTURE: Masterful organization with seamless flow.",
        "✅ SOLID: Good structure but transitions need polish.",
        "⚠️ BASIC: Recognizable structure but lacks sophistication.",
        "❌ MESSY: Confusing organization that loses the listener.",
    ),
    "rhyme_scheme": (
        "🏆 MASTERFUL: Creative, natural rhymes that enhance the song.",
        "✅ GOOD: Solid rhyming with occasional forced moments.",
        "⚠️ BASIC: Predictable rhymes that don't add much.",
        "❌ POOR: Forced, awkward rhymes that hurt the flow.",
    ),
    "wordplay": (
        "🏆 BRILLIANT: Sophisticated wordplay that impresses and delights.",
        "✅ CLEVER: Good use of language with room for more creativity.",
        "⚠️ SIMPLE: Basic word choices without much flair.",
        "❌ BLAND: Boring language that doesn't engage the listener.",
    ),
    "emotion": (
        "🏆 POWERFUL: Raw, authentic emotion that moves the listener.",
        "✅ TOUCHING: Good emotional content but could be more specific.",
        "⚠️ SURFACE: Emotions feel generic and predictable.",
        "❌ EMPTY: No real emotional connection or impact.",
    ),
    "technical": (
        "🏆 FLAWLESS: Perfect technical execution that's easy to perform.",
        "✅ SOLID: Good technical skills with minor issues.",
        "⚠️ ROUGH: Technical problems that distract from the message.",
        "❌ BROKEN: Major technical issues that make it hard to perform.",
    ),
}

RAP_SUMMARIES: Mapping[str, SummaryTiers] = {
    "lyrical_content": (
        "🔥 FIRE CONTENT: Your lyrics are original and hit hard!",
        "💯 SOLID BARS: Good content but could use more punch.",
        "😐 BASIC: Your lyrics are okay but nothing special.",
        "💀 TRASH BARS: These lyrics are weak and unoriginal.",
    ),
    "flow": (
        "🌊 SMOOTH FLOW: Your rhythm is locked in and sounds professional!",
        "👍 DECENT FLOW: Good rhythm but could use more variation.",
        "😬 CHOPPY: Your flow needs work to sound smooth.",
        "💀 NO FLOW: This doesn't sound like rap - work on your rhythm.",
    ),
    "rhyme_scheme": (
        "🎯 RHYME MASTER: Complex rhyme schemes that show real skill!",
        "👌 GOOD RHYMES: Solid rhyming but could be more complex.",
        "😐 BASIC RHYMES: Predictable rhyme patterns.",
        "💀 WEAK RHYMES: Forced and basic - sounds amateur.",
    ),
    "wordplay": (
        "🧠 WORDPLAY GENIUS: Clever bars that show real lyrical skill!",
        "💭 SMART BARS: Good wordplay but could be more clever.",
        "😐 BASIC WORDPLAY: Some attempts but nothing impressive.",
        "💀 NO WORDPLAY: Literal bars with no cleverness.",
    ),
    "technical": (
        "⚙️ TECHNICAL MASTER: Flawless execution that sounds professional!",
        "🔧 SOLID TECHNIQUE: Good technical skills with minor issues.",
        "😬 TECHNICAL ISSUES: Noticeable problems with execution.",
        "💀 TECHNICAL DISASTER: Major issues that make it hard to listen to.",
    ),
    "authenticity": (
        "💯 AUTHENTIC: You have a unique voice and sound credible!",
        "👤 DEVELOPING VOICE: Good authenticity but could be more unique.",
        "😐 GENERIC: Sounds like other rappers, not distinctive.",
        "💀 FAKE: Inauthentic and using tired rap clichés.",
    ),
}

GENERAL_RULES: Mapping[str, tuple[IssueRule, ...]] = {
    "lyrical_content": (
        IssueRule(
            "depth", 70,
            "SHALLOW CONTENT: Lacks emotional depth and meaningful substance",
            "Instead of 'I love you so much' try 'Your laugh echoes in empty rooms long after you've gone'",
        ),
        IssueRule(
            "originality", 60,
            "UNORIGINAL: Sounds like every other song in this genre",
            "Find your unique voice - what's YOUR story that no one else can tell?",
        ),
    ),
    "structure": (
        IssueRule(
            "flow", 70,
            "CHOPPY FLOW: Lines don't connect smoothly",
            "Use transitional phrases: 'But then...', 'So when...', 'And now...'",
        ),
    ),
    "rhyme_scheme": (
        IssueRule(
            "consistency", 70,
            "INCONSISTENT PATTERN: Rhyme scheme is all over the place",
            "Pick a pattern (ABAB, AABB, ABCB) and stick to it throughout each section",
        ),
        IssueRule(
            "creativity", 60,
            "BORING RHYMES: Using the most obvious rhyme choices",
            "Instead of love/above try love/enough or love/rough for more interesting sounds",
        ),
    ),
    "wordplay": (
        IssueRule(
            "metaphors", 50,
            "NO METAPHORS: Missing creative comparisons and imagery",
            "Add metaphors: 'Your words are bullets' or 'Time is a thief stealing our moments'",
        ),
        IssueRule(
            "word_choice", 60,
            "BASIC VOCABULARY: Using simple, common words",
            "Replace 'very sad' with 'devastated', 'broken', or 'shattered'",
        ),
        IssueRule(
            "cleverness", 50,
            "NO WORDPLAY: Missing puns, double meanings, or clever phrases",
            "Try double meanings: 'I'm falling for you' (love + literally falling)",
        ),
    ),
    "emotion": (
        IssueRule(
            "authenticity", 70,
            "FAKE EMOTIONS: Doesn't feel genuine or personal",
            "Write from real experience - what did heartbreak actually FEEL like for you?",
        ),
        IssueRule(
            "impact", 60,
            "NO EMOTIONAL PUNCH: Doesn't make the listener feel anything",
            "Show, don't tell: Instead of 'I'm sad' try 'I count the ceiling tiles at 3 AM'",
        ),
        IssueRule(
            "consistency", 70,
            "EMOTIONAL CONFUSION: Mixed emotions without clear purpose",
            "Pick one main emotion per song and explore it fully",
        ),
    ),
    "technical": (
        IssueRule(
            "syllable_count", 70,
            "INCONSISTENT METER: Syllable counts vary wildly between lines",
            "Count syllables: 'I love you so' (5) should match 'You mean the world' (4) - add 'to me' (2)",
        ),
        IssueRule(
            "rhythm", 60,
            "BROKEN RHYTHM: Lines don't flow when spoken aloud",
            "Read your lyrics out loud - if you stumble, rewrite that line",
        ),
        IssueRule(
            "pronunciation", 70,
            "HARD TO SING: Awkward word combinations or tongue twisters",
            "Avoid: 'She sells seashells' - hard to sing quickly",
        ),
    ),
}

RAP_RULES: Mapping[str, tuple[IssueRule, ...]] = {
    "lyrical_content": (
        IssueRule(
            "punchlines", 60,
            "NO PUNCHLINES: Where are the bars that make people go 'OHHH!'?",
            "Add setup-punchline combos: 'They say I'm broke, but my spirit's rich / "
            "While they count pennies, I count my wins'",
        ),
        IssueRule(
            "storytelling", 70,
            "WEAK STORYTELLING: You're just saying words, not painting pictures",
            "Tell a story: Where you came from, where you're going, what you've seen",
        ),
    ),
    "flow": (
        IssueRule(
            "syllable_pattern", 70,
            "BROKEN FLOW: Your syllable count is all over the place",
            "Keep consistent patterns: 8-8-8-8 or 12-12-12-12 syllables per bar",
        ),
        IssueRule(
            "rhythm_consistency", 60,
            "OFF-BEAT: You're not riding the pocket - sounds choppy",
            "Practice with a metronome - your flow should lock into the beat",
        ),
        IssueRule(
            "delivery", 70,
            "BORING DELIVERY: No flow switches or dynamic changes",
            "Switch up your flow: fast-slow-fast or triplets to straight time",
        ),
    ),
    "rhyme_scheme": (
        IssueRule(
            "internal_rhymes", 60,
            "NO INTERNAL RHYMES: You're only rhyming at the end of bars like a beginner",
            "Add internal rhymes: 'I SPIT fire while I SPLIT wires, my GRIT higher than your QUIT desires'",
        ),
        IssueRule(
            "multisyllabic_rhymes", 50,
            "BASIC RHYMES: Single syllable rhymes are elementary",
            "Use multisyllabic rhymes: 'EDUCATION / DEDICATION' or 'INCREDIBLE / UNFORGETTABLE'",
        ),
        IssueRule(
            "rhyme_density", 70,
            "LOW RHYME DENSITY: Not enough rhymes per bar",
            "Pack more rhymes: Every 2-4 words should connect sonically",
        ),
    ),
    "wordplay": (
        IssueRule(
            "metaphors", 60,
            "NO METAPHORS: Your bars are literal and boring",
            "Use metaphors: 'My flow's a river, yours is a puddle' or 'I'm a lion, you're a poodle'",
        ),
        IssueRule(
            "double_entendres", 50,
            "NO DOUBLE MEANINGS: Missing the wordplay that makes rap clever",
            "Double entendres: 'I'm BANKING on success' (money + relying on)",
        ),
        IssueRule(
            "vocabulary", 70,
            "LIMITED VOCABULARY: Using basic words like a amateur",
            "Expand vocabulary: 'devastated' instead of 'sad', 'annihilate' instead of 'beat'",
        ),
    ),
    "technical": (
        IssueRule(
            "syllable_count", 70,
            "INCONSISTENT SYLLABLES: Your bar lengths are random",
            "Count syllables: 16 syllables = 4 beats in 4/4 time",
        ),
        IssueRule(
            "breath_control", 60,
            "POOR BREATH CONTROL: Lines too long to rap smoothly",
            "Break up long lines or practice breath control exercises",
        ),
        IssueRule(
            "enunciation", 70,
            "HARD TO UNDERSTAND: Too many consonant clusters",
            "Avoid tongue twisters unless intentional for effect",
        ),
    ),
    "authenticity": (
        IssueRule(
            "voice", 70,
            "NO UNIQUE VOICE: You sound like every other rapper",
            "Develop your own style - what makes YOU different?",
        ),
        IssueRule(
            "credibility", 60,
            "NOT CREDIBLE: Using too many played-out rap clichés",
            "Rap about YOUR life, not what you think rap should sound like",
        ),
    ),
}


def overall_feedback(grade: str, score: float, profile: AnalysisProfile) -> str:
    """One-sentence verdict chosen by grade letter."""
    if profile is AnalysisProfile.RAP:
        if grade == "A+":
            return (
                f"🔥 LEGENDARY! Your rap skills are at {score:.1f}% - This is FIRE! "
                "You've got the flow, the bars, and the technical skills of a professional MC."
            )
        if grade.startswith("A"):
            return (
                f"💯 DOPE! Solid rap with {score:.1f}% - You've got skills but need to "
                "tighten up a few areas to reach legendary status."
            )
        if grade.startswith("B"):
            return (
                f"👍 DECENT! {score:.1f}% - You can rap, but you're not ready for the "
                "cypher yet. Work on your craft."
            )
        if grade.startswith("C"):
            return (
                f"😬 WEAK! {score:.1f}% - Your bars need serious work. "
                "This wouldn't survive a battle."
            )
        return (
            f"💀 TRASH! {score:.1f}% - This is not rap. "
            "Go back to the drawing board and study the greats."
        )

    if grade == "A+":
        return (
            "Exceptional work! Your song demonstrates mastery across all areas with a "
            f"score of {score:.1f}%. This is professional-level songwriting."
        )
    if grade.startswith("A"):
        return (
            f"Excellent songwriting with a score of {score:.1f}%. "
            "You're very close to perfection - just a few tweaks needed."
        )
    if grade.startswith("B"):
        return (
            f"Good work with a score of {score:.1f}%. Your song has solid foundations "
            "but needs improvement in key areas."
        )
    if grade.startswith("C"):
        return (
            f"Average songwriting with a score of {score:.1f}%. "
            "Significant improvements needed across multiple areas."
        )
    return (
        f"Below average with a score of {score:.1f}%. "
        "This song needs major revisions to reach professional standards."
    )


def _summary(tiers: SummaryTiers, score: float) -> str:
    if score >= 90:
        return tiers[0]
    if score >= 80:
        return tiers[1]
    if score >= 70:
        return tiers[2]
    return tiers[3]


def _apply_rules(rules: tuple[IssueRule, ...], dimension: DimensionScore) -> list[FeedbackIssue]:
    return [
        FeedbackIssue(issue=rule.issue, example=rule.example)
        for rule in rules
        if dimension.subscores.get(rule.subscore, 100) < rule.below
    ]


def _lead_issues(
    name: str,
    lyrics: str,
    profile: AnalysisProfile,
    structure: StructureInfo,
) -> list[FeedbackIssue]:
    """Issues that come from the lyric text rather than a sub-score."""
    issues: list[FeedbackIssue] = []

    if profile is AnalysisProfile.RAP:
        if name == "lyrical_content":
            rap_cliches = find_cliches(lyrics, tables.RAP_CLICHES)
            if rap_cliches:
                issues.append(
                    FeedbackIssue(
                        issue=(
                            f"RAP CLICHÉS: Found {len(rap_cliches)} overused rap phrases "
                            "- you sound like every other wannabe"
                        ),
                        example=f'"{rap_cliches[0]}" is played out - find your own voice!',
                    )
                )
        return issues

    if name == "lyrical_content":
        cliches = find_cliches(lyrics, tables.CLICHE_PHRASES)
        if cliches:
            issues.append(
                FeedbackIssue(
                    issue=f"CLICHÉ OVERLOAD: Found {len(cliches)} overused phrases",
                    example=f'Replace "{cliches[0]}" with something personal and specific',
                )
            )
    elif name == "structure":
        if not structure.has_verse:
            issues.append(
                FeedbackIssue(
                    issue="MISSING VERSES: No clear verse structure detected",
                    example=(
                        "Add verses that tell your story: "
                        "Verse 1 → Chorus → Verse 2 → Chorus → Bridge → Chorus"
                    ),
                )
            )
        if not structure.has_chorus:
            issues.append(
                FeedbackIssue(
                    issue="NO HOOK: Missing a memorable, repeatable chorus",
                    example=(
                        "Create a chorus that people will sing along to - "
                        "your main message in 2-4 lines"
                    ),
                )
            )
    elif name == "rhyme_scheme":
        forced = find_forced_rhymes(lyrics)
        if forced:
            issues.append(
                FeedbackIssue(
                    issue=f"FORCED RHYMES: {len(forced)} awkward rhymes detected",
                    example=(
                        f'"{forced[0]}" sounds unnatural - try slant rhymes or rewrite the line'
                    ),
                )
            )

    return issues


def dimension_feedback(
    breakdown: Mapping[str, DimensionScore],
    lyrics: str,
    profile: AnalysisProfile,
    structure: StructureInfo | None = None,
) -> dict[str, DimensionFeedback]:
    """Summary and itemized issues for every dimension in the breakdown."""
    structure = structure or StructureInfo()
    if profile is AnalysisProfile.RAP:
        summaries, rules = RAP_SUMMARIES, RAP_RULES
    else:
        summaries, rules = GENERAL_SUMMARIES, GENERAL_RULES

    feedback: dict[str, DimensionFeedback] = {}
    for name, dimension in breakdown.items():
        issues: list[FeedbackIssue] = []
        if dimension.value < tables.FEEDBACK_ISSUE_THRESHOLD:
            issues = _lead_issues(name, lyrics, profile, structure)
            issues.extend(_apply_rules(rules.get(name, ()), dimension))

        feedback[name] = DimensionFeedback(
            summary=_summary(summaries[name], dimension.value),
            score=dimension.value,
            issues=issues,
        )

    return feedback


# Issue finders


def cliche_replacement(cliche: str) -> str:
    return tables.CLICHE_REPLACEMENTS.get(cliche, tables.DEFAULT_CLICHE_REPLACEMENT)


def rap_cliche_suggestion(cliche: str) -> str:
    return f'Replace "{cliche}" with original content about your life'


def is_forced_rhyme(line1: str, line2: str) -> bool:
    """Whether two lines end on one of the stock rhyme pairs (love/above, ...)."""
    end1 = end_word(line1)
    end2 = end_word(line2)
    if not end1 or not end2:
        return False

    return any(
        (end1 == first and end2 == second) or (end1 == second and end2 == first)
        for first, second in tables.OBVIOUS_RHYME_PAIRS
    )


def find_forced_rhymes_with_lines(lyrics: str) -> list[PairFinding]:
    lines = [line.strip() for line in split_lines(lyrics)]
    return [
        PairFinding(
            lines=(index + 1, index + 2),
            text=(first, second),
            issue="Rhyme sounds unnatural or forced",
            suggestion="Rewrite one line to make the rhyme flow naturally",
        )
        for index, (first, second) in enumerate(zip(lines, lines[1:]))
        if is_forced_rhyme(first, second)
    ]


def find_forced_rhymes(lyrics: str) -> list[str]:
    """Stock rhyme pairs at adjacent line endings, formatted as "love / above"."""
    return [
        f"{end_word(finding.text[0])} / {end_word(finding.text[1])}"
        for finding in find_forced_rhymes_with_lines(lyrics)
    ]


def find_repetitive_words(lyrics: str) -> list[RepeatedWord]:
    """Uncommon words longer than three letters used more than three times."""
    counts: Counter[str] = Counter()
    for word in lyrics.lower().split():
        cleaned = strip_non_word(word)
        if len(cleaned) > 3 and cleaned not in tables.COMMON_WORDS:
            counts[cleaned] += 1

    return [
        RepeatedWord(word=word, count=count, suggestion=f'Use synonyms for "{word}" to add variety')
        for word, count in counts.items()
        if count > 3
    ]


def find_weak_verbs(lyrics: str) -> list[LineFinding]:
    """First WEAK_VERB_LIMIT occurrences of weak verbs, in reading order."""
    found: list[LineFinding] = []

    for index, line in enumerate(lyrics.split("\n")):
        for word in line.lower().split():
            verb = strip_non_word(word)
            if verb in tables.WEAK_VERBS:
                found.append(
                    LineFinding(
                        line=index + 1,
                        text=line.strip(),
                        issue=f'Weak verb: "{verb}"',
                        suggestion=tables.STRONG_VERB_SUGGESTIONS.get(
                            verb, tables.DEFAULT_VERB_SUGGESTION
                        ),
                        term=verb,
                    )
                )

    return found[: tables.WEAK_VERB_LIMIT]


def find_vague_language(lyrics: str) -> list[LineFinding]:
    found: list[LineFinding] = []

    for index, line in enumerate(lyrics.split("\n")):
        lowered = line.lower()
        for word in tables.VAGUE_WORDS:
            if word in lowered:
                found.append(
                    LineFinding(
                        line=index + 1,
                        text=line.strip(),
                        issue=f'Vague word: "{word}"',
                        suggestion=f'Replace "{word}" with something specific',
                        term=word,
                    )
                )

    return found


def find_flow_issues(lyrics: str) -> list[PairFinding]:
    """Adjacent bars whose syllable counts differ by more than four.

    Only reported when the lyric's overall syllable variance exceeds
    FLOW_ISSUE_VARIANCE.
    """
    lines = split_lines(lyrics)
    counts = syllable_counts(lines)
    if variance(counts) <= FLOW_ISSUE_VARIANCE:
        return []

    return [
        PairFinding(
            lines=(i, i + 1),
            text=(lines[i - 1].strip(), lines[i].strip()),
            issue=f"Flow break: {counts[i - 1]} vs {counts[i]} syllables",
            suggestion="Adjust syllable count to maintain consistent flow",
        )
        for i in range(1, len(lines))
        if abs(counts[i] - counts[i - 1]) > 4
    ]


def find_missing_internal_rhymes(lyrics: str) -> list[LineFinding]:
    return [
        LineFinding(
            line=index + 1,
            text=line.strip(),
            issue="Long bar with no internal rhymes",
            suggestion="Add internal rhymes to improve flow and complexity",
        )
        for index, line in enumerate(split_lines(lyrics))
        if len(line.split(" ")) > 6 and count_line_internal_rhymes(line) == 0
    ]


def find_weak_punchlines(lyrics: str) -> list[PairFinding]:
    """Setup lines not followed by a payoff line."""
    lines = split_lines(lyrics)
    found: list[PairFinding] = []

    for i in range(len(lines) - 1):
        setup = lines[i].lower()
        payoff = lines[i + 1].lower()
        has_setup = any(word in setup for word in tables.WEAK_PUNCHLINE_SETUP_WORDS)
        has_payoff = any(word in payoff for word in tables.WEAK_PUNCHLINE_PAYOFF_WORDS)
        if has_setup and not has_payoff:
            found.append(
                PairFinding(
                    lines=(i + 1, i + 2),
                    text=(lines[i], lines[i + 1]),
                    issue="Setup line without strong punchline",
                    suggestion="Follow setup with a clever punchline or wordplay",
                )
            )

    return found


def _issue(type_: str, severity: Priority, found: list, fix: str) -> SpecificIssue | None:
    if not found:
        return None
    return SpecificIssue(
        type=type_,
        severity=severity,
        count=len(found),
        examples=found[:MAX_ISSUE_EXAMPLES],
        fix=fix,
    )


def identify_specific_issues(lyrics: str) -> list[SpecificIssue]:
    cliches: list[ClicheHit] = find_cliches_with_lines(
        lyrics, tables.CLICHE_PHRASES, cliche_replacement
    )
    candidates = (
        _issue(
            "CLICHÉS", Priority.HIGH, cliches,
            "Replace with personal, specific imagery that only you could write",
        ),
        _issue(
            "FORCED RHYMES", Priority.MEDIUM, find_forced_rhymes_with_lines(lyrics),
            "Rewrite lines to make rhymes sound natural, or use slant rhymes",
        ),
        _issue(
            "WORD REPETITION", Priority.LOW, find_repetitive_words(lyrics),
            "Use synonyms or rephrase to avoid overusing the same words",
        ),
        _issue(
            "WEAK VERBS", Priority.MEDIUM, find_weak_verbs(lyrics),
            "Replace with stronger, more specific action words",
        ),
        _issue(
            "VAGUE LANGUAGE", Priority.HIGH, find_vague_language(lyrics),
            "Be specific - replace general words with concrete details",
        ),
    )
    return [issue for issue in candidates if issue is not None]


def identify_rap_specific_issues(lyrics: str) -> list[SpecificIssue]:
    candidates = (
        _issue(
            "RAP CLICHÉS", Priority.HIGH,
            find_cliches_with_lines(lyrics, tables.RAP_CLICHES, rap_cliche_suggestion),
            "Replace with original bars that reflect YOUR story and experience",
        ),
        _issue(
            "FLOW PROBLEMS", Priority.HIGH, find_flow_issues(lyrics),
            "Practice consistent syllable counts and rhythm patterns",
        ),
        _issue(
            "MISSING INTERNAL RHYMES", Priority.MEDIUM, find_missing_internal_rhymes(lyrics),
            "Add rhymes within bars, not just at the end",
        ),
        _issue(
            "WEAK PUNCHLINES", Priority.HIGH, find_weak_punchlines(lyrics),
            "Create setup-punchline combinations that surprise the listener",
        ),
    )
    return [issue for issue in candidates if issue is not None]


# Line-by-line


def _clamp(score: int) -> int:
    return max(0, min(100, score))


def analyze_line(line: str, index: int, lines: list[str]) -> LineBreakdown:
    """Score one line of a General-profile lyric."""
    issues: list[str] = []
    suggestions: list[str] = []
    strengths: list[str] = []
    score = 100
    lowered = line.strip().lower()

    for cliche in tables.CLICHE_PHRASES:
        if cliche in lowered:
            issues.append(f'Contains cliché: "{cliche}"')
            suggestions.append(f'Replace "{cliche}" with something personal and specific')
            score -= 20

    syllables = count_syllables(line)
    if index > 0:
        previous = count_syllables(lines[index - 1])
        if abs(syllables - previous) > 3:
            issues.append(f"Syllable mismatch: {syllables} vs {previous} in previous line")
            suggestions.append(f"Adjust to match previous line's rhythm ({previous} syllables)")
            score -= 10

    for weak in tables.WEAK_MODIFIERS:
        if weak in lowered:
            issues.append(f'Weak modifier: "{weak}"')
            suggestions.append(f'Remove "{weak}" and use a stronger adjective instead')
            score -= 5

    for word in tables.LINE_IMAGERY_WORDS:
        if word in lowered:
            strengths.append(f'Good sensory word: "{word}"')
            score += 5

    if " is " in lowered or " like " in lowered or " as " in lowered:
        strengths.append("Contains comparison/metaphor")
        score += 10

    length = len(line.strip())
    if length < 10:
        issues.append("Line too short - lacks substance")
        suggestions.append("Add more detail or combine with another line")
        score -= 15
    elif length > 80:
        issues.append("Line too long - may be hard to sing")
        suggestions.append("Break into two lines or remove unnecessary words")
        score -= 10

    return LineBreakdown(
        line_number=index + 1,
        text=line.strip(),
        score=_clamp(score),
        issues=issues,
        suggestions=suggestions,
        strengths=strengths,
    )


def analyze_rap_line(line: str, index: int, lines: list[str]) -> LineBreakdown:
    """Score one bar of a Rap-profile lyric."""
    issues: list[str] = []
    suggestions: list[str] = []
    strengths: list[str] = []
    score = 100
    lowered = line.strip().lower()
    syllables = count_syllables(line)

    metrics = RapLineMetrics(
        syllables=syllables,
        internal_rhymes=count_line_internal_rhymes(line),
        multisyllabic_words=count_multisyllabic_words(line),
        rap_vocab=count_keyword_hits(line, tables.RAP_KEYWORDS),
    )

    for cliche in tables.RAP_CLICHES:
        if cliche in lowered:
            issues.append(f'Rap cliché: "{cliche}"')
            suggestions.append(f'Replace "{cliche}" with original bars about your experience')
            score -= 25

    if index > 0:
        previous = count_syllables(lines[index - 1])
        drift = abs(syllables - previous)
        if drift > 4:
            issues.append(f"Flow break: {syllables} syllables vs {previous} in previous bar")
            suggestions.append(f"Adjust to match flow pattern ({previous} syllables)")
            score -= 15
        elif drift <= 1:
            strengths.append("Consistent flow pattern")
            score += 5

    if metrics.internal_rhymes > 0:
        strengths.append(f"{metrics.internal_rhymes} internal rhymes - good technique!")
        score += metrics.internal_rhymes * 5
    elif len(line.split(" ")) > 6:
        issues.append("No internal rhymes in long bar")
        suggestions.append('Add internal rhymes: "I SPIT fire while I SPLIT wires"')
        score -= 10

    if metrics.multisyllabic_words > 2:
        strengths.append("Good vocabulary complexity")
        score += 5

    if metrics.rap_vocab > 0:
        strengths.append("Using authentic rap vocabulary")
        score += 3

    last_word = line.strip().split(" ")[-1].lower()
    if last_word in tables.WEAK_RHYME_ENDINGS:
        issues.append(f'Weak rhyme ending: "{last_word}"')
        suggestions.append("Use stronger, more creative rhyme words")
        score -= 8

    return LineBreakdown(
        line_number=index + 1,
        text=line.strip(),
        score=_clamp(score),
        issues=issues,
        suggestions=suggestions,
        strengths=strengths,
        rap_metrics=metrics,
    )


def line_by_line_breakdown(lyrics: str, profile: AnalysisProfile) -> list[LineBreakdown]:
    lines = split_lines(lyrics)
    analyze = analyze_rap_line if profile is AnalysisProfile.RAP else analyze_line
    return [analyze(line, index, lines) for index, line in enumerate(lines)]


def generate_feedback(
    lyrics: str,
    profile: AnalysisProfile,
    breakdown: Mapping[str, DimensionScore],
    grade: str,
    overall_score: float,
    structure: StructureInfo | None = None,
) -> Feedback:
    """Assemble all feedback for one analysis.

    Args:
        lyrics: Raw lyric text as submitted.
        profile: Grading profile the breakdown was produced with.
        breakdown: Dimension scores.
        grade: Letter grade.
        overall_score: Weighted overall score.
        structure: Sections detected in the raw lyric.
    """
    if profile is AnalysisProfile.RAP:
        specific_issues = identify_rap_specific_issues(lyrics)
    else:
        specific_issues = identify_specific_issues(lyrics)

    return Feedback(
        overall=overall_feedback(grade, overall_score, profile),
        dimensions=dimension_feedback(breakdown, lyrics, profile, structure),
        specific_issues=specific_issues,
        line_by_line=line_by_line_breakdown(lyrics, profile),
    )
