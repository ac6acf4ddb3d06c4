"""Tests for feedback generation."""

from lyric_grader.analysis.feedback import (
    analyze_line,
    analyze_rap_line,
    dimension_feedback,
    find_flow_issues,
    find_forced_rhymes,
    find_missing_internal_rhymes,
    find_repetitive_words,
    find_vague_language,
    find_weak_punchlines,
    find_weak_verbs,
    generate_feedback,
    identify_rap_specific_issues,
    identify_specific_issues,
    line_by_line_breakdown,
    overall_feedback,
)
from lyric_grader.analysis.text import identify_sections
from lyric_grader.models.analysis import (
    AnalysisProfile,
    DimensionScore,
    Priority,
    StructureInfo,
)


class TestOverallFeedback:
    """Tests for overall_feedback."""

    def test_general_tiers(self):
        """Each grade letter has its own General verdict."""
        assert overall_feedback("A+", 96, AnalysisProfile.GENERAL).startswith("Exceptional work!")
        assert overall_feedback("A-", 88, AnalysisProfile.GENERAL).startswith("Excellent")
        assert overall_feedback("B", 81, AnalysisProfile.GENERAL).startswith("Good work")
        assert overall_feedback("C+", 74, AnalysisProfile.GENERAL).startswith("Average")
        assert overall_feedback("F", 10, AnalysisProfile.GENERAL).startswith("Below average")

    def test_rap_tiers(self):
        """Rap verdicts use their own voice."""
        assert "LEGENDARY" in overall_feedback("A+", 96, AnalysisProfile.RAP)
        assert "TRASH" in overall_feedback("D", 61, AnalysisProfile.RAP)

    def test_score_is_formatted(self):
        """The score appears with one decimal place."""
        assert "85.5%" in overall_feedback("B+", 85.5, AnalysisProfile.GENERAL)


class TestDimensionFeedback:
    """Tests for dimension_feedback."""

    def test_high_scores_list_no_issues(self):
        """Dimensions at or above 90 get a summary and no issues."""
        breakdown = {
            "lyrical_content": DimensionScore("lyrical_content", 95, {"depth": 10}),
        }

        feedback = dimension_feedback(breakdown, "baby baby", AnalysisProfile.GENERAL)

        assert feedback["lyrical_content"].issues == []
        assert feedback["lyrical_content"].score == 95

    def test_low_subscores_trigger_rules(self):
        """Sub-scores under a rule's threshold produce that rule's issue."""
        breakdown = {
            "lyrical_content": DimensionScore(
                "lyrical_content", 40, {"depth": 30, "originality": 90}
            ),
        }

        feedback = dimension_feedback(breakdown, "rust on the gate", AnalysisProfile.GENERAL)
        issues = [issue.issue for issue in feedback["lyrical_content"].issues]

        assert any(issue.startswith("SHALLOW CONTENT") for issue in issues)
        assert not any(issue.startswith("UNORIGINAL") for issue in issues)

    def test_cliche_lead_issue(self):
        """Clichés in a weak lyric are called out first."""
        breakdown = {"lyrical_content": DimensionScore("lyrical_content", 50, {})}

        feedback = dimension_feedback(breakdown, "my baby forever", AnalysisProfile.GENERAL)
        first = feedback["lyrical_content"].issues[0]

        assert first.issue == "CLICHÉ OVERLOAD: Found 2 overused phrases"
        assert '"baby"' in first.example

    def test_structure_without_sections(self):
        """Missing verse and chorus markers are both reported."""
        breakdown = {"structure": DimensionScore("structure", 75, {"flow": 75})}

        feedback = dimension_feedback(breakdown, "no markers", AnalysisProfile.GENERAL, StructureInfo())
        issues = [issue.issue for issue in feedback["structure"].issues]

        assert issues[0].startswith("MISSING VERSES")
        assert issues[1].startswith("NO HOOK")

    def test_structure_with_sections(self):
        """Detected verse and chorus markers suppress the structure lead issues."""
        breakdown = {"structure": DimensionScore("structure", 75, {"flow": 75})}
        structure = StructureInfo(sections=identify_sections("[Verse 1]\n[Chorus]"))

        feedback = dimension_feedback(breakdown, "x", AnalysisProfile.GENERAL, structure)

        assert feedback["structure"].issues == []

    def test_rap_cliche_lead_issue(self):
        """Rap lyrics get called out for played-out phrases."""
        breakdown = {"lyrical_content": DimensionScore("lyrical_content", 50, {})}

        feedback = dimension_feedback(breakdown, "stack paper, day one", AnalysisProfile.RAP)

        assert feedback["lyrical_content"].issues[0].issue.startswith("RAP CLICHÉS: Found 2")


class TestIssueFinders:
    """Tests for the specific issue finders."""

    def test_forced_rhymes(self):
        """Stock rhyme pairs at adjacent line endings are flagged."""
        assert find_forced_rhymes("I give you my love\nLike stars up above") == ["love / above"]
        assert find_forced_rhymes("I give you my love\nLike stars in the sky") == []

    def test_repetitive_words(self):
        """Uncommon words used more than three times are flagged."""
        repeated = find_repetitive_words("dream dream dream dream the the the the")

        assert [(word.word, word.count) for word in repeated] == [("dream", 4)]

    def test_weak_verbs_are_limited(self):
        """Only the first five weak verbs are reported."""
        found = find_weak_verbs("it is what it is\nI was there and I go\nyou get it, I have it")

        assert [finding.term for finding in found] == ["is", "is", "was", "go", "get"]
        assert found[0].suggestion == "becomes, transforms, stands"
        assert found[4].line == 3

    def test_vague_language(self):
        """Vague words are reported with their line."""
        found = find_vague_language("clear line\nthat stuff matters")

        assert [(finding.line, finding.term) for finding in found] == [(2, "stuff")]

    def test_flow_issues(self):
        """Big syllable jumps between bars are flagged when variance is high."""
        found = find_flow_issues("go\nincredible unbelievable opportunities everywhere")

        assert len(found) == 1
        assert found[0].lines == (1, 2)

    def test_no_flow_issues_for_even_bars(self):
        """Consistent bars produce no flow findings."""
        assert find_flow_issues("run it back\nrun it back") == []

    def test_missing_internal_rhymes(self):
        """Long bars with no rhyming word pairs are flagged."""
        found = find_missing_internal_rhymes("cat dog fish snake horse lemur zebra\nshort bar")

        assert [finding.line for finding in found] == [1]

    def test_weak_punchlines(self):
        """A setup without a payoff is flagged."""
        found = find_weak_punchlines("when I step in\neverybody stares")

        assert len(found) == 1
        assert found[0].lines == (1, 2)

    def test_specific_issues(self):
        """Clichés are a high-severity issue with at most three examples."""
        lyrics = "I love you forever\nBaby you're my heart\nForever and always\nNever apart"

        issues = {issue.type: issue for issue in identify_specific_issues(lyrics)}

        assert issues["CLICHÉS"].severity is Priority.HIGH
        assert issues["CLICHÉS"].count == 4
        assert len(issues["CLICHÉS"].examples) == 3

    def test_rap_specific_issues(self, rap_verse):
        """Rap clichés are detected in a rap verse."""
        types = [issue.type for issue in identify_rap_specific_issues(rap_verse)]
        assert "RAP CLICHÉS" in types

    def test_no_issues_for_clean_lyric(self):
        """A lyric with nothing to flag yields no issues."""
        assert identify_specific_issues("rust on the gate") == []


class TestLineByLine:
    """Tests for the line-by-line breakdown."""

    def test_short_line(self):
        """Lines under ten characters lose fifteen points."""
        breakdown = analyze_line("Hi", 0, ["Hi"])

        assert breakdown.score == 85
        assert "Line too short - lacks substance" in breakdown.issues

    def test_score_is_clamped(self):
        """Heavy penalties never push a line below 0."""
        line = "baby heart forever tears cry angel heaven perfect"
        assert analyze_line(line, 0, [line]).score == 0

    def test_comparison_bonus_is_clamped(self):
        """Bonuses never push a line above 100."""
        line = "I see your eyes shine like the sun"
        assert analyze_line(line, 0, [line]).score == 100

    def test_rap_line_metrics(self):
        """Rap bars carry per-line metrics."""
        lines = ["I spit fire on the mic", "flow so tight"]

        breakdown = analyze_rap_line(lines[0], 0, lines)

        assert breakdown.rap_metrics is not None
        assert breakdown.rap_metrics.rap_vocab >= 3
        assert "Using authentic rap vocabulary" in breakdown.strengths

    def test_breakdown_numbers_non_empty_lines(self, love_song):
        """Line numbers count non-empty lines from 1."""
        breakdown = line_by_line_breakdown(love_song, AnalysisProfile.GENERAL)

        assert [line.line_number for line in breakdown] == [1, 2, 3, 4, 5, 6]
        assert all(line.rap_metrics is None for line in breakdown)


class TestGenerateFeedback:
    """Tests for generate_feedback."""

    def test_assembles_all_parts(self, love_song):
        """Overall verdict, dimensions, issues and lines are all present."""
        breakdown = {"emotion": DimensionScore("emotion", 75, {"impact": 50})}

        feedback = generate_feedback(love_song, AnalysisProfile.GENERAL, breakdown, "A+", 7000)

        assert feedback.overall.startswith("Exceptional work!")
        assert set(feedback.dimensions) == {"emotion"}
        assert feedback.specific_issues
        assert len(feedback.line_by_line) == 6
