"""Tests for genre classification and song purpose detection."""

from lyric_grader.analysis.genre import (
    detect_rap_genre,
    detect_song_purpose,
    profile_for_score,
    rap_score,
    select_profile,
)
from lyric_grader.models.analysis import AnalysisProfile
from lyric_grader.models.pipeline import AnalysisContext
from lyric_grader.stages import ClassifyStage

# One word per line: 5 points for short lines, 2 per rap keyword
AT_THRESHOLD = "bars\nflow\nmic\nspit\ncypher"
# "crush" is an aggressive word (1 point) rather than a rap keyword
BELOW_THRESHOLD = "bars\nflow\nmic\nspit\ncrush"


class TestRapScore:
    """Tests for rap_score and the profile decision."""

    def test_short_aggressive_line(self):
        """A single short line with one aggressive word scores 5 + 1."""
        assert rap_score("crush") == 6

    def test_keywords_are_substring_matches(self):
        """Keywords count once each, even inside longer words."""
        # "yo" inside "you", plus the short-line bonus
        assert rap_score("I love you forever\nBaby you're my heart\nForever and always\nNever apart") == 7

    def test_love_song_is_general(self, love_song):
        """A ballad with few rap signals stays below the threshold."""
        assert rap_score(love_song) == 13
        assert select_profile(love_song) is AnalysisProfile.GENERAL

    def test_rap_verse_is_rap(self, rap_verse):
        """A verse dense with rap vocabulary is classified as rap."""
        assert rap_score(rap_verse) >= 15
        assert select_profile(rap_verse) is AnalysisProfile.RAP

    def test_fifteen_points_is_rap(self):
        """Five rap keywords on short lines score exactly the threshold."""
        assert rap_score(AT_THRESHOLD) == 15
        assert select_profile(AT_THRESHOLD) is AnalysisProfile.RAP
        assert detect_rap_genre(AT_THRESHOLD) is True

    def test_fourteen_points_is_general(self):
        """One point under the threshold stays General."""
        assert rap_score(BELOW_THRESHOLD) == 14
        assert select_profile(BELOW_THRESHOLD) is AnalysisProfile.GENERAL
        assert detect_rap_genre(BELOW_THRESHOLD) is False

    def test_profile_for_score(self):
        """The threshold itself is inclusive."""
        assert profile_for_score(15) is AnalysisProfile.RAP
        assert profile_for_score(14) is AnalysisProfile.GENERAL

    def test_classify_stage_at_boundary(self):
        """The classify stage agrees with select_profile on both sides of the threshold."""
        for lyrics, expected in (
            (AT_THRESHOLD, AnalysisProfile.RAP),
            (BELOW_THRESHOLD, AnalysisProfile.GENERAL),
        ):
            context = AnalysisContext(lyrics=lyrics)

            result = ClassifyStage().run(context)

            assert result.success
            assert context.rap_score == rap_score(lyrics)
            assert context.profile is expected

    def test_empty_text(self):
        """Empty text scores nothing."""
        assert rap_score("") == 0


class TestSongPurpose:
    """Tests for detect_song_purpose."""

    def test_love_song(self, love_song):
        """Love keywords win with medium confidence."""
        purpose = detect_song_purpose(love_song)

        assert purpose.primary == "love_song"
        assert purpose.score == 8
        assert purpose.confidence == "medium"
        assert set(purpose.scores) >= {"love_song", "diss_track", "personal_experience"}

    def test_diss_track(self):
        """Diss vocabulary scores three points per keyword."""
        purpose = detect_song_purpose("You're a fake clown, a fraud and a loser")

        assert purpose.primary == "diss_track"
        assert purpose.score == 12
        assert purpose.confidence == "high"

    def test_third_person_narration(self):
        """Third-person heavy lyrics lean toward storytelling."""
        purpose = detect_song_purpose("She walked home and they followed her")

        assert purpose.primary == "storytelling"
        assert purpose.scores["fictional_narrative"] == 3

    def test_no_signals_ties_to_last_category(self):
        """With every category at zero, the last declared one wins."""
        purpose = detect_song_purpose("la la la")

        assert purpose.primary == "personal_experience"
        assert purpose.score == 0
        assert purpose.confidence == "low"
