"""Rule-based lyric analysis: feature extraction, classification, scoring and feedback."""

from lyric_grader.analysis.feedback import generate_feedback
from lyric_grader.analysis.general import GeneralAnalysis, analyze_general
from lyric_grader.analysis.genre import (
    detect_rap_genre,
    detect_song_purpose,
    profile_for_score,
    rap_score,
    select_profile,
)
from lyric_grader.analysis.grading import (
    calculate_overall_score,
    grade_for_score,
    weights_for,
)
from lyric_grader.analysis.rap import RapAnalysis, analyze_rap
from lyric_grader.analysis.recommendations import (
    generate_improvements,
    identify_strengths,
    identify_weaknesses,
)

__all__ = [
    "GeneralAnalysis",
    "RapAnalysis",
    "analyze_general",
    "analyze_rap",
    "calculate_overall_score",
    "detect_rap_genre",
    "detect_song_purpose",
    "generate_feedback",
    "generate_improvements",
    "grade_for_score",
    "identify_strengths",
    "identify_weaknesses",
    "profile_for_score",
    "rap_score",
    "select_profile",
    "weights_for",
]
