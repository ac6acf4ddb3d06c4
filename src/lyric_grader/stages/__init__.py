"""Analysis stages for Lyric Grader."""

from lyric_grader.stages.classify import ClassifyStage
from lyric_grader.stages.dimensions import DimensionsStage
from lyric_grader.stages.feedback import FeedbackStage
from lyric_grader.stages.preprocess import PreprocessStage
from lyric_grader.stages.recommendations import RecommendationsStage
from lyric_grader.stages.scoring import ScoringStage

__all__ = [
    "ClassifyStage",
    "DimensionsStage",
    "FeedbackStage",
    "PreprocessStage",
    "RecommendationsStage",
    "ScoringStage",
]
