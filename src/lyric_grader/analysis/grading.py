"""Weighted scoring and letter grades."""

from typing import Mapping

from lyric_grader.analysis.tables import (
    GENERAL_WEIGHTS,
    GRADE_THRESHOLDS,
    RAP_WEIGHTS,
    SCORE_SCALE,
    DimensionWeights,
)
from lyric_grader.models.analysis import AnalysisProfile, DimensionScore


def weights_for(profile: AnalysisProfile) -> Mapping[str, DimensionWeights]:
    """Weight table for a grading profile."""
    return RAP_WEIGHTS if profile is AnalysisProfile.RAP else GENERAL_WEIGHTS


def score_dimension(
    name: str,
    subscores: dict[str, float],
    weights: DimensionWeights,
) -> DimensionScore:
    """Combine 0-100 sub-scores into a dimension score with the given sub-weights."""
    value = sum(subscores[key] * weight for key, weight in weights.subcriteria.items())
    return DimensionScore(name=name, value=value, subscores=dict(subscores))


def calculate_overall_score(
    breakdown: Mapping[str, DimensionScore],
    profile: AnalysisProfile,
) -> float:
    """Weighted sum of dimension values, scaled by SCORE_SCALE.

    Raises:
        KeyError: If the breakdown lacks a dimension of the profile.
    """
    table = weights_for(profile)
    total = sum(breakdown[name].value * dimension.weight for name, dimension in table.items())
    return total * SCORE_SCALE


def grade_for_score(score: float) -> str:
    """Letter grade for a score. Thresholds are inclusive: 90 is an A."""
    for grade, threshold in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"
