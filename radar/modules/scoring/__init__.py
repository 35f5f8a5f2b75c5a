"""Scoring module -- composite, strategic, and opportunity scores."""

from radar.modules.scoring.scorer import (
    SCORING_MODEL_VERSION,
    compute_composite_score,
    compute_local_boost,
    compute_opportunity_score,
    compute_strategic_score,
    normalize_volume,
)
from radar.modules.scoring.assessment import KeywordAssessment, assess_keyword

__all__ = [
    "SCORING_MODEL_VERSION",
    "compute_composite_score",
    "compute_local_boost",
    "compute_opportunity_score",
    "compute_strategic_score",
    "normalize_volume",
    "KeywordAssessment",
    "assess_keyword",
]
