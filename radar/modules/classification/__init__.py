"""Classification module -- pure, deterministic keyword classifiers."""

from radar.modules.classification.geo import is_in_scope
from radar.modules.classification.intent import Intent, classify_intent
from radar.modules.classification.difficulty import (
    Confidence,
    DifficultyAnomaly,
    DifficultySource,
    DifficultyValidation,
    estimate_difficulty,
    validate_difficulty,
)
from radar.modules.classification.subtypes import Subtype, tag_subtypes
from radar.modules.classification.seasonality import seasonality_boost
from radar.modules.classification.coverage import (
    CoverageMatch,
    match_to_existing_content,
    suggest_internal_links,
)

__all__ = [
    "is_in_scope",
    "Intent",
    "classify_intent",
    "Confidence",
    "DifficultyAnomaly",
    "DifficultySource",
    "DifficultyValidation",
    "estimate_difficulty",
    "validate_difficulty",
    "Subtype",
    "tag_subtypes",
    "seasonality_boost",
    "CoverageMatch",
    "match_to_existing_content",
    "suggest_internal_links",
]
