"""Full classification and scoring pass for a single keyword."""

import logging
from dataclasses import dataclass
from typing import Optional

from radar.modules.classification.coverage import CoverageMatch, match_to_existing_content
from radar.modules.classification.difficulty import (
    DifficultyValidation,
    estimate_difficulty,
    validate_difficulty,
)
from radar.modules.classification.geo import is_in_scope
from radar.modules.classification.intent import Intent, classify_intent
from radar.modules.classification.seasonality import seasonality_boost
from radar.modules.classification.subtypes import Subtype, tag_subtypes
from radar.modules.scoring.scorer import (
    compute_composite_score,
    compute_opportunity_score,
    compute_strategic_score,
    normalize_volume,
)

logger = logging.getLogger(__name__)

DEFAULT_TREND_SCORE = 50
DEFAULT_RISING_SCORE = 30


@dataclass
class KeywordAssessment:
    """Everything the radar knows about a keyword before it is stored."""

    keyword: str
    bucket: str
    monthly_volume: int
    in_scope: bool
    intent: Intent
    subtypes: frozenset[Subtype]
    validation: DifficultyValidation
    seasonality: float
    coverage: Optional[CoverageMatch]
    composite_score: int
    strategic_score: int
    opportunity_score: int

    @property
    def difficulty(self) -> int:
        return self.validation.difficulty

    @property
    def is_covered(self) -> bool:
        return self.coverage is not None

    def to_record(self) -> dict:
        """Column values for a new ``Keyword`` row."""
        return {
            "keyword": self.keyword,
            "bucket": self.bucket,
            "monthly_volume": self.monthly_volume,
            "intent": self.intent.value,
            "subtypes": sorted(s.value for s in self.subtypes),
            "difficulty": self.validation.difficulty,
            "difficulty_source": self.validation.source.value,
            "difficulty_confidence": self.validation.confidence.value,
            "difficulty_anomaly": self.validation.anomaly,
            "composite_score": self.composite_score,
            "strategic_score": self.strategic_score,
            "opportunity_score": self.opportunity_score,
            "matched_app": self.coverage.app if self.coverage else None,
            "matched_url": self.coverage.url if self.coverage else None,
        }


def assess_keyword(
    keyword: str,
    volume: int,
    bucket: str,
    month: Optional[int] = None,
    trend_score: float = DEFAULT_TREND_SCORE,
    rising_score: float = DEFAULT_RISING_SCORE,
) -> KeywordAssessment:
    """Classify and score ``keyword`` (already normalised) in one pass."""
    volume = max(0, int(volume))
    in_scope = is_in_scope(keyword)
    intent = classify_intent(keyword)
    subtypes = tag_subtypes(keyword)
    validation = validate_difficulty(keyword, estimate_difficulty(keyword, volume, intent), volume)
    seasonality = seasonality_boost(keyword, month)
    coverage = match_to_existing_content(keyword)

    assessment = KeywordAssessment(
        keyword=keyword,
        bucket=bucket,
        monthly_volume=volume,
        in_scope=in_scope,
        intent=intent,
        subtypes=subtypes,
        validation=validation,
        seasonality=seasonality,
        coverage=coverage,
        composite_score=compute_composite_score(normalize_volume(volume), trend_score, rising_score),
        strategic_score=compute_strategic_score(
            keyword, volume, validation.difficulty, subtypes, bucket, in_scope=in_scope,
        ),
        opportunity_score=compute_opportunity_score(
            volume, validation.difficulty, seasonality, is_covered=coverage is not None,
        ),
    )
    logger.debug(
        "Assessed %r: intent=%s difficulty=%d strategic=%d opportunity=%d",
        keyword, intent.value, validation.difficulty,
        assessment.strategic_score, assessment.opportunity_score,
    )
    return assessment
