"""Difficulty estimator and validator.

The estimator derives a 0-100 ranking-difficulty guess from volume,
intent, phrase length, and qualifying modifiers. The validator then
sanity-checks estimated values: implausibly low numbers are lifted to a
floor and the correction is recorded as a structured anomaly so it can be
audited later. API-sourced values are trusted as-is.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from radar.modules.classification.intent import Intent
from radar.utils.helpers import clamp, round_half_up, safe_log10
from radar.utils.text_processing import count_contained, count_words, first_contained

logger = logging.getLogger(__name__)

MIN_DIFFICULTY = 5
MAX_DIFFICULTY = 95
BASE_CAP = 85

DIFFICULTY_FLOOR = 35
SUSPICIOUS_DIFFICULTY = 15
SUSPICIOUS_VOLUME = 100


class DifficultySource(str, Enum):
    ESTIMATED = "estimated"
    API = "api"


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# (intent, delta, bound); positive deltas are capped, negative ones floored.
INTENT_ADJUSTMENTS: dict[Intent, tuple[int, int]] = {
    Intent.COMMERCIAL: (12, 95),
    Intent.LOCAL: (-15, 10),
    Intent.NAVIGATIONAL: (-20, 5),
}

# (minimum word count, discount) applied cumulatively.
WORD_COUNT_DISCOUNTS: tuple[tuple[int, int], ...] = (
    (3, 8),
    (4, 10),
    (5, 8),
    (6, 5),
)

MODIFIER_DISCOUNT_SIGNALS: tuple[str, ...] = (
    "indian", "mexican", "italian", "chinese", "korean", "thai",
    "japanese", "vietnamese", "mediterranean", "french", "greek",
    "ethiopian", "persian", "cajun", "southern", "asian",
    "vegan", "vegetarian", "gluten free", "healthy",
    "bbq", "sushi", "ramen", "tacos", "pizza", "burger",
    "seafood", "steak", "brunch", "breakfast", "lunch", "dinner",
    "for families", "for kids", "for groups", "for large groups",
    "dog friendly", "kid friendly", "pet friendly",
    "with a view", "on the lake", "on the water", "rooftop",
    "outdoor", "patio", "romantic", "date night", "late night",
    "on thanksgiving", "on christmas", "new year", "weekend",
    "tonight", "this weekend", "open late", "open now",
)
FIRST_MODIFIER_DISCOUNT = 10
EXTRA_MODIFIER_DISCOUNT = 5

COMPETITIVE_MODIFIERS: tuple[str, ...] = (
    "restaurants", "best", "downtown", "lake", "brunch", "bbq", "tacos",
    "bars", "hotels", "apartments", "coffee", "pizza", "sushi",
    "nightlife", "food trucks", "breweries", "steakhouse", "rooftop bar",
    "happy hour", "date night", "things to do",
)


def estimate_difficulty(keyword: str, volume: int, intent: Intent) -> int:
    """Estimate ranking difficulty in [5, 95]."""
    diff = min(BASE_CAP, round_half_up(safe_log10(volume, 10) * 15))

    adjustment = INTENT_ADJUSTMENTS.get(Intent(intent))
    if adjustment is not None:
        delta, bound = adjustment
        diff = min(bound, diff + delta) if delta > 0 else max(bound, diff + delta)

    words = count_words(keyword)
    for threshold, discount in WORD_COUNT_DISCOUNTS:
        if words >= threshold:
            diff = max(MIN_DIFFICULTY, diff - discount)

    modifiers = count_contained(keyword.lower(), MODIFIER_DISCOUNT_SIGNALS)
    if modifiers >= 1:
        diff = max(MIN_DIFFICULTY, diff - FIRST_MODIFIER_DISCOUNT)
    if modifiers >= 2:
        diff = max(MIN_DIFFICULTY, diff - EXTRA_MODIFIER_DISCOUNT)

    return int(clamp(diff, MIN_DIFFICULTY, MAX_DIFFICULTY))


@dataclass(frozen=True)
class DifficultyAnomaly:
    """One validator trigger: a stable id for tests plus the audit text."""

    trigger: str
    message: str


@dataclass(frozen=True)
class DifficultyValidation:
    difficulty: int
    source: DifficultySource
    confidence: Confidence
    anomalies: tuple[DifficultyAnomaly, ...] = field(default_factory=tuple)

    @property
    def triggers(self) -> tuple[str, ...]:
        return tuple(a.trigger for a in self.anomalies)

    @property
    def anomaly(self) -> Optional[str]:
        """Rendered form stored in ``difficulty_anomaly``."""
        if not self.anomalies:
            return None
        return "; ".join(a.message for a in self.anomalies)


def expected_band(volume: int) -> tuple[int, int]:
    """Plausible difficulty range for a given volume."""
    expected_min = max(10, round_half_up(safe_log10(volume, 10) * 8))
    expected_max = min(MAX_DIFFICULTY, expected_min + 40)
    return expected_min, expected_max


def validate_difficulty(
    keyword: str,
    raw_difficulty: int,
    volume: int,
    source: DifficultySource | str = DifficultySource.ESTIMATED,
) -> DifficultyValidation:
    """Flag and correct implausible difficulty estimates."""
    source = DifficultySource(source)
    if source is DifficultySource.API:
        return DifficultyValidation(
            difficulty=int(raw_difficulty),
            source=source,
            confidence=Confidence.HIGH,
        )

    lc = keyword.lower()
    corrected = int(raw_difficulty)
    anomalies: list[DifficultyAnomaly] = []

    if raw_difficulty < SUSPICIOUS_DIFFICULTY and volume > SUSPICIOUS_VOLUME:
        corrected = max(corrected, DIFFICULTY_FLOOR)
        anomalies.append(DifficultyAnomaly(
            trigger="volume_floor",
            message=(
                f"floor {DIFFICULTY_FLOOR} enforced: vol={volume} too high "
                f"for difficulty<{SUSPICIOUS_DIFFICULTY}"
            ),
        ))

    # At or below the floor: re-validating a floored value yields the same record.
    competitive = first_contained(lc, COMPETITIVE_MODIFIERS)
    if competitive is not None and raw_difficulty <= DIFFICULTY_FLOOR:
        corrected = max(corrected, DIFFICULTY_FLOOR)
        anomalies.append(DifficultyAnomaly(
            trigger="competitive_modifier",
            message=f'floor {DIFFICULTY_FLOOR} enforced: competitive modifier "{competitive}"',
        ))

    if anomalies:
        logger.debug(
            "Difficulty corrected for %r: %d -> %d (%s)",
            keyword, raw_difficulty, corrected, ", ".join(a.trigger for a in anomalies),
        )
        confidence = Confidence.LOW
    else:
        low, high = expected_band(volume)
        confidence = Confidence.HIGH if low <= corrected <= high else Confidence.MEDIUM

    return DifficultyValidation(
        difficulty=int(clamp(corrected, 0, 100)),
        source=source,
        confidence=confidence,
        anomalies=tuple(anomalies),
    )
