"""Keyword scorer -- composite, strategic, and opportunity scores.

All three scores are integers in [0, 100] and are computed independently
of one another:

* **composite** blends normalised volume with trend signals;
* **strategic** measures how good a content investment a keyword is for
  this site (geo gate, subtype fit, local intent, head-term penalty,
  bucket weight);
* **opportunity** measures how easy and timely a keyword is to capture
  right now (difficulty, seasonality, coverage gap).
"""

import math
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from radar.modules.classification.geo import is_in_scope
from radar.modules.classification.subtypes import Subtype
from radar.utils.helpers import clamp, clamp_score, round_half_up

SCORING_MODEL_VERSION = "v4-2026-02-13"

# Composite weights: volume, trend, rising.
COMPOSITE_WEIGHTS = (0.5, 0.3, 0.2)
VOLUME_CEILING = 100_000

GEO_MULTIPLIER = 1.25
HARD_DIFFICULTY_THRESHOLD = 60
HARD_DIFFICULTY_EXPONENT = 1.5
MIN_COMBINED_MULTIPLIER = 0.1
DEFAULT_BUCKET_WEIGHT = 1.0
GAP_MULTIPLIER = 1.5

BUCKET_WEIGHTS: dict[str, float] = {
    "food": 0.80,
    "outdoors": 1.10,
    "places": 1.05,
    "events": 1.00,
    "neighborhoods": 1.10,
    "housing": 0.90,
    "weather": 1.05,
}

SUBTYPE_ADJUSTMENTS: dict[Subtype, float] = {
    Subtype.GUIDE: 0.25,
    Subtype.MAP: 0.25,
    Subtype.SEASONAL: 0.20,
    Subtype.EVENT: 0.15,
    Subtype.NEAR_ME: 0.15,
    Subtype.MENU: -0.40,
    Subtype.PHONE: -0.40,
    Subtype.JOB: -0.30,
    Subtype.PDF: -0.25,
    Subtype.HOURS: -0.10,
}


@dataclass(frozen=True)
class LocalIntentSignal:
    """A local-intent phrase worth ``boost``.

    ``consumed_by`` lists more specific signals that, once matched,
    suppress this one. Parents must precede their children in
    ``LOCAL_INTENT_SIGNALS``.
    """

    id: str
    pattern: re.Pattern
    boost: float
    consumed_by: tuple[str, ...] = ()


def _signal(signal_id: str, pattern: str, boost: float, consumed_by: tuple[str, ...] = ()) -> LocalIntentSignal:
    return LocalIntentSignal(signal_id, re.compile(pattern), boost, consumed_by)


LOCAL_INTENT_SIGNALS: tuple[LocalIntentSignal, ...] = (
    _signal("near_me", r"\bnear me\b", 0.25),
    _signal("open_now", r"\bopen now\b", 0.20),
    _signal("open_late", r"\bopen late\b", 0.15),
    _signal("open_today", r"\bopen today\b", 0.15),
    _signal("happy_hour", r"\bhappy hour\b", 0.15),
    _signal("this_weekend", r"\bthis weekend\b", 0.15),
    _signal("date_night", r"\bdate night\b", 0.10),
    _signal("late_night", r"\blate night\b", 0.10),
    _signal("with_view", r"\bwith a view\b", 0.10),
    _signal("on_lake", r"\bon the (?:lake|water|river)\b", 0.10),
    _signal("walk_in", r"\bwalk[ -]?in\b", 0.10),
    _signal("reservations", r"\breservations?\b", 0.15),
    _signal("tonight", r"\btonight\b", 0.15),
    _signal("hours", r"\bhours?\b", 0.10, ("happy_hour", "open_now", "open_late", "open_today")),
    _signal("takeout", r"\btakeout\b", 0.10),
    _signal("delivery", r"\bdelivery\b", 0.10),
    _signal("rooftop", r"\brooftop\b", 0.10),
    _signal("patio", r"\bpatio\b", 0.10),
    _signal("outdoor", r"\boutdoor\b", 0.10),
    _signal("downtown", r"\bdowntown\b", 0.05),
    _signal("near", r"\bnear\b", 0.05, ("near_me",)),
)
LOCAL_INTENT_CAP = 0.45

HEAD_TERMS: tuple[str, ...] = (
    "austin restaurants", "austin weather", "austin bbq",
    "austin tacos", "austin bars", "austin food",
    "austin things to do", "austin hotels",
    "austin coffee", "austin pizza", "austin brunch",
    "austin nightlife", "austin parks", "austin hiking",
    "austin apartments", "austin rent", "austin live music",
    "austin sushi", "austin breweries", "austin food trucks",
)

HEAD_TERM_MODIFIERS: tuple[re.Pattern, ...] = tuple(re.compile(p) for p in (
    r"\bnear\b", r"\bin\b", r"\bon\b", r"\bat\b",
    r"\bsouth\b", r"\bnorth\b", r"\beast\b", r"\bwest\b", r"\bdowntown\b",
    r"\blake\b", r"\bbarton\b", r"\bzilker\b", r"\bdomain\b", r"\brainey\b",
    r"\bcongress\b", r"\blamar\b", r"\bmanor\b", r"\bmueller\b",
    r"\bround rock\b", r"\bcedar park\b", r"\bpflugerville\b",
    r"\bnear me\b", r"\bopen (?:now|late|early|today)\b",
    r"\bwith (?:a |)view\b", r"\bon the (?:lake|water|river)\b",
    r"\bdog[ -]?friendly\b", r"\bkid[ -]?friendly\b", r"\bpet[ -]?friendly\b",
    r"\brooftop\b", r"\boutdoor(?:\s+(?:seating|dining|patio))?\b", r"\bpatio\b",
    r"\bcheap\b", r"\baffordable\b", r"\bbest\b", r"\btop\b",
    r"\bhidden gem\b", r"\bunderrated\b", r"\bnew\b",
    r"\bfamily\b", r"\bromantic\b", r"\bdate night\b", r"\blate night\b",
    r"\bguide\b", r"\btips\b", r"\bhow to\b", r"\bbeginner\b",
    r"\bfor (?:large |)groups?\b", r"\bfor (?:families|kids|couples)\b",
    r"\bindian\b", r"\bmexican\b", r"\bitalian\b", r"\bchinese\b",
    r"\bkorean\b", r"\bthai\b", r"\bjapanese\b", r"\bvietnamese\b",
    r"\bmediterranean\b", r"\bfrench\b", r"\bgreek\b", r"\bethiopian\b",
    r"\bcajun\b", r"\bsouthern\b", r"\basian\b", r"\bvegan\b", r"\bvegetarian\b",
    r"\bgluten free\b", r"\bhealthy\b",
    r"\bthanksgiving\b", r"\bchristmas\b", r"\bnew year\b", r"\bweekend\b",
    r"\btonight\b", r"\bthis weekend\b", r"\bhalloween\b",
    r"\breservations?\b", r"\bwalk[ -]?in\b",
    r"\btakeout\b", r"\bdelivery\b", r"\bbrunch\b", r"\blunch\b", r"\bdinner\b",
    r"\breddit\b", r"\byelp\b",
))
HEAD_TERM_PENALTY = 0.30

_HEAD_TERM_FORMS = frozenset(HEAD_TERMS) | frozenset(t.removeprefix("austin ") for t in HEAD_TERMS)


# ----------------------------------------------------------------------
# Shared normalisations
# ----------------------------------------------------------------------

def normalize_volume(raw_volume: float) -> int:
    """Map a raw monthly volume onto 0-100 on a log scale (100k -> 100).

    Examples:
        >>> normalize_volume(0)
        0
        >>> normalize_volume(1000)
        60
        >>> normalize_volume(1_000_000)
        100
    """
    if raw_volume <= 0:
        return 0
    return clamp_score(math.log10(raw_volume) / math.log10(VOLUME_CEILING) * 100)


def volume_norm(volume: float) -> int:
    """Volume scale used by the strategic and opportunity scores."""
    return min(100, round_half_up(math.log10(max(volume, 1) + 1) * 22))


def compute_composite_score(normalized_volume: float, trend_score: float, rising_score: float) -> int:
    """Weighted blend of normalised volume, trend, and rising-query signals."""
    w_volume, w_trend, w_rising = COMPOSITE_WEIGHTS
    return clamp_score(normalized_volume * w_volume + trend_score * w_trend + rising_score * w_rising)


# ----------------------------------------------------------------------
# Strategic score components
# ----------------------------------------------------------------------

def difficulty_factor(difficulty: float) -> float:
    """Linear ease factor, sharpened for hard keywords."""
    linear = 1 - clamp(difficulty, 0, 100) / 100
    if difficulty > HARD_DIFFICULTY_THRESHOLD:
        return linear ** HARD_DIFFICULTY_EXPONENT
    return linear


def subtype_fit(subtypes: Iterable[Subtype | str]) -> float:
    """Sum the per-subtype adjustments; unknown tags count as zero."""
    total = 0.0
    for subtype in subtypes:
        try:
            total += SUBTYPE_ADJUSTMENTS.get(Subtype(subtype), 0.0)
        except ValueError:
            continue
    return total


def matched_local_signals(keyword: str) -> list[str]:
    """Ids of the local-intent signals that count toward the boost."""
    lc = keyword.lower()
    matched: list[str] = []
    for signal in LOCAL_INTENT_SIGNALS:
        if any(parent in matched for parent in signal.consumed_by):
            continue
        if signal.pattern.search(lc):
            matched.append(signal.id)
    return matched


def compute_local_boost(keyword: str) -> float:
    """Summed local-intent boost, capped at ``LOCAL_INTENT_CAP``."""
    by_id = {signal.id: signal for signal in LOCAL_INTENT_SIGNALS}
    total = sum(by_id[signal_id].boost for signal_id in matched_local_signals(keyword))
    return min(total, LOCAL_INTENT_CAP)


def is_head_term(keyword: str) -> bool:
    """True for a bare head phrase, with or without the leading city name."""
    return keyword.strip().lower() in _HEAD_TERM_FORMS


def head_term_penalty(keyword: str) -> float:
    """Penalty for chasing an unmodified head term; long-tail variants are exempt."""
    lc = keyword.strip().lower()
    if lc not in _HEAD_TERM_FORMS:
        return 0.0
    if any(modifier.search(lc) for modifier in HEAD_TERM_MODIFIERS):
        return 0.0
    return HEAD_TERM_PENALTY


def bucket_weight(bucket: Optional[str]) -> float:
    return BUCKET_WEIGHTS.get(bucket or "", DEFAULT_BUCKET_WEIGHT)


def compute_strategic_score(
    keyword: str,
    volume: float,
    difficulty: float,
    subtypes: Iterable[Subtype | str] = (),
    bucket: Optional[str] = None,
    in_scope: Optional[bool] = None,
) -> int:
    """Score a keyword as a content investment for this site.

    Args:
        keyword: The keyword phrase.
        volume: Monthly search volume (negative or zero is treated as 1).
        difficulty: Ranking difficulty 0-100.
        subtypes: Subtype tags for the keyword.
        bucket: Topical bucket; unknown buckets weigh 1.0.
        in_scope: Precomputed geo-filter result; computed when omitted.

    Returns:
        0 for keywords outside the target geography, otherwise an
        integer in [1, 100].
    """
    if in_scope is None:
        in_scope = is_in_scope(keyword)
    if not in_scope:
        return 0

    base = volume_norm(volume) * difficulty_factor(difficulty)
    combined = max(
        MIN_COMBINED_MULTIPLIER,
        1.0 + subtype_fit(subtypes) + compute_local_boost(keyword) - head_term_penalty(keyword),
    )
    raw = base * combined * GEO_MULTIPLIER * bucket_weight(bucket)
    # In-scope keywords keep a positive score so that 0 always means "out of scope".
    return max(1, clamp_score(raw))


# ----------------------------------------------------------------------
# Opportunity score
# ----------------------------------------------------------------------

def compute_opportunity_score(
    volume: float,
    difficulty: float,
    seasonality: float = 1.0,
    is_covered: bool = False,
) -> int:
    """Score how easy and timely a keyword is to capture right now."""
    ease = 1 - clamp(difficulty, 0, 100) / 100
    gap = 1.0 if is_covered else GAP_MULTIPLIER
    return clamp_score(volume_norm(volume) * ease * max(seasonality, 0.0) * gap)
