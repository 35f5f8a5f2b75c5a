"""Seasonality estimator -- month-of-year relevance multiplier per keyword."""

from datetime import date
from typing import Optional

NEUTRAL_BOOST = 1.0

# First matching fragment wins; index 0 is January.
SEASONAL_CURVES: tuple[tuple[str, tuple[float, ...]], ...] = (
    ("bluebonnet", (0.6, 0.8, 1.4, 1.5, 1.2, 0.6, 0.4, 0.4, 0.4, 0.5, 0.5, 0.5)),
    ("pollen",     (1.3, 1.5, 1.4, 1.0, 0.6, 0.4, 0.3, 0.3, 0.5, 0.8, 1.0, 1.3)),
    ("cedar",      (1.5, 1.4, 1.0, 0.5, 0.3, 0.3, 0.3, 0.3, 0.5, 0.8, 1.2, 1.5)),
    ("swimming",   (0.4, 0.5, 0.7, 1.0, 1.4, 1.5, 1.5, 1.4, 1.0, 0.7, 0.4, 0.3)),
    ("swim",       (0.4, 0.5, 0.7, 1.0, 1.4, 1.5, 1.5, 1.4, 1.0, 0.7, 0.4, 0.3)),
    ("tubing",     (0.3, 0.4, 0.6, 0.9, 1.3, 1.5, 1.5, 1.3, 0.8, 0.5, 0.3, 0.3)),
    ("kayak",      (0.5, 0.6, 0.8, 1.1, 1.3, 1.4, 1.4, 1.3, 1.0, 0.7, 0.5, 0.4)),
    ("crawfish",   (0.5, 0.8, 1.3, 1.5, 1.3, 0.8, 0.4, 0.3, 0.3, 0.3, 0.4, 0.5)),
    ("rodeo",      (0.5, 0.8, 1.5, 1.3, 0.6, 0.4, 0.4, 0.4, 0.5, 0.6, 0.6, 0.5)),
    ("halloween",  (0.3, 0.3, 0.3, 0.3, 0.3, 0.4, 0.6, 0.9, 1.4, 1.5, 0.4, 0.3)),
    ("christmas",  (0.3, 0.3, 0.3, 0.3, 0.3, 0.3, 0.3, 0.4, 0.6, 0.9, 1.4, 1.5)),
    ("brunch",     (1.1, 1.1, 1.2, 1.2, 1.1, 1.0, 0.9, 0.9, 0.9, 1.0, 1.1, 1.1)),
    ("hiking",     (0.7, 0.8, 1.1, 1.3, 1.2, 0.8, 0.6, 0.6, 0.8, 1.2, 1.1, 0.8)),
    ("bat",        (0.3, 0.4, 0.6, 0.9, 1.2, 1.4, 1.5, 1.4, 1.0, 0.7, 0.4, 0.3)),
    ("festival",   (0.6, 0.7, 1.3, 1.2, 1.0, 0.9, 0.7, 0.7, 1.0, 1.3, 0.8, 0.6)),
)


def seasonality_boost(keyword: str, month: Optional[int] = None) -> float:
    """Return the weight for ``month`` (1-12, default: this month) from the first matching curve."""
    if month is None:
        month = date.today().month
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1-12, got {month}")
    lc = keyword.lower()
    for fragment, curve in SEASONAL_CURVES:
        if fragment in lc:
            return curve[month - 1]
    return NEUTRAL_BOOST
