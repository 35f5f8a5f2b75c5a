"""General-purpose numeric helpers shared by the estimators and scorers."""

import math


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into the closed range [low, high]."""
    return max(low, min(high, value))


def clamp_score(value: float) -> int:
    """Round and clamp a raw score into the 0-100 integer range.

    Examples:
        >>> clamp_score(104.6)
        100
        >>> clamp_score(-3)
        0
        >>> clamp_score(41.5)
        42
    """
    return int(round_half_up(clamp(value, 0.0, 100.0)))


def round_half_up(value: float) -> int:
    """Round halves up (``2.5 -> 3``); the built-in ``round`` rounds halves to even."""
    return int(math.floor(value + 0.5))


def safe_log10(value: float, minimum: float = 1.0) -> float:
    """log10 of ``max(value, minimum)`` so zero or negative volumes never raise."""
    return math.log10(max(value, minimum))


def format_number(n: int | float) -> str:
    """Format a number with human-readable suffixes.

    Examples:
        >>> format_number(1500)
        '1.5K'
        >>> format_number(999)
        '999'
    """
    abs_n = abs(n)
    sign = "-" if n < 0 else ""
    if abs_n >= 1_000_000:
        return f"{sign}{abs_n / 1_000_000:.1f}M"
    if abs_n >= 1_000:
        return f"{sign}{abs_n / 1_000:.1f}K"
    if isinstance(n, float):
        return f"{sign}{abs_n:.1f}"
    return f"{sign}{abs_n}"
