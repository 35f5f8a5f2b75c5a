"""Text processing utilities for keyword phrases."""

import re
from typing import Iterable, Optional

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_keyword(text: str) -> str:
    """Case-fold, trim, and collapse internal whitespace.

    This is the storage form used for the unique ``keyword`` column.

    Examples:
        >>> normalize_keyword("  Best  Tacos   AUSTIN ")
        'best tacos austin'
    """
    return _WHITESPACE_RE.sub(" ", text.strip().lower())


def count_words(text: str) -> int:
    """Count whitespace-separated words.

    Args:
        text: Input text.

    Returns:
        Word count (0 for empty or whitespace-only input).
    """
    return len(text.split())


def contains_any(text: str, fragments: Iterable[str]) -> bool:
    """Return True if any fragment is a substring of ``text``."""
    return any(fragment in text for fragment in fragments)


def first_contained(text: str, fragments: Iterable[str]) -> Optional[str]:
    """Return the first fragment that is a substring of ``text``, or None."""
    for fragment in fragments:
        if fragment in text:
            return fragment
    return None


def count_contained(text: str, fragments: Iterable[str]) -> int:
    """Count how many distinct fragments appear in ``text``."""
    return sum(1 for fragment in fragments if fragment in text)


def title_case(text: str) -> str:
    """Upper-case the first letter of every word, leaving the rest untouched.

    Unlike ``str.title`` this does not lower-case the remainder, so
    tokens such as ``ATX`` or ``6th`` survive.

    Examples:
        >>> title_case("best tacos in atx")
        'Best Tacos In Atx'
        >>> title_case("6th street bars")
        '6th Street Bars'
    """
    return re.sub(r"\b[a-z]", lambda m: m.group(0).upper(), text)
