"""Intent classifier -- assigns one searcher-intent category per keyword."""

from dataclasses import dataclass
from enum import Enum

from radar.utils.text_processing import contains_any


class Intent(str, Enum):
    COMMERCIAL = "commercial"
    INFORMATIONAL = "informational"
    LOCAL = "local"
    NAVIGATIONAL = "navigational"


@dataclass(frozen=True)
class IntentRule:
    """Trigger substrings for one intent; rules are evaluated in table order."""

    intent: Intent
    signals: tuple[str, ...]

    def matches(self, lc: str) -> bool:
        return contains_any(lc, self.signals)


LOCAL_SIGNALS: tuple[str, ...] = (
    "near me", "near", "nearby", "close to", "around",
    "open now", "open late", "open early", "open today",
    "downtown", "south austin", "north austin", "east austin", "west austin",
    "south congress", "rainey", "6th street", "zilker", "mueller", "domain",
    "cedar park", "round rock", "pflugerville", "south lamar",
    "north loop", "east side", "west lake", "barton", "great hills",
    "in austin",
    "with a view", "on the lake", "on the water", "on the river",
    "on lake travis", "on lake austin", "on lady bird",
    "waterfront", "lakeside", "rooftop",
    "map", "directions", "location", "where",
    "reservations", "walk in", "takeout", "delivery",
    "for large groups", "for groups", "for families", "for kids",
    "dog friendly", "kid friendly", "pet friendly",
    "outdoor seating", "outdoor dining", "patio",
    "date night", "romantic",
)

COMMERCIAL_SIGNALS: tuple[str, ...] = (
    "best", "top", "review", "cheap", "affordable", "price", "cost",
    "compare", "vs", "buy", "deal", "discount", "worth", "recommend",
    "favorite", "popular", "rated", "premium", "luxury",
)

NAVIGATIONAL_SIGNALS: tuple[str, ...] = (
    "atx-apps", "website", "app", "schedule",
    "address", "phone", "contact", "book",
)

INFORMATIONAL_SIGNALS: tuple[str, ...] = (
    "how to", "what is", "when is", "why", "guide",
    "tips", "history", "meaning", "definition", "explained",
    "tutorial", "learn", "facts", "information",
)

# Order is significant: local and commercial are the most specific signals.
INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(Intent.LOCAL, LOCAL_SIGNALS),
    IntentRule(Intent.COMMERCIAL, COMMERCIAL_SIGNALS),
    IntentRule(Intent.NAVIGATIONAL, NAVIGATIONAL_SIGNALS),
    IntentRule(Intent.INFORMATIONAL, INFORMATIONAL_SIGNALS),
)

DEFAULT_INTENT = Intent.INFORMATIONAL


def classify_intent(keyword: str) -> Intent:
    """Return the intent of the first rule with a matching signal."""
    lc = keyword.lower()
    for rule in INTENT_RULES:
        if rule.matches(lc):
            return rule.intent
    return DEFAULT_INTENT
