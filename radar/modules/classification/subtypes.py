"""Subtype tagger -- structural tags describing what kind of page answers a query."""

import re
from dataclasses import dataclass
from enum import Enum


class Subtype(str, Enum):
    MENU = "MENU"
    PHONE = "PHONE"
    JOB = "JOB"
    PDF = "PDF"
    HOURS = "HOURS"
    GUIDE = "GUIDE"
    MAP = "MAP"
    EVENT = "EVENT"
    SEASONAL = "SEASONAL"
    NEAR_ME = "NEAR_ME"


@dataclass(frozen=True)
class SubtypeRule:
    subtype: Subtype
    patterns: tuple[re.Pattern, ...]

    def matches(self, lc: str) -> bool:
        return any(p.search(lc) for p in self.patterns)


def _rule(subtype: Subtype, *patterns: str) -> SubtypeRule:
    return SubtypeRule(subtype, tuple(re.compile(p) for p in patterns))


SUBTYPE_RULES: tuple[SubtypeRule, ...] = (
    _rule(Subtype.MENU, r"\bmenu\b", r"\bprices?\b", r"\bwhat to order\b", r"\bfood list\b"),
    _rule(Subtype.PHONE, r"\bphone\s*(?:number)?\b", r"\bcall\b", r"\bcontact\s*(?:info|number|us)?\b"),
    _rule(Subtype.JOB, r"\bjobs?\b", r"\bhiring\b", r"\bcareers?\b", r"\bemployment\b", r"\bsalary\b"),
    _rule(Subtype.PDF, r"\bpdf\b", r"\bdownload\b", r"\bprintable\b", r"\bbrochure\b"),
    _rule(
        Subtype.HOURS,
        r"\bhours?\b", r"\bopen(?:ing)?\s*(?:times?|hours?)?\b", r"\bclose(?:d|s|ing)?\b", r"\bschedule\b",
    ),
    _rule(
        Subtype.GUIDE,
        r"\bguide\b", r"\btips?\b", r"\bhow to\b", r"\bcomplete\s+guide\b", r"\bultimate\b", r"\bbeginners?\b",
    ),
    _rule(Subtype.MAP, r"\bmap\b", r"\blocation(?:s)?\b", r"\bdirections?\b", r"\bwhere (?:is|are|to)\b"),
    _rule(
        Subtype.EVENT,
        r"\bevent(?:s)?\b", r"\bfestival(?:s)?\b", r"\bconcert(?:s)?\b", r"\bshow(?:s)?\b",
        r"\bticket(?:s)?\b", r"\btonight\b", r"\bupcoming\b",
    ),
    _rule(
        Subtype.SEASONAL,
        r"\bspring\b", r"\bsummer\b", r"\bfall\b", r"\bwinter\b", r"\bchristmas\b", r"\bhalloween\b",
        r"\bthanksgiving\b", r"\bnew year\b", r"\bseason(?:al)?\b", r"\bholiday(?:s)?\b",
        r"\bbluebon+et(?:s)?\b", r"\bpollen\b",
    ),
    _rule(Subtype.NEAR_ME, r"\bnear me\b", r"\bnearby\b", r"\baround (?:me|here)\b", r"\bclose (?:to|by)\b"),
)


def tag_subtypes(keyword: str) -> frozenset[Subtype]:
    """Return every subtype whose patterns match; the empty set is a valid result."""
    lc = keyword.lower()
    return frozenset(rule.subtype for rule in SUBTYPE_RULES if rule.matches(lc))
