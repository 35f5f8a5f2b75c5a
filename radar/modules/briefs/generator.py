"""Content brief generator -- advisory title, meta, outline, and links for a keyword."""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from radar.modules.classification.coverage import (
    CoverageMatch,
    match_to_existing_content,
    suggest_internal_links,
)
from radar.modules.classification.subtypes import Subtype, tag_subtypes
from radar.utils.text_processing import title_case

logger = logging.getLogger(__name__)

# (subtype, heading, prompt) in outline order.
OUTLINE_SECTIONS: tuple[tuple[Subtype, str, str], ...] = (
    (Subtype.GUIDE, "Getting Started", "Practical tips and recommendations."),
    (Subtype.MAP, "Map & Locations", "Interactive map of relevant spots."),
    (Subtype.EVENT, "Schedule & Details", "Dates, times, and logistics."),
    (Subtype.SEASONAL, "Best Time to Visit", "Seasonal timing and what to expect."),
)


@dataclass
class ContentBrief:
    keyword: str
    suggested_title: str
    meta_description: str
    outline: str
    internal_links: list[str]
    coverage: Optional[CoverageMatch] = None
    subtypes: list[str] = field(default_factory=list)
    difficulty: Optional[int] = None
    strategic_score: Optional[int] = None
    monthly_volume: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "keyword": self.keyword,
            "suggested_title": self.suggested_title,
            "meta_description": self.meta_description,
            "outline": self.outline,
            "internal_links": list(self.internal_links),
            "coverage": (
                {"app": self.coverage.app, "domain": self.coverage.domain, "url": self.coverage.url}
                if self.coverage else None
            ),
            "subtypes": list(self.subtypes),
            "difficulty": self.difficulty,
            "strategic_score": self.strategic_score,
            "monthly_volume": self.monthly_volume,
        }


def _record_subtypes(record: Mapping[str, Any], keyword: str) -> set[Subtype]:
    stored = record.get("subtypes")
    if stored is None:
        return set(tag_subtypes(keyword))
    result = set()
    for name in stored:
        try:
            result.add(Subtype(name))
        except ValueError:
            logger.debug("Ignoring unknown subtype %r on %r", name, keyword)
    return result


def build_title(keyword: str, subtypes: set[Subtype], year: int) -> str:
    """Title by subtype priority: seasonal, then map, then event, else a guide."""
    title_kw = title_case(keyword)
    if Subtype.SEASONAL in subtypes:
        return f"{title_kw}: {year} Season Guide"
    if Subtype.MAP in subtypes:
        return f"{title_kw}: Map & Locations"
    if Subtype.EVENT in subtypes:
        return f"{title_kw}: What to Know in {year}"
    return f"{title_kw}: {year} Guide"


def build_outline(keyword: str, title: str, subtypes: set[Subtype], links: list[str]) -> str:
    lines = [f"# {title}", "", "## Overview", f"Introduce {keyword} for visitors and locals.", ""]
    for subtype, heading, prompt in OUTLINE_SECTIONS:
        if subtype in subtypes:
            lines.extend([f"## {heading}", prompt, ""])
    lines.extend(["## Tips from Locals", "Insider knowledge and hidden gems.", "", "## Related"])
    lines.extend(f"- [{link}]({link})" for link in links)
    return "\n".join(lines)


def generate_brief(record: Mapping[str, Any], today: Optional[date] = None) -> ContentBrief:
    """Generate an advisory content brief from a keyword record.

    Args:
        record: Mapping with at least ``keyword``; ``subtypes``,
            ``matched_app``, ``difficulty``, ``strategic_score`` and
            ``monthly_volume`` are used when present (``Keyword.to_dict()``
            fits).
        today: Date used for the year in titles; defaults to today.

    Returns:
        A ``ContentBrief``. Nothing is persisted here.
    """
    keyword = record["keyword"]
    year = (today or date.today()).year
    subtypes = _record_subtypes(record, keyword)
    links = suggest_internal_links(keyword, exclude_app=record.get("matched_app"))
    title = build_title(keyword, subtypes, year)

    return ContentBrief(
        keyword=keyword,
        suggested_title=title,
        meta_description=(
            f"Everything you need to know about {keyword}. "
            f"Updated for {year} with local tips and insider details."
        ),
        outline=build_outline(keyword, title, subtypes, links),
        internal_links=links,
        coverage=match_to_existing_content(keyword),
        subtypes=sorted(s.value for s in subtypes),
        difficulty=record.get("difficulty"),
        strategic_score=record.get("strategic_score"),
        monthly_volume=record.get("monthly_volume"),
    )


class BriefService:
    """Generate a brief for a stored keyword and save its title and links."""

    def __init__(self, store=None):
        from radar.modules.ingestion.store import KeywordStore

        self._store = store or KeywordStore()

    def create_for(self, keyword_id: int, today: Optional[date] = None) -> ContentBrief:
        """Raises ``KeywordNotFoundError`` for an unknown id."""
        row = self._store.get_by_id(keyword_id)
        brief = generate_brief(row.to_dict(), today=today)
        self._store.save_brief(keyword_id, brief.suggested_title, brief.internal_links)
        logger.info("Brief generated for %r: %s", brief.keyword, brief.suggested_title)
        return brief
