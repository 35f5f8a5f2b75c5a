"""Keyword store -- SQLAlchemy-backed persistence for radar keywords."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import String, cast, func, select

from radar.database import check_connection, get_session
from radar.exceptions import KeywordNotFoundError
from radar.models.keyword import Keyword
from radar.utils.text_processing import normalize_keyword

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = (
    "composite_score",
    "strategic_score",
    "opportunity_score",
    "difficulty",
    "monthly_volume",
    "keyword",
    "last_seen",
)
MAX_LIST_LIMIT = 500
MAX_QUEUE_LIMIT = 50
TOP_OPPORTUNITIES = 10


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KeywordStore:
    """Read and write ``Keyword`` rows.

    Every method runs in its own ``get_session()`` transaction, so one
    keyword's write never depends on another's.

    Usage::

        store = KeywordStore()
        if store.get("austin tacos") is None:
            store.insert(assessment.to_record(), source="seed")
        queue = store.content_queue(limit=20)
    """

    def ping(self) -> None:
        """Raise ``OperationalError`` if the database is unreachable."""
        check_connection()

    # ------------------------------------------------------------------
    # Single-row access
    # ------------------------------------------------------------------

    def get(self, keyword: str) -> Optional[Keyword]:
        with get_session() as session:
            return session.execute(
                select(Keyword).where(Keyword.keyword == normalize_keyword(keyword))
            ).scalar_one_or_none()

    def get_by_id(self, keyword_id: int) -> Keyword:
        with get_session() as session:
            row = session.get(Keyword, keyword_id)
            if row is None:
                raise KeywordNotFoundError(f"No keyword with id {keyword_id}")
            return row

    def insert(
        self,
        record: dict[str, Any],
        source: str = "seed",
        seen_at: Optional[datetime] = None,
    ) -> Keyword:
        """Insert a fully classified keyword; ``first_seen`` and ``last_seen`` start equal."""
        seen_at = seen_at or _utcnow()
        values = dict(record)
        values["keyword"] = normalize_keyword(values["keyword"])
        row = Keyword(source=source, first_seen=seen_at, last_seen=seen_at, **values)
        with get_session() as session:
            session.add(row)
            session.flush()
            logger.debug("Inserted keyword %r (id=%d)", row.keyword, row.id)
        return row

    def touch(
        self,
        keyword: str,
        volume: Optional[int] = None,
        seen_at: Optional[datetime] = None,
    ) -> bool:
        """Refresh ``last_seen`` (and ``monthly_volume`` when given) of an existing row.

        Classification and scores are left untouched. Returns False when
        the keyword does not exist.
        """
        with get_session() as session:
            row = session.execute(
                select(Keyword).where(Keyword.keyword == normalize_keyword(keyword))
            ).scalar_one_or_none()
            if row is None:
                return False
            row.last_seen = seen_at or _utcnow()
            if volume is not None:
                row.monthly_volume = max(0, int(volume))
        return True

    def set_page_exists(self, keyword_id: int, value: bool = True) -> Keyword:
        with get_session() as session:
            row = session.get(Keyword, keyword_id)
            if row is None:
                raise KeywordNotFoundError(f"No keyword with id {keyword_id}")
            row.page_exists = bool(value)
            logger.info("Keyword %d page_exists=%s", keyword_id, row.page_exists)
            return row

    def save_brief(self, keyword_id: int, title: str, links: list[str]) -> Keyword:
        """Store the advisory brief fields and count the lookup as a sighting."""
        with get_session() as session:
            row = session.get(Keyword, keyword_id)
            if row is None:
                raise KeywordNotFoundError(f"No keyword with id {keyword_id}")
            row.suggested_title = title
            row.suggested_internal_links = list(links)
            row.last_seen = _utcnow()
            return row

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_keywords(
        self,
        bucket: Optional[str] = None,
        intent: Optional[str] = None,
        covered: Optional[bool] = None,
        min_difficulty: Optional[int] = None,
        max_difficulty: Optional[int] = None,
        min_opportunity: Optional[int] = None,
        search: Optional[str] = None,
        subtype: Optional[str] = None,
        sort: str = "strategic_score",
        order: str = "desc",
        limit: int = 100,
        offset: int = 0,
    ) -> list[Keyword]:
        """Filtered, sorted page of keywords.

        Raises:
            ValueError: For an unknown sort column or order.
        """
        if sort not in SORTABLE_COLUMNS:
            raise ValueError(f"Unknown sort column {sort!r}; choose from {', '.join(SORTABLE_COLUMNS)}")
        if order not in ("asc", "desc"):
            raise ValueError(f"order must be 'asc' or 'desc', got {order!r}")

        stmt = select(Keyword)
        if bucket:
            stmt = stmt.where(Keyword.bucket == bucket)
        if intent:
            stmt = stmt.where(Keyword.intent == intent)
        if covered is True:
            stmt = stmt.where(Keyword.matched_app.is_not(None))
        elif covered is False:
            stmt = stmt.where(Keyword.matched_app.is_(None))
        if min_difficulty is not None:
            stmt = stmt.where(Keyword.difficulty >= min_difficulty)
        if max_difficulty is not None:
            stmt = stmt.where(Keyword.difficulty <= max_difficulty)
        if min_opportunity is not None:
            stmt = stmt.where(Keyword.opportunity_score >= min_opportunity)
        if search:
            stmt = stmt.where(Keyword.keyword.like(f"%{search.lower()}%"))
        if subtype:
            # Subtypes are a JSON list of names; match the quoted element.
            stmt = stmt.where(cast(Keyword.subtypes, String).like(f'%"{subtype.upper()}"%'))

        column = getattr(Keyword, sort)
        stmt = stmt.order_by(column.asc() if order == "asc" else column.desc(), Keyword.id)
        stmt = stmt.limit(max(1, min(limit, MAX_LIST_LIMIT))).offset(max(0, offset))

        with get_session() as session:
            return list(session.execute(stmt).scalars())

    def content_queue(self, limit: int = 20) -> list[Keyword]:
        """Uncovered keywords without a page, best strategic score first."""
        stmt = (
            select(Keyword)
            .where(Keyword.matched_app.is_(None), Keyword.page_exists.is_(False))
            .order_by(Keyword.strategic_score.desc(), Keyword.id)
            .limit(max(1, min(limit, MAX_QUEUE_LIMIT)))
        )
        with get_session() as session:
            return list(session.execute(stmt).scalars())

    def count(self) -> int:
        with get_session() as session:
            return session.execute(select(func.count(Keyword.id))).scalar_one()

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def stats(self) -> dict[str, Any]:
        """Totals, coverage, and per-bucket / per-intent breakdowns."""
        with get_session() as session:
            total = session.execute(select(func.count(Keyword.id))).scalar_one()
            covered = session.execute(
                select(func.count(Keyword.id)).where(Keyword.matched_app.is_not(None))
            ).scalar_one()
            avg_difficulty = session.execute(select(func.avg(Keyword.difficulty))).scalar_one()

            buckets = session.execute(
                select(Keyword.bucket, func.count(Keyword.id), func.avg(Keyword.strategic_score))
                .group_by(Keyword.bucket)
                .order_by(func.count(Keyword.id).desc())
            ).all()
            intents = session.execute(
                select(Keyword.intent, func.count(Keyword.id))
                .group_by(Keyword.intent)
                .order_by(func.count(Keyword.id).desc())
            ).all()
            top = session.execute(
                select(Keyword)
                .where(Keyword.matched_app.is_(None))
                .order_by(Keyword.strategic_score.desc(), Keyword.id)
                .limit(TOP_OPPORTUNITIES)
            ).scalars().all()

            return {
                "total": total,
                "covered": covered,
                "gaps": total - covered,
                "coverage_pct": round(covered / total * 100) if total else 0,
                "avg_difficulty": round(avg_difficulty) if avg_difficulty is not None else 0,
                "buckets": [
                    {"bucket": b, "count": n, "avg_strategic": round(avg or 0)}
                    for b, n, avg in buckets
                ],
                "intents": [{"intent": i, "count": n} for i, n in intents],
                "top_opportunities": [
                    {
                        "id": row.id,
                        "keyword": row.keyword,
                        "strategic_score": row.strategic_score,
                        "opportunity_score": row.opportunity_score,
                        "bucket": row.bucket,
                    }
                    for row in top
                ],
            }
