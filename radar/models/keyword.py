"""Keyword SQLAlchemy model -- the single persistent entity of the radar."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from radar.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Keyword(Base):
    """Candidate search phrase with classification, difficulty, and scores."""

    __tablename__ = "radar_keywords"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    keyword: Mapped[str] = mapped_column(String(500), nullable=False, unique=True, index=True)
    bucket: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    source: Mapped[str] = mapped_column(String(20), default="seed", nullable=False)
    monthly_volume: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    intent: Mapped[str] = mapped_column(String(20), default="informational", nullable=False, index=True)
    subtypes: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    difficulty: Mapped[int] = mapped_column(Integer, default=50, nullable=False)
    difficulty_source: Mapped[str] = mapped_column(String(20), default="estimated", nullable=False)
    difficulty_confidence: Mapped[str] = mapped_column(String(20), default="medium", nullable=False)
    difficulty_anomaly: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    composite_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    strategic_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)
    opportunity_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    matched_app: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    matched_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    page_exists: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    suggested_title: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    suggested_internal_links: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)

    first_seen: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    last_seen: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)

    @property
    def is_covered(self) -> bool:
        return self.matched_app is not None

    def to_dict(self) -> dict:
        """Plain-dict view used by the CLI and brief generator."""
        return {
            "id": self.id,
            "keyword": self.keyword,
            "bucket": self.bucket,
            "source": self.source,
            "monthly_volume": self.monthly_volume,
            "intent": self.intent,
            "subtypes": list(self.subtypes or []),
            "difficulty": self.difficulty,
            "difficulty_source": self.difficulty_source,
            "difficulty_confidence": self.difficulty_confidence,
            "difficulty_anomaly": self.difficulty_anomaly,
            "composite_score": self.composite_score,
            "strategic_score": self.strategic_score,
            "opportunity_score": self.opportunity_score,
            "matched_app": self.matched_app,
            "matched_url": self.matched_url,
            "page_exists": self.page_exists,
            "suggested_title": self.suggested_title,
            "suggested_internal_links": self.suggested_internal_links,
            "first_seen": self.first_seen.isoformat() if self.first_seen else None,
            "last_seen": self.last_seen.isoformat() if self.last_seen else None,
        }

    def __repr__(self) -> str:
        return (
            f"<Keyword id={self.id} keyword={self.keyword!r} "
            f"vol={self.monthly_volume} strategic={self.strategic_score}>"
        )
