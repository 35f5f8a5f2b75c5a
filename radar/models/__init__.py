"""SQLAlchemy ORM models -- import every model so Base.metadata is populated."""

from radar.models.keyword import Keyword

__all__ = [
    "Keyword",
]
