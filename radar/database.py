"""Database engine, session management, and initialization for the keyword store."""

import os
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///data/search_radar.db"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


_engine = None
_SessionFactory: sessionmaker | None = None


def _enable_wal(dbapi_conn, connection_record):
    """Enable WAL journal mode and busy timeout so the cron run and CLI can share the file."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL;")
    cursor.execute("PRAGMA synchronous=NORMAL;")
    cursor.execute("PRAGMA busy_timeout=5000;")
    cursor.close()


def get_engine(database_url: str | None = None, echo: bool = False):
    """Return (and cache) the global SQLAlchemy engine.

    Args:
        database_url: SQLAlchemy connection string.  Falls back to the
                      ``DATABASE_URL`` env-var or the local SQLite file.
        echo: Whether to log every SQL statement.
    """
    global _engine
    if _engine is not None:
        return _engine

    if database_url is None:
        database_url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

    is_sqlite = database_url.startswith("sqlite")
    if database_url.startswith("sqlite:///") and ":memory:" not in database_url:
        db_path = database_url.replace("sqlite:///", "")
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    connect_args = {"check_same_thread": False} if is_sqlite else {}
    _engine = create_engine(
        database_url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=True,
    )

    if is_sqlite:
        event.listen(_engine, "connect", _enable_wal)
    logger.info("Database engine created: %s", database_url)
    return _engine


def get_session_factory(engine=None) -> sessionmaker:
    """Return (and cache) the global session factory."""
    global _SessionFactory
    if _SessionFactory is not None:
        return _SessionFactory
    if engine is None:
        engine = get_engine()
    _SessionFactory = sessionmaker(bind=engine, expire_on_commit=False)
    return _SessionFactory


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Provide a transactional database session via context manager.

    Usage::

        with get_session() as session:
            session.add(obj)
    """
    factory = get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def check_connection() -> None:
    """Issue a trivial query; raises ``OperationalError`` when the store is down."""
    with get_session() as session:
        session.execute(text("SELECT 1"))


def init_db(database_url: str | None = None, echo: bool = False) -> None:
    """Create all tables that do not yet exist.

    Imports the model package so that ``Base.metadata`` is fully
    populated before issuing ``CREATE TABLE`` statements.
    """
    engine = get_engine(database_url=database_url, echo=echo)
    import radar.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("All database tables created / verified.")


def reset_db(database_url: str | None = None) -> None:
    """Drop and recreate every table.  **Destructive** -- use only in tests."""
    engine = get_engine(database_url=database_url)
    import radar.models  # noqa: F401
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.warning("Database has been reset (all tables dropped and recreated).")


def reset_engine() -> None:
    """Dispose of the cached engine and session factory (useful for tests)."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionFactory = None
