"""Shared pytest fixtures for Search Radar tests."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Ensure project root is on sys.path so 'radar' is importable.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)


@pytest.fixture(autouse=True)
def _reset_db_engine():
    """Autouse fixture: reset the global DB engine before and after every test.

    This prevents cross-test pollution when tests create their own in-memory
    databases.
    """
    from radar.database import reset_engine
    reset_engine()
    yield
    reset_engine()


@pytest.fixture()
def test_db():
    """Provide an in-memory SQLite database with all tables created.

    Yields a database URL string. The engine is automatically torn down
    after the test by the autouse ``_reset_db_engine`` fixture.
    """
    from radar.database import reset_engine, init_db
    reset_engine()
    db_url = "sqlite:///:memory:"
    init_db(database_url=db_url, echo=False)
    yield db_url


@pytest.fixture()
def store(test_db):
    """A KeywordStore bound to the in-memory database."""
    from radar.modules.ingestion.store import KeywordStore
    return KeywordStore()


@pytest.fixture()
def mock_suggest_client():
    """Return a mock SuggestClient whose ``fetch`` answers from a query map.

    Tests fill ``client.responses`` (query -> list of suggestions) and
    ``client.failing`` (queries that raise); unknown queries return [].
    """
    client = MagicMock()
    client.responses = {}
    client.failing = set()

    async def _fetch(query):
        if query in client.failing:
            raise ConnectionError("suggest provider unreachable")
        return list(client.responses.get(query, []))

    client.fetch = AsyncMock(side_effect=_fetch)
    client.close = AsyncMock()
    return client


@pytest.fixture()
def ticking_clock():
    """A clock that advances one minute on every call."""
    state = {"now": datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)}

    def _clock():
        state["now"] += timedelta(minutes=1)
        return state["now"]

    return _clock


@pytest.fixture()
def sample_record():
    """A keyword record shaped like ``Keyword.to_dict()``."""
    return {
        "id": 1,
        "keyword": "austin bluebonnet fields map",
        "bucket": "outdoors",
        "monthly_volume": 1900,
        "intent": "informational",
        "subtypes": ["MAP", "SEASONAL"],
        "difficulty": 32,
        "strategic_score": 71,
        "matched_app": "bluebonnets",
    }
