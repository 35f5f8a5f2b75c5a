"""Tests for the ingestion orchestrator and the seed list."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from radar.exceptions import StoreUnavailableError
from radar.modules.expansion.autocomplete import AutocompleteExpander, Suggestion
from radar.modules.ingestion import (
    BUCKETS,
    SEED_KEYWORDS,
    IngestionOrchestrator,
    IngestionState,
    SeedKeyword,
    run_ingestion,
)
from radar.modules.ingestion.seeds import seeds_by_volume
from radar.modules.scoring.scorer import SCORING_MODEL_VERSION

SEEDS = [
    SeedKeyword("austin tacos", "food", 12100),
    SeedKeyword("zilker park", "outdoors", 9900),
    SeedKeyword("tacos denver", "food", 500),
]


def _operational_error():
    return OperationalError("SELECT 1", {}, Exception("database is locked"))


# ===========================================================================
# Seed list
# ===========================================================================
class TestSeedList:

    def test_seeds_are_unique_and_bucketed(self):
        keywords = [s.keyword for s in SEED_KEYWORDS]
        assert len(keywords) == len(set(keywords))
        assert all(s.bucket in BUCKETS for s in SEED_KEYWORDS)
        assert all(s.estimated_volume > 0 for s in SEED_KEYWORDS)

    def test_seeds_by_volume(self):
        top = seeds_by_volume(SEEDS, 2)
        assert [s.keyword for s in top] == ["austin tacos", "zilker park"]
        assert len(seeds_by_volume(SEEDS)) == 3


# ===========================================================================
# Orchestrator against a real (in-memory) store
# ===========================================================================
class TestIngestionRun:

    @pytest.fixture()
    def orchestrator(self, store, mock_suggest_client, ticking_clock):
        mock_suggest_client.responses = {
            "austin tacos": ["austin tacos al pastor", "austin vs denver tacos"],
        }
        expander = AutocompleteExpander(mock_suggest_client)
        return IngestionOrchestrator(
            store=store,
            expander=expander,
            expand_top_seeds=2,
            clock=ticking_clock,
            month=5,
        )

    @pytest.mark.asyncio
    async def test_first_run(self, orchestrator, store):
        summary = await orchestrator.run(SEEDS)

        assert orchestrator.state == IngestionState.DONE
        assert summary.seeded == 3
        assert summary.expanded == 1
        assert summary.skipped == 1
        assert summary.refreshed == 0
        assert summary.failed == 0
        assert summary.total == 4
        assert summary.model_version == SCORING_MODEL_VERSION
        assert store.count() == 4

        discovery = store.get("austin tacos al pastor")
        assert discovery.source == "suffix"
        assert discovery.bucket == "food"
        assert discovery.monthly_volume == 100
        assert store.get("austin vs denver tacos") is None

    @pytest.mark.asyncio
    async def test_out_of_scope_seed_is_kept_with_zero_score(self, orchestrator, store):
        await orchestrator.run(SEEDS)

        row = store.get("tacos denver")
        assert row is not None
        assert row.strategic_score == 0

    @pytest.mark.asyncio
    async def test_rerun_is_idempotent(self, orchestrator, store):
        """A second run refreshes ``last_seen`` and never duplicates rows."""
        await orchestrator.run(SEEDS)
        before = {row.keyword: row.to_dict() for row in store.list_keywords(limit=500)}

        summary = await orchestrator.run(SEEDS)

        assert store.count() == 4
        assert summary.refreshed == 4
        assert summary.seeded == 3
        assert summary.expanded == 0
        for row in store.list_keywords(limit=500):
            old = before[row.keyword]
            assert row.to_dict()["first_seen"] == old["first_seen"]
            assert row.to_dict()["last_seen"] > old["last_seen"]
            assert row.strategic_score == old["strategic_score"]

    @pytest.mark.asyncio
    async def test_rerun_refreshes_seed_volume(self, orchestrator, store):
        await orchestrator.run(SEEDS)
        bumped = [SeedKeyword("austin tacos", "food", 14800)]

        await orchestrator.run(bumped, expand=False)

        assert store.get("austin tacos").monthly_volume == 14800

    @pytest.mark.asyncio
    async def test_duplicate_seeds_collapse(self, store, ticking_clock):
        orchestrator = IngestionOrchestrator(store=store, clock=ticking_clock, month=5)
        seeds = [
            SeedKeyword("Austin Tacos", "food", 12100),
            SeedKeyword("  austin   tacos ", "food", 12100),
        ]

        summary = await orchestrator.run(seeds)

        assert summary.seeded == 1
        assert store.count() == 1

    @pytest.mark.asyncio
    async def test_expansion_failure_is_tolerated(self, store, ticking_clock):
        expander = MagicMock()

        async def _expand(seed):
            if seed == "austin tacos":
                raise ConnectionError("provider down")
            return [Suggestion("zilker park map", "suffix")]

        expander.expand = AsyncMock(side_effect=_expand)
        orchestrator = IngestionOrchestrator(
            store=store, expander=expander, expand_top_seeds=3, clock=ticking_clock, month=5,
        )

        summary = await orchestrator.run(SEEDS)

        assert orchestrator.state == IngestionState.DONE
        assert summary.seeded == 3
        assert summary.expanded == 1
        assert store.get("zilker park map") is not None

    @pytest.mark.asyncio
    async def test_no_expansion(self, orchestrator, mock_suggest_client):
        summary = await orchestrator.run(SEEDS, expand=False)

        assert summary.expanded == 0
        mock_suggest_client.fetch.assert_not_awaited()


# ===========================================================================
# Store failures
# ===========================================================================
class TestStoreFailures:

    @pytest.mark.asyncio
    async def test_unreachable_store_aborts_before_work(self):
        store = MagicMock()
        store.ping.side_effect = _operational_error()
        orchestrator = IngestionOrchestrator(store=store)

        with pytest.raises(StoreUnavailableError) as exc_info:
            await orchestrator.run(SEEDS)

        assert orchestrator.state == IngestionState.FAILED
        assert exc_info.value.summary.seeded == 0
        store.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_lost_mid_run_reports_partial_summary(self):
        store = MagicMock()
        store.get.return_value = None
        store.insert.side_effect = [MagicMock(), _operational_error(), MagicMock()]
        orchestrator = IngestionOrchestrator(store=store, month=5)

        with pytest.raises(StoreUnavailableError) as exc_info:
            await orchestrator.run(SEEDS, expand=False)

        assert orchestrator.state == IngestionState.FAILED
        assert exc_info.value.summary.seeded == 1
        assert store.insert.call_count == 2

    @pytest.mark.asyncio
    async def test_row_error_is_counted_and_skipped(self):
        store = MagicMock()
        store.get.return_value = None
        store.insert.side_effect = [IntegrityError("INSERT", {}, Exception("dup")), MagicMock(), MagicMock()]
        orchestrator = IngestionOrchestrator(store=store, month=5)

        summary = await orchestrator.run(SEEDS, expand=False)

        assert orchestrator.state == IngestionState.DONE
        assert summary.failed == 1
        assert summary.seeded == 2


# ===========================================================================
# Config-driven entry point
# ===========================================================================
class TestRunIngestion:

    @pytest.mark.asyncio
    async def test_builds_pipeline_from_config(self, store, mock_suggest_client):
        mock_suggest_client.responses = {"austin tacos": ["austin tacos trucks"]}
        config = {
            "autocomplete": {"batch_size": 4, "geo_token": "austin"},
            "ingestion": {"expand_top_seeds": 1, "discovered_volume": 250},
        }

        summary = await run_ingestion(seeds=SEEDS, config=config, store=store, client=mock_suggest_client)

        assert summary.expanded == 1
        assert store.get("austin tacos trucks").monthly_volume == 250
        # Only the top seed was expanded: 45 queries.
        assert mock_suggest_client.fetch.await_count == 45
        mock_suggest_client.close.assert_not_awaited()

    def test_summary_to_dict(self):
        from radar.modules.ingestion.orchestrator import IngestionSummary

        data = IngestionSummary(seeded=2, expanded=3, skipped=1).to_dict()
        assert data["total"] == 5
        assert data["model_version"] == SCORING_MODEL_VERSION
