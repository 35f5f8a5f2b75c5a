"""Tests for the APScheduler-backed ingestion scheduler."""

from unittest.mock import AsyncMock, patch

import pytest
from apscheduler.triggers.cron import CronTrigger

from radar.exceptions import StoreUnavailableError
from radar.modules.ingestion.orchestrator import IngestionSummary
from radar.scheduler import (
    INGESTION_JOB_ID,
    RadarScheduler,
    ingestion_job,
    parse_cron,
)


def _noop():
    return None


@pytest.fixture()
def scheduler():
    sched = RadarScheduler(job_store_url=None, timezone="UTC")
    yield sched
    sched.stop(wait=False)


class TestParseCron:

    def test_hourly(self):
        trigger = parse_cron("0 * * * *", "UTC")
        assert isinstance(trigger, CronTrigger)
        assert "minute='0'" in str(trigger)

    @pytest.mark.parametrize("cron", ["", "0 * * *", "0 * * * * *"])
    def test_wrong_field_count(self, cron):
        with pytest.raises(ValueError):
            parse_cron(cron)


class TestRadarScheduler:

    def test_schedule_ingestion(self, scheduler):
        scheduler.schedule_ingestion(config={"ingestion": {"expand_top_seeds": 2}})

        job = scheduler.get_job(INGESTION_JOB_ID)
        assert job is not None
        assert job["id"] == INGESTION_JOB_ID
        assert len(scheduler.list_jobs()) == 1

    def test_replace_existing(self, scheduler):
        scheduler.start()
        scheduler.schedule_ingestion("0 * * * *")
        scheduler.schedule_ingestion("30 * * * *")
        jobs = scheduler.list_jobs()
        assert len(jobs) == 1
        assert "minute='30'" in jobs[0]["trigger"]

    def test_remove_job(self, scheduler):
        scheduler.add_job("cleanup", _noop, "0 3 * * *")
        assert scheduler.remove_job("cleanup") is True
        assert scheduler.remove_job("cleanup") is False
        assert scheduler.get_job("cleanup") is None

    def test_start_and_stop(self, scheduler):
        scheduler.add_job("cleanup", _noop, "0 3 * * *")
        scheduler.start()
        assert scheduler.is_running
        assert scheduler.get_job("cleanup")["next_run_time"] is not None

        scheduler.stop(wait=False)
        assert not scheduler.is_running

    def test_start_twice_is_harmless(self, scheduler):
        scheduler.start()
        scheduler.start()
        assert scheduler.is_running


class TestIngestionJob:

    def test_success(self):
        summary = IngestionSummary(seeded=3, expanded=5)
        with patch(
            "radar.modules.ingestion.orchestrator.run_ingestion",
            new=AsyncMock(return_value=summary),
        ) as mocked:
            result = ingestion_job({"ingestion": {"expand_top_seeds": 1}})

        assert result["status"] == "ok"
        assert result["total"] == 8
        mocked.assert_awaited_once_with(config={"ingestion": {"expand_top_seeds": 1}})

    def test_store_unavailable(self):
        error = StoreUnavailableError("Keyword store unavailable: locked", IngestionSummary(seeded=2))
        with patch(
            "radar.modules.ingestion.orchestrator.run_ingestion",
            new=AsyncMock(side_effect=error),
        ):
            result = ingestion_job()

        assert result["status"] == "error"
        assert "unavailable" in result["error"]
        assert result["seeded"] == 2
