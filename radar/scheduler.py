"""Ingestion scheduler built on APScheduler with a SQLite persistent job store."""

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Optional

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.jobstores.sqlalchemy import SQLAlchemyJobStore
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from radar.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

INGESTION_JOB_ID = "radar_ingestion"
DEFAULT_CRON = "0 * * * *"


def ingestion_job(config: Optional[dict] = None) -> dict[str, Any]:
    """Scheduled entry point: one ingestion pass, summary returned as a dict.

    Lives at module level so the persistent job store can reference it.
    """
    from radar.modules.ingestion.orchestrator import run_ingestion

    try:
        summary = asyncio.run(run_ingestion(config=config))
    except StoreUnavailableError as exc:
        logger.error("Scheduled ingestion aborted: %s", exc)
        return {"status": "error", "error": str(exc), **(exc.summary.to_dict() if exc.summary else {})}
    return {"status": "ok", **summary.to_dict()}


def parse_cron(cron: str, timezone: str = "UTC") -> CronTrigger:
    """Build a ``CronTrigger`` from a 5-field expression (min hour day month weekday)."""
    parts = cron.strip().split()
    if len(parts) != 5:
        raise ValueError(f"Cron expression must have 5 fields, got {len(parts)}: {cron!r}")
    return CronTrigger(
        minute=parts[0],
        hour=parts[1],
        day=parts[2],
        month=parts[3],
        day_of_week=parts[4],
        timezone=timezone,
    )


class RadarScheduler:
    """Wrapper around APScheduler for the recurring ingestion run.

    Jobs default to ``max_instances=1`` and ``coalesce=True`` so two
    ingestion runs never overlap and missed runs collapse into one.

    Usage::

        sched = RadarScheduler()
        sched.schedule_ingestion("0 * * * *", config=app.config)
        sched.start()
        sched.list_jobs()
        sched.stop()
    """

    def __init__(
        self,
        job_store_url: Optional[str] = "sqlite:///data/scheduler_jobs.db",
        timezone: str = "UTC",
        max_workers: int = 1,
    ):
        jobstores = {}
        if job_store_url:
            if job_store_url.startswith("sqlite:///"):
                Path(job_store_url.replace("sqlite:///", "")).parent.mkdir(parents=True, exist_ok=True)
            jobstores["default"] = SQLAlchemyJobStore(url=job_store_url)

        self._scheduler = BackgroundScheduler(
            jobstores=jobstores,
            executors={"default": ThreadPoolExecutor(max_workers=max_workers)},
            job_defaults={
                "coalesce": True,
                "max_instances": 1,
                "misfire_grace_time": 3600,
            },
            timezone=timezone,
        )
        self._timezone = timezone
        self._running = False
        logger.info(
            "RadarScheduler initialized (store=%s, tz=%s, workers=%d)",
            job_store_url or "memory", timezone, max_workers,
        )

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            logger.warning("Scheduler is already running.")
            return
        self._scheduler.start()
        self._running = True
        logger.info("Scheduler started.")

    def stop(self, wait: bool = True) -> None:
        if not self._running:
            return
        self._scheduler.shutdown(wait=wait)
        self._running = False
        logger.info("Scheduler stopped.")

    def add_job(
        self,
        job_id: str,
        func: Callable,
        cron: str,
        kwargs: Optional[dict[str, Any]] = None,
        replace_existing: bool = True,
    ) -> None:
        """Add or replace a cron-triggered job."""
        self._scheduler.add_job(
            func,
            trigger=parse_cron(cron, self._timezone),
            id=job_id,
            kwargs=kwargs or {},
            replace_existing=replace_existing,
        )
        logger.info("Job added: %s [%s]", job_id, cron)

    def schedule_ingestion(self, cron: str = DEFAULT_CRON, config: Optional[dict] = None) -> None:
        """Register the recurring ingestion run (hourly by default)."""
        self.add_job(INGESTION_JOB_ID, ingestion_job, cron, kwargs={"config": config or {}})

    def remove_job(self, job_id: str) -> bool:
        """Returns True if the job was found and removed."""
        if self._scheduler.get_job(job_id) is None:
            logger.warning("Job not found: %s", job_id)
            return False
        self._scheduler.remove_job(job_id)
        logger.info("Job removed: %s", job_id)
        return True

    def list_jobs(self) -> list[dict[str, Any]]:
        return [self._job_info(job) for job in self._scheduler.get_jobs()]

    def get_job(self, job_id: str) -> Optional[dict[str, Any]]:
        job = self._scheduler.get_job(job_id)
        return self._job_info(job) if job is not None else None

    @staticmethod
    def _job_info(job) -> dict[str, Any]:
        next_run = getattr(job, "next_run_time", None)
        return {
            "id": job.id,
            "name": job.name,
            "trigger": str(job.trigger),
            "next_run_time": next_run.isoformat() if next_run else None,
            "pending": job.pending,
        }
