"""Application wiring for Search Radar: config, environment, database, scheduler."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/settings.yaml"


class RadarApp:
    """Central application object shared by the CLI and the scheduler.

    Usage::

        app = RadarApp()
        app.initialize()
        summary = app.run_ingestion()
        status = app.get_status()
    """

    def __init__(
        self,
        config_path: str = DEFAULT_CONFIG_PATH,
        env_path: str = ".env",
    ):
        self._config_path = config_path
        self._env_path = env_path
        self.config: dict[str, Any] = {}
        self._initialized = False
        self._scheduler = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, with_scheduler: bool = False) -> None:
        """Load configuration and environment, then initialise the database."""
        if self._initialized:
            return

        env_file = Path(self._env_path)
        if env_file.exists():
            load_dotenv(env_file)
            logger.info("Loaded environment from %s", self._env_path)

        self.config = self._load_config()

        data_dir = self.config.get("app", {}).get("data_dir", "")
        if data_dir:
            Path(data_dir).mkdir(parents=True, exist_ok=True)

        from radar.database import init_db
        db_cfg = self.config.get("database", {})
        db_url = os.getenv("DATABASE_URL") or db_cfg.get("url")
        init_db(database_url=db_url, echo=db_cfg.get("echo", False))

        if with_scheduler:
            self._scheduler = self._build_scheduler()

        self._initialized = True
        logger.info("RadarApp initialised.")

    def _load_config(self) -> dict[str, Any]:
        """Load the YAML configuration file."""
        config_file = Path(self._config_path)
        if not config_file.exists():
            logger.warning("Config file not found: %s, using defaults.", self._config_path)
            return {}
        with open(config_file, "r", encoding="utf-8") as fh:
            config = yaml.safe_load(fh) or {}
        logger.info("Configuration loaded from %s", self._config_path)
        return config

    def _build_scheduler(self):
        from radar.scheduler import RadarScheduler

        sched_cfg = self.config.get("scheduler", {})
        return RadarScheduler(
            job_store_url=sched_cfg.get("job_store", "sqlite:///data/scheduler_jobs.db"),
            timezone=sched_cfg.get("timezone", "UTC"),
        )

    @property
    def scheduler(self):
        self._ensure_initialized()
        if self._scheduler is None:
            self._scheduler = self._build_scheduler()
        return self._scheduler

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def run_ingestion(self, seeds=None, expand: bool = True, top_seeds: Optional[int] = None):
        """Run one ingestion pass synchronously and return its ``IngestionSummary``."""
        from radar.modules.ingestion.orchestrator import run_ingestion

        self._ensure_initialized()
        config = dict(self.config)
        if top_seeds is not None:
            config["ingestion"] = {**config.get("ingestion", {}), "expand_top_seeds": top_seeds}
        return asyncio.run(run_ingestion(seeds, config=config, expand=expand))

    def schedule_ingestion(self, cron: Optional[str] = None) -> None:
        """Register the recurring ingestion job (cron from config, hourly by default)."""
        cron = cron or self.config.get("scheduler", {}).get("cron", "0 * * * *")
        self.scheduler.schedule_ingestion(cron, config=self.config)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_status(self) -> dict[str, dict[str, Any]]:
        """Return health status of the database, store, scheduler, and config."""
        self._ensure_initialized()
        status: dict[str, dict[str, Any]] = {}

        try:
            from radar.modules.ingestion.store import KeywordStore
            store = KeywordStore()
            store.ping()
            status["database"] = {"status": "ok", "details": f"{store.count()} keywords"}
        except Exception as exc:
            status["database"] = {"status": "error", "details": str(exc)}

        if self._scheduler is not None:
            jobs = self._scheduler.list_jobs()
            status["scheduler"] = {
                "status": "ok",
                "details": f"{'running' if self._scheduler.is_running else 'stopped'}, {len(jobs)} jobs",
            }
        else:
            status["scheduler"] = {"status": "warning", "details": "not started"}

        status["config"] = {
            "status": "ok" if self.config else "warning",
            "details": f"{len(self.config)} sections loaded" if self.config else "no config",
        }
        return status

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("Call initialize() before using the application.")
