"""Integration tests for Search Radar.

Covers database setup, package imports, application wiring,
configuration loading, CLI smoke tests, and syntax validation of every
Python file in the project.
"""

import ast
import importlib
from pathlib import Path

import pytest
import yaml

# ---------------------------------------------------------------------------
# Project root (conftest.py already puts it on sys.path)
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture()
def config_file(tmp_path, monkeypatch):
    """A settings.yaml pointing at a throwaway SQLite file."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.safe_dump({
        "app": {"data_dir": str(tmp_path / "data")},
        "database": {"url": "sqlite:///" + str(tmp_path / "radar.db")},
        "scheduler": {"job_store": None, "timezone": "UTC"},
    }))
    return str(path)


# ===========================================================================
# 1. Database setup
# ===========================================================================
class TestDatabaseSetup:
    """Verify that the database can be initialised with in-memory SQLite."""

    def test_init_db_creates_tables(self, test_db):
        """init_db with in-memory SQLite should create the keyword table."""
        from radar.database import get_engine
        from sqlalchemy import inspect

        table_names = inspect(get_engine()).get_table_names()
        assert "radar_keywords" in table_names, "Found: " + str(table_names)

    def test_get_session_context_manager(self, test_db):
        from radar.database import get_session
        from sqlalchemy import text as sa_text

        with get_session() as session:
            row = session.execute(sa_text("SELECT 1")).fetchone()
            assert row[0] == 1

    def test_reset_db(self, test_db):
        """reset_db should drop and recreate all tables without error."""
        from radar.database import get_engine, reset_db
        from sqlalchemy import inspect

        reset_db()
        assert "radar_keywords" in inspect(get_engine()).get_table_names()

    def test_check_connection(self, test_db):
        from radar.database import check_connection

        check_connection()


# ===========================================================================
# 2. Package imports
# ===========================================================================
class TestModuleImports:
    """Every public entry point should be importable."""

    @pytest.mark.parametrize("module_path,names", [
        ("radar.models", ["Keyword"]),
        ("radar.modules.classification", [
            "is_in_scope", "classify_intent", "estimate_difficulty",
            "validate_difficulty", "tag_subtypes", "seasonality_boost",
            "match_to_existing_content", "suggest_internal_links",
        ]),
        ("radar.modules.scoring", [
            "compute_composite_score", "compute_strategic_score",
            "compute_opportunity_score", "assess_keyword",
        ]),
        ("radar.modules.expansion", ["AutocompleteExpander", "Suggestion"]),
        ("radar.modules.ingestion", ["KeywordStore", "IngestionOrchestrator", "run_ingestion"]),
        ("radar.modules.briefs", ["BriefService", "generate_brief"]),
        ("radar.integrations", ["SuggestClient"]),
        ("radar.scheduler", ["RadarScheduler", "ingestion_job"]),
        ("radar.app", ["RadarApp"]),
    ])
    def test_module_importable(self, module_path, names):
        module = importlib.import_module(module_path)
        for name in names:
            assert hasattr(module, name), module_path + " has no " + name


# ===========================================================================
# 3. Application wiring
# ===========================================================================
class TestRadarApp:

    def test_initialize_and_status(self, config_file):
        from radar.app import RadarApp

        app = RadarApp(config_path=config_file, env_path="does-not-exist.env")
        app.initialize()
        status = app.get_status()

        assert status["database"] == {"status": "ok", "details": "0 keywords"}
        assert status["scheduler"]["status"] == "warning"
        assert status["config"]["status"] == "ok"

    def test_missing_config_uses_defaults(self, tmp_path, monkeypatch):
        from radar.app import RadarApp

        monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
        app = RadarApp(config_path=str(tmp_path / "missing.yaml"), env_path=str(tmp_path / ".env"))
        app.initialize()
        assert app.config == {}
        assert app.get_status()["config"]["status"] == "warning"

    def test_requires_initialize(self):
        from radar.app import RadarApp

        with pytest.raises(RuntimeError):
            RadarApp().get_status()

    def test_schedule_ingestion(self, config_file):
        from radar.app import RadarApp
        from radar.scheduler import INGESTION_JOB_ID

        app = RadarApp(config_path=config_file, env_path="does-not-exist.env")
        app.initialize()
        app.schedule_ingestion("15 * * * *")

        assert app.scheduler.get_job(INGESTION_JOB_ID) is not None


# ===========================================================================
# 4. Settings YAML
# ===========================================================================
class TestSettingsYaml:
    """Configuration file should be loadable."""

    def _load(self):
        with open(PROJECT_ROOT / "config" / "settings.yaml") as fh:
            return yaml.safe_load(fh)

    def test_settings_parseable(self):
        assert isinstance(self._load(), dict)

    def test_settings_has_required_sections(self):
        config = self._load()
        for section in ("app", "database", "autocomplete", "ingestion", "scoring", "scheduler"):
            assert section in config, "Missing config section: " + section

    def test_default_cron_is_hourly(self):
        assert self._load()["scheduler"]["cron"] == "0 * * * *"


# ===========================================================================
# 5. CLI commands (smoke test via CliRunner)
# ===========================================================================
class TestCLICommands:

    def _get_runner_and_app(self):
        from typer.testing import CliRunner
        from radar.cli import app
        return CliRunner(), app

    def test_main_help(self):
        runner, cli_app = self._get_runner_and_app()
        result = runner.invoke(cli_app, ["--help"])
        assert result.exit_code == 0
        assert "Search Radar" in result.output

    @pytest.mark.parametrize("command", [
        "ingest", "classify", "expand", "brief", "queue",
        "keywords", "stats", "mark-page", "schedule", "status",
    ])
    def test_command_help(self, command):
        runner, cli_app = self._get_runner_and_app()
        result = runner.invoke(cli_app, [command, "--help"])
        assert result.exit_code == 0, command + " --help failed: " + result.output

    def test_classify(self):
        runner, cli_app = self._get_runner_and_app()
        result = runner.invoke(cli_app, ["classify", "tacos near me downtown austin", "--volume", "500"])
        assert result.exit_code == 0, result.output
        assert "local" in result.output

    def test_stats_on_empty_store(self, config_file):
        runner, cli_app = self._get_runner_and_app()
        result = runner.invoke(cli_app, ["stats", "--config", config_file])
        assert result.exit_code == 0, result.output
        assert "0 keywords" in result.output

    def test_keywords_rejects_unknown_sort(self, config_file):
        runner, cli_app = self._get_runner_and_app()
        result = runner.invoke(cli_app, ["keywords", "--sort", "bogus", "--config", config_file])
        assert result.exit_code == 2

    def test_mark_page_unknown_id(self, config_file):
        runner, cli_app = self._get_runner_and_app()
        result = runner.invoke(cli_app, ["mark-page", "999", "--config", config_file])
        assert result.exit_code == 1

    def test_queue_lists_gaps(self, config_file, monkeypatch):
        import radar.cli
        from radar.modules.ingestion.store import KeywordStore
        from radar.modules.scoring.assessment import assess_keyword

        monkeypatch.setattr(radar.cli.console, "width", 200)
        runner, cli_app = self._get_runner_and_app()
        runner.invoke(cli_app, ["stats", "--config", config_file])
        KeywordStore().insert(assess_keyword("zilker park map guide", 1900, "outdoors", month=4).to_record())

        result = runner.invoke(cli_app, ["queue", "--config", config_file])
        assert result.exit_code == 0, result.output
        assert "zilker park map guide" in result.output
        assert "1.9K" in result.output


# ===========================================================================
# 6. Utility helpers
# ===========================================================================
class TestUtilities:

    def test_normalize_keyword(self):
        from radar.utils.text_processing import normalize_keyword
        assert normalize_keyword("  Best  Tacos   AUSTIN ") == "best tacos austin"
        assert normalize_keyword("") == ""

    def test_title_case(self):
        from radar.utils.text_processing import title_case
        assert title_case("6th street bars in ATX") == "6th Street Bars In ATX"

    def test_clamp_score(self):
        from radar.utils.helpers import clamp_score
        assert clamp_score(104.6) == 100
        assert clamp_score(-3) == 0
        assert clamp_score(41.5) == 42

    def test_format_number(self):
        from radar.utils.helpers import format_number
        assert format_number(1500) == "1.5K"
        assert format_number(999) == "999"
        assert format_number(2_500_000) == "2.5M"


# ===========================================================================
# 7. All Python files syntax validation
# ===========================================================================
class TestAllPythonFilesSyntax:
    """Every .py file in radar/ and tests/ should pass ast.parse."""

    def _collect_python_files(self):
        files = []
        for directory in ("radar", "tests"):
            for py_file in (PROJECT_ROOT / directory).rglob("*.py"):
                if "__pycache__" in py_file.parts:
                    continue
                files.append(py_file)
        return sorted(files)

    def test_all_python_files_parse(self):
        py_files = self._collect_python_files()
        assert len(py_files) > 0, "No Python files found"
        errors = []
        for py_file in py_files:
            try:
                ast.parse(py_file.read_text(encoding="utf-8"))
            except SyntaxError as exc:
                errors.append(str(py_file.relative_to(PROJECT_ROOT)) + ": " + str(exc))
        if errors:
            pytest.fail("Python syntax errors:\n" + "\n".join(errors[:20]))


# ===========================================================================
# 8. Key packages importable
# ===========================================================================
class TestRequirementsInstallable:

    @pytest.mark.parametrize("package", [
        "typer", "rich", "sqlalchemy", "yaml", "aiohttp", "dotenv", "apscheduler",
    ])
    def test_package_importable(self, package):
        importlib.import_module(package)
