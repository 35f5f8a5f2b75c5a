"""Typer CLI application for Search Radar.

Provides commands to ingest and expand keywords, classify ad-hoc
phrases, inspect the content queue and statistics, generate briefs,
and run the hourly ingestion scheduler.
"""

import asyncio
import json
import logging
import time
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from radar.utils.helpers import format_number

console = Console()
app = typer.Typer(
    name="radar",
    help="Search Radar -- keyword opportunity intelligence for Austin content.",
    add_completion=False,
    no_args_is_help=True,
)

CONFIG_HELP = "Path to settings.yaml."


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _run_async(coro):
    """Run an async coroutine from synchronous CLI context."""
    return asyncio.run(coro)


def _get_app(config_path: str):
    """Create and initialise the RadarApp."""
    from radar.app import RadarApp

    radar_app = RadarApp(config_path=config_path)
    radar_app.initialize()
    return radar_app


def _score_style(score: int) -> str:
    if score >= 60:
        return f"[green]{score}[/green]"
    if score >= 30:
        return f"[yellow]{score}[/yellow]"
    return f"[red]{score}[/red]"


def _keyword_table(rows, title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right")
    table.add_column("Keyword", style="cyan", min_width=28)
    table.add_column("Bucket")
    table.add_column("Vol", justify="right")
    table.add_column("Intent")
    table.add_column("Diff", justify="right")
    table.add_column("Strategic", justify="right")
    table.add_column("Opp", justify="right")
    table.add_column("Coverage")
    for row in rows:
        table.add_row(
            str(row.id),
            row.keyword,
            row.bucket,
            format_number(row.monthly_volume),
            row.intent,
            str(row.difficulty),
            _score_style(row.strategic_score),
            _score_style(row.opportunity_score),
            row.matched_app if row.is_covered else "[yellow]gap[/yellow]",
        )
    return table


# ------------------------------------------------------------------
# ingest
# ------------------------------------------------------------------
@app.command()
def ingest(
    top_seeds: Optional[int] = typer.Option(None, "--top-seeds", help="Seeds to expand (default from config)."),
    no_expand: bool = typer.Option(False, "--no-expand", help="Skip autocomplete expansion."),
    config: str = typer.Option("config/settings.yaml", "--config", "-c", help=CONFIG_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Run one ingestion pass: seed, expand, score, persist."""
    _setup_logging(verbose)
    from radar.exceptions import StoreUnavailableError

    radar_app = _get_app(config)
    console.print(Panel("[bold cyan]Keyword Ingestion[/bold cyan]"))

    with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), console=console) as progress:
        progress.add_task(description="Ingesting keywords...", total=None)
        try:
            summary = radar_app.run_ingestion(expand=not no_expand, top_seeds=top_seeds)
        except StoreUnavailableError as exc:
            console.print(f"[red]✘ Ingestion aborted:[/red] {exc}")
            if exc.summary is not None:
                console.print(json.dumps(exc.summary.to_dict(), indent=2))
            raise typer.Exit(code=1)

    table = Table(title="Ingestion Summary", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in summary.to_dict().items():
        table.add_row(key.replace("_", " ").title(), str(value))
    console.print(table)
    console.print("[green]✔[/green] Ingestion complete.")


# ------------------------------------------------------------------
# classify
# ------------------------------------------------------------------
@app.command()
def classify(
    keyword: str = typer.Argument(..., help="Keyword phrase to classify."),
    volume: int = typer.Option(100, "--volume", help="Monthly search volume."),
    bucket: str = typer.Option("events", "--bucket", help="Topical bucket."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Classify and score a keyword without storing it."""
    _setup_logging(verbose)
    from radar.modules.scoring.assessment import assess_keyword
    from radar.utils.text_processing import normalize_keyword

    result = assess_keyword(normalize_keyword(keyword), volume, bucket)
    table = Table(title=f"Assessment: {result.keyword}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("In scope", "[green]yes[/green]" if result.in_scope else "[red]no[/red]")
    table.add_row("Intent", result.intent.value)
    table.add_row("Subtypes", ", ".join(sorted(s.value for s in result.subtypes)) or "-")
    table.add_row(
        "Difficulty",
        f"{result.difficulty} ({result.validation.source.value}, {result.validation.confidence.value})",
    )
    table.add_row("Anomaly", result.validation.anomaly or "-")
    table.add_row("Seasonality", f"{result.seasonality:.2f}")
    table.add_row("Coverage", result.coverage.app if result.coverage else "[yellow]gap[/yellow]")
    table.add_row("Composite", _score_style(result.composite_score))
    table.add_row("Strategic", _score_style(result.strategic_score))
    table.add_row("Opportunity", _score_style(result.opportunity_score))
    console.print(table)


# ------------------------------------------------------------------
# expand
# ------------------------------------------------------------------
@app.command()
def expand(
    seed: str = typer.Argument(..., help="Seed keyword to expand."),
    config: str = typer.Option("config/settings.yaml", "--config", "-c", help=CONFIG_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show autocomplete discoveries for a seed without storing them."""
    _setup_logging(verbose)
    from radar.app import RadarApp
    from radar.integrations.suggest_client import SuggestClient
    from radar.modules.expansion.autocomplete import AutocompleteExpander

    ac_cfg = RadarApp(config_path=config)._load_config().get("autocomplete", {})

    async def _run():
        async with SuggestClient(
            locale=ac_cfg.get("locale", "en"),
            country=ac_cfg.get("country", "us"),
            timeout=ac_cfg.get("timeout_seconds", 10),
        ) as client:
            expander = AutocompleteExpander(
                client,
                batch_size=ac_cfg.get("batch_size", 8),
                geo_token=ac_cfg.get("geo_token", "austin"),
            )
            return await expander.expand(seed)

    with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), console=console) as progress:
        progress.add_task(description=f"Expanding {seed!r}...", total=None)
        suggestions = _run_async(_run())

    table = Table(title=f"Discoveries for {seed!r}", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Keyword", style="cyan")
    table.add_column("Source")
    for i, suggestion in enumerate(suggestions, start=1):
        table.add_row(str(i), suggestion.keyword, suggestion.source)
    console.print(table)
    console.print(f"{len(suggestions)} discoveries.")


# ------------------------------------------------------------------
# brief
# ------------------------------------------------------------------
@app.command()
def brief(
    keyword_id: int = typer.Argument(..., help="ID of a stored keyword."),
    config: str = typer.Option("config/settings.yaml", "--config", "-c", help=CONFIG_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print the brief as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Generate a content brief for a stored keyword and save its title and links."""
    _setup_logging(verbose)
    from radar.exceptions import KeywordNotFoundError
    from radar.modules.briefs.generator import BriefService

    _get_app(config)
    try:
        result = BriefService().create_for(keyword_id)
    except KeywordNotFoundError as exc:
        console.print(f"[red]✘[/red] {exc}")
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(json.dumps(result.to_dict()))
        return
    console.print(Panel(f"[bold cyan]{result.suggested_title}[/bold cyan]\n{result.meta_description}"))
    console.print(result.outline)


# ------------------------------------------------------------------
# queue
# ------------------------------------------------------------------
@app.command()
def queue(
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum rows (up to 50)."),
    config: str = typer.Option("config/settings.yaml", "--config", "-c", help=CONFIG_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show the content queue: uncovered keywords without a page."""
    _setup_logging(verbose)
    from radar.modules.ingestion.store import KeywordStore

    _get_app(config)
    rows = KeywordStore().content_queue(limit=limit)
    console.print(_keyword_table(rows, title="Content Queue"))


# ------------------------------------------------------------------
# keywords
# ------------------------------------------------------------------
@app.command()
def keywords(
    bucket: Optional[str] = typer.Option(None, "--bucket", help="Filter by bucket."),
    intent: Optional[str] = typer.Option(None, "--intent", help="Filter by intent."),
    covered: Optional[bool] = typer.Option(None, "--covered/--gaps", help="Only covered keywords or only gaps."),
    min_difficulty: Optional[int] = typer.Option(None, "--min-difficulty"),
    max_difficulty: Optional[int] = typer.Option(None, "--max-difficulty"),
    min_opportunity: Optional[int] = typer.Option(None, "--min-opportunity"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Substring match on the keyword."),
    subtype: Optional[str] = typer.Option(None, "--subtype", help="Subtype tag, e.g. GUIDE."),
    sort: str = typer.Option("strategic_score", "--sort", help="Sort column."),
    order: str = typer.Option("desc", "--order", help="asc or desc."),
    limit: int = typer.Option(50, "--limit", "-n"),
    offset: int = typer.Option(0, "--offset"),
    config: str = typer.Option("config/settings.yaml", "--config", "-c", help=CONFIG_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """List stored keywords with filters."""
    _setup_logging(verbose)
    from radar.modules.ingestion.store import KeywordStore

    _get_app(config)
    try:
        rows = KeywordStore().list_keywords(
            bucket=bucket,
            intent=intent,
            covered=covered,
            min_difficulty=min_difficulty,
            max_difficulty=max_difficulty,
            min_opportunity=min_opportunity,
            search=search,
            subtype=subtype,
            sort=sort,
            order=order,
            limit=limit,
            offset=offset,
        )
    except ValueError as exc:
        console.print(f"[red]✘[/red] {exc}")
        raise typer.Exit(code=2)
    console.print(_keyword_table(rows, title="Keywords"))


# ------------------------------------------------------------------
# stats
# ------------------------------------------------------------------
@app.command()
def stats(
    config: str = typer.Option("config/settings.yaml", "--config", "-c", help=CONFIG_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show coverage and scoring statistics."""
    _setup_logging(verbose)
    from radar.modules.ingestion.store import KeywordStore

    _get_app(config)
    data = KeywordStore().stats()
    console.print(Panel(
        f"[bold]{data['total']}[/bold] keywords, {data['covered']} covered, "
        f"{data['gaps']} gaps ({data['coverage_pct']}% coverage), "
        f"avg difficulty {data['avg_difficulty']}",
        title="Radar Stats",
    ))

    buckets = Table(title="Buckets", show_header=True, header_style="bold magenta")
    buckets.add_column("Bucket", style="cyan")
    buckets.add_column("Count", justify="right")
    buckets.add_column("Avg Strategic", justify="right")
    for row in data["buckets"]:
        buckets.add_row(row["bucket"], str(row["count"]), str(row["avg_strategic"]))
    console.print(buckets)

    intents = Table(title="Intents", show_header=True, header_style="bold magenta")
    intents.add_column("Intent", style="cyan")
    intents.add_column("Count", justify="right")
    for row in data["intents"]:
        intents.add_row(row["intent"], str(row["count"]))
    console.print(intents)

    top = Table(title="Top Opportunities (uncovered)", show_header=True, header_style="bold magenta")
    top.add_column("ID", justify="right")
    top.add_column("Keyword", style="cyan")
    top.add_column("Strategic", justify="right")
    top.add_column("Opp", justify="right")
    for row in data["top_opportunities"]:
        top.add_row(
            str(row["id"]), row["keyword"],
            _score_style(row["strategic_score"]), _score_style(row["opportunity_score"]),
        )
    console.print(top)


# ------------------------------------------------------------------
# mark-page
# ------------------------------------------------------------------
@app.command("mark-page")
def mark_page(
    keyword_id: int = typer.Argument(..., help="ID of a stored keyword."),
    missing: bool = typer.Option(False, "--missing", help="Clear the flag instead of setting it."),
    config: str = typer.Option("config/settings.yaml", "--config", "-c", help=CONFIG_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Record that a page now exists (or no longer exists) for a keyword."""
    _setup_logging(verbose)
    from radar.exceptions import KeywordNotFoundError
    from radar.modules.ingestion.store import KeywordStore

    _get_app(config)
    try:
        row = KeywordStore().set_page_exists(keyword_id, not missing)
    except KeywordNotFoundError as exc:
        console.print(f"[red]✘[/red] {exc}")
        raise typer.Exit(code=1)
    console.print(f"[green]✔[/green] {row.keyword!r}: page_exists={row.page_exists}")


# ------------------------------------------------------------------
# schedule
# ------------------------------------------------------------------
@app.command()
def schedule(
    cron: Optional[str] = typer.Option(None, "--cron", help="Cron expression (default from config, hourly)."),
    config: str = typer.Option("config/settings.yaml", "--config", "-c", help=CONFIG_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Run ingestion on a schedule until interrupted."""
    _setup_logging(verbose)
    radar_app = _get_app(config)
    radar_app.schedule_ingestion(cron)
    scheduler = radar_app.scheduler
    scheduler.start()
    for job in scheduler.list_jobs():
        console.print(f"[cyan]{job['id']}[/cyan] next run: {job['next_run_time']}")
    console.print("Scheduler running. Press Ctrl+C to stop.")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        console.print("Stopping scheduler...")
    finally:
        scheduler.stop()


# ------------------------------------------------------------------
# status
# ------------------------------------------------------------------
@app.command()
def status(
    config: str = typer.Option("config/settings.yaml", "--config", "-c", help=CONFIG_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show project status: database, scheduler, configuration, modules."""
    _setup_logging(verbose)
    console.print(Panel("[bold cyan]System Status[/bold cyan]"))
    radar_app = _get_app(config)

    table = Table(title="Component Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", min_width=20)
    table.add_column("Status", min_width=10)
    table.add_column("Details", max_width=50)

    icons = {
        "ok": "[green]✔ OK[/green]",
        "warning": "[yellow]⚠ Warning[/yellow]",
        "error": "[red]✘ Error[/red]",
    }
    for name, info in radar_app.get_status().items():
        table.add_row(name.title(), icons.get(info["status"], info["status"]), str(info["details"])[:50])

    from radar.modules.scoring.scorer import SCORING_MODEL_VERSION
    table.add_row("Scoring Model", icons["ok"], SCORING_MODEL_VERSION)
    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
