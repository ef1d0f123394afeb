"""Command line entry point: ``sitehealth run`` and friends."""

from __future__ import annotations

import json

import asyncio
import typer
import typing as t
from rich.console import Console
from rich.table import Table
from rich.text import Text

from sitehealth.checks.status import HealthStatus
from sitehealth.config import HealthCheckerSettings
from sitehealth.database import SQLDatabase
from sitehealth.errors import NoChecksAvailableError
from sitehealth.events import EventDispatcher
from sitehealth.i18n import Translator
from sitehealth.logger import configure_logging
from sitehealth.plugins import register_default_plugins
from sitehealth.report import Report
from sitehealth.runner import HealthCheckRunner

cli = typer.Typer(help="Run site health checks.", no_args_is_help=True)
console = Console()

EXIT_CRITICAL = 2

_STATUS_STYLES = {
    HealthStatus.CRITICAL: "bold red",
    HealthStatus.WARNING: "yellow",
    HealthStatus.GOOD: "green",
}


def build_runner(
    settings: HealthCheckerSettings,
    database: SQLDatabase | None = None,
) -> HealthCheckRunner:
    dispatcher = EventDispatcher()
    translator = Translator()
    register_default_plugins(dispatcher, settings=settings, translator=translator)
    return HealthCheckRunner(
        dispatcher,
        database=database,
        settings=settings,
        translator=translator,
    )


async def _with_runner(
    settings: HealthCheckerSettings,
    database_url: str | None,
    action: t.Callable[[HealthCheckRunner], t.Awaitable[t.Any]],
) -> t.Any:
    database = SQLDatabase.from_url(database_url) if database_url else None
    try:
        return await action(build_runner(settings, database))
    finally:
        if database is not None:
            await database.dispose()


def render_report(
    report: Report,
    status: HealthStatus | None = None,
    category: str | None = None,
    translator: Translator | None = None,
) -> None:
    table = Table(title="Site Health", show_lines=False)
    table.add_column("Status", no_wrap=True)
    table.add_column("Category")
    table.add_column("Check")
    table.add_column("Description", overflow="fold")
    labels = {c.slug: c.to_dict(translator)["label"] for c in report.categories}
    for slug, results in report.filtered(status, category).items():
        for result in results:
            table.add_row(
                Text(result.status.value, style=_STATUS_STYLES[result.status]),
                Text(labels.get(slug, slug)),
                Text(result.title),
                Text(result.description),
            )
    console.print(table)
    counts = report.counts
    console.print(
        f"[bold red]{counts['critical']}[/bold red] critical, "
        f"[yellow]{counts['warning']}[/yellow] warning, "
        f"[green]{counts['good']}[/green] good "
        f"[dim]({report.last_run.isoformat()})[/dim]",
    )


@cli.command()
def run(
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    database_url: str | None = typer.Option(
        None,
        "--database-url",
        envvar="SITEHEALTH_DATABASE_URL",
        help="SQLAlchemy async URL, e.g. sqlite+aiosqlite:///site.db",
    ),
    status: HealthStatus | None = typer.Option(None, "--status", help="Only show this status"),
    category: str | None = typer.Option(None, "--category", help="Only show this category"),
) -> None:
    """Run every health check and print the report."""
    settings = HealthCheckerSettings()
    configure_logging(settings.log_level)

    async def evaluate(runner: HealthCheckRunner) -> tuple[Report, Translator]:
        return await runner.run(), runner.translator

    report, translator = asyncio.run(_with_runner(settings, database_url, evaluate))
    if as_json:
        console.print_json(
            json.dumps(report.to_dict(sanitize=True, translator=translator)),
        )
    else:
        render_report(report, status, category, translator)
    if report.status is HealthStatus.CRITICAL:
        raise typer.Exit(code=EXIT_CRITICAL)


@cli.command()
def categories() -> None:
    """List the categories contributed by the installed plugins."""
    settings = HealthCheckerSettings()
    configure_logging(settings.log_level)
    try:
        metadata = asyncio.run(
            _with_runner(settings, None, lambda runner: runner.get_metadata()),
        )
    except NoChecksAvailableError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e
    table = Table(title="Categories")
    table.add_column("Order", justify="right")
    table.add_column("Slug")
    table.add_column("Label")
    table.add_column("Checks", justify="right")
    for item in metadata["categories"]:
        count = sum(1 for c in metadata["checks"] if c["category"] == item["slug"])
        table.add_row(str(item["sortOrder"]), item["slug"], item["label"], str(count))
    console.print(table)


def main() -> None:
    cli()


__all__ = ["build_runner", "cli", "main", "render_report"]
