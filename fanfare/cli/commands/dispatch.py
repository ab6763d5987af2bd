"""``fanfare dispatch EVENT_JSON`` — fan one event out to its recipients.

Validates the event file, builds the orchestrator from configuration
(``FANFARE_*`` environment, ``.env``) with the given overrides, runs the
dispatch to completion and prints the aggregate report.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from fanfare.channels.table import IncompleteDispatchTableError
from fanfare.config import FanfareConfig
from fanfare.core.orchestrator import NotificationOrchestrator
from fanfare.core.production_guard import ProductionConfigError
from fanfare.models.events import NotificationEvent
from fanfare.models.records import DispatchReport, NotificationStatus

console = Console()

_STATUS_STYLES = {
    NotificationStatus.SENT: "green",
    NotificationStatus.PARTIAL: "yellow",
    NotificationStatus.FAILED: "red",
}


def dispatch_cmd(
    event_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON file containing one notification event.",
    ),
    database: Path = typer.Option(
        None,
        "--database",
        "-d",
        help="Path to the notification SQLite database.",
    ),
    batch_size: int = typer.Option(
        None,
        "--batch-size",
        "-b",
        min=1,
        help="Recipients per batch.",
    ),
    workers: int = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Worker threads processing batches in parallel.",
    ),
) -> None:
    """Dispatch a notification event and print a summary."""
    try:
        event = NotificationEvent.model_validate_json(event_file.read_text(encoding="utf-8"))
    except ValidationError as exc:
        console.print(f"[bold red]Invalid event file:[/bold red] {event_file}")
        console.print(str(exc), markup=False)
        raise typer.Exit(code=1)

    overrides: dict[str, Any] = {}
    if database is not None:
        overrides["database_path"] = database
    if batch_size is not None:
        overrides["batch_size"] = batch_size
    if workers is not None:
        overrides["parallel_threads"] = workers
    config = FanfareConfig().model_copy(update=overrides)

    try:
        orchestrator = NotificationOrchestrator.from_config(config)
    except (ProductionConfigError, IncompleteDispatchTableError) as exc:
        console.print("[bold red]Configuration error[/bold red]")
        console.print(str(exc), markup=False)
        raise typer.Exit(code=2)

    try:
        report = orchestrator.dispatch(event)
    finally:
        orchestrator.shutdown()

    console.print(_report_table(report, config.database_path))
    if report.batches_failed or report.batches_rejected:
        raise typer.Exit(code=1)


def _report_table(report: DispatchReport, database_path: Path) -> Table:
    table = Table(title="Dispatch Summary", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Correlation ID", report.correlation_id)
    table.add_row("Recipients", str(report.recipients_total))
    table.add_row(
        "Batches",
        f"{report.batches_completed}/{report.batches_total} completed, "
        f"{report.batches_failed} failed, {report.batches_rejected} rejected",
    )
    for status, style in _STATUS_STYLES.items():
        count = report.status_counts.get(status, 0)
        table.add_row(status.value, f"[{style}]{count}[/{style}]")
    if report.persistence_failures:
        table.add_row("Unpersisted", f"[red]{report.persistence_failures}[/red]")
    table.add_row("Duration", f"{report.duration_ms} ms")
    table.add_row("Database", str(database_path))
    return table
