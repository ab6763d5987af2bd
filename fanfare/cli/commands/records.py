"""``fanfare records CORRELATION_ID`` — show the stored records of one dispatch."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from fanfare.config import FanfareConfig
from fanfare.models.records import NotificationStatus
from fanfare.store.sqlite_store import SqliteNotificationStore

console = Console()

_STATUS_STYLES = {
    NotificationStatus.PROCESSING: "cyan",
    NotificationStatus.SENT: "green",
    NotificationStatus.PARTIAL: "yellow",
    NotificationStatus.FAILED: "red",
}


def records_cmd(
    correlation_id: str = typer.Argument(..., help="Correlation ID printed by `dispatch`."),
    database: Path = typer.Option(
        None,
        "--database",
        "-d",
        help="Path to the notification SQLite database.",
    ),
) -> None:
    """List the notification records of one dispatch."""
    db_path = database or FanfareConfig().database_path
    if not db_path.exists():
        console.print(f"[bold red]Database not found:[/bold red] {db_path}")
        raise typer.Exit(code=1)

    records = SqliteNotificationStore(db_path).list_by_correlation(correlation_id)
    if not records:
        console.print(f"[dim]No records for {correlation_id}.[/dim]")
        raise typer.Exit(code=1)

    table = Table(title=f"Records ({len(records)})")
    table.add_column("Record", style="dim")
    table.add_column("Recipient", style="cyan")
    table.add_column("Type")
    table.add_column("Channels")
    table.add_column("Status", justify="center")
    table.add_column("Sent at")

    for record in records:
        style = _STATUS_STYLES[record.status]
        table.add_row(
            record.id[:8],
            record.user_id or record.recipient_email or record.recipient_phone or "-",
            record.type.value,
            ", ".join(c.value for c in record.channels) or "-",
            f"[{style}]{record.status.value}[/{style}]",
            record.sent_at.strftime("%Y-%m-%d %H:%M:%S") if record.sent_at else "-",
        )
    console.print(table)
