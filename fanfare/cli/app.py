"""Main Typer application — imports and registers all CLI commands.

Entry point: ``fanfare`` (configured via pyproject.toml scripts).

Commands: dispatch, render, records, channels.
"""

from __future__ import annotations

import typer

from fanfare.cli._logging import configure_logging
from fanfare.cli.commands.channels import channels_cmd
from fanfare.cli.commands.dispatch import dispatch_cmd
from fanfare.cli.commands.records import records_cmd
from fanfare.cli.commands.render import render_cmd
from fanfare.config import FanfareConfig

app = typer.Typer(
    name="fanfare",
    help="Fanfare: multi-channel notification fan-out.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _root(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to FANFARE_LOG_LEVEL).",
    ),
) -> None:
    configure_logging(log_level or FanfareConfig().log_level)


# Register subcommands
app.command(name="dispatch", help="Dispatch a notification event from a JSON file.")(dispatch_cmd)
app.command(name="render", help="Render a template file with JSON data.")(render_cmd)
app.command(name="records", help="Show stored records for one dispatch.")(records_cmd)
app.command(name="channels", help="Show the active provider per channel.")(channels_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
