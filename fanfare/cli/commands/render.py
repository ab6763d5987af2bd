"""``fanfare render TEMPLATE_FILE`` — preview a template with sample data."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console

from fanfare.templating.engine import render

console = Console(stderr=True)


def render_cmd(
    template_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Template file to render.",
    ),
    data_file: Path = typer.Option(
        None,
        "--data",
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON file with the template data (an object).",
    ),
) -> None:
    """Render TEMPLATE_FILE through the template engine and print the result."""
    data: dict = {}
    if data_file is not None:
        try:
            data = json.loads(data_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            console.print(f"[bold red]Invalid JSON in {data_file}:[/bold red] {exc}")
            raise typer.Exit(code=1)
        if not isinstance(data, dict):
            console.print("[bold red]Template data must be a JSON object.[/bold red]")
            raise typer.Exit(code=1)

    # Plain echo: rendered output may contain [brackets] rich would eat.
    typer.echo(render(template_file.read_text(encoding="utf-8"), data))
