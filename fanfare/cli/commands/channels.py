"""``fanfare channels`` — show which backend serves each channel."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from fanfare.channels.factory import build_dispatch_table
from fanfare.config import FanfareConfig
from fanfare.providers.http import ApiClient

console = Console()


def channels_cmd() -> None:
    """Show the active provider per channel (real or mock)."""
    config = FanfareConfig()
    api_client = ApiClient(timeout=config.request_timeout_seconds)
    try:
        table = build_dispatch_table(config, api_client=api_client)
    finally:
        api_client.close()

    out = Table(title=f"Channels ({config.environment})")
    out.add_column("Channel", style="cyan")
    out.add_column("Provider")
    out.add_column("Mode", justify="center")

    for channel, sender in table.senders.items():
        provider = getattr(sender, "provider", None)
        if provider is None:
            out.add_row(channel.value, "-", "[dim]no backend[/dim]")
            continue
        mock = provider.provider_name.endswith("-mock")
        mode = "[yellow]mock[/yellow]" if mock else "[green]live[/green]"
        out.add_row(channel.value, provider.provider_name, mode)

    console.print(out)
