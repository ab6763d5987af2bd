"""Fanfare CLI — Typer-based command-line interface.

Provides the ``fanfare`` command with subcommands for dispatching events
from JSON files, previewing templates, inspecting stored records and
checking which provider serves each channel.

All output uses Rich for formatted terminal display.
"""
