"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables and error lines are reused across commands.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.config import AppSettings


def print_error(console: Console, message: str) -> None:
    """Print a one-line error, the way the engine CLI reports failures."""

    console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)


def build_checks_table(title: str) -> Table:
    """Table for the doctor diagnostics."""

    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white", no_wrap=True)
    table.add_column("Details", style="dim")
    return table


def build_settings_table(settings: AppSettings) -> Table:
    """Effective configuration, after env vars and .env files."""

    table = Table(title="Effective settings")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("engine_url", settings.engine_url)
    table.add_row("engine_api_prefix", settings.engine_api_prefix or "(none)")
    table.add_row("artifacts_dir", str(settings.artifacts_dir))
    table.add_row("snapshot_path", str(settings.snapshot_path) if settings.snapshot_path else "(live engine)")
    table.add_row("batch_policy", f"{settings.batch_policy.value} ({settings.batch_policy.label()})")
    table.add_row("allow_missing_artifact", str(settings.allow_missing_artifact))
    table.add_row("json_indent", str(settings.json_indent))
    return table
