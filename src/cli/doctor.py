"""Doctor command for environment diagnostics."""

from __future__ import annotations

import os
from pathlib import Path

import typer
from rich.console import Console

from adapters.engine_client import EngineClient
from adapters.snapshot import SnapshotStore
from cli.context import current_settings
from cli.ui_components import build_checks_table, build_settings_table
from core.config import AppSettings, write_user_env_vars
from core.interfaces.stores import StoreError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_engine(settings: AppSettings) -> tuple[bool, str]:
    try:
        with EngineClient.from_settings(settings) as engine:
            return engine.ping()
    except Exception as exc:
        return False, str(exc)


def _check_artifacts_dir(path: Path) -> tuple[bool, str]:
    if not path.is_dir():
        return False, f"{path} does not exist"
    if not os.access(path, os.R_OK | os.X_OK):
        return False, f"{path} is not readable"
    return True, str(path)


def _check_snapshot(path: Path) -> tuple[bool, str]:
    try:
        SnapshotStore.from_path(path)
    except StoreError as exc:
        return False, str(exc)
    return True, str(path)


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = current_settings(ctx)
    table = build_checks_table("podspect Doctor")

    if settings.snapshot_path is not None:
        ok_snapshot, detail_snapshot = _check_snapshot(settings.snapshot_path)
        table.add_row("Snapshot", "OK" if ok_snapshot else "FAIL", detail_snapshot)
        ok_engine, detail_engine = _check_engine(settings)
        table.add_row("Engine API", "OK" if ok_engine else "OPTIONAL", detail_engine)
    else:
        ok_engine, detail_engine = _check_engine(settings)
        table.add_row("Engine API", "OK" if ok_engine else "FAIL", detail_engine)

    ok_artifacts, detail_artifacts = _check_artifacts_dir(settings.artifacts_dir)
    if ok_artifacts:
        table.add_row("Artifacts dir", "OK", detail_artifacts)
    elif settings.allow_missing_artifact:
        table.add_row("Artifacts dir", "OPTIONAL", detail_artifacts + " (create-config merge skipped)")
    else:
        table.add_row("Artifacts dir", "FAIL", detail_artifacts)

    _console.print(table)
    _console.print(build_settings_table(settings))

    if not ok_artifacts and not settings.allow_missing_artifact:
        _console.print(
            "\n[yellow]Note:[/yellow] Container inspects need the create-config artifact. "
            "Point PODSPECT_ARTIFACTS_DIR at the engine storage or set "
            "PODSPECT_ALLOW_MISSING_ARTIFACT=true."
        )


@app.command(name="setup-engine")
def setup_engine(ctx: typer.Context) -> None:
    """Interactive engine setup (stores config in the user config .env)."""

    settings = current_settings(ctx)

    engine_url = typer.prompt("Engine URL", default=settings.engine_url, show_default=True).strip()
    api_prefix = typer.prompt(
        "API path prefix",
        default=settings.engine_api_prefix,
        show_default=True,
    ).strip()
    artifacts_dir = typer.prompt(
        "Artifacts directory",
        default=str(settings.artifacts_dir),
        show_default=True,
    ).strip()

    if not engine_url:
        raise typer.BadParameter("engine URL is required")

    env_path = write_user_env_vars(
        {
            "PODSPECT_ENGINE_URL": engine_url,
            "PODSPECT_ENGINE_API_PREFIX": api_prefix,
            "PODSPECT_ARTIFACTS_DIR": artifacts_dir,
        }
    )

    _console.print(f"[green]Saved engine config to:[/green] {env_path}")
