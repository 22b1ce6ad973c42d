"""podspect CLI.

Thin layer: flags become an `InspectionRequest`, adapters are wired from
settings, and the rendered text (or one error) is printed. All inspection
logic lives in `core.services.inspect_pipeline`.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import typer
from rich.console import Console

from adapters.backends import open_backends
from cli import doctor
from cli.context import current_settings
from cli.ui_components import print_error
from core.config import AppSettings
from core.domain.errors import InspectError
from core.domain.models import InspectionRequest, InspectKind
from core.domain.policy import BatchPolicy
from core.interfaces.stores import StoreError
from core.logging_utils import setup_logging
from core.services.inspect_pipeline import run_inspect

# Exit status the engine CLI uses for errors of the tool itself.
EXIT_ERROR = 125

INSPECT_HELP = """This displays the low-level information on containers and images identified by name or ID.

If given a name that matches both a container and an image, this command inspects the container.  By default, this will render all results in a JSON array."""

INSPECT_EPILOG = """Examples:

  podspect inspect alpine

  podspect inspect --format "imageId: {{.Id}} size: {{.Size}}" alpine

  podspect inspect --format "image: {{.ImageName}} driver: {{.Driver}}" myctr"""

FORMAT_HELP = "Change the output format to a Go template"
LATEST_HELP = "Act on the latest container podspect is aware of"
SIZE_HELP = "Display total file size"
CONTAINERS_ONLY = " (containers only)"

app = typer.Typer(
    no_args_is_help=True,
    help="Display the configuration of containers and images.",
)
container_app = typer.Typer(no_args_is_help=True, help="Container commands.")
image_app = typer.Typer(no_args_is_help=True, help="Image commands.")
app.add_typer(container_app, name="container")
app.add_typer(image_app, name="image")
app.add_typer(doctor.app, name="doctor")

_err_console = Console(stderr=True)


def _package_version() -> str:
    try:
        return version("podspect")
    except PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"podspect {_package_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    snapshot: Path | None = typer.Option(
        None,
        "--snapshot",
        help="Inspect an offline JSON snapshot instead of the live engine.",
    ),
    policy: BatchPolicy | None = typer.Option(
        None,
        "--policy",
        case_sensitive=False,
        help="Batch failure policy (default from PODSPECT_BATCH_POLICY).",
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    settings = AppSettings()
    updates: dict[str, object] = {}
    if snapshot is not None:
        updates["snapshot_path"] = snapshot
    if policy is not None:
        updates["batch_policy"] = policy
    if log_level:
        updates["log_level"] = log_level
    if updates:
        settings = settings.model_copy(update=updates)

    setup_logging(level=settings.log_level)
    ctx.obj = settings


def _run(
    ctx: typer.Context,
    *,
    names: list[str] | None,
    kind: str,
    output_format: str,
    latest: bool = False,
    size: bool = False,
) -> None:
    settings = current_settings(ctx)
    try:
        request = InspectionRequest(
            names=tuple(names or ()),
            kind=kind,
            include_size=size,
            use_latest=latest,
            format=output_format,
        )
        with open_backends(settings) as backends:
            output = run_inspect(
                request,
                store=backends.store,
                provider=backends.provider,
                artifacts=backends.artifacts,
                templates=backends.templates,
                encoder=backends.encoder,
                settings=settings,
            )
    except (InspectError, StoreError) as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=EXIT_ERROR) from exc

    typer.echo(output, nl=False)


@app.command("inspect", help=INSPECT_HELP, epilog=INSPECT_EPILOG)
def inspect_cmd(
    ctx: typer.Context,
    names: list[str] | None = typer.Argument(None, metavar="CONTAINER | IMAGE"),
    output_format: str = typer.Option("", "--format", "-f", help=FORMAT_HELP),
    type_: str = typer.Option(
        InspectKind.ALL.value,
        "--type",
        "-t",
        help="Return JSON for specified type, (image or container)",
    ),
    latest: bool = typer.Option(False, "--latest", "-l", help=LATEST_HELP + CONTAINERS_ONLY),
    size: bool = typer.Option(False, "--size", "-s", help=SIZE_HELP + CONTAINERS_ONLY),
) -> None:
    _run(ctx, names=names, kind=type_, output_format=output_format, latest=latest, size=size)


@container_app.command("inspect", help=INSPECT_HELP)
def container_inspect_cmd(
    ctx: typer.Context,
    names: list[str] | None = typer.Argument(None, metavar="CONTAINER"),
    output_format: str = typer.Option("", "--format", "-f", help=FORMAT_HELP),
    latest: bool = typer.Option(False, "--latest", "-l", help=LATEST_HELP),
    size: bool = typer.Option(False, "--size", "-s", help=SIZE_HELP),
) -> None:
    _run(
        ctx,
        names=names,
        kind=InspectKind.CONTAINER.value,
        output_format=output_format,
        latest=latest,
        size=size,
    )


@image_app.command("inspect", help=INSPECT_HELP)
def image_inspect_cmd(
    ctx: typer.Context,
    names: list[str] | None = typer.Argument(None, metavar="IMAGE"),
    output_format: str = typer.Option("", "--format", "-f", help=FORMAT_HELP),
) -> None:
    _run(ctx, names=names, kind=InspectKind.IMAGE.value, output_format=output_format)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
