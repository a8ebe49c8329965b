"""Typer entrypoint for the Trellis CLI."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Annotated

import typer

from . import __version__
from . import log as trellis_log
from .commands.init import init_project as init_cmd

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Prepare a project directory before trellis init.",
)


def _validate_log_level(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in trellis_log.LOG_LEVEL_NAMES:
        raise typer.BadParameter(
            "expected one of: " + ", ".join(trellis_log.LOG_LEVEL_NAMES)
        )
    return normalized


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log level (trace|debug|info|success|warning|error).",
            callback=_validate_log_level,
        ),
    ] = None,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="Disable colorized output.")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Trellis project setup."""
    del version
    if log_level is not None:
        trellis_log.set_level(log_level)
    if no_color:
        trellis_log.set_no_color(True)


@app.command("init")
def init(
    app_url: Annotated[
        str | None,
        typer.Option(
            "--app",
            metavar="URL",
            help="Clone a sample app repository into the current (empty) directory.",
        ),
    ] = None,
    quickstart: Annotated[
        bool,
        typer.Option("--quickstart", help="Create the project skeleton and exit."),
    ] = False,
) -> None:
    """Run pre-initialization setup in the current directory."""
    code = init_cmd(SimpleNamespace(app=app_url, quickstart=quickstart))
    raise typer.Exit(code=code)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
