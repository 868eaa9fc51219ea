from __future__ import annotations

import os
from pathlib import Path

import typer

from repowatch import __version__
from repowatch.cli.commands.repos import repos
from repowatch.cli.commands.status import status
from repowatch.core.errors import ErrorCode
from repowatch.platform.paths import CONFIG_ENV_VAR


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(status)
app.command()(repos)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (overrides $REPOWATCH_CONFIG)",
    ),
) -> None:
    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: --config '{path}' does not exist", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        os.environ[CONFIG_ENV_VAR] = str(path)


def main() -> None:
    app()
