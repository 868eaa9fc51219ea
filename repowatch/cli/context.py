from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from repowatch.core.config import WatchConfig, load_config_or_default
from repowatch.core.errors import ErrorCode
from repowatch.core.result import Err
from repowatch.output.console import ConsoleProtocol, RichConsole
from repowatch.platform.paths import default_config_path


@dataclass(frozen=True, slots=True)
class CLIContext:
    config_path: Path
    config: WatchConfig
    console: ConsoleProtocol


def build_context() -> CLIContext:
    config_path = default_config_path()
    result = load_config_or_default(config_path)
    if isinstance(result, Err):
        typer.echo(f"error: {result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(
        config_path=config_path,
        config=result.value,
        console=RichConsole(),
    )
