"""Status command - report which watched repositories need attention."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console

from repowatch.cli.context import build_context
from repowatch.core.config import RepoConfig, expand_path
from repowatch.core.errors import ErrorCode
from repowatch.git.multi import check_all
from repowatch.git.runner import GitRunner
from repowatch.output.errors import exit_code_for, print_fetch_warnings
from repowatch.output.render import print_report

_console = Console()


def status(
    paths: list[Path] | None = typer.Argument(
        None, help="Working copies to check instead of the configured ones"
    ),
    fetch: bool = typer.Option(False, "--fetch", "-f", help="Fetch remotes first"),
    detailed: bool = typer.Option(False, "--detailed", "-d", help="List files and commits"),
    as_json: bool = typer.Option(False, "--json", help="Print checks as JSON"),
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help="Parallel checks"),
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero if any repo is dirty"),
) -> None:
    """Check pending changes in all watched repos."""
    ctx = build_context()
    config = ctx.config

    if paths:
        repos = tuple(RepoConfig(path=expand_path(str(p)).resolve()) for p in paths)
        missing = [r.path for r in repos if not r.path.is_dir()]
        for path in missing:
            ctx.console.error(f"{path}: no such directory")
        if missing:
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    else:
        repos = config.repos

    if fetch and not as_json:
        _console.print("[dim]Fetching remotes...[/dim]")

    checks = check_all(
        repos,
        do_fetch=fetch,
        runner=GitRunner(timeout=config.timeout),
        fetch_default=config.fetch,
        jobs=jobs or config.jobs,
    )

    if as_json:
        typer.echo(json.dumps([c.to_dict() for c in checks], indent=2))
    else:
        print_report(_console, checks, detailed=detailed)
        print_fetch_warnings(checks, ctx.console)

    code = exit_code_for(checks, strict=strict)
    if code:
        raise typer.Exit(code=code)
