"""Repos command - list the working copies being watched."""

from __future__ import annotations

from repowatch.cli.context import build_context
from repowatch.core.config import RepoConfig
from repowatch.output.console import Style
from repowatch.output.render import display_name


def _fetch_label(repo: RepoConfig, default: bool) -> str:
    if repo.fetch is None:
        return f"fetch: {'on' if default else 'off'} (default)"
    return f"fetch: {'on' if repo.fetch else 'off'}"


def repos() -> None:
    """List watched repositories."""
    ctx = build_context()
    console = ctx.console
    config = ctx.config

    console.print(f"config: {ctx.config_path}", Style.DIM)
    if not config.repos:
        console.warning("no repositories configured")
        return

    for repo in config.repos:
        marker = "" if (repo.path / ".git").exists() else "  (not a git working copy)"
        console.print(f"{display_name(repo.path)}  {_fetch_label(repo, config.fetch)}{marker}")
