"""Git status engine.

This module inventories working copies:
- status: check one repository (fetch, upstream, divergence, worktree)
- multi: check many repositories, optionally in parallel

Usage:
    from repowatch.git import GitRunner, check_all

    checks = check_all(config.repos, do_fetch=False, runner=GitRunner())
    for c in checks:
        print(c.path, "clean" if c.is_clean else "needs attention")
"""

from repowatch.git.divergence import DivergenceArrow, divergence
from repowatch.git.errors import (
    CheckError,
    MalformedDivergenceLine,
    MalformedStatusLine,
    ToolInvocationFailure,
    describe,
)
from repowatch.git.multi import (
    RepoCheck,
    check_all,
    check_one,
    get_summary,
)
from repowatch.git.runner import CommandRunner, GitRunner
from repowatch.git.status import RepoStatus, check, refresh
from repowatch.git.upstream import DEFAULT_REMOTE, resolve_upstream
from repowatch.git.worktree import FileStatusCode, parse_status_line

__all__ = [
    # Errors
    "CheckError",
    "MalformedDivergenceLine",
    "MalformedStatusLine",
    "ToolInvocationFailure",
    "describe",
    # Runner
    "CommandRunner",
    "GitRunner",
    # Engine
    "DEFAULT_REMOTE",
    "DivergenceArrow",
    "FileStatusCode",
    "RepoStatus",
    "check",
    "divergence",
    "parse_status_line",
    "refresh",
    "resolve_upstream",
    # Multi
    "RepoCheck",
    "check_all",
    "check_one",
    "get_summary",
]
