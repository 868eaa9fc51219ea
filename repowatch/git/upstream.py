"""Upstream resolution.

The configured upstream of the current branch wins. Branches without one are
compared against `origin/<branch>` when that ref exists, since most clones
never set up tracking for every branch. If neither exists there is nothing to
compare against, which is a normal outcome rather than an error.
"""

from __future__ import annotations

from pathlib import Path

from repowatch.core.result import Err, Ok, Result
from repowatch.git.divergence import divergence_args
from repowatch.git.errors import ToolInvocationFailure
from repowatch.git.replies import first_line, is_failure
from repowatch.git.runner import CommandRunner

__all__ = [
    "BRANCH_ARGS",
    "DEFAULT_REMOTE",
    "UPSTREAM_ARGS",
    "resolve_upstream",
]

DEFAULT_REMOTE = "origin"

UPSTREAM_ARGS = ["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"]
BRANCH_ARGS = ["rev-parse", "--abbrev-ref", "HEAD"]


def resolve_upstream(
    path: Path,
    runner: CommandRunner,
    *,
    remote: str = DEFAULT_REMOTE,
) -> Result[str | None, ToolInvocationFailure]:
    """Find the ref HEAD should be compared against.

    Returns:
        Ok(ref) for the configured upstream or the `<remote>/<branch>` fallback,
        Ok(None) when neither exists, Err if git could not be run.
    """
    match runner.run(path, UPSTREAM_ARGS):
        case Err(e):
            return Err(e)
        case Ok(reply) if not is_failure(reply):
            return Ok(first_line(reply))
        case Ok(_):
            pass

    match runner.run(path, BRANCH_ARGS):
        case Err(e):
            return Err(e)
        case Ok(reply) if is_failure(reply) or not reply.strip():
            return Ok(None)
        case Ok(reply):
            candidate = f"{remote}/{first_line(reply)}"

    # rev-list of a ref against itself prints nothing if the ref exists
    match runner.run(path, divergence_args(candidate, candidate)):
        case Err(e):
            return Err(e)
        case Ok(reply) if is_failure(reply):
            return Ok(None)
        case Ok(_):
            return Ok(candidate)
