"""Per-repository status check.

`check` runs, in order: an optional `git fetch`, upstream resolution, the
divergence query, and `git status --porcelain`, and folds the replies into
an immutable RepoStatus. A RepoStatus depends only on what is on disk (plus
the fetch, if any) and is rebuilt from scratch on every check.

Usage:
    runner = GitRunner()
    match check(RepoConfig(Path("~/src/app").expanduser()), False, runner=runner):
        case Ok(status):
            print("clean" if status.is_clean else status.to_dict())
        case Err(error):
            print(f"check failed: {error}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from repowatch.core.config import RepoConfig
from repowatch.core.result import Err, Ok, Result
from repowatch.git.divergence import divergence
from repowatch.git.errors import CheckError, ToolInvocationFailure
from repowatch.git.replies import contains_failure, first_line, is_failure
from repowatch.git.runner import CommandRunner
from repowatch.git.upstream import resolve_upstream
from repowatch.git.worktree import STATUS_COMMAND, FileStatusCode, parse_status_output

__all__ = [
    "FETCH_COMMAND",
    "FetchErrorHandler",
    "RepoStatus",
    "check",
    "refresh",
]

FETCH_COMMAND = ("fetch",)

FetchErrorHandler = Callable[[ToolInvocationFailure], None]


@dataclass(frozen=True, slots=True)
class RepoStatus:
    """Outstanding work in one working copy.

    Attributes:
        ahead: Local-only commit ids, in git's order
        behind: Upstream-only commit ids, in git's order
        modified: Paths with content changes
        deleted: Removed paths
        unknown: Untracked paths
    """

    ahead: tuple[str, ...] = field(default_factory=tuple)
    behind: tuple[str, ...] = field(default_factory=tuple)
    modified: frozenset[str] = field(default_factory=frozenset)
    deleted: frozenset[str] = field(default_factory=frozenset)
    unknown: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_clean(self) -> bool:
        """True if there is nothing to commit, push or pull."""
        return not (self.ahead or self.behind or self.modified or self.deleted or self.unknown)

    @property
    def has_divergence(self) -> bool:
        return bool(self.ahead or self.behind)

    @property
    def has_changes(self) -> bool:
        """True if the working tree itself is dirty."""
        return bool(self.modified or self.deleted or self.unknown)

    def to_dict(self) -> dict[str, object]:
        """Plain JSON-ready form; sets are sorted for stable output."""
        return {
            "ahead": list(self.ahead),
            "behind": list(self.behind),
            "modified": sorted(self.modified),
            "deleted": sorted(self.deleted),
            "unknown": sorted(self.unknown),
            "is_clean": self.is_clean,
        }


def refresh(path: Path, runner: CommandRunner) -> Result[None, ToolInvocationFailure]:
    """Fetch from the default remote so `behind` reflects the server."""
    match runner.run(path, FETCH_COMMAND):
        case Err(e):
            return Err(e)
        case Ok(reply) if contains_failure(reply):
            return Err(
                ToolInvocationFailure(path=path, command="fetch", message=reply.strip())
            )
        case Ok(_):
            return Ok(None)


def check(
    repo: RepoConfig,
    do_fetch: bool,
    *,
    runner: CommandRunner,
    fetch_default: bool = True,
    on_fetch_error: FetchErrorHandler | None = None,
) -> Result[RepoStatus, CheckError]:
    """Check one working copy.

    Args:
        repo: The working copy to check
        do_fetch: Whether this run may fetch at all
        runner: git command runner
        fetch_default: Fetch flag for repos that do not set their own
        on_fetch_error: Called when the fetch fails; the check continues
            with whatever remote refs are already present

    Returns:
        Ok(RepoStatus), or Err with the first fatal condition met
    """
    path = repo.path

    if do_fetch and repo.should_fetch(fetch_default):
        fetched = refresh(path, runner)
        if isinstance(fetched, Err) and on_fetch_error is not None:
            on_fetch_error(fetched.error)

    ahead: tuple[str, ...] = ()
    behind: tuple[str, ...] = ()
    match resolve_upstream(path, runner):
        case Err(e):
            return Err(e)
        case Ok(None):
            pass
        case Ok(upstream):
            match divergence(path, upstream, runner):
                case Err(e):
                    return Err(e)
                case Ok((ahead, behind)):
                    pass

    match runner.run(path, STATUS_COMMAND):
        case Err(e):
            return Err(e)
        case Ok(reply) if is_failure(reply):
            return Err(
                ToolInvocationFailure(
                    path=path, command=" ".join(STATUS_COMMAND), message=first_line(reply)
                )
            )
        case Ok(reply):
            status_output = reply

    match parse_status_output(status_output):
        case Err(e):
            return Err(e)
        case Ok(buckets):
            return Ok(
                RepoStatus(
                    ahead=ahead,
                    behind=behind,
                    modified=buckets[FileStatusCode.MODIFIED],
                    deleted=buckets[FileStatusCode.DELETED],
                    unknown=buckets[FileStatusCode.UNTRACKED],
                )
            )
