"""Multi-repository checks.

Runs `check` over every configured working copy. A failure in one repository
is recorded on its RepoCheck and never affects the others. With jobs > 1 the
checks run on a thread pool; results always come back in input order.

Usage:
    checks = check_all(config.repos, do_fetch=True, runner=GitRunner(), jobs=4)
    print(get_summary(checks))
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from repowatch.core.result import Err, Ok
from repowatch.git.errors import CheckError, ToolInvocationFailure, describe
from repowatch.git.status import RepoStatus, check

if TYPE_CHECKING:
    from collections.abc import Sequence

    from repowatch.core.config import RepoConfig
    from repowatch.git.runner import CommandRunner

__all__ = [
    "RepoCheck",
    "check_all",
    "check_one",
    "get_summary",
]


@dataclass(frozen=True, slots=True)
class RepoCheck:
    """Outcome of checking one repository.

    Attributes:
        path: Repository path
        status: RepoStatus if the check succeeded, None on error
        error: Why the check failed, None on success
        fetch_error: Fetch failure, if a fetch was attempted and failed
    """

    path: Path
    status: RepoStatus | None = None
    error: CheckError | None = None
    fetch_error: ToolInvocationFailure | None = None

    @property
    def ok(self) -> bool:
        return self.status is not None

    @property
    def is_clean(self) -> bool:
        """True if repository is clean. False if dirty or failed."""
        return self.status is not None and self.status.is_clean

    @property
    def is_dirty(self) -> bool:
        return self.status is not None and not self.status.is_clean

    @property
    def has_divergence(self) -> bool:
        return self.status is not None and self.status.has_divergence

    def to_dict(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "status": self.status.to_dict() if self.status is not None else None,
            "error": describe(self.error) if self.error is not None else None,
            "fetch_error": describe(self.fetch_error) if self.fetch_error is not None else None,
        }


def check_one(
    repo: RepoConfig,
    *,
    do_fetch: bool,
    runner: CommandRunner,
    fetch_default: bool = True,
) -> RepoCheck:
    """Check a single repository, capturing any error on the result."""
    fetch_errors: list[ToolInvocationFailure] = []
    result = check(
        repo,
        do_fetch,
        runner=runner,
        fetch_default=fetch_default,
        on_fetch_error=fetch_errors.append,
    )
    fetch_error = fetch_errors[0] if fetch_errors else None

    match result:
        case Ok(status):
            return RepoCheck(path=repo.path, status=status, fetch_error=fetch_error)
        case Err(error):
            return RepoCheck(path=repo.path, error=error, fetch_error=fetch_error)


def check_all(
    repos: Sequence[RepoConfig],
    *,
    do_fetch: bool,
    runner: CommandRunner,
    fetch_default: bool = True,
    jobs: int = 1,
) -> list[RepoCheck]:
    """Check all repositories.

    Args:
        repos: Working copies to check
        do_fetch: Whether repos with fetching enabled are fetched first
        runner: git command runner, shared by all workers
        fetch_default: Fetch flag for repos that do not set their own
        jobs: Number of parallel workers

    Returns:
        One RepoCheck per input repo, in input order
    """

    def _check(repo: RepoConfig) -> RepoCheck:
        return check_one(repo, do_fetch=do_fetch, runner=runner, fetch_default=fetch_default)

    if jobs <= 1 or len(repos) <= 1:
        return [_check(repo) for repo in repos]

    with ThreadPoolExecutor(max_workers=min(jobs, len(repos))) as executor:
        return list(executor.map(_check, repos))


def get_summary(checks: list[RepoCheck]) -> dict[str, int]:
    """Counts: total, clean, dirty, diverged, errors."""
    return {
        "total": len(checks),
        "clean": sum(1 for c in checks if c.is_clean),
        "dirty": sum(1 for c in checks if c.is_dirty),
        "diverged": sum(1 for c in checks if c.has_divergence),
        "errors": sum(1 for c in checks if not c.ok),
    }
