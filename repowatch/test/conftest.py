from __future__ import annotations

import threading
from collections.abc import Sequence
from pathlib import Path

import pytest

from repowatch.core.result import Err, Ok, Result
from repowatch.git.divergence import divergence_args
from repowatch.git.errors import ToolInvocationFailure
from repowatch.git.upstream import UPSTREAM_ARGS
from repowatch.git.worktree import STATUS_COMMAND


class FakeRunner:
    """Scripted CommandRunner: replies keyed by (path, args)."""

    def __init__(self) -> None:
        self._replies: dict[tuple[Path | None, tuple[str, ...]], Result[str, str]] = {}
        self._lock = threading.Lock()
        self.calls: list[tuple[Path, tuple[str, ...]]] = []

    def reply(self, args: Sequence[str], output: str, *, path: Path | None = None) -> None:
        self._replies[(path, tuple(args))] = Ok(output)

    def fail(self, args: Sequence[str], message: str, *, path: Path | None = None) -> None:
        self._replies[(path, tuple(args))] = Err(message)

    def script_repo(
        self,
        *,
        upstream: str = "origin/main",
        rev_list: str = "",
        status: str = "",
        path: Path | None = None,
    ) -> None:
        """Script a repository with a configured upstream."""
        self.reply(UPSTREAM_ARGS, f"{upstream}\n", path=path)
        self.reply(divergence_args("", upstream), rev_list, path=path)
        self.reply(STATUS_COMMAND, status, path=path)

    def commands(self) -> list[tuple[str, ...]]:
        return [args for _, args in self.calls]

    def run(self, path: Path, args: Sequence[str]) -> Result[str, ToolInvocationFailure]:
        key = tuple(args)
        with self._lock:
            self.calls.append((path, key))
        reply = self._replies.get((path, key)) or self._replies.get((None, key))
        if reply is None:
            raise AssertionError(f"unexpected git {' '.join(key)} in {path}")
        match reply:
            case Ok(output):
                return Ok(output)
            case Err(message):
                return Err(ToolInvocationFailure(path=path, command=" ".join(key), message=message))


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
