"""Running git against a working copy.

The status engine only needs one primitive: run a git subcommand in a
directory and get its text back. `CommandRunner` is that contract;
`GitRunner` is the subprocess-backed implementation. Tests substitute a
scripted runner.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from repowatch.core.result import Err, Ok, Result
from repowatch.git.errors import ToolInvocationFailure
from repowatch.platform.process import run as run_process

__all__ = ["CommandRunner", "GitRunner"]


class CommandRunner(Protocol):
    """Runs a version-control subcommand against a working copy.

    Implementations return the command's standard output (trailing newline
    included) when it succeeds, and its error reply ahead of any standard
    output when it fails, so a failure reads as text starting with `fatal:`.
    Err is reserved for a tool that could not be run at all. Implementations
    must not depend on the process working directory, so calls for different
    paths can run concurrently.
    """

    def run(self, path: Path, args: Sequence[str]) -> Result[str, ToolInvocationFailure]: ...


class GitRunner:
    """CommandRunner backed by the git executable.

    Attributes:
        executable: git binary name or path
        timeout: Per-command timeout in seconds, None to wait indefinitely
    """

    def __init__(self, executable: str = "git", *, timeout: float | None = None) -> None:
        self.executable = executable
        self.timeout = timeout

    def run(self, path: Path, args: Sequence[str]) -> Result[str, ToolInvocationFailure]:
        result = run_process(
            [self.executable, *args],
            cwd=path,
            env=self._env(),
            timeout=self.timeout,
        )
        match result:
            case Err(e):
                return Err(
                    ToolInvocationFailure(path=path, command=" ".join(args), message=e.message)
                )
            case Ok(output):
                return Ok(output)

    @staticmethod
    def _env() -> dict[str, str]:
        # Untranslated messages keep the "fatal:" prefix matchable;
        # no pager or credential prompt may block a batch run.
        env = dict(os.environ)
        env["LC_ALL"] = "C"
        env["GIT_TERMINAL_PROMPT"] = "0"
        env["GIT_PAGER"] = "cat"
        return env
