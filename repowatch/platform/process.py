"""Subprocess execution with Result-based error handling.

Git reports many ordinary conditions (no upstream, unknown revision) on
stderr with a non-zero exit. The status engine reads those replies as text,
so `run` returns output whatever the exit status: stdout alone on success,
stderr followed by stdout on failure. Warnings git prints on stderr while
succeeding never reach the parsers. Only a process that could not be started
or did not finish is an Err.

Output is decoded as UTF-8 with undecodable bytes replaced, since file names
in a working copy need not be valid UTF-8.

Usage:
    match run(["git", "status", "--porcelain"], cwd=repo_path):
        case Ok(output):
            print(output)
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from repowatch.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that could not be run to completion.

    Attributes:
        command: The command that was executed.
        message: Why it could not run (OS error text, timeout).
    """

    command: tuple[str, ...]
    message: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str}: {self.message}"


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its output.

    The process is started with `cwd` instead of changing the interpreter's
    working directory, so concurrent calls for different paths are safe.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on exit status 0, Ok(stderr + stdout) on any other exit
        status, Err(ProcessError) if the process could not run.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(ProcessError(command=tuple(cmd), message=f"timed out after {timeout}s"))
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), message=str(e)))

    stdout = proc.stdout or ""
    if proc.returncode == 0:
        return Ok(stdout)
    return Ok((proc.stderr or "") + stdout)
