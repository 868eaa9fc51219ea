"""Error presentation utilities.

Centralized error formatting and exit code mapping for check failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from repowatch.core.errors import ErrorCode
from repowatch.git.errors import (
    CheckError,
    MalformedDivergenceLine,
    MalformedStatusLine,
    ToolInvocationFailure,
    describe,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from repowatch.git.multi import RepoCheck
    from repowatch.output.console import ConsoleProtocol

__all__ = ["check_error_exit_code", "exit_code_for", "print_fetch_warnings"]


def check_error_exit_code(error: CheckError) -> int:
    """Exit code for a failed repository check."""
    match error:
        case ToolInvocationFailure():
            return int(ErrorCode.ENV_ERROR)
        case MalformedDivergenceLine() | MalformedStatusLine():
            return int(ErrorCode.PARSE_ERROR)


def exit_code_for(checks: list[RepoCheck], *, strict: bool = False) -> int:
    """Overall exit code: worst error first, then DIRTY when strict."""
    codes = [check_error_exit_code(c.error) for c in checks if c.error is not None]
    if codes:
        return max(codes)
    if strict and any(c.is_dirty for c in checks):
        return int(ErrorCode.DIRTY)
    return int(ErrorCode.OK)


def print_fetch_warnings(checks: Iterable[RepoCheck], console: ConsoleProtocol) -> None:
    """Print one warning per failed fetch.

    Failed checks are not repeated here; the report already shows them.
    """
    for c in checks:
        if c.fetch_error is not None:
            console.warning(f"{c.path}: {describe(c.fetch_error)}")
