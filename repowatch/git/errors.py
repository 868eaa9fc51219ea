"""Errors that abort a single repository's check.

"No upstream" is not an error: the resolver returns None and divergence is
skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "CheckError",
    "MalformedDivergenceLine",
    "MalformedStatusLine",
    "ToolInvocationFailure",
    "describe",
]


@dataclass(frozen=True, slots=True)
class ToolInvocationFailure:
    """git could not be run against the working copy.

    Attributes:
        path: Working copy the command targeted
        command: git subcommand (e.g. "status --porcelain")
        message: OS error, timeout, or git's own failure reply
    """

    path: Path
    command: str
    message: str


@dataclass(frozen=True, slots=True)
class MalformedDivergenceLine:
    """A rev-list --left-right line without a `<` or `>` marker."""

    line: str
    reason: str = "unknown divergence marker"


@dataclass(frozen=True, slots=True)
class MalformedStatusLine:
    """A porcelain status line the status model cannot represent."""

    line: str
    reason: str


CheckError = ToolInvocationFailure | MalformedDivergenceLine | MalformedStatusLine


def describe(error: CheckError) -> str:
    """One-line description: error kind plus the offending content."""
    match error:
        case ToolInvocationFailure(command=command, message=message):
            return f"git {command} failed: {message}"
        case MalformedDivergenceLine(line=line, reason=reason):
            return f"malformed divergence line ({reason}): {line!r}"
        case MalformedStatusLine(line=line, reason=reason):
            return f"malformed status line ({reason}): {line!r}"
