"""Working-tree status parsing.

Turns `git status --porcelain` output into modified, deleted and untracked
paths. Each line is `XY PATH`: X is the index status, Y the worktree status,
a space meaning "unchanged". The model only represents lines where exactly
one side reports a change, or both report the same change ("MM", "??").
Anything else is rejected rather than guessed at.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from repowatch.core.result import Err, Ok, Result
from repowatch.git.errors import MalformedStatusLine

__all__ = [
    "FileStatusCode",
    "STATUS_COMMAND",
    "iter_status_lines",
    "parse_status_line",
    "parse_status_output",
    "unquote_path",
]

STATUS_COMMAND = ("status", "--porcelain")

_UNCHANGED = " "


class FileStatusCode(Enum):
    """Category of a changed path."""

    MODIFIED = "M"
    DELETED = "D"
    UNTRACKED = "?"

    def __str__(self) -> str:
        return self.name.lower()


_CODES = {code.value: code for code in FileStatusCode}


def unquote_path(raw: str) -> str:
    """Strip the double quotes git puts around paths with special characters.

    Escapes inside the quotes are left as git wrote them.
    """
    if len(raw) >= 2 and raw.startswith('"') and raw.endswith('"'):
        return raw[1:-1]
    return raw


def parse_status_line(line: str) -> Result[tuple[FileStatusCode, str], MalformedStatusLine]:
    """Parse one non-blank porcelain line into (code, path).

    Examples:
        " M src/x.go"   -> (MODIFIED, "src/x.go")
        "D  old.txt"    -> (DELETED, "old.txt")
        '?? "a b.txt"'  -> (UNTRACKED, "a b.txt")
    """
    if len(line) < 4 or line[2] != " ":
        return Err(MalformedStatusLine(line, "truncated status line"))

    index, worktree = line[0], line[1]
    if index == _UNCHANGED and worktree == _UNCHANGED:
        return Err(MalformedStatusLine(line, "no status code"))
    if index != _UNCHANGED and worktree != _UNCHANGED and index != worktree:
        return Err(MalformedStatusLine(line, "ambiguous status"))

    effective = worktree if index == _UNCHANGED else index
    code = _CODES.get(effective)
    if code is None:
        return Err(MalformedStatusLine(line, f"unknown file status {effective!r}"))

    return Ok((code, unquote_path(line[3:])))


def iter_status_lines(output: str) -> Iterator[str]:
    """Yield the non-blank lines of a status reply.

    Lines are not stripped: a leading space is the index status.
    """
    for line in output.splitlines():
        if line.strip():
            yield line


def parse_status_output(
    output: str,
) -> Result[dict[FileStatusCode, frozenset[str]], MalformedStatusLine]:
    """Bucket a full status reply by status code.

    Stops at the first malformed line.
    """
    buckets: dict[FileStatusCode, set[str]] = {code: set() for code in FileStatusCode}
    for line in iter_status_lines(output):
        match parse_status_line(line):
            case Err(e):
                return Err(e)
            case Ok((code, path)):
                buckets[code].add(path)

    return Ok({code: frozenset(paths) for code, paths in buckets.items()})
