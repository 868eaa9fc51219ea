"""Classification of git's textual replies.

git signals errors such as "no upstream configured" or "unknown revision"
only in prose on stderr, prefixed with `fatal:`. Every decision that depends
on that wording goes through this module, so a change in git's messages means
changing one constant. The runner pins `LC_ALL=C` so the prefix is never
translated.
"""

from __future__ import annotations

__all__ = [
    "FAILURE_PREFIX",
    "contains_failure",
    "first_line",
    "is_failure",
]

FAILURE_PREFIX = "fatal:"


def is_failure(reply: str) -> bool:
    """True if git answered with an error instead of data."""
    return reply.startswith(FAILURE_PREFIX)


def contains_failure(reply: str) -> bool:
    """True if any line of a multi-line reply is an error.

    Commands like fetch print progress before failing, so the error is not
    necessarily on the first line.
    """
    return any(line.startswith(FAILURE_PREFIX) for line in reply.splitlines())


def first_line(reply: str) -> str:
    """First line of a reply without its line terminator."""
    lines = reply.splitlines()
    return lines[0] if lines else ""
