"""Result type for explicit error handling.

Every step of a repository check can fail in a well-defined way (git not
runnable, malformed porcelain output, unreadable config). Those steps return
a Result instead of raising, so the batch layer can record the failure for
one repository and carry on with the others.

Usage:
    match parse_status_line(" M src/x.go"):
        case Ok((code, path)):
            print(code, path)
        case Err(error):
            print(f"bad line: {error.line!r}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome carrying `value`."""

    value: T

    def unwrap(self) -> T:
        return self.value

    def unwrap_or[D](self, default: D) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed outcome carrying `error`, usually a frozen error dataclass."""

    error: E

    def unwrap(self) -> NoReturn:
        """Raise ValueError; tests use this to assert a step succeeded."""
        raise ValueError(f"expected Ok, got Err({self.error!r})")

    def unwrap_or[D](self, default: D) -> D:
        return default


type Result[T, E] = Ok[T] | Err[E]
