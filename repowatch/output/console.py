"""Console output abstraction.

Commands report warnings (a fetch that failed) and errors (a repository that
could not be checked) through ConsoleProtocol. Production code writes with
Rich to stderr, keeping stdout for the report and `--json`; tests capture
lines with MockConsole.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    DEFAULT = auto()
    DIM = auto()
    WARNING = auto()
    ERROR = auto()


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


_RICH_STYLES = {
    Style.DEFAULT: None,
    Style.DIM: "dim",
    Style.WARNING: "yellow",
    Style.ERROR: "red bold",
}


class RichConsole:
    """Rich-backed console. Messages are printed literally, never as markup."""

    def __init__(self, *, stderr: bool = True) -> None:
        from rich.console import Console

        self._console = Console(stderr=stderr)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=_RICH_STYLES[style], markup=False, highlight=False)

    def warning(self, message: str) -> None:
        self._labelled("warning:", Style.WARNING, message)

    def error(self, message: str) -> None:
        self._labelled("error:", Style.ERROR, message)

    def _labelled(self, label: str, style: Style, message: str) -> None:
        from rich.text import Text

        # Text keeps [brackets] in paths and git replies literal
        line = Text(label, style=_RICH_STYLES[style] or "")
        line.append(f" {message}")
        self._console.print(line, highlight=False)


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


@dataclass
class MockConsole:
    """Records every line instead of printing it."""

    outputs: list[OutputRecord] = field(default_factory=list)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style is Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
