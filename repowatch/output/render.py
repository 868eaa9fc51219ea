"""Rich rendering of repository checks.

Repositories needing attention go in a PENDING panel with their counts and
divergence (and, with `detailed`, the file paths and commit ids); clean ones
are listed by name in an OK panel.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.text import Text

from repowatch.git.errors import describe
from repowatch.git.multi import RepoCheck, get_summary
from repowatch.git.status import RepoStatus
from repowatch.platform.paths import home

__all__ = [
    "ChangeCounts",
    "display_name",
    "print_report",
    "render_report",
    "render_summary",
]

_SHORT_COMMIT = 10


@dataclass(frozen=True, slots=True)
class ChangeCounts:
    """Counts of different change types."""

    modified: int = 0
    deleted: int = 0
    untracked: int = 0

    @staticmethod
    def from_status(st: RepoStatus) -> ChangeCounts:
        return ChangeCounts(
            modified=len(st.modified),
            deleted=len(st.deleted),
            untracked=len(st.unknown),
        )

    def as_parts(self) -> list[tuple[str, str]]:
        """Return (label, color) pairs for non-zero counts."""
        parts: list[tuple[str, str]] = []
        if self.modified:
            parts.append((f"{self.modified}M", "yellow"))
        if self.deleted:
            parts.append((f"{self.deleted}D", "red"))
        if self.untracked:
            parts.append((f"{self.untracked}?", "cyan"))
        return parts

    def as_string(self) -> str:
        return " ".join(label for label, _ in self.as_parts())


def display_name(path: Path) -> str:
    """Path with the home directory shortened to ~."""
    try:
        return "~/" + path.relative_to(home()).as_posix()
    except ValueError:
        return str(path)


def _render_counts(counts: ChangeCounts) -> Text:
    text = Text()
    for i, (label, color) in enumerate(counts.as_parts()):
        if i > 0:
            text.append(" ")
        text.append(label, style=color)
    return text


def _render_divergence(st: RepoStatus) -> Text:
    """Render ahead/behind as 3^ 2v."""
    text = Text()
    if st.ahead:
        text.append(f"{len(st.ahead)}", style="green")
        text.append("^", style="green dim")
    if st.ahead and st.behind:
        text.append(" ")
    if st.behind:
        text.append(f"{len(st.behind)}", style="red")
        text.append("v", style="red dim")
    return text


def _render_details(st: RepoStatus) -> list[Text]:
    lines: list[Text] = []
    for label, color, paths in (
        ("M", "yellow", st.modified),
        ("D", "red", st.deleted),
        ("?", "cyan", st.unknown),
    ):
        for p in sorted(paths):
            line = Text("    ")
            line.append(f"{label} ", style=color)
            line.append(p, style="dim")
            lines.append(line)
    for arrow, color, commits in (("^", "green", st.ahead), ("v", "red", st.behind)):
        for commit in commits:
            line = Text("    ")
            line.append(f"{arrow} ", style=color)
            line.append(commit[:_SHORT_COMMIT], style="dim")
            lines.append(line)
    return lines


def _render_pending(c: RepoCheck, detailed: bool) -> Text:
    text = Text()
    if c.error is not None:
        text.append(display_name(c.path), style="bold red")
        text.append(f"\n{describe(c.error)}", style="red dim")
        return text

    st = c.status
    assert st is not None

    text.append(display_name(c.path), style="bold")
    summary = Text("\n")
    summary.append_text(_render_counts(ChangeCounts.from_status(st)))
    div = _render_divergence(st)
    if div.plain:
        if summary.plain.strip():
            summary.append("  ")
        summary.append_text(div)
    text.append_text(summary)

    if c.fetch_error is not None:
        text.append("\nfetch failed, remote state may be stale", style="yellow dim")

    if detailed:
        for line in _render_details(st):
            text.append("\n")
            text.append_text(line)

    return text


def render_report(checks: list[RepoCheck], *, detailed: bool = False) -> list[RenderableType]:
    """Build the PENDING and OK panels, in input order within each."""
    pending = [c for c in checks if not c.is_clean]
    clean = [c for c in checks if c.is_clean]

    renderables: list[RenderableType] = []
    if pending:
        combined = Text()
        for i, c in enumerate(pending):
            if i > 0:
                combined.append("\n\n")
            combined.append_text(_render_pending(c, detailed))
        renderables.append(
            Panel(
                combined,
                title="[bold yellow]PENDING[/bold yellow]",
                title_align="left",
                border_style="yellow",
                padding=(0, 1),
            )
        )

    if clean:
        clean_text = Text()
        for i, c in enumerate(clean):
            if i > 0:
                clean_text.append("\n")
            clean_text.append(display_name(c.path), style="dim")
        renderables.append(
            Panel(
                clean_text,
                title=f"[bold green]OK[/bold green] [dim]({len(clean)})[/dim]",
                title_align="left",
                border_style="green dim",
                padding=(0, 1),
            )
        )

    return renderables


def render_summary(checks: list[RepoCheck]) -> Text:
    """One-line footer: 5 repos, 3 clean, 1 dirty, 1 diverged, 1 failed."""
    summary = get_summary(checks)
    total = summary["total"]
    text = Text(f"{total} repo" if total == 1 else f"{total} repos", style="dim")
    for key, label, color in (
        ("clean", "clean", "green"),
        ("dirty", "dirty", "yellow"),
        ("diverged", "diverged", "cyan"),
        ("errors", "failed", "red"),
    ):
        if summary[key]:
            text.append(", ", style="dim")
            text.append(f"{summary[key]} {label}", style=color)
    return text


def print_report(console: Console, checks: list[RepoCheck], *, detailed: bool = False) -> None:
    renderables = render_report(checks, detailed=detailed)
    if not renderables:
        console.print("[dim]No repositories configured[/dim]")
        return
    for renderable in renderables:
        console.print(renderable)
    console.print(render_summary(checks))
