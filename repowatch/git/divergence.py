"""Commit divergence between HEAD and its upstream.

`git rev-list --left-right ...<upstream>` lists the commits reachable from
only one side of HEAD...upstream, each prefixed with `<` (local only, ahead)
or `>` (upstream only, behind).
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from repowatch.core.result import Err, Ok, Result
from repowatch.git.errors import CheckError, MalformedDivergenceLine
from repowatch.git.runner import CommandRunner

__all__ = [
    "Divergence",
    "DivergenceArrow",
    "divergence",
    "divergence_args",
    "parse_divergence_line",
    "parse_divergence_output",
]

Divergence = tuple[tuple[str, ...], tuple[str, ...]]


class DivergenceArrow(Enum):
    AHEAD = "<"
    BEHIND = ">"


_ARROWS = {arrow.value: arrow for arrow in DivergenceArrow}


def divergence_args(left: str, right: str) -> list[str]:
    """rev-list arguments for the symmetric difference left...right.

    An empty `left` stands for HEAD.
    """
    return ["rev-list", "--left-right", f"{left}...{right}"]


def parse_divergence_line(line: str) -> Result[tuple[DivergenceArrow, str], MalformedDivergenceLine]:
    arrow = _ARROWS.get(line[:1])
    if arrow is None:
        return Err(MalformedDivergenceLine(line))
    return Ok((arrow, line[1:].strip()))


def parse_divergence_output(output: str) -> Result[Divergence, MalformedDivergenceLine]:
    """Split a rev-list reply into (ahead, behind), keeping git's order."""
    ahead: list[str] = []
    behind: list[str] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        match parse_divergence_line(line):
            case Err(e):
                return Err(e)
            case Ok((DivergenceArrow.AHEAD, commit)):
                ahead.append(commit)
            case Ok((_, commit)):
                behind.append(commit)

    return Ok((tuple(ahead), tuple(behind)))


def divergence(path: Path, upstream: str, runner: CommandRunner) -> Result[Divergence, CheckError]:
    """Compute (ahead, behind) commit ids of HEAD against `upstream`."""
    match runner.run(path, divergence_args("", upstream)):
        case Err(e):
            return Err(e)
        case Ok(output):
            return parse_divergence_output(output)
