"""Text map parsing and rendering.

Map format: one row per line, ``#`` for an obstruction, ``.`` for an open
cell, and exactly one of ``^ > v <`` marking the guard's start cell and
heading. Trailing whitespace and trailing blank lines are ignored.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from guard_patrol.config.constants import OBSTRUCTION_CHAR, OPEN_CHAR, VISITED_CHAR
from guard_patrol.domain.agent import Agent, Heading, Position, is_heading_marker
from guard_patrol.domain.errors import (
    GridShapeError,
    MissingAgentError,
    MultipleAgentsError,
    UnknownCellError,
)
from guard_patrol.domain.grid import Cell, Grid


def _split_rows(text: str) -> list[str]:
    rows = [line.rstrip() for line in text.splitlines()]
    while rows and not rows[-1]:
        rows.pop()
    return rows


def parse_patrol_map(text: str) -> tuple[Grid, Agent]:
    """Parse map text into a :class:`Grid` and the guard's start state."""
    rows = _split_rows(text)
    if not rows:
        raise GridShapeError("map is empty")
    width = len(rows[0])
    cells: list[list[Cell]] = []
    starts: list[Agent] = []
    for row_index, line in enumerate(rows):
        if len(line) != width:
            raise GridShapeError(
                f"row {row_index} has length {len(line)}, expected {width}"
            )
        row: list[Cell] = []
        for col_index, char in enumerate(line):
            if char == OBSTRUCTION_CHAR:
                row.append(Cell.OBSTRUCTION)
            elif char == OPEN_CHAR:
                row.append(Cell.OPEN)
            elif is_heading_marker(char):
                row.append(Cell.OPEN)
                starts.append(Agent((row_index, col_index), Heading.from_marker(char)))
            else:
                raise UnknownCellError(char, row_index, col_index)
        cells.append(row)

    if not starts:
        raise MissingAgentError("map has no guard start marker (^ > v <)")
    if len(starts) > 1:
        found = ", ".join(str(agent.position) for agent in starts)
        raise MultipleAgentsError(f"map has {len(starts)} guard start markers at {found}")
    return Grid.from_cells(cells), starts[0]


def load_patrol_map(path: Path) -> tuple[Grid, Agent]:
    """Read and parse a map file."""
    return parse_patrol_map(Path(path).read_text(encoding="utf-8"))


def render_patrol_map(
    grid: Grid,
    agent: Agent | None = None,
    visited: Iterable[Position] = (),
) -> str:
    """Render the grid as text, marking the route and the guard if given."""
    visited_set = set(visited)
    lines: list[str] = []
    for row_index, row in enumerate(grid.rows()):
        chars: list[str] = []
        for col_index, cell in enumerate(row):
            pos = (row_index, col_index)
            if agent is not None and pos == agent.position:
                chars.append(agent.heading.marker)
            elif cell is Cell.OBSTRUCTION:
                chars.append(OBSTRUCTION_CHAR)
            elif pos in visited_set:
                chars.append(VISITED_CHAR)
            else:
                chars.append(OPEN_CHAR)
        lines.append("".join(chars))
    return "\n".join(lines) + "\n"
