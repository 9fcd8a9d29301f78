"""Guard headings and pure movement arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from guard_patrol.config.constants import HEADING_MARKERS

Position = tuple[int, int]
"""Grid coordinate as ``(row, col)``."""


class Heading(Enum):
    """Compass heading in clockwise order."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def marker(self) -> str:
        return HEADING_MARKERS[self.value]

    @classmethod
    def from_marker(cls, char: str) -> Heading:
        """Map a start-marker character (``^ > v <``) to its heading."""
        try:
            return cls(HEADING_MARKERS.index(char))
        except ValueError as exc:
            valid = " ".join(HEADING_MARKERS)
            raise ValueError(f"heading marker must be one of {valid}, got {char!r}") from exc


_DELTAS: dict[Heading, tuple[int, int]] = {
    Heading.NORTH: (-1, 0),
    Heading.EAST: (0, 1),
    Heading.SOUTH: (1, 0),
    Heading.WEST: (0, -1),
}


def is_heading_marker(char: str) -> bool:
    return char in HEADING_MARKERS


def forward(heading: Heading) -> tuple[int, int]:
    """Return the ``(d_row, d_col)`` unit delta for one step in *heading*."""
    return _DELTAS[heading]


def turn_right(heading: Heading) -> Heading:
    """Rotate 90 degrees clockwise: North -> East -> South -> West -> North."""
    return Heading((heading.value + 1) % len(Heading))


@dataclass(frozen=True)
class Agent:
    """The guard: a position plus the heading it faces."""

    position: Position
    heading: Heading

    def ahead(self) -> Position:
        """Cell directly in front of the guard (may be off-grid)."""
        d_row, d_col = forward(self.heading)
        return (self.position[0] + d_row, self.position[1] + d_col)

    def turned(self) -> Agent:
        return Agent(position=self.position, heading=turn_right(self.heading))

    def moved_to(self, position: Position) -> Agent:
        return Agent(position=position, heading=self.heading)
