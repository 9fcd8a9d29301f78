"""Exception taxonomy for map loading, grid access, and simulation defects.

A detected cycle is an ordinary :class:`~guard_patrol.simulation.engine.Outcome`,
never an exception.
"""

from __future__ import annotations


class GuardPatrolError(Exception):
    """Base class for all guard_patrol errors."""


class GridLoadError(GuardPatrolError, ValueError):
    """Load-time input-contract violation; the run cannot start."""


class GridShapeError(GridLoadError):
    """Map rows are missing or have unequal lengths."""


class UnknownCellError(GridLoadError):
    """Map contains a character that is neither a cell nor a start marker."""

    def __init__(self, char: str, row: int, col: int) -> None:
        super().__init__(f"unknown map character {char!r} at row {row}, col {col}")
        self.char = char
        self.row = row
        self.col = col

    def __reduce__(self) -> tuple[type[UnknownCellError], tuple[str, int, int]]:
        return (type(self), (self.char, self.row, self.col))


class MissingAgentError(GridLoadError):
    """Map has no guard start marker."""


class MultipleAgentsError(GridLoadError):
    """Map has more than one guard start marker."""


class OutOfBoundsError(GuardPatrolError, IndexError):
    """Position lies outside the grid."""

    def __init__(self, position: tuple[int, int], width: int, height: int) -> None:
        super().__init__(
            f"position {position} outside grid of height {height} and width {width}"
        )
        self.position = position
        self.width = width
        self.height = height

    def __reduce__(self) -> tuple[type[OutOfBoundsError], tuple[tuple[int, int], int, int]]:
        return (type(self), (self.position, self.width, self.height))


class InvalidEditError(GuardPatrolError, ValueError):
    """Obstruction placement rejected (already blocked or the start cell)."""


class StepLimitExceededError(GuardPatrolError, RuntimeError):
    """Simulation hit its step ceiling without reaching a terminal state."""
