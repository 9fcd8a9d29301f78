"""Read-only obstruction grid with copy-on-write single-cell edits.

The base layout is a boolean ``numpy`` array (``True`` = obstruction) that is
marked read-only and shared between every grid derived from it. Edits made by
:meth:`Grid.with_obstruction` live in a small overlay set, so building a
candidate map for the obstruction search never copies the array.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from guard_patrol.domain.agent import Position
from guard_patrol.domain.errors import GridShapeError, InvalidEditError, OutOfBoundsError


class Cell(Enum):
    """Kind of a single grid cell."""

    OPEN = "open"
    OBSTRUCTION = "obstruction"


@dataclass(frozen=True, eq=False)
class Grid:
    """Immutable ``height x width`` cell store with bounds-checked access."""

    base: np.ndarray
    overlay: frozenset[Position] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.base.ndim != 2 or self.base.shape[0] < 1 or self.base.shape[1] < 1:
            raise GridShapeError(f"grid must be a non-empty 2-D array, got shape {self.base.shape}")
        if self.base.dtype != np.bool_:
            raise GridShapeError(f"grid array must be boolean, got {self.base.dtype}")
        if self.base.flags.writeable:
            # Callers may still hold a writable reference to the array.
            frozen = self.base.copy()
            frozen.setflags(write=False)
            object.__setattr__(self, "base", frozen)
        for pos in self.overlay:
            self._check_bounds(pos)

    @classmethod
    def from_cells(cls, rows: Sequence[Sequence[Cell]]) -> Grid:
        """Build a grid from a rectangular matrix of :class:`Cell` values."""
        if not rows or not rows[0]:
            raise GridShapeError("grid must have at least one row and one column")
        width = len(rows[0])
        for index, row in enumerate(rows):
            if len(row) != width:
                raise GridShapeError(
                    f"row {index} has length {len(row)}, expected {width}"
                )
        array = np.array(
            [[cell is Cell.OBSTRUCTION for cell in row] for row in rows], dtype=np.bool_
        )
        array.setflags(write=False)
        return cls(base=array)

    @property
    def height(self) -> int:
        return int(self.base.shape[0])

    @property
    def width(self) -> int:
        return int(self.base.shape[1])

    def contains(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.height and 0 <= col < self.width

    def _check_bounds(self, pos: Position) -> None:
        if not self.contains(pos):
            raise OutOfBoundsError(pos, width=self.width, height=self.height)

    def cell_at(self, pos: Position) -> Cell:
        """Return the cell kind at *pos*; raises :exc:`OutOfBoundsError` off-grid."""
        self._check_bounds(pos)
        if pos in self.overlay or self.base[pos[0], pos[1]]:
            return Cell.OBSTRUCTION
        return Cell.OPEN

    def is_obstruction(self, pos: Position) -> bool:
        return self.cell_at(pos) is Cell.OBSTRUCTION

    def with_obstruction(self, pos: Position) -> Grid:
        """Return a grid equal to this one except that *pos* is blocked.

        Only bounds and the already-blocked case are checked here; which cells
        are eligible (e.g. never the guard's start cell) is the caller's policy.
        """
        if self.is_obstruction(pos):
            raise InvalidEditError(f"cell {pos} is already an obstruction")
        return Grid(base=self.base, overlay=self.overlay | {pos})

    def to_array(self) -> np.ndarray:
        """Writable boolean copy of the effective layout (base plus overlay)."""
        array = self.base.copy()
        for row, col in self.overlay:
            array[row, col] = True
        return array

    def obstructions(self) -> frozenset[Position]:
        cells = {(int(row), int(col)) for row, col in np.argwhere(self.base)}
        return frozenset(cells) | self.overlay

    def open_cells(self) -> Iterator[Position]:
        """Yield open positions in row-major order."""
        for row, col in np.argwhere(~self.to_array()):
            yield (int(row), int(col))

    def rows(self) -> list[list[Cell]]:
        return [
            [Cell.OBSTRUCTION if blocked else Cell.OPEN for blocked in row]
            for row in self.to_array().tolist()
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return bool(np.array_equal(self.to_array(), other.to_array()))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Grid(height={self.height}, width={self.width}, "
            f"obstructions={len(self.obstructions())})"
        )
