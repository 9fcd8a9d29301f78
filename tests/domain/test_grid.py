"""Tests for guard_patrol.domain.grid module."""

from __future__ import annotations

import numpy as np
import pytest

from guard_patrol.domain.errors import GridShapeError, InvalidEditError, OutOfBoundsError
from guard_patrol.domain.grid import Cell, Grid

OPEN = Cell.OPEN
WALL = Cell.OBSTRUCTION


def _grid() -> Grid:
    return Grid.from_cells([[OPEN, WALL, OPEN], [OPEN, OPEN, OPEN]])


class TestGridConstruction:
    def test_dimensions(self) -> None:
        grid = _grid()
        assert grid.height == 2
        assert grid.width == 3

    def test_ragged_rows_rejected(self) -> None:
        with pytest.raises(GridShapeError, match="row 1"):
            Grid.from_cells([[OPEN, OPEN], [OPEN]])

    def test_empty_rejected(self) -> None:
        with pytest.raises(GridShapeError):
            Grid.from_cells([])

    def test_base_array_is_read_only(self) -> None:
        grid = _grid()
        assert not grid.base.flags.writeable
        with pytest.raises(ValueError):
            grid.base[0, 0] = True

    def test_writable_array_is_copied(self) -> None:
        array = np.zeros((2, 2), dtype=np.bool_)
        grid = Grid(base=array)
        array[0, 0] = True
        assert grid.cell_at((0, 0)) is Cell.OPEN

    def test_non_boolean_array_rejected(self) -> None:
        with pytest.raises(GridShapeError, match="boolean"):
            Grid(base=np.zeros((2, 2), dtype=int))


class TestGridAccess:
    def test_cell_at(self) -> None:
        grid = _grid()
        assert grid.cell_at((0, 0)) is Cell.OPEN
        assert grid.cell_at((0, 1)) is Cell.OBSTRUCTION
        assert grid.is_obstruction((0, 1))
        assert not grid.is_obstruction((1, 1))

    @pytest.mark.parametrize("pos", [(-1, 0), (0, -1), (2, 0), (0, 3)])
    def test_cell_at_out_of_bounds(self, pos: tuple[int, int]) -> None:
        with pytest.raises(OutOfBoundsError):
            _grid().cell_at(pos)

    def test_out_of_bounds_is_an_index_error(self) -> None:
        with pytest.raises(IndexError):
            _grid().cell_at((5, 5))

    def test_contains(self) -> None:
        grid = _grid()
        assert grid.contains((1, 2))
        assert not grid.contains((1, 3))

    def test_open_cells_row_major(self) -> None:
        assert list(_grid().open_cells()) == [(0, 0), (0, 2), (1, 0), (1, 1), (1, 2)]

    def test_rows_round_trip(self) -> None:
        assert _grid().rows() == [[OPEN, WALL, OPEN], [OPEN, OPEN, OPEN]]


class TestWithObstruction:
    def test_adds_obstruction_leaving_source_unchanged(self) -> None:
        grid = _grid()
        edited = grid.with_obstruction((1, 2))
        assert edited.is_obstruction((1, 2))
        assert not grid.is_obstruction((1, 2))

    def test_shares_base_array(self) -> None:
        grid = _grid()
        assert grid.with_obstruction((1, 2)).base is grid.base

    def test_edits_accumulate(self) -> None:
        edited = _grid().with_obstruction((1, 0)).with_obstruction((1, 1))
        assert edited.obstructions() == frozenset({(0, 1), (1, 0), (1, 1)})

    def test_existing_obstruction_rejected(self) -> None:
        with pytest.raises(InvalidEditError):
            _grid().with_obstruction((0, 1))

    def test_edited_cell_cannot_be_edited_again(self) -> None:
        with pytest.raises(InvalidEditError):
            _grid().with_obstruction((1, 1)).with_obstruction((1, 1))

    def test_out_of_bounds_rejected(self) -> None:
        with pytest.raises(OutOfBoundsError):
            _grid().with_obstruction((2, 2))

    def test_equality_uses_effective_cells(self) -> None:
        overlay = _grid().with_obstruction((1, 1))
        rebuilt = Grid.from_cells([[OPEN, WALL, OPEN], [OPEN, WALL, OPEN]])
        assert overlay == rebuilt
        assert overlay != _grid()

    def test_to_array_includes_overlay(self) -> None:
        array = _grid().with_obstruction((1, 0)).to_array()
        assert array.tolist() == [[False, True, False], [True, False, False]]
        assert array.flags.writeable
