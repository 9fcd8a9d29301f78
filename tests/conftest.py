"""Shared map fixtures for the guard_patrol test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from guard_patrol.domain.agent import Agent
from guard_patrol.domain.grid import Grid
from guard_patrol.io.grid_text import parse_patrol_map

EXAMPLE_MAP = """\
....#.....
.........#
..........
..#.......
.......#..
..........
.#..^.....
........#.
#.........
......#...
"""
"""The canonical 10x10 patrol example: 41 visited cells, 6 loop obstructions."""

LOOP_MAP_ROWS = [".#....", ".^...#", "#.....", "....#."]
"""A map whose unmodified route already loops."""

TINY_MAP = ".#.\n.^.\n"


@pytest.fixture
def example_map() -> tuple[Grid, Agent]:
    return parse_patrol_map(EXAMPLE_MAP)


@pytest.fixture
def loop_map() -> tuple[Grid, Agent]:
    return parse_patrol_map("\n".join(LOOP_MAP_ROWS))


@pytest.fixture
def tiny_map() -> tuple[Grid, Agent]:
    return parse_patrol_map(TINY_MAP)


@pytest.fixture
def example_map_file(tmp_path: Path) -> Path:
    path = tmp_path / "example.txt"
    path.write_text(EXAMPLE_MAP)
    return path
