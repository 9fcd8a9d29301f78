from __future__ import annotations

import pytest

from guard_patrol.config.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_WORKERS,
    FLUSH_THRESHOLD,
    HEADING_MARKERS,
    NUM_HEADINGS,
)
from guard_patrol.config.types import PatrolConfig, SearchConfig, state_space_bound


def test_heading_markers_cover_every_heading() -> None:
    assert len(HEADING_MARKERS) == NUM_HEADINGS
    assert len(set(HEADING_MARKERS)) == NUM_HEADINGS


def test_defaults_are_positive() -> None:
    assert DEFAULT_WORKERS >= 1
    assert DEFAULT_CHUNK_SIZE >= 1
    assert FLUSH_THRESHOLD >= 1024


class TestPatrolConfig:
    def test_default_uses_state_space_bound(self) -> None:
        assert PatrolConfig().resolved_max_steps(10, 10) == state_space_bound(10, 10)

    def test_explicit_ceiling_wins(self) -> None:
        assert PatrolConfig(max_steps=7).resolved_max_steps(10, 10) == 7

    def test_rejects_non_positive_ceiling(self) -> None:
        with pytest.raises(ValueError, match="max_steps"):
            PatrolConfig(max_steps=0)


class TestSearchConfig:
    def test_rejects_zero_workers(self) -> None:
        with pytest.raises(ValueError, match="workers"):
            SearchConfig(workers=0)

    def test_rejects_zero_chunk_size(self) -> None:
        with pytest.raises(ValueError, match="chunk_size"):
            SearchConfig(chunk_size=0)

    def test_default_patrol_config(self) -> None:
        assert SearchConfig().patrol == PatrolConfig()


def test_state_space_bound_grows_with_grid() -> None:
    # 1x1 grid: 4 possible edges, each move preceded by up to 3 turns
    assert state_space_bound(1, 1) == (4 + 1) * 4
    assert state_space_bound(3, 2) > state_space_bound(2, 2)
