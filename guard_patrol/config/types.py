"""Configuration dataclasses for patrol runs and obstruction searches."""

from __future__ import annotations

from dataclasses import dataclass, field

from guard_patrol.config.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_WORKERS,
    MAX_TURNS_IN_PLACE,
    NUM_HEADINGS,
)

__all__ = [
    "PatrolConfig",
    "SearchConfig",
    "state_space_bound",
]


def state_space_bound(width: int, height: int) -> int:
    """Return the largest step count a terminating run can take on a grid.

    Every (position, heading) pair can be recorded as an edge at most once,
    each move or terminal step is preceded by at most ``MAX_TURNS_IN_PLACE``
    turns, and one final step either exits or detects the repeat.
    """
    moves = width * height * NUM_HEADINGS
    return (moves + 1) * (MAX_TURNS_IN_PLACE + 1)


@dataclass(frozen=True)
class PatrolConfig:
    """Runtime knobs for a single patrol simulation."""

    max_steps: int | None = None
    """Per-run step ceiling; ``None`` uses :func:`state_space_bound`."""

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps < 1:
            raise ValueError("max_steps must be >= 1")

    def resolved_max_steps(self, width: int, height: int) -> int:
        if self.max_steps is not None:
            return self.max_steps
        return state_space_bound(width, height)


@dataclass(frozen=True)
class SearchConfig:
    """Obstruction-search parameters, including optional process fan-out."""

    workers: int = DEFAULT_WORKERS
    chunk_size: int = DEFAULT_CHUNK_SIZE
    patrol: PatrolConfig = field(default_factory=PatrolConfig)

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
