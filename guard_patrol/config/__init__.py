"""Configuration layer: constants and typed config dataclasses."""

from guard_patrol.config.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_WORKERS,
    FLUSH_THRESHOLD,
    HEADING_MARKERS,
    MAX_TURNS_IN_PLACE,
    NUM_HEADINGS,
    OBSTRUCTION_CHAR,
    OPEN_CHAR,
    VISITED_CHAR,
)
from guard_patrol.config.types import PatrolConfig, SearchConfig, state_space_bound

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_WORKERS",
    "FLUSH_THRESHOLD",
    "HEADING_MARKERS",
    "MAX_TURNS_IN_PLACE",
    "NUM_HEADINGS",
    "OBSTRUCTION_CHAR",
    "OPEN_CHAR",
    "PatrolConfig",
    "SearchConfig",
    "VISITED_CHAR",
    "state_space_bound",
]
