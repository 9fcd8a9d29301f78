"""Centralized domain constants for patrol simulations.

Map characters and numeric defaults that appear across multiple modules are
defined here. Consuming modules should import from this module rather than
defining their own inline literals.
"""

from __future__ import annotations

OPEN_CHAR = "."
"""Map character for an open cell."""

OBSTRUCTION_CHAR = "#"
"""Map character for an obstruction."""

VISITED_CHAR = "X"
"""Render-only character for an open cell on the guard's route."""

HEADING_MARKERS: tuple[str, ...] = ("^", ">", "v", "<")
"""Start-marker characters in clockwise order: North, East, South, West."""

NUM_HEADINGS = 4
"""Number of distinct guard headings."""

MAX_TURNS_IN_PLACE = 3
"""Turns a guard can make at one cell before its heading repeats."""

DEFAULT_WORKERS = 1
"""Default worker count for the obstruction search (1 = in-process)."""

DEFAULT_CHUNK_SIZE = 64
"""Candidates per task submitted to the worker pool."""

FLUSH_THRESHOLD = 8_192
"""Flush candidate log rows to Parquet once this in-memory row count is reached."""
