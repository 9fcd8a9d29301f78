"""Map text I/O, output paths, and Parquet logs."""

from guard_patrol.io.grid_text import load_patrol_map, parse_patrol_map, render_patrol_map

__all__ = [
    "load_patrol_map",
    "parse_patrol_map",
    "render_patrol_map",
]
