"""Path construction helpers for patrol output directories."""

from __future__ import annotations

from pathlib import Path


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def figures_dir(out_dir: Path) -> Path:
    """Return path to the figures subdirectory within an output directory."""
    return out_dir / "figures"


def route_log_path(out_dir: Path) -> Path:
    """Return path to the route edge log Parquet file."""
    return logs_dir(out_dir) / "route_log.parquet"


def candidate_log_path(out_dir: Path) -> Path:
    """Return path to the obstruction candidate log Parquet file."""
    return logs_dir(out_dir) / "candidate_log.parquet"


def route_figure_path(out_dir: Path) -> Path:
    """Return path to the rendered route figure."""
    return figures_dir(out_dir) / "route.png"
