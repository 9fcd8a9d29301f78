"""Matplotlib-based rendering of a guard's route over the grid."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.colors import BoundaryNorm, ListedColormap  # noqa: E402
from matplotlib.patches import Patch  # noqa: E402

from guard_patrol.domain.agent import Agent, Position  # noqa: E402
from guard_patrol.domain.grid import Grid  # noqa: E402
from guard_patrol.simulation.engine import Outcome, PatrolResult  # noqa: E402

OPEN_CODE = 0
OBSTRUCTION_CODE = 1
VISITED_CODE = 2
LOOP_CODE = 3

CELL_COLORS: tuple[str, ...] = ("#F5F5F5", "#37474F", "#4FC3F7", "#E53935")
"""Colors for open, obstruction, visited, and loop-inducing cells."""

CELL_LABELS: tuple[str, ...] = ("Open", "Obstruction", "Route", "Loop obstruction")

GRID_LINE_COLOR = "#CFD8DC"


def build_route_array(
    grid: Grid,
    visited_cells: Iterable[Position],
    loop_cells: Iterable[Position] = (),
) -> np.ndarray:
    """Return (H, W) int array of cell codes for plotting.

    Loop-inducing cells take precedence over route cells.
    """
    codes = np.where(grid.to_array(), OBSTRUCTION_CODE, OPEN_CODE).astype(int)
    for row, col in visited_cells:
        if codes[row, col] == OPEN_CODE:
            codes[row, col] = VISITED_CODE
    for row, col in loop_cells:
        codes[row, col] = LOOP_CODE
    return codes


def _route_cmap() -> tuple[ListedColormap, BoundaryNorm]:
    cmap = ListedColormap(list(CELL_COLORS))
    norm = BoundaryNorm([-0.5, 0.5, 1.5, 2.5, 3.5], cmap.N)
    return cmap, norm


def render_route(
    grid: Grid,
    result: PatrolResult,
    out_path: Path,
    loop_cells: Iterable[Position] = (),
    agent: Agent | None = None,
    dpi: int = 150,
) -> Path:
    """Save a PNG of the route, optional loop obstructions, and the start cell."""
    codes = build_route_array(grid, result.visited_cells, loop_cells)
    cmap, norm = _route_cmap()
    h, w = codes.shape

    fig, ax = plt.subplots(figsize=(max(3.0, w * 0.3), max(3.0, h * 0.3)))
    try:
        ax.imshow(codes, cmap=cmap, norm=norm, origin="upper", aspect="equal")
        for x in range(w + 1):
            ax.axvline(x - 0.5, color=GRID_LINE_COLOR, linewidth=0.5)
        for y in range(h + 1):
            ax.axhline(y - 0.5, color=GRID_LINE_COLOR, linewidth=0.5)
        ax.set_xticks([])
        ax.set_yticks([])
        if agent is not None:
            row, col = agent.position
            ax.text(
                col,
                row,
                agent.heading.marker,
                ha="center",
                va="center",
                fontsize=8,
                fontweight="bold",
            )
        status = "exits" if result.outcome is Outcome.EXITED else "loops"
        ax.set_title(f"Guard {status}: {result.visited_count} cells visited", fontsize=9)
        handles = [
            Patch(facecolor=color, edgecolor="gray", label=label)
            for color, label in zip(CELL_COLORS, CELL_LABELS, strict=True)
        ]
        ax.legend(
            handles=handles,
            loc="upper left",
            bbox_to_anchor=(1.01, 1.0),
            fontsize=7,
            frameon=False,
        )
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out_path, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    return out_path
