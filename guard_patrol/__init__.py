"""Guard patrol simulation: route length and loop-inducing obstruction search."""

from guard_patrol.config.types import PatrolConfig, SearchConfig
from guard_patrol.domain.agent import Agent, Heading, Position, forward, turn_right
from guard_patrol.domain.grid import Cell, Grid
from guard_patrol.io.grid_text import load_patrol_map, parse_patrol_map, render_patrol_map
from guard_patrol.simulation.engine import Outcome, PatrolResult, Simulator, simulate
from guard_patrol.simulation.search import count_cycle_inducing_obstructions

__all__ = [
    "Agent",
    "Cell",
    "Grid",
    "Heading",
    "Outcome",
    "PatrolConfig",
    "PatrolResult",
    "Position",
    "SearchConfig",
    "Simulator",
    "count_cycle_inducing_obstructions",
    "forward",
    "load_patrol_map",
    "parse_patrol_map",
    "render_patrol_map",
    "simulate",
    "turn_right",
]
