"""Domain layer: grid model, guard movement, and error taxonomy."""

from guard_patrol.domain.agent import (
    Agent,
    Heading,
    Position,
    forward,
    is_heading_marker,
    turn_right,
)
from guard_patrol.domain.errors import (
    GridLoadError,
    GridShapeError,
    GuardPatrolError,
    InvalidEditError,
    MissingAgentError,
    MultipleAgentsError,
    OutOfBoundsError,
    StepLimitExceededError,
    UnknownCellError,
)
from guard_patrol.domain.grid import Cell, Grid

__all__ = [
    "Agent",
    "Cell",
    "Grid",
    "GridLoadError",
    "GridShapeError",
    "GuardPatrolError",
    "Heading",
    "InvalidEditError",
    "MissingAgentError",
    "MultipleAgentsError",
    "OutOfBoundsError",
    "Position",
    "StepLimitExceededError",
    "UnknownCellError",
    "forward",
    "is_heading_marker",
    "turn_right",
]
