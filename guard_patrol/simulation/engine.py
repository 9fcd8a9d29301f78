"""Patrol state machine: step the guard until it exits or repeats a state.

A run records every ``(position, heading)`` pair the instant before the guard
moves away from it. Movement is a deterministic function of that pair, so
meeting one a second time proves the route loops forever.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from guard_patrol.config.constants import MAX_TURNS_IN_PLACE
from guard_patrol.config.types import PatrolConfig
from guard_patrol.domain.agent import Agent, Heading, Position
from guard_patrol.domain.errors import StepLimitExceededError
from guard_patrol.domain.grid import Grid

logger = logging.getLogger(__name__)

Edge = tuple[Position, Heading]
"""A ``(position, heading)`` pair recorded just before a move."""

EventKind = Literal["move", "turn", "exit", "cycle"]


class Outcome(Enum):
    """Terminal classification of a patrol run."""

    EXITED = "exited"
    CYCLE = "cycle"


class SimulationState(Enum):
    RUNNING = "running"
    EXITED = "exited"
    CYCLE_DETECTED = "cycle_detected"


@dataclass(frozen=True)
class StepEvent:
    """One transition, handed to the optional trace sink."""

    step: int
    kind: EventKind
    agent: Agent


@dataclass(frozen=True)
class PatrolResult:
    """Outcome and route of one completed run."""

    outcome: Outcome
    visited_cells: frozenset[Position]
    visited_edges: tuple[Edge, ...]
    steps: int
    final_agent: Agent

    @property
    def visited_count(self) -> int:
        return len(self.visited_cells)


class Simulator:
    """Drives one guard over one grid; owns all per-run mutable state."""

    def __init__(
        self,
        grid: Grid,
        agent: Agent,
        config: PatrolConfig | None = None,
        on_event: Callable[[StepEvent], None] | None = None,
    ) -> None:
        if not grid.contains(agent.position):
            raise ValueError(f"agent start {agent.position} lies outside the grid")
        self.grid = grid
        self._config = config or PatrolConfig()
        self._max_steps = self._config.resolved_max_steps(grid.width, grid.height)
        self._on_event = on_event
        self._agent = agent
        self._state = SimulationState.RUNNING
        self._steps = 0
        self._turns_in_place = 0
        self._visited_cells: set[Position] = {agent.position}
        # dict preserves insertion order so the edge sequence can be replayed
        self._visited_edges: dict[Edge, None] = {}

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def agent(self) -> Agent:
        return self._agent

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def visited_cells(self) -> frozenset[Position]:
        return frozenset(self._visited_cells)

    @property
    def visited_edges(self) -> tuple[Edge, ...]:
        return tuple(self._visited_edges)

    def _emit(self, kind: EventKind) -> None:
        event = StepEvent(step=self._steps, kind=kind, agent=self._agent)
        logger.debug(
            "step=%d %s at %s facing %s",
            event.step,
            kind,
            self._agent.position,
            self._agent.heading.name,
        )
        if self._on_event is not None:
            self._on_event(event)

    def step(self) -> SimulationState:
        """Advance one transition: exit, turn right, or move forward."""
        if self._state is not SimulationState.RUNNING:
            raise RuntimeError(f"simulation already finished ({self._state.value})")
        self._steps += 1
        ahead = self._agent.ahead()

        if not self.grid.contains(ahead):
            self._state = SimulationState.EXITED
            self._emit("exit")
            return self._state

        if self.grid.is_obstruction(ahead):
            self._agent = self._agent.turned()
            self._turns_in_place += 1
            if self._turns_in_place > MAX_TURNS_IN_PLACE:
                # Boxed in on all four sides: the guard spins in place forever.
                self._state = SimulationState.CYCLE_DETECTED
                self._emit("cycle")
                return self._state
            self._emit("turn")
            return self._state

        edge: Edge = (self._agent.position, self._agent.heading)
        if edge in self._visited_edges:
            self._state = SimulationState.CYCLE_DETECTED
            self._emit("cycle")
            return self._state
        self._visited_edges[edge] = None
        self._agent = self._agent.moved_to(ahead)
        self._visited_cells.add(ahead)
        self._turns_in_place = 0
        self._emit("move")
        return self._state

    def run(self) -> PatrolResult:
        """Step until a terminal state and return the run's result."""
        while self._state is SimulationState.RUNNING:
            if self._steps >= self._max_steps:
                raise StepLimitExceededError(
                    f"no terminal state after {self._steps} steps "
                    f"(ceiling {self._max_steps}) from {self._agent}"
                )
            self.step()
        return self.result()

    def result(self) -> PatrolResult:
        if self._state is SimulationState.RUNNING:
            raise RuntimeError("simulation has not finished")
        outcome = Outcome.EXITED if self._state is SimulationState.EXITED else Outcome.CYCLE
        return PatrolResult(
            outcome=outcome,
            visited_cells=self.visited_cells,
            visited_edges=self.visited_edges,
            steps=self._steps,
            final_agent=self._agent,
        )


def run_patrol(
    grid: Grid,
    agent: Agent,
    config: PatrolConfig | None = None,
    on_event: Callable[[StepEvent], None] | None = None,
) -> PatrolResult:
    """Run a fresh simulation to completion and return the full result."""
    result = Simulator(grid, agent, config=config, on_event=on_event).run()
    logger.debug(
        "patrol finished: %s after %d steps, %d cells",
        result.outcome.value,
        result.steps,
        result.visited_count,
    )
    return result


def simulate(
    grid: Grid,
    agent: Agent,
    config: PatrolConfig | None = None,
    on_event: Callable[[StepEvent], None] | None = None,
) -> tuple[Outcome, frozenset[Position]]:
    """Return the run's outcome and the set of cells the guard visited."""
    result = run_patrol(grid, agent, config=config, on_event=on_event)
    return result.outcome, result.visited_cells
