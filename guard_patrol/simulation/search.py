"""Obstruction search: which single extra obstruction traps the guard in a loop.

Only cells on the unmodified route are candidates; an obstruction anywhere
else is never reached, so the route and its outcome cannot change. Every
candidate is simulated on its own copy-on-write grid, which makes the runs
independent and safe to fan out across worker processes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass

from guard_patrol.config.types import PatrolConfig, SearchConfig
from guard_patrol.domain.agent import Agent, Position
from guard_patrol.domain.errors import InvalidEditError
from guard_patrol.domain.grid import Grid
from guard_patrol.simulation.engine import Outcome, Simulator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateResult:
    """Outcome of the patrol with one extra obstruction at ``position``."""

    position: Position
    outcome: Outcome
    steps: int

    @property
    def is_cycle(self) -> bool:
        return self.outcome is Outcome.CYCLE


def candidate_positions(
    grid: Grid, agent: Agent, visited_cells: Iterable[Position]
) -> list[Position]:
    """Visited cells eligible for an extra obstruction, in row-major order."""
    return sorted(
        pos
        for pos in set(visited_cells)
        if pos != agent.position and not grid.is_obstruction(pos)
    )


def evaluate_candidate(
    grid: Grid,
    agent: Agent,
    position: Position,
    config: PatrolConfig | None = None,
) -> CandidateResult:
    """Simulate a fresh run with an obstruction added at *position*."""
    if position == agent.position:
        raise InvalidEditError(f"cannot place an obstruction on the guard start {position}")
    simulator = Simulator(grid.with_obstruction(position), agent, config=config)
    result = simulator.run()
    return CandidateResult(position=position, outcome=result.outcome, steps=result.steps)


def _evaluate_chunk(
    grid: Grid,
    agent: Agent,
    positions: Sequence[Position],
    config: PatrolConfig,
) -> list[CandidateResult]:
    return [evaluate_candidate(grid, agent, pos, config) for pos in positions]


def _chunked(items: Sequence[Position], size: int) -> list[Sequence[Position]]:
    return [items[start : start + size] for start in range(0, len(items), size)]


def evaluate_candidates(
    grid: Grid,
    agent: Agent,
    visited_cells: Iterable[Position],
    config: SearchConfig | None = None,
    on_result: Callable[[CandidateResult], None] | None = None,
) -> list[CandidateResult]:
    """Evaluate every candidate cell and return results sorted by position.

    With ``config.workers > 1`` candidates are split into chunks and run in a
    process pool. A failure in any candidate propagates to the caller.
    """
    search_config = config or SearchConfig()
    candidates = candidate_positions(grid, agent, visited_cells)
    logger.info(
        "evaluating %d candidate obstructions with %d worker(s)",
        len(candidates),
        search_config.workers,
    )

    results: list[CandidateResult] = []
    if search_config.workers == 1 or len(candidates) <= search_config.chunk_size:
        for pos in candidates:
            candidate = evaluate_candidate(grid, agent, pos, search_config.patrol)
            results.append(candidate)
            if on_result is not None:
                on_result(candidate)
        return results

    chunks = _chunked(candidates, search_config.chunk_size)
    with ProcessPoolExecutor(max_workers=search_config.workers) as pool:
        futures = {
            pool.submit(_evaluate_chunk, grid, agent, chunk, search_config.patrol): index
            for index, chunk in enumerate(chunks)
        }
        # Chunks are row-major slices; emit them in index order to keep results sorted.
        finished: dict[int, list[CandidateResult]] = {}
        next_index = 0
        try:
            for future in as_completed(futures):
                index = futures[future]
                finished[index] = future.result()
                logger.debug("chunk %d done: %d candidates", index, len(finished[index]))
                while next_index in finished:
                    for candidate in finished.pop(next_index):
                        results.append(candidate)
                        if on_result is not None:
                            on_result(candidate)
                    next_index += 1
        except BaseException:
            pool.shutdown(wait=False, cancel_futures=True)
            raise
    return results


def count_cycle_inducing_obstructions(
    grid: Grid,
    agent: Agent,
    visited_cells: Iterable[Position],
    config: SearchConfig | None = None,
) -> int:
    """Count candidate obstructions that turn the guard's route into a loop."""
    results = evaluate_candidates(grid, agent, visited_cells, config=config)
    count = sum(1 for candidate in results if candidate.is_cycle)
    logger.info("%d of %d candidates induce a cycle", count, len(results))
    return count
