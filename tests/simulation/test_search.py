"""Tests for the obstruction search (guard_patrol.simulation.search)."""

from __future__ import annotations

import pytest

from guard_patrol.config.types import PatrolConfig, SearchConfig
from guard_patrol.domain.agent import Agent
from guard_patrol.domain.errors import InvalidEditError, StepLimitExceededError
from guard_patrol.domain.grid import Grid
from guard_patrol.simulation.engine import Outcome, simulate
from guard_patrol.simulation.search import (
    CandidateResult,
    candidate_positions,
    count_cycle_inducing_obstructions,
    evaluate_candidate,
    evaluate_candidates,
)

EXAMPLE_LOOP_CELLS = [(6, 3), (7, 6), (7, 7), (8, 1), (8, 3), (9, 7)]


class TestCandidatePositions:
    def test_excludes_start_cell(self, example_map: tuple[Grid, Agent]) -> None:
        grid, agent = example_map
        _, visited = simulate(grid, agent)
        candidates = candidate_positions(grid, agent, visited)
        assert agent.position not in candidates
        assert len(candidates) == len(visited) - 1

    def test_excludes_obstructions_and_sorts(self, example_map: tuple[Grid, Agent]) -> None:
        grid, agent = example_map
        candidates = candidate_positions(grid, agent, [(9, 9), (0, 4), (6, 4), (0, 0)])
        assert candidates == [(0, 0), (9, 9)]


class TestEvaluateCandidate:
    def test_start_cell_rejected(self, example_map: tuple[Grid, Agent]) -> None:
        grid, agent = example_map
        with pytest.raises(InvalidEditError, match="guard start"):
            evaluate_candidate(grid, agent, agent.position)

    def test_existing_obstruction_rejected(self, example_map: tuple[Grid, Agent]) -> None:
        grid, agent = example_map
        with pytest.raises(InvalidEditError):
            evaluate_candidate(grid, agent, (0, 4))

    def test_known_loop_cell(self, example_map: tuple[Grid, Agent]) -> None:
        grid, agent = example_map
        result = evaluate_candidate(grid, agent, (6, 3))
        assert result.position == (6, 3)
        assert result.outcome is Outcome.CYCLE
        assert result.is_cycle

    def test_source_grid_untouched(self, example_map: tuple[Grid, Agent]) -> None:
        grid, agent = example_map
        evaluate_candidate(grid, agent, (6, 3))
        assert not grid.is_obstruction((6, 3))


class TestCountCycleInducingObstructions:
    def test_example_map_has_six(self, example_map: tuple[Grid, Agent]) -> None:
        grid, agent = example_map
        _, visited = simulate(grid, agent)
        assert count_cycle_inducing_obstructions(grid, agent, visited) == 6

    def test_loop_cells_match_known_positions(self, example_map: tuple[Grid, Agent]) -> None:
        grid, agent = example_map
        _, visited = simulate(grid, agent)
        results = evaluate_candidates(grid, agent, visited)
        assert [r.position for r in results if r.is_cycle] == EXAMPLE_LOOP_CELLS

    def test_count_bounded_by_visited_cells(self, tiny_map: tuple[Grid, Agent]) -> None:
        grid, agent = tiny_map
        _, visited = simulate(grid, agent)
        count = count_cycle_inducing_obstructions(grid, agent, visited)
        assert 0 <= count <= len(visited) - 1

    def test_on_result_sees_every_candidate(self, example_map: tuple[Grid, Agent]) -> None:
        grid, agent = example_map
        _, visited = simulate(grid, agent)
        seen: list[CandidateResult] = []
        results = evaluate_candidates(grid, agent, visited, on_result=seen.append)
        assert seen == results
        assert len(results) == 40

    def test_process_pool_matches_sequential(self, example_map: tuple[Grid, Agent]) -> None:
        grid, agent = example_map
        _, visited = simulate(grid, agent)
        sequential = evaluate_candidates(grid, agent, visited)
        parallel = evaluate_candidates(
            grid, agent, visited, config=SearchConfig(workers=2, chunk_size=8)
        )
        assert parallel == sequential

    def test_no_candidates(self, tiny_map: tuple[Grid, Agent]) -> None:
        grid, agent = tiny_map
        assert count_cycle_inducing_obstructions(grid, agent, [agent.position]) == 0


@pytest.mark.parametrize("workers", [1, 2])
def test_failing_candidate_stops_the_search(
    example_map: tuple[Grid, Agent], workers: int
) -> None:
    grid, agent = example_map
    _, visited = simulate(grid, agent)
    # No candidate run can terminate within 3 steps on this map.
    config = SearchConfig(workers=workers, chunk_size=8, patrol=PatrolConfig(max_steps=3))
    with pytest.raises(StepLimitExceededError):
        count_cycle_inducing_obstructions(grid, agent, visited, config=config)


def test_pool_streams_results_in_position_order(example_map: tuple[Grid, Agent]) -> None:
    grid, agent = example_map
    _, visited = simulate(grid, agent)
    streamed: list[CandidateResult] = []
    evaluate_candidates(
        grid,
        agent,
        visited,
        config=SearchConfig(workers=4, chunk_size=4),
        on_result=streamed.append,
    )
    positions = [candidate.position for candidate in streamed]
    assert positions == sorted(positions)
    assert len(positions) == 40
