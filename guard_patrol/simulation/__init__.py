"""Simulation engine: patrol state machine and obstruction search."""

from guard_patrol.simulation.engine import (
    Edge,
    Outcome,
    PatrolResult,
    SimulationState,
    Simulator,
    StepEvent,
    run_patrol,
    simulate,
)
from guard_patrol.simulation.search import (
    CandidateResult,
    candidate_positions,
    count_cycle_inducing_obstructions,
    evaluate_candidate,
    evaluate_candidates,
)

__all__ = [
    "CandidateResult",
    "Edge",
    "Outcome",
    "PatrolResult",
    "SimulationState",
    "Simulator",
    "StepEvent",
    "candidate_positions",
    "count_cycle_inducing_obstructions",
    "evaluate_candidate",
    "evaluate_candidates",
    "run_patrol",
    "simulate",
]
