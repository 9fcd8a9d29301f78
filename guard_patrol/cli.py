"""CLI entrypoint for patrol runs.

This module owns CLI argument parsing and output. All domain logic lives in
the extracted modules:

- ``guard_patrol.io.grid_text``         - map text parsing and rendering
- ``guard_patrol.config``               - configuration dataclasses
- ``guard_patrol.simulation.engine``    - patrol state machine (part one)
- ``guard_patrol.simulation.search``    - obstruction search (part two)
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from guard_patrol.config.types import PatrolConfig, SearchConfig
from guard_patrol.domain.errors import GridLoadError
from guard_patrol.io.grid_text import load_patrol_map, render_patrol_map
from guard_patrol.io.paths import candidate_log_path, route_figure_path, route_log_path
from guard_patrol.io.persistence import CandidateLogWriter, write_route_log
from guard_patrol.simulation.engine import Outcome, run_patrol
from guard_patrol.simulation.search import evaluate_candidates

logger = logging.getLogger(__name__)

PARTS = ("1", "2", "both")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_optional_int(raw: object, key: str) -> int | None:
    if raw is None:
        return None
    return _coerce_int(raw, key)


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _parse_part(raw_part: str) -> str:
    if raw_part not in PARTS:
        raise ValueError(f"part must be one of {', '.join(PARTS)}")
    return raw_part


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Simulate a patrolling guard and search for loop-inducing obstructions"
    )
    parser.add_argument("input", type=Path, help="Map file (# . ^ > v <)")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--part", type=str, choices=PARTS, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--chunk-size", type=int, default=None)
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Per-run step ceiling (default: provable state-space bound)",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Write route/candidate Parquet logs under this directory",
    )
    parser.add_argument(
        "--render",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Save a route figure under --out-dir",
    )
    parser.add_argument(
        "--show-map",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print the map with the route marked",
    )
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None)
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for patrol runs.

    Supports ``--config path/to/config.json``. CLI arguments override
    config-file values; config-file values override built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    try:
        part = _parse_part(_coerce_str(_get_val(args.part, "part", file_cfg, "both"), "part"))
        workers = _coerce_int(_get_val(args.workers, "workers", file_cfg, 1), "workers")
        chunk_size = _coerce_int(
            _get_val(args.chunk_size, "chunk_size", file_cfg, 64), "chunk_size"
        )
        max_steps = _coerce_optional_int(
            _get_val(args.max_steps, "max_steps", file_cfg, None), "max_steps"
        )
        out_dir_raw = _get_val(args.out_dir, "out_dir", file_cfg, None)
        render = _coerce_bool(_get_val(args.render, "render", file_cfg, False), "render")
        show_map = _coerce_bool(_get_val(args.show_map, "show_map", file_cfg, False), "show_map")
        log_level = _coerce_str(
            _get_val(args.log_level, "log_level", file_cfg, "WARNING"), "log_level"
        ).upper()
        patrol_config = PatrolConfig(max_steps=max_steps)
        search_config = SearchConfig(workers=workers, chunk_size=chunk_size, patrol=patrol_config)
    except ValueError as exc:
        parser.error(str(exc))

    if log_level not in LOG_LEVELS:
        parser.error(f"log_level must be one of {', '.join(LOG_LEVELS)}")
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    out_dir = None if out_dir_raw is None else Path(_coerce_str(out_dir_raw, "out_dir"))
    if render and out_dir is None:
        parser.error("--render requires --out-dir")

    try:
        grid, agent = load_patrol_map(args.input)
    except FileNotFoundError:
        parser.error(f"Map file not found: {args.input}")
    except GridLoadError as exc:
        parser.error(f"Invalid map {args.input}: {exc}")

    logger.info("loaded %dx%d map, guard at %s", grid.height, grid.width, agent.position)
    result = run_patrol(grid, agent, config=patrol_config)
    summary: dict[str, object] = {
        "input": str(args.input),
        "outcome": result.outcome.value,
        "steps": result.steps,
    }
    if part in ("1", "both"):
        summary["part_one"] = result.visited_count

    loop_cells: list[tuple[int, int]] = []
    if part in ("2", "both"):
        if result.outcome is Outcome.CYCLE:
            logger.warning("unmodified route already loops; counting candidates anyway")
        if out_dir is not None:
            with CandidateLogWriter(candidate_log_path(out_dir)) as writer:
                candidates = evaluate_candidates(
                    grid,
                    agent,
                    result.visited_cells,
                    config=search_config,
                    on_result=writer.append,
                )
        else:
            candidates = evaluate_candidates(
                grid, agent, result.visited_cells, config=search_config
            )
        loop_cells = [candidate.position for candidate in candidates if candidate.is_cycle]
        summary["part_two"] = len(loop_cells)

    if out_dir is not None:
        write_route_log(result, route_log_path(out_dir))
        if render:
            from guard_patrol.viz.render import render_route

            render_route(
                grid, result, route_figure_path(out_dir), loop_cells=loop_cells, agent=agent
            )

    if show_map:
        print(render_patrol_map(grid, agent=agent, visited=result.visited_cells), end="")
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
