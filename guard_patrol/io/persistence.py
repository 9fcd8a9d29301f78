"""Parquet writers for route and obstruction-candidate logs."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from types import TracebackType

import pyarrow as pa
import pyarrow.parquet as pq

from guard_patrol.config.constants import FLUSH_THRESHOLD
from guard_patrol.io.schemas import CANDIDATE_SCHEMA, LOG_SCHEMA_VERSION, ROUTE_SCHEMA
from guard_patrol.simulation.engine import PatrolResult
from guard_patrol.simulation.search import CandidateResult


def _with_version(schema: pa.Schema) -> pa.Schema:
    return schema.with_metadata({"schema_version": str(LOG_SCHEMA_VERSION)})


def route_columns(result: PatrolResult) -> dict[str, list[int | str]]:
    """Column buffers for the recorded edges of *result*."""
    columns: dict[str, list[int | str]] = {"order": [], "row": [], "col": [], "heading": []}
    for order, ((row, col), heading) in enumerate(result.visited_edges):
        columns["order"].append(order)
        columns["row"].append(row)
        columns["col"].append(col)
        columns["heading"].append(heading.name.lower())
    return columns


def write_route_log(result: PatrolResult, path: Path) -> Path:
    """Write the route's edge sequence to a Parquet file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    schema = _with_version(ROUTE_SCHEMA)
    table = pa.Table.from_pydict(route_columns(result), schema=schema)
    pq.write_table(table, path)
    return path


class CandidateLogWriter:
    """Streams candidate results to Parquet in batches of ``flush_threshold`` rows."""

    def __init__(self, path: Path, flush_threshold: int = FLUSH_THRESHOLD) -> None:
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be >= 1")
        self.path = path
        self.flush_threshold = flush_threshold
        self.rows_written = 0
        self._schema = _with_version(CANDIDATE_SCHEMA)
        self._writer: pq.ParquetWriter | None = None
        self._closed = False
        self._columns: dict[str, list[int | str]] = {
            "row": [],
            "col": [],
            "outcome": [],
            "steps": [],
        }

    def append(self, candidate: CandidateResult) -> None:
        row, col = candidate.position
        self._columns["row"].append(row)
        self._columns["col"].append(col)
        self._columns["outcome"].append(candidate.outcome.value)
        self._columns["steps"].append(candidate.steps)
        if len(self._columns["row"]) >= self.flush_threshold:
            self.flush()

    def flush(self) -> None:
        """Write buffered rows and clear the in-memory buffers."""
        if not self._columns["row"]:
            return
        table = pa.Table.from_pydict(self._columns, schema=self._schema)
        if self._writer is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._writer = pq.ParquetWriter(self.path, self._schema)
        self._writer.write_table(table)
        self.rows_written += table.num_rows
        for values in self._columns.values():
            values.clear()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.flush()
        if self._writer is None:
            # No rows at all: still leave a readable, empty file behind.
            self.path.parent.mkdir(parents=True, exist_ok=True)
            pq.write_table(self._schema.empty_table(), self.path)
            return
        self._writer.close()
        self._writer = None

    def abort(self) -> None:
        """Drop buffered rows and remove any partially written file."""
        if self._closed:
            return
        self._closed = True
        for values in self._columns.values():
            values.clear()
        if self._writer is not None:
            self._writer.close()
            self._writer = None
        self.path.unlink(missing_ok=True)

    def __enter__(self) -> CandidateLogWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self.abort()
            return
        self.close()


def write_candidate_log(results: Iterable[CandidateResult], path: Path) -> Path:
    """Write all candidate results to a Parquet file."""
    with CandidateLogWriter(path) as writer:
        for candidate in results:
            writer.append(candidate)
    return path
