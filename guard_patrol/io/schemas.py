"""Parquet schema definitions for patrol artifacts.

All Arrow schemas used for persisting route and candidate logs are
centralised here so that writers and readers share the same column contracts.
"""

from __future__ import annotations

import pyarrow as pa

LOG_SCHEMA_VERSION = 1

ROUTE_SCHEMA = pa.schema(
    [
        ("order", pa.int64()),
        ("row", pa.int64()),
        ("col", pa.int64()),
        ("heading", pa.string()),
    ]
)
"""One row per recorded edge, in the order the guard took them."""

CANDIDATE_SCHEMA = pa.schema(
    [
        ("row", pa.int64()),
        ("col", pa.int64()),
        ("outcome", pa.string()),
        ("steps", pa.int64()),
    ]
)
"""One row per evaluated obstruction candidate."""
