"""
Insight Kernel — Query Orchestrator

Pure function: (store, query) → rows
No side effects. No IO. Either every rule passes and the full row list is
returned, or the first violated rule raises and nothing is returned.

Pipeline:
  1. query shape          exactly WHERE + OPTIONS
  2. target dataset       dataset id prefix of the first COLUMNS entry,
                          NotFoundError if it is not installed
  3. filter               compile + evaluate WHERE → candidate indices
  4. projection           COLUMNS → rows
  5. options              ORDER must be one of COLUMNS, no other keys
  6. result cap           more than MAX_RESULTS rows fails
  7. sort                 ORDER ascending
"""

from __future__ import annotations

import logging
from typing import Any

from engine.kernel.errors import ResultTooLargeError, ShapeError
from engine.kernel.filters import find_matches
from engine.kernel.projection import project, sort_rows
from engine.kernel.store import DatasetStore
from engine.kernel.types import MAX_RESULTS, OPTION_KEYS, QUERY_KEYS

logger = logging.getLogger(__name__)


def perform_query(store: DatasetStore, query: Any) -> list[dict[str, Any]]:
    columns, order = _validate_shape(query)

    dataset_id = target_dataset_id(columns)
    dataset = store.get(dataset_id)
    logger.debug("query: resolved dataset %s (%d rows)", dataset_id, dataset.num_rows)

    indices = find_matches(query["WHERE"], dataset)
    rows = project(indices, columns, dataset)

    if order is not None and order not in columns:
        raise ShapeError(f"ORDER key must be one of COLUMNS: {order}")

    if len(rows) > MAX_RESULTS:
        raise ResultTooLargeError(len(rows), MAX_RESULTS)

    return sort_rows(rows, order)


def target_dataset_id(columns: list[str]) -> str:
    """By convention the query targets the dataset of its first column."""
    return columns[0].split("_", 1)[0]


# ---------------------------------------------------------------------------
# Shape validation
# ---------------------------------------------------------------------------


def _validate_shape(query: Any) -> tuple[list[str], str | None]:
    """Check the query's container structure. Returns (columns, order)."""
    if not isinstance(query, dict):
        raise ShapeError("Query must be an object")
    if set(query.keys()) != QUERY_KEYS:
        raise ShapeError(f"Query must have exactly WHERE and OPTIONS, got {sorted(query)}")

    options = query["OPTIONS"]
    if not isinstance(options, dict):
        raise ShapeError("OPTIONS must be an object")
    if "COLUMNS" not in options:
        raise ShapeError("OPTIONS must contain COLUMNS")
    extra = set(options.keys()) - OPTION_KEYS
    if extra:
        raise ShapeError(f"Invalid keys in OPTIONS: {sorted(extra)}")

    columns = options["COLUMNS"]
    if not isinstance(columns, list) or not columns:
        raise ShapeError("COLUMNS must be a non-empty array")
    if not all(isinstance(c, str) for c in columns):
        raise ShapeError("COLUMNS entries must be strings")

    order = options.get("ORDER")
    if "ORDER" in options and not isinstance(order, str):
        raise ShapeError("ORDER must be a string")

    return columns, order
