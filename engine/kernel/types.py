"""
Insight Kernel — Shared Types

Data classes and constants used across the store, filter evaluator,
projector and orchestrator. These are the contracts that bind the kernel
together.

A dataset is an ordered, immutable sequence of records (flat mappings of
field name → string | number) plus a kind tag. Queries reference fields by
qualified key: `<datasetId>_<field>`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# `<datasetId>_<field>`, neither part containing an underscore
QUALIFIED_KEY_PATTERN = re.compile(r"^[^_]+_[^_]+$")
# optional leading `*`, any non-`*` run, optional trailing `*`
WILDCARD_PATTERN = re.compile(r"^\*?[^*]*\*?$")


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

DATASET_KINDS: set[str] = {"courses", "rooms"}

LOGIC_OPERATORS: set[str] = {"AND", "OR"}
NEGATION_OPERATOR = "NOT"
STRING_COMPARATORS: set[str] = {"IS"}
NUMERIC_COMPARATORS: set[str] = {"EQ", "LT", "GT"}

QUERY_KEYS: frozenset[str] = frozenset({"WHERE", "OPTIONS"})
OPTION_KEYS: frozenset[str] = frozenset({"COLUMNS", "ORDER"})

MAX_RESULTS = 5000

Record = Mapping[str, Any]


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Dataset:
    """
    One installed dataset.

    `records` is a tuple of plain dicts copied at install time, so nothing
    the caller still holds can change what queries observe.
    """

    id: str
    kind: str
    records: tuple[dict[str, Any], ...] = field(default_factory=tuple)

    @property
    def num_rows(self) -> int:
        return len(self.records)

    @property
    def schema(self) -> frozenset[str]:
        """Field names of the first record; all records are assumed to share them."""
        if not self.records:
            return frozenset()
        return frozenset(self.records[0].keys())

    def universe(self) -> frozenset[int]:
        """Every record index, 0..n-1."""
        return frozenset(range(len(self.records)))


@dataclass(frozen=True)
class DatasetInfo:
    """What list_datasets returns per dataset."""

    id: str
    kind: str
    num_rows: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "kind": self.kind, "numRows": self.num_rows}


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def is_valid_id(dataset_id: Any) -> bool:
    """Non-empty after trimming whitespace, and no underscore."""
    if not isinstance(dataset_id, str):
        return False
    if "_" in dataset_id:
        return False
    return dataset_id.strip() != ""


def is_qualified_key(key: Any) -> bool:
    return isinstance(key, str) and QUALIFIED_KEY_PATTERN.match(key) is not None


def split_key(key: str) -> tuple[str, str]:
    """'courses_avg' → ('courses', 'avg'). Caller checks is_qualified_key first."""
    dataset_id, local = key.split("_", 1)
    return dataset_id, local


def is_number(value: Any) -> bool:
    """int or float, but never bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)
