"""
Insight Kernel — Projector and Sorter

project: candidate indices → output rows keyed by qualified column name
sort_rows: ascending order by one column, stable on ties
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from engine.kernel.filters import resolve_field
from engine.kernel.types import Dataset, is_number


def project(indices: Iterable[int], columns: Sequence[str], dataset: Dataset) -> list[dict[str, Any]]:
    """
    Build one row per index, in ascending index order.
    Every column is validated before any row is built.
    """
    resolved = [(column, resolve_field(column, dataset)) for column in columns]
    records = dataset.records
    return [
        {column: records[i][local] for column, local in resolved}
        for i in sorted(indices)
    ]


def sort_key(value: Any) -> tuple[int, Any]:
    """
    Total order over stored values: numbers by magnitude, then strings by
    code point (a proper prefix sorts first).
    """
    if is_number(value):
        return (0, value)
    return (1, str(value))


def sort_rows(rows: list[dict[str, Any]], order: str | None) -> list[dict[str, Any]]:
    if order is None:
        return rows
    return sorted(rows, key=lambda row: sort_key(row[order]))
