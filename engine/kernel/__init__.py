"""
Insight Kernel — the pure query engine.

Components:
  store       — id → immutable Dataset, single-writer / lock-free readers
  filters     — WHERE object → FilterNode → matching record indices
  projection  — indices → rows, rows → sorted rows
  query       — perform_query: shape checks + filter + project + sort + cap
  facade      — InsightFacade, the async boundary over one store
  scheduler   — greedy room/section assignment
"""

from engine.kernel.errors import (
    CrossDatasetError,
    DuplicateError,
    FieldTypeError,
    InsightError,
    InvalidDatasetError,
    InvalidIdError,
    NotFoundError,
    PatternError,
    QueryEngineError,
    ResultTooLargeError,
    ShapeError,
    UnknownFieldError,
)
from engine.kernel.facade import InsightFacade
from engine.kernel.filters import compile_filter, evaluate
from engine.kernel.projection import project, sort_rows
from engine.kernel.query import perform_query
from engine.kernel.scheduler import schedule
from engine.kernel.store import DatasetStore

__all__ = [
    "InsightFacade",
    "DatasetStore",
    "perform_query",
    "compile_filter",
    "evaluate",
    "project",
    "sort_rows",
    "schedule",
    "QueryEngineError",
    "InsightError",
    "InvalidIdError",
    "DuplicateError",
    "InvalidDatasetError",
    "ShapeError",
    "CrossDatasetError",
    "UnknownFieldError",
    "FieldTypeError",
    "PatternError",
    "NotFoundError",
    "ResultTooLargeError",
]
