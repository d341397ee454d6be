"""
Insight Kernel — Errors

Every failure the kernel can raise. Validation is fail-fast: the first
violated rule raises one of these and aborts the whole operation.
"""

from __future__ import annotations


class QueryEngineError(Exception):
    """Base for every kernel failure."""


class InsightError(QueryEngineError):
    """A malformed request: bad id, bad query shape, bad field, bad value."""


class InvalidIdError(InsightError):
    """Dataset id is empty, all whitespace, or contains an underscore."""


class DuplicateError(InsightError):
    """A dataset with this id is already installed."""


class InvalidDatasetError(InsightError):
    """Dataset content or kind cannot be installed."""


class ShapeError(InsightError):
    """Query or filter object has the wrong keys or wrong container types."""


class CrossDatasetError(InsightError):
    """A key names another dataset, or a WHERE key is not `<id>_<field>` at all."""


class UnknownFieldError(InsightError):
    """A qualified key is malformed or its field is absent from the schema."""


class FieldTypeError(InsightError):
    """Comparison value or stored field value has the wrong type for the operator."""


class PatternError(InsightError):
    """Wildcard `*` appears somewhere other than the start or end of an IS value."""


class NotFoundError(QueryEngineError):
    """The referenced dataset is not installed."""


class ResultTooLargeError(QueryEngineError):
    """The query matched more rows than the result cap allows."""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"Query returned {count} rows; the limit is {limit}")
        self.count = count
        self.limit = limit
