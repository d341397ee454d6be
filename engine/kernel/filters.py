"""
Insight Kernel — Filter Evaluator

Two pure steps:
  compile_filter  — raw WHERE object → FilterNode (validates shape, keys,
                    value types and wildcard placement against one dataset)
  evaluate        — FilterNode → frozenset of matching record indices

A FilterNode is a closed sum type:

  EmptyFilter       {}                                   every record
  LogicalFilter     {"AND"|"OR": [node, ...]}            ∩ / ∪ of operands
  NegationFilter    {"NOT": node}                        complement
  ComparisonFilter  {"IS"|"EQ"|"LT"|"GT": {key: value}}  per-record test

Each evaluation returns a new set; nothing is shared or mutated between
nodes, so AND/OR/NOT compose freely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union

from engine.kernel.errors import (
    CrossDatasetError,
    FieldTypeError,
    PatternError,
    ShapeError,
    UnknownFieldError,
)
from engine.kernel.types import (
    LOGIC_OPERATORS,
    NEGATION_OPERATOR,
    NUMERIC_COMPARATORS,
    STRING_COMPARATORS,
    WILDCARD_PATTERN,
    Dataset,
    is_number,
    is_qualified_key,
    split_key,
)

# ---------------------------------------------------------------------------
# Node types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EmptyFilter:
    pass


@dataclass(frozen=True)
class LogicalFilter:
    op: str  # "AND" | "OR"
    operands: tuple[FilterNode, ...]


@dataclass(frozen=True)
class NegationFilter:
    operand: FilterNode


@dataclass(frozen=True)
class ComparisonFilter:
    op: str  # "IS" | "EQ" | "LT" | "GT"
    field: str  # local field name, dataset prefix stripped
    value: str | int | float


FilterNode = Union[EmptyFilter, LogicalFilter, NegationFilter, ComparisonFilter]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compile_filter(raw: Any, dataset: Dataset) -> FilterNode:
    """
    Validate a raw WHERE object against `dataset` and build its FilterNode.
    Raises on the first violation, walking operands in order.
    """
    if not isinstance(raw, dict):
        raise ShapeError("WHERE must be an object")
    if len(raw) == 0:
        return EmptyFilter()
    if len(raw) > 1:
        raise ShapeError(f"Filter must have exactly one key, got {sorted(raw)}")

    op, body = next(iter(raw.items()))

    if op in LOGIC_OPERATORS:
        if not isinstance(body, list):
            raise ShapeError(f"{op} must be an array")
        if not body:
            raise ShapeError(f"{op} must have at least one element")
        return LogicalFilter(op=op, operands=tuple(compile_filter(sub, dataset) for sub in body))

    if op == NEGATION_OPERATOR:
        return NegationFilter(operand=compile_filter(body, dataset))

    if op in STRING_COMPARATORS or op in NUMERIC_COMPARATORS:
        return _compile_comparison(op, body, dataset)

    raise ShapeError(f"Invalid filter operator: {op}")


def evaluate(node: FilterNode, dataset: Dataset) -> frozenset[int]:
    """Indices of the records in `dataset` that satisfy `node`."""
    evaluator = _EVALUATORS.get(type(node))
    if evaluator is None:
        raise ShapeError(f"Unknown filter node: {type(node).__name__}")
    return evaluator(node, dataset)


def find_matches(raw: Any, dataset: Dataset) -> frozenset[int]:
    """compile_filter + evaluate."""
    return evaluate(compile_filter(raw, dataset), dataset)


def resolve_field(key: Any, dataset: Dataset) -> str:
    """
    Check a qualified key against `dataset` and return its local field name.
    Shared by the filter compiler and the projector.
    """
    if not is_qualified_key(key):
        raise UnknownFieldError(f"Invalid key format: {key!r}")
    dataset_id, local = split_key(key)
    if dataset_id != dataset.id:
        raise CrossDatasetError(f"Cannot query more than one dataset: {dataset.id}, {dataset_id}")
    if local not in dataset.schema:
        raise UnknownFieldError(f"Key not found in dataset {dataset.id}: {key}")
    return local


# ---------------------------------------------------------------------------
# Comparison compilation
# ---------------------------------------------------------------------------


def _compile_comparison(op: str, body: Any, dataset: Dataset) -> ComparisonFilter:
    if not isinstance(body, dict) or len(body) != 1:
        raise ShapeError(f"{op} must have exactly one key")

    key, value = next(iter(body.items()))
    # a WHERE key outside the <id>_<field> pattern cannot belong to this dataset
    if not is_qualified_key(key):
        raise CrossDatasetError(f"Filter key must be {dataset.id}_<field>: {key!r}")
    local = resolve_field(key, dataset)
    stored = dataset.records[0][local]

    if op in STRING_COMPARATORS:
        if not isinstance(value, str):
            raise FieldTypeError(f"{op} value must be a string: {key}")
        if not isinstance(stored, str):
            raise FieldTypeError(f"{op} cannot be applied to non-string field: {key}")
        if "*" in value and not WILDCARD_PATTERN.match(value):
            raise PatternError(f"Asterisks may only appear at the start or end: {value!r}")
    else:
        if not is_number(value):
            raise FieldTypeError(f"{op} value must be a number: {key}")
        if not is_number(stored):
            raise FieldTypeError(f"{op} cannot be applied to non-numeric field: {key}")

    return ComparisonFilter(op=op, field=local, value=value)


# ---------------------------------------------------------------------------
# Evaluators
# ---------------------------------------------------------------------------


def _eval_empty(node: EmptyFilter, dataset: Dataset) -> frozenset[int]:
    return dataset.universe()


def _eval_logical(node: LogicalFilter, dataset: Dataset) -> frozenset[int]:
    subsets = [evaluate(sub, dataset) for sub in node.operands]
    if node.op == "AND":
        return frozenset.intersection(*subsets)
    return frozenset.union(*subsets)


def _eval_negation(node: NegationFilter, dataset: Dataset) -> frozenset[int]:
    return dataset.universe() - evaluate(node.operand, dataset)


def _eval_comparison(node: ComparisonFilter, dataset: Dataset) -> frozenset[int]:
    test = _COMPARATORS[node.op]
    field = node.field
    value = node.value
    return frozenset(i for i, record in enumerate(dataset.records) if test(record[field], value))


_EVALUATORS: dict[type, Callable[[Any, Dataset], frozenset[int]]] = {
    EmptyFilter: _eval_empty,
    LogicalFilter: _eval_logical,
    NegationFilter: _eval_negation,
    ComparisonFilter: _eval_comparison,
}


# ---------------------------------------------------------------------------
# Comparators
# ---------------------------------------------------------------------------


def match_wildcard(actual: str, pattern: str) -> bool:
    """
    IS semantics. No `*` → exact match. Leading `*` → suffix, trailing `*`
    → prefix, both → substring. Always anchored to the whole string.
    """
    if "*" not in pattern:
        return actual == pattern

    leading = pattern.startswith("*")
    trailing = len(pattern) > 1 and pattern.endswith("*")
    core = pattern.strip("*")

    if leading and trailing:
        return core in actual
    if leading:
        return actual.endswith(core)
    return actual.startswith(core)


_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "IS": match_wildcard,
    "EQ": lambda a, b: a == b,
    "LT": lambda a, b: a < b,
    "GT": lambda a, b: a > b,
}
