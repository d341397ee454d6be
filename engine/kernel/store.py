"""
Insight Kernel — Dataset Store

Holds the id → Dataset mapping. The only mutable shared state in the
kernel.

Writers (add/remove) serialize on a lock and publish a fresh mapping;
readers take whatever mapping is current without locking. Datasets are
immutable once built, so a reader holding a Dataset never observes a
half-installed or half-removed one.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from types import MappingProxyType
from typing import Any, Mapping

from engine.kernel.errors import DuplicateError, InvalidDatasetError, InvalidIdError, NotFoundError
from engine.kernel.types import DATASET_KINDS, Dataset, DatasetInfo, Record, is_valid_id

logger = logging.getLogger(__name__)


class DatasetStore:
    def __init__(self) -> None:
        self._write_lock = threading.Lock()
        self._datasets: Mapping[str, Dataset] = MappingProxyType({})

    # -- writes --

    def add(self, dataset_id: str, kind: str, records: Iterable[Record]) -> Dataset:
        """
        Install a dataset. Records are copied before the dataset becomes
        visible; on any failure nothing is installed.
        """
        if not is_valid_id(dataset_id):
            raise InvalidIdError(f"Invalid dataset id: {dataset_id!r}")
        if kind not in DATASET_KINDS:
            raise InvalidDatasetError(f"Unknown dataset kind: {kind!r}")

        dataset = Dataset(
            id=dataset_id,
            kind=kind,
            records=tuple(dict(r) for r in records),
        )
        _check_uniform_fields(dataset)

        with self._write_lock:
            if dataset_id in self._datasets:
                raise DuplicateError(f"Dataset already exists: {dataset_id}")
            updated = dict(self._datasets)
            updated[dataset_id] = dataset
            self._datasets = MappingProxyType(updated)

        logger.info("store: added dataset %s (%s, %d rows)", dataset_id, kind, dataset.num_rows)
        return dataset

    def remove(self, dataset_id: str) -> str:
        if not is_valid_id(dataset_id):
            raise InvalidIdError(f"Invalid dataset id: {dataset_id!r}")

        with self._write_lock:
            if dataset_id not in self._datasets:
                raise NotFoundError(f"Dataset not found: {dataset_id}")
            updated = dict(self._datasets)
            del updated[dataset_id]
            self._datasets = MappingProxyType(updated)

        logger.info("store: removed dataset %s", dataset_id)
        return dataset_id

    # -- reads --

    def get(self, dataset_id: str) -> Dataset:
        dataset = self._datasets.get(dataset_id)
        if dataset is None:
            raise NotFoundError(f"Dataset not found: {dataset_id}")
        return dataset

    def contains(self, dataset_id: Any) -> bool:
        return isinstance(dataset_id, str) and dataset_id in self._datasets

    def ids(self) -> list[str]:
        return list(self._datasets.keys())

    def list(self) -> list[DatasetInfo]:
        return [
            DatasetInfo(id=ds.id, kind=ds.kind, num_rows=ds.num_rows)
            for ds in self._datasets.values()
        ]

    def __len__(self) -> int:
        return len(self._datasets)


def _check_uniform_fields(dataset: Dataset) -> None:
    """Every record must carry exactly the first record's field names."""
    schema = dataset.schema
    for index, record in enumerate(dataset.records):
        if record.keys() != schema:
            missing = sorted(schema - record.keys())
            extra = sorted(record.keys() - schema)
            raise InvalidDatasetError(
                f"Record {index} fields differ from record 0 (missing {missing}, extra {extra})"
            )
