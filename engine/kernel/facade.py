"""
Insight Kernel — Facade

The async boundary around the pure kernel. Callers (the service layer,
tests) await these methods; each one runs the synchronous kernel to
completion without suspending. Ingestion and transport IO happen outside,
before records reach add_dataset.

Operations: add_dataset, remove_dataset, list_datasets, perform_query
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from engine.kernel.query import perform_query
from engine.kernel.store import DatasetStore
from engine.kernel.types import DatasetInfo, Record


class InsightFacade:
    """
    One store per facade instance. A new facade starts with no datasets.
    """

    def __init__(self, store: DatasetStore | None = None):
        self._store = store if store is not None else DatasetStore()

    @property
    def store(self) -> DatasetStore:
        return self._store

    # -- add --

    async def add_dataset(self, dataset_id: str, records: Iterable[Record], kind: str) -> list[str]:
        """
        Install pre-parsed records under `dataset_id`.
        Returns the ids of every installed dataset.
        """
        self._store.add(dataset_id, kind, records)
        return self._store.ids()

    # -- remove --

    async def remove_dataset(self, dataset_id: str) -> str:
        return self._store.remove(dataset_id)

    # -- list --

    async def list_datasets(self) -> list[DatasetInfo]:
        return self._store.list()

    # -- query --

    async def perform_query(self, query: Any) -> list[dict[str, Any]]:
        return perform_query(self._store, query)
