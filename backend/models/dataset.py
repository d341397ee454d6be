"""Dataset and query response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from engine.kernel.types import DatasetInfo


class DatasetResponse(BaseModel):
    """One entry of GET /datasets."""

    id: str
    kind: str
    numRows: int = Field(ge=0)

    @classmethod
    def from_info(cls, info: DatasetInfo) -> DatasetResponse:
        return cls(id=info.id, kind=info.kind, numRows=info.num_rows)


class DatasetListResponse(BaseModel):
    result: list[DatasetResponse]


class AddDatasetResponse(BaseModel):
    """Ids of every installed dataset after the add."""

    result: list[str]


class RemoveDatasetResponse(BaseModel):
    result: str


class QueryResponse(BaseModel):
    result: list[dict[str, Any]]


class EchoResponse(BaseModel):
    result: str


class ErrorResponse(BaseModel):
    error: str
