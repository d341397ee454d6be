"""
Pydantic models for the Insight service.

Response shapes only. No imports from routes or services.
"""

from backend.models.dataset import (
    AddDatasetResponse,
    DatasetListResponse,
    DatasetResponse,
    EchoResponse,
    ErrorResponse,
    QueryResponse,
    RemoveDatasetResponse,
)

__all__ = [
    "AddDatasetResponse",
    "DatasetListResponse",
    "DatasetResponse",
    "EchoResponse",
    "ErrorResponse",
    "QueryResponse",
    "RemoveDatasetResponse",
]
