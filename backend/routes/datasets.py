"""Dataset routes — add (upload), remove, list."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from backend.config import settings
from backend.dependencies import get_facade
from backend.models.dataset import (
    AddDatasetResponse,
    DatasetListResponse,
    DatasetResponse,
    ErrorResponse,
    RemoveDatasetResponse,
)
from backend.services.ingest import parse_dataset_archive
from engine.kernel.errors import InvalidDatasetError, NotFoundError
from engine.kernel.facade import InsightFacade

logger = logging.getLogger(__name__)

router = APIRouter(tags=["datasets"])


async def _read_archive(request: Request, limit: int) -> bytes:
    """Request body, refusing anything over `limit` bytes before it is buffered."""
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise InvalidDatasetError(f"Archive is {declared} bytes; the limit is {limit}")

    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise InvalidDatasetError(f"Archive exceeds the {limit} byte limit")
        chunks.append(chunk)
    return b"".join(chunks)


@router.put("/dataset/{dataset_id}/{kind}", status_code=200)
async def put_dataset(
    dataset_id: str,
    kind: str,
    request: Request,
    facade: InsightFacade = Depends(get_facade),
) -> AddDatasetResponse:
    """
    Upload a dataset archive as the raw request body.

    The archive is parsed off the event loop; the records are then
    installed atomically under `dataset_id`.
    """
    content = await _read_archive(request, settings.MAX_UPLOAD_BYTES)
    records = await run_in_threadpool(parse_dataset_archive, content, kind)
    ids = await facade.add_dataset(dataset_id, records, kind)
    logger.info("datasets: added %s with %d records", dataset_id, len(records))
    return AddDatasetResponse(result=ids)


@router.delete(
    "/dataset/{dataset_id}",
    status_code=200,
    response_model=RemoveDatasetResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_dataset(
    dataset_id: str,
    facade: InsightFacade = Depends(get_facade),
):
    """Remove a dataset. Missing dataset → 404, malformed id → 400."""
    try:
        removed = await facade.remove_dataset(dataset_id)
    except NotFoundError as e:
        logger.warning("datasets: remove of missing dataset %s", dataset_id)
        return JSONResponse(status_code=404, content=ErrorResponse(error=str(e)).model_dump())
    return RemoveDatasetResponse(result=removed)


@router.get("/datasets", status_code=200)
async def list_datasets(facade: InsightFacade = Depends(get_facade)) -> DatasetListResponse:
    """List every installed dataset with its kind and row count."""
    infos = await facade.list_datasets()
    return DatasetListResponse(result=[DatasetResponse.from_info(i) for i in infos])
