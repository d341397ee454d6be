"""Query route."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from backend.dependencies import get_facade
from backend.models.dataset import QueryResponse
from engine.kernel.errors import ShapeError
from engine.kernel.facade import InsightFacade

router = APIRouter(tags=["query"])


@router.post("/query", status_code=200)
async def post_query(
    request: Request,
    facade: InsightFacade = Depends(get_facade),
) -> QueryResponse:
    """
    Run a structured query. The body is the query object itself:

        {"WHERE": {...}, "OPTIONS": {"COLUMNS": [...], "ORDER": "..."}}

    Shape checks happen in the kernel, so any JSON value is accepted here.
    """
    try:
        query = await request.json()
    except ValueError as e:
        raise ShapeError("Query body must be valid JSON") from e

    rows = await facade.perform_query(query)
    return QueryResponse(result=rows)
