"""
Insight FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from backend.config import settings
from backend.models.dataset import EchoResponse, ErrorResponse
from backend.routes import datasets as dataset_routes
from backend.routes import query as query_routes
from engine.kernel.errors import QueryEngineError
from engine.kernel.facade import InsightFacade

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Every process start gets a fresh facade with no datasets.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    app.state.facade = InsightFacade()
    logger.info("Insight facade initialized (%s)", settings.ENVIRONMENT)

    yield

    logger.info("Insight facade released")


app = FastAPI(
    title="Insight",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)


@app.exception_handler(QueryEngineError)
async def query_engine_error_handler(request: Request, exc: QueryEngineError) -> JSONResponse:
    """Every kernel failure that a route does not map itself is a 400."""
    logger.warning("%s %s failed: %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return JSONResponse(status_code=400, content=ErrorResponse(error=str(exc)).model_dump())


# Register routes
app.include_router(dataset_routes.router)
app.include_router(query_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}


@app.get("/echo/{msg}")
async def echo(msg: str) -> EchoResponse:
    """Connectivity check: echoes the message twice."""
    return EchoResponse(result=f"{msg}...{msg}")


# Static assets are mounted last so the API routes match first
if settings.STATIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=str(settings.STATIC_DIR), html=True), name="static")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
