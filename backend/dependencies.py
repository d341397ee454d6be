"""FastAPI dependencies shared by the routes."""

from __future__ import annotations

from fastapi import Request

from engine.kernel.facade import InsightFacade


def get_facade(request: Request) -> InsightFacade:
    """The process-wide facade created in the app lifespan."""
    return request.app.state.facade
