"""
Health Router

Liveness at ``GET /`` and readiness at ``GET /health/ready``. Readiness
only looks at the optional tool store: a server running without one is
ready, a server whose configured store stopped answering is not.
"""

import asyncio
import logging

import redis
from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel

from sum_mcp.api.deps import get_settings
from sum_mcp.core.config import Settings

logger = logging.getLogger(__name__)


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Liveness response model."""

    status: str
    server: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    checks: dict[str, bool]


router = APIRouter(tags=["Health"])


@router.get("/", response_model=HealthResponse)
async def root(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", server=settings.service_name)


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request, response: Response) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Returns:
        ReadinessResponse with one entry per checked dependency; HTTP 503
        when any check fails.
    """
    checks: dict[str, bool] = {}
    store = request.app.state.store
    if store is not None:
        try:
            checks["redis"] = bool(await asyncio.to_thread(store.ping))
        except redis.RedisError as e:
            logger.warning(f"Tool store ping failed: {e}")
            checks["redis"] = False

    all_healthy = all(checks.values())
    if not all_healthy:
        response.status_code = 503

    return ReadinessResponse(
        status="ready" if all_healthy else "not_ready",
        checks=checks,
    )
