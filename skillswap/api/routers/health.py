"""
Health check API endpoints.

Routes: GET /health

Dependencies: skillswap.boundary, skillswap.core.session_coordinator
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.deps.dependencies import get_session_coordinator
from skillswap.boundary.db import get_async_db
from skillswap.core.session_coordinator import SessionCoordinator
from skillswap.models.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_async_db),
    coordinator: SessionCoordinator = Depends(get_session_coordinator),
) -> HealthResponse:
    """Liveness plus database reachability and live realtime connections."""
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        database = "unavailable"

    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        database=database,
        realtime_connections=coordinator.connection_count,
    )
