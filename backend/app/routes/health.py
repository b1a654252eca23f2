"""
Q&A Service — Health Check Route
==================================

What:  Health check endpoint for monitoring and load balancer health checks.
How:   Runs SELECT 1 through the injected Database and reports the result.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable (still HTTP 200; the body carries the state)
"""

import logging
import time

from fastapi import APIRouter, Request

from app import __version__
from app.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    connected = await request.app.state.database.ping()

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
