"""
QuickNotes Backend - Health Check Routes
=========================================

What:  Liveness endpoints for monitoring and load balancer probes.
How:   GET / answers with a plain "running" message; GET /health reports
       version, uptime and how many notes are currently held in memory.
Who:   Called by Docker health checks, load balancers, and developers
       poking the server.
"""

import logging
import time

from fastapi import APIRouter, Request

from app import __version__
from app.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", summary="Liveness message")
async def root() -> dict:
    return {"success": True, "message": "Server is running"}


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    """
    The store is in-process, so the service is healthy whenever it can
    answer. The note count is informational; it resets on every restart.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        notes=len(request.app.state.note_service.store),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
