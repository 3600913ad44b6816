"""
pgnotes: Health Check Route
=============================

What:  Health check endpoint for container and load balancer probes.
Why:   The server keeps running when the database is unreachable (startup
       failures are only logged), so "process is up" says little on its
       own; this endpoint reports whether the store can actually be reached.
How:   Runs SELECT 1 on a pooled connection.
Who:   Called by Docker health checks and monitoring.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from pgnotes import __version__
from pgnotes.database import Database, get_database
from pgnotes.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(database: Database = Depends(get_database)) -> JSONResponse:
    """Probe the database and report aggregate status with uptime."""
    connected = await database.ping()

    body = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(
        status_code=200 if connected else 503,
        content=body.model_dump(),
    )
