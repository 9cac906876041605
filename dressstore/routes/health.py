"""
DressStore Backend: Service Routes
====================================

What:  The welcome page (GET /) and the health check (GET /health).
Who:   `/` is for browsers and smoke tests; `/health` is for Docker health
       checks, load balancers and monitoring.

Health status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable (still HTTP 200; the body says why)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from dressstore import __version__
from dressstore.schemas.product import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Service"])

_start_time = time.time()

WELCOME_TEXT = "Welcome to DressStore Application."


@router.get("/", response_class=PlainTextResponse, summary="Welcome message")
async def welcome() -> str:
    return WELCOME_TEXT


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports database connectivity and uptime.",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Check the health of the service and its database.

    Database: executes SELECT 1 through the application's Database handle.
    """
    database = getattr(request.app.state, "database", None)
    connected = database is not None and await database.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
