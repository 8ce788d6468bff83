"""
PartCat Backend — Liveness & Health Routes
============================================

What:  Unauthenticated endpoints for humans and monitoring.
       GET /        plain-text liveness answer
       GET /health  JSON report including a database probe
Why:   Load balancers and docker health checks need an endpoint that
       works without credentials.
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from partcat import __version__
from partcat.database import PersistenceGateway, get_gateway
from partcat.exceptions import PersistenceError
from partcat.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Liveness check",
)
async def index() -> str:
    """Answer without touching the database."""
    return "PartCat API is running."


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the backend and its database.",
)
async def health_check(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> HealthResponse:
    """
    Probe the database with SELECT 1 and report aggregate status.

    A failed probe is reported in the body (status "unhealthy"); the
    endpoint itself still answers 200 so the report is readable.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        await gateway.ping()
    except PersistenceError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", e.context.get("error"))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
