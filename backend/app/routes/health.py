"""
Product API - Health Check Route
=================================

What:  Health check endpoint for container and load balancer checks.
How:   Pings MongoDB through the shared ProductDbContext.

Status levels:
    - healthy:   ping succeeded (HTTP 200)
    - unhealthy: ping failed (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from app import __version__
from app.database import ProductDbContext, get_db_context
from app.schemas.product import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    db: ProductDbContext = Depends(get_db_context),
) -> HealthResponse:
    """Report whether the document store answers a ping."""
    db_status = "connected"
    overall = "healthy"

    try:
        await db.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
