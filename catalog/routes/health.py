"""
Catalog Backend: Health Check Route
===================================

What:  GET /health for container health checks and load balancer probes.
How:   Pings the product store and the media host and aggregates the result.

    Status levels:
    - healthy:   database and media host reachable (HTTP 200)
    - degraded:  media host unreachable; reads and writes still work (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from catalog import __version__
from catalog.dependencies import get_media_host, get_product_store
from catalog.schemas.product import HealthResponse
from catalog.services.media_base import MediaHost
from catalog.services.store_base import ProductStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: ProductStore = Depends(get_product_store),
    media_host: MediaHost = Depends(get_media_host),
) -> HealthResponse:
    db_status = "connected"
    media_status = "available"
    overall = "healthy"

    try:
        await store.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    if not await media_host.health_check():
        media_status = "unavailable"
        if overall == "healthy":
            overall = "degraded"

    if overall == "unhealthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        media=media_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
