"""
Storefront Backend - Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Reports whether the images directory is readable and how many orders
       are held in memory.
Who:   Called by hosting health checks and uptime monitors.

Status levels:
    - healthy:   images directory readable (HTTP 200)
    - degraded:  images directory missing; order API still works (HTTP 200)
"""

import logging
import time

from fastapi import APIRouter, Depends

from storefront import __version__
from storefront.schemas.order import HealthResponse
from storefront.services.catalog_service import CatalogService, get_catalog_service
from storefront.services.order_store import OrderStore, get_order_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    catalog: CatalogService = Depends(get_catalog_service),
    store: OrderStore = Depends(get_order_store),
) -> HealthResponse:
    images_status = "readable"
    overall = "healthy"

    if not await catalog.is_readable():
        images_status = "unavailable"
        overall = "degraded"
        logger.warning("Health check: images directory %s is not readable", catalog.images_root)

    return HealthResponse(
        status=overall,
        version=__version__,
        images=images_status,
        orders=store.count(),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
