"""Health check endpoints for The Vault API.

Provides system health status for the dynamic store and media storage.
"""

import time
from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException

from vault import __version__
from vault.api.dependencies import get_component_store, get_storage
from vault.api.models import HealthCheckResponse, HealthStatus
from vault.storage.base import StorageAdapter
from vault.store.base import ComponentStore
from vault.store.unconfigured import UnconfiguredComponentStore

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Health"])

# Track server start time for uptime calculation
_server_start_time: Optional[float] = None


def set_server_start_time() -> None:
    """Set the server start time. Called on application startup."""
    global _server_start_time
    _server_start_time = time.time()


def get_uptime_seconds() -> Optional[float]:
    """Get server uptime in seconds."""
    if _server_start_time is None:
        return None
    return time.time() - _server_start_time


async def check_store_health(store: ComponentStore) -> HealthStatus:
    """Check dynamic store connectivity."""
    if isinstance(store, UnconfiguredComponentStore):
        return HealthStatus(
            status="not_configured",
            message="Supabase credentials are not set",
        )

    start_time = time.time()
    healthy = store.health_check()
    latency = (time.time() - start_time) * 1000

    if not healthy:
        logger.error("store_health_check_failed", store=store.name)
    return HealthStatus(
        status="healthy" if healthy else "unhealthy",
        latency_ms=round(latency, 2),
        message=f"{store.name} store {'reachable' if healthy else 'unreachable'}",
    )


async def check_storage_health(storage: StorageAdapter) -> HealthStatus:
    """Check media storage availability."""
    start_time = time.time()
    healthy = await storage.health_check()
    latency = (time.time() - start_time) * 1000

    return HealthStatus(
        status="healthy" if healthy else "unhealthy",
        latency_ms=round(latency, 2),
        message=f"{storage.backend} storage {'ready' if healthy else 'unavailable'}",
    )


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Health Check",
    description="Check the health status of the API and its dependencies.",
)
async def health_check(
    store: ComponentStore = Depends(get_component_store),
    storage: StorageAdapter = Depends(get_storage),
) -> HealthCheckResponse:
    """
    Perform a health check of all system components.

    Returns the status of:
    - store (dynamic components)
    - storage (preview media)

    An unconfigured store degrades the service; the registry is still served.
    """
    services = {
        "store": await check_store_health(store),
        "storage": await check_storage_health(storage),
    }

    statuses = [s.status for s in services.values()]
    if all(s == "healthy" for s in statuses):
        overall_status = "healthy"
    elif any(s == "unhealthy" for s in statuses):
        overall_status = "unhealthy"
    else:
        overall_status = "degraded"

    return HealthCheckResponse(
        status=overall_status,
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        services=services,
        uptime_seconds=get_uptime_seconds(),
    )


@router.get(
    "/health/live",
    summary="Liveness Check",
    description="Simple liveness check for container orchestration.",
)
async def liveness() -> dict:
    """Returns 200 if the service is alive."""
    return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get(
    "/health/ready",
    summary="Readiness Check",
    description="Check if the service is ready to accept traffic.",
)
async def readiness(
    store: ComponentStore = Depends(get_component_store),
) -> dict:
    """
    Readiness probe.

    Returns 200 unless a configured store is unreachable.
    """
    store_status = await check_store_health(store)
    if store_status.status == "unhealthy":
        raise HTTPException(
            status_code=503,
            detail="Service not ready: component store unavailable",
        )

    return {
        "status": "ready",
        "store": store_status.status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
