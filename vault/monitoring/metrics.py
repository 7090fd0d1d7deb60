"""
Prometheus metrics for The Vault.

Usage:
    from vault.monitoring.metrics import track_store_operation

    with track_store_operation("supabase", "fetch_components"):
        rows = store.fetch_components()

    # Or manually
    MEDIA_OPERATIONS.labels(backend="local", operation="upload", status="success").inc()
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
from starlette.applications import Starlette
from starlette.responses import Response
from starlette.routing import Route


# =============================================================================
# Metric Definitions
# =============================================================================

COMPONENT_OPERATIONS = Counter(
    "vault_component_operations_total",
    "Total component service operations",
    ["operation", "status"],
)

MEDIA_OPERATIONS = Counter(
    "vault_media_operations_total",
    "Total media storage operations",
    ["backend", "operation", "status"],
)

STORE_OPERATIONS = Counter(
    "vault_store_operations_total",
    "Total dynamic store operations",
    ["store", "operation", "status"],
)

STORE_LATENCY = Histogram(
    "vault_store_latency_seconds",
    "Latency of dynamic store operations",
    ["store", "operation"],
    buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Tracking Helpers
# =============================================================================


@contextmanager
def track_store_operation(
    store: str,
    operation: str,
) -> Generator[None, None, None]:
    """
    Context manager to track dynamic store operations.

    Usage:
        with track_store_operation("supabase", "insert_component"):
            client.table("components").insert(row).execute()
    """
    start_time = time.perf_counter()
    status = "success"
    try:
        yield
    except Exception:
        status = "error"
        raise
    finally:
        duration = time.perf_counter() - start_time
        STORE_OPERATIONS.labels(store=store, operation=operation, status=status).inc()
        STORE_LATENCY.labels(store=store, operation=operation).observe(duration)


@contextmanager
def track_component_operation(operation: str) -> Generator[None, None, None]:
    """
    Context manager counting a component service operation by outcome.

    Usage:
        with track_component_operation("create"):
            ...
    """
    try:
        yield
    except Exception:
        record_component_operation(operation, "error")
        raise
    record_component_operation(operation, "success")


def record_component_operation(operation: str, status: str) -> None:
    """Count a component create/update/delete by outcome."""
    COMPONENT_OPERATIONS.labels(operation=operation, status=status).inc()


def record_media_operation(backend: str, operation: str, status: str) -> None:
    """Count a media upload/delete by backend and outcome."""
    MEDIA_OPERATIONS.labels(backend=backend, operation=operation, status=status).inc()


# =============================================================================
# Metrics Endpoint
# =============================================================================


async def metrics_endpoint(request) -> Response:
    """Prometheus metrics endpoint handler."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


def get_metrics_app() -> Starlette:
    """
    Get a Starlette app for serving metrics.

    Mount this at /metrics in the main app:
        app.mount("/metrics", get_metrics_app())
    """
    return Starlette(
        routes=[
            Route("/", metrics_endpoint),
        ]
    )
