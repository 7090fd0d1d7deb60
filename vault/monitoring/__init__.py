"""
Monitoring and observability for The Vault.

Provides Prometheus metrics for component writes, media storage and the
dynamic store, served at /metrics.
"""

from vault.monitoring.metrics import (
    COMPONENT_OPERATIONS,
    MEDIA_OPERATIONS,
    STORE_LATENCY,
    STORE_OPERATIONS,
    get_metrics_app,
    record_component_operation,
    record_media_operation,
    track_component_operation,
    track_store_operation,
)

__all__ = [
    "COMPONENT_OPERATIONS",
    "MEDIA_OPERATIONS",
    "STORE_LATENCY",
    "STORE_OPERATIONS",
    "get_metrics_app",
    "record_component_operation",
    "record_media_operation",
    "track_component_operation",
    "track_store_operation",
]
