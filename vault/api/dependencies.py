"""FastAPI dependency injection providers.

This module provides dependency functions for injecting services into route
handlers. Instances are process-wide singletons built lazily from settings;
tests swap them through ``app.dependency_overrides``.
"""

from typing import Optional

import structlog
from fastapi import Depends
from supabase import Client, create_client

from vault.config.settings import get_settings
from vault.registry.components import ComponentRegistry, build_registry
from vault.services.aggregation import ComponentAggregator, RegistryProvider, ServiceProvider
from vault.services.categories import CategoryService
from vault.services.component_service import ComponentService
from vault.services.migration import LocalComponentProvider
from vault.storage.base import StorageAdapter
from vault.storage.registry import get_storage_adapter
from vault.store import ComponentStore
from vault.store import get_component_store as build_component_store

logger = structlog.get_logger(__name__)

# Global instances for singleton pattern
_supabase_client: Optional[Client] = None
_component_store: Optional[ComponentStore] = None
_storage: Optional[StorageAdapter] = None
_registry: Optional[ComponentRegistry] = None


def get_supabase() -> Optional[Client]:
    """
    Get Supabase client instance.

    Uses a singleton pattern to reuse the same client across requests.

    Returns:
        Authenticated Supabase client, or None when credentials are missing.
    """
    global _supabase_client

    if _supabase_client is None:
        settings = get_settings()
        if not settings.supabase_configured:
            return None
        _supabase_client = create_client(
            settings.supabase_url,
            settings.supabase_key.get_secret_value(),
        )

    return _supabase_client


def get_component_store() -> ComponentStore:
    global _component_store

    if _component_store is None:
        settings = get_settings()
        client = get_supabase() if settings.store_backend == "supabase" else None
        _component_store = build_component_store(settings, client)

    return _component_store


def get_storage() -> StorageAdapter:
    global _storage

    if _storage is None:
        settings = get_settings()
        if settings.storage_backend == "supabase":
            _storage = get_storage_adapter(settings, client=get_supabase())
        else:
            _storage = get_storage_adapter(settings)

    return _storage


def get_registry() -> ComponentRegistry:
    global _registry

    if _registry is None:
        _registry = build_registry(include_samples=get_settings().show_sample_components)
        logger.info("component_registry_loaded", components=len(_registry))

    return _registry


def get_local_provider() -> LocalComponentProvider:
    return LocalComponentProvider(get_settings().custom_components_path)


def get_component_service(
    store: ComponentStore = Depends(get_component_store),
    storage: StorageAdapter = Depends(get_storage),
    registry: ComponentRegistry = Depends(get_registry),
) -> ComponentService:
    return ComponentService(store, storage, registry)


def get_category_service(
    store: ComponentStore = Depends(get_component_store),
) -> CategoryService:
    return CategoryService(store)


def get_aggregator(
    registry: ComponentRegistry = Depends(get_registry),
    local: LocalComponentProvider = Depends(get_local_provider),
    service: ComponentService = Depends(get_component_service),
) -> ComponentAggregator:
    """
    Get the catalog aggregator.

    Providers in precedence order: registry, local custom components,
    dynamic store.
    """
    return ComponentAggregator(
        [
            RegistryProvider(registry),
            local,
            ServiceProvider(service),
        ]
    )


def reset_dependencies() -> None:
    """
    Reset all global dependency instances.

    Useful for testing or application shutdown.
    """
    global _supabase_client, _component_store, _storage, _registry
    _supabase_client = None
    _component_store = None
    _storage = None
    _registry = None
