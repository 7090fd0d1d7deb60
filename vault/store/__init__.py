"""
Dynamic component store.

Backends:
- SupabaseComponentStore: Postgres tables through supabase-py
- InMemoryComponentStore: dict tables for tests and local development
- UnconfiguredComponentStore: fails every call with a configuration cause

Use :func:`get_component_store` to build the one selected by settings.
"""

from typing import TYPE_CHECKING, Optional

import structlog

from vault.store.base import (
    CATEGORIES_TABLE,
    COMPONENT_SELECT,
    COMPONENT_TAGS_TABLE,
    COMPONENTS_TABLE,
    CONTENT_TABLE,
    REQUIRED_TABLES,
    TAGS_TABLE,
    ComponentStore,
    Row,
)
from vault.store.memory import InMemoryComponentStore
from vault.store.supabase import SupabaseComponentStore
from vault.store.unconfigured import UnconfiguredComponentStore

if TYPE_CHECKING:
    from supabase import Client

    from vault.config.settings import Settings

logger = structlog.get_logger(__name__)


def get_component_store(
    settings: "Settings",
    client: Optional["Client"] = None,
) -> ComponentStore:
    """Build the dynamic store selected by ``settings.store_backend``.

    Args:
        settings: Application settings.
        client: Existing Supabase client to reuse. Created from settings
            when omitted and credentials are present.

    Returns:
        A ComponentStore. Falls back to UnconfiguredComponentStore when the
        Supabase backend is selected without credentials.
    """
    if settings.store_backend == "memory":
        logger.info("component_store_selected", store=InMemoryComponentStore.name)
        return InMemoryComponentStore()

    if client is None and settings.supabase_configured:
        from supabase import create_client

        client = create_client(
            settings.supabase_url,
            settings.supabase_key.get_secret_value(),
        )

    if client is None:
        logger.warning(
            "supabase_not_configured",
            hint="Set SUPABASE_URL and SUPABASE_KEY to enable dynamic components",
        )
        return UnconfiguredComponentStore()

    logger.info("component_store_selected", store=SupabaseComponentStore.name)
    return SupabaseComponentStore(client)


__all__ = [
    "CATEGORIES_TABLE",
    "COMPONENT_SELECT",
    "COMPONENT_TAGS_TABLE",
    "COMPONENTS_TABLE",
    "CONTENT_TABLE",
    "REQUIRED_TABLES",
    "TAGS_TABLE",
    "ComponentStore",
    "Row",
    "InMemoryComponentStore",
    "SupabaseComponentStore",
    "UnconfiguredComponentStore",
    "get_component_store",
]
