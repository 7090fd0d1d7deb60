"""
Catalog services.

- component_service: CRUD over the dynamic store
- categories: category listing and authoring
- aggregation: merged read view over registry, local and dynamic providers
- migration: local custom components and their migration into the store
"""

from vault.services.aggregation import (
    ComponentAggregator,
    ComponentProvider,
    RegistryProvider,
    ServiceProvider,
    merge_components,
)
from vault.services.categories import CategoryService
from vault.services.component_service import ComponentService, component_row, content_row
from vault.services.migration import (
    LocalComponentProvider,
    MigrationItemResult,
    MigrationReport,
    migrate_components,
)

__all__ = [
    "ComponentAggregator",
    "ComponentProvider",
    "RegistryProvider",
    "ServiceProvider",
    "merge_components",
    "CategoryService",
    "ComponentService",
    "component_row",
    "content_row",
    "LocalComponentProvider",
    "MigrationItemResult",
    "MigrationReport",
    "migrate_components",
]
