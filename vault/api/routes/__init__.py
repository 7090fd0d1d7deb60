"""API route modules."""

from vault.api.routes.catalog import router as catalog_router
from vault.api.routes.categories import router as categories_router
from vault.api.routes.components import router as components_router
from vault.api.routes.health import router as health_router
from vault.api.routes.media import router as media_router
from vault.api.routes.migration import router as migration_router

__all__ = [
    "catalog_router",
    "categories_router",
    "components_router",
    "health_router",
    "media_router",
    "migration_router",
]
