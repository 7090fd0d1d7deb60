"""
Component Aggregation.

Merges every component provider into one catalog. Providers are applied in
order and the last one to supply an id wins, so the usual precedence is:

    registry  <  local custom components  <  dynamic store

Nothing is cached; every read path recomputes the merge from the providers.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Optional

import structlog

from vault.core.exceptions import ConfigurationError, PersistenceError
from vault.models.component import CategorySummary, Component, TagSummary, sort_by_date
from vault.normalization.summaries import summarize_categories, summarize_tags
from vault.registry.components import ComponentRegistry

logger = structlog.get_logger(__name__)


# =============================================================================
# Providers
# =============================================================================


class ComponentProvider(ABC):
    """Read-only source of normalized components."""

    name: str = "abstract"

    @abstractmethod
    async def fetch_components(self) -> list[Component]:
        ...


class RegistryProvider(ComponentProvider):
    name = "registry"

    def __init__(self, registry: ComponentRegistry):
        self.registry = registry

    async def fetch_components(self) -> list[Component]:
        return self.registry.all()


class ServiceProvider(ComponentProvider):
    """Dynamic components from the component service.

    A store that is not configured contributes nothing; any other
    persistence failure propagates.
    """

    name = "dynamic"

    def __init__(self, service):
        self.service = service

    async def fetch_components(self) -> list[Component]:
        try:
            return await self.service.list()
        except PersistenceError as e:
            if isinstance(e.cause, ConfigurationError):
                logger.warning("dynamic_components_unavailable", reason=e.cause.message)
                return []
            raise


def merge_components(sources: Iterable[Iterable[Component]]) -> list[Component]:
    """Deduplicate by id with last-source-wins, then sort by date descending."""
    merged: dict[str, Component] = {}
    for components in sources:
        for component in components:
            merged[component.id] = component
    return sort_by_date(list(merged.values()))


# =============================================================================
# Aggregator
# =============================================================================


class ComponentAggregator:
    """Unified catalog view over an ordered list of providers.

    Example:
        aggregator = ComponentAggregator([
            RegistryProvider(registry),
            ServiceProvider(service),
        ])
        components = await aggregator.get_all()
    """

    def __init__(self, providers: Sequence[ComponentProvider]):
        self.providers = list(providers)

    async def get_all(self) -> list[Component]:
        sources = []
        for provider in self.providers:
            components = await provider.fetch_components()
            logger.debug("provider_fetched", provider=provider.name, count=len(components))
            sources.append(components)
        return merge_components(sources)

    async def by_slug(self, slug: str) -> Optional[Component]:
        for component in await self.get_all():
            if component.slug == slug:
                return component
        return None

    async def by_category(self, category: str) -> list[Component]:
        wanted = (category or "").strip().lower()
        return [c for c in await self.get_all() if c.category.lower() == wanted]

    async def categories(self) -> list[CategorySummary]:
        return summarize_categories(await self.get_all())

    async def tags(self) -> list[TagSummary]:
        return summarize_tags(await self.get_all())

    async def featured(self) -> list[Component]:
        return [c for c in await self.get_all() if c.featured]

    async def search(self, query: str) -> list[Component]:
        """Case-insensitive match on title, description and tags.

        A blank query returns the whole catalog.
        """
        needle = (query or "").strip().lower()
        components = await self.get_all()
        if not needle:
            return components

        return [
            component
            for component in components
            if needle in component.title.lower()
            or needle in component.description.lower()
            or any(needle in tag for tag in component.tags)
        ]
