"""Static component registry.

Holds the code-authored components compiled into the application. Entries
are normalized once at construction; the registry has no mutation operations
and hands out copies so callers cannot alter the shared instances.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from vault.models.component import (
    CategorySummary,
    Component,
    ComponentSource,
    TagSummary,
    sort_by_date,
)
from vault.normalization.normalizer import normalize_component
from vault.normalization.summaries import summarize_categories, summarize_tags


class ComponentRegistry:
    """Immutable, process-wide collection of code-authored components.

    Example:
        registry = ComponentRegistry(SAMPLE_COMPONENTS)
        registry.by_slug("burger-menu-button")
    """

    def __init__(self, entries: Iterable[Mapping[str, Any]] = ()):
        components = [
            normalize_component(entry, source=ComponentSource.REGISTRY)
            for entry in entries
        ]
        self._components: tuple[Component, ...] = tuple(sort_by_date(components))

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, component_id: object) -> bool:
        return any(component.id == component_id for component in self._components)

    def all(self) -> list[Component]:
        """All components, most recent first."""
        return [component.model_copy(deep=True) for component in self._components]

    def by_id(self, component_id: str) -> Optional[Component]:
        for component in self._components:
            if component.id == component_id:
                return component.model_copy(deep=True)
        return None

    def by_slug(self, slug: str) -> Optional[Component]:
        for component in self._components:
            if component.slug == slug:
                return component.model_copy(deep=True)
        return None

    def by_category(self, category: str) -> list[Component]:
        """Components in a category (case-insensitive), most recent first."""
        wanted = (category or "").strip().lower()
        return [
            component.model_copy(deep=True)
            for component in self._components
            if component.category.lower() == wanted
        ]

    def categories(self) -> list[CategorySummary]:
        return summarize_categories(self._components)

    def tags(self) -> list[TagSummary]:
        return summarize_tags(self._components)


def build_registry(include_samples: bool = True) -> ComponentRegistry:
    """Registry over the bundled catalog, or an empty one when samples are off."""
    from vault.registry.catalog import SAMPLE_COMPONENTS

    return ComponentRegistry(SAMPLE_COMPONENTS if include_samples else ())
