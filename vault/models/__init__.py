"""Data models for catalog components and derived listings."""

from vault.models.component import (
    CamelModel,
    CategorySummary,
    Component,
    ComponentContent,
    ComponentCreate,
    ComponentSource,
    ComponentUpdate,
    TagSummary,
    parse_component_date,
    sort_by_date,
)

__all__ = [
    "CamelModel",
    "CategorySummary",
    "Component",
    "ComponentContent",
    "ComponentCreate",
    "ComponentSource",
    "ComponentUpdate",
    "TagSummary",
    "parse_component_date",
    "sort_by_date",
]
