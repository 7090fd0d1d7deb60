"""Derived category and tag listings over a set of normalized components."""

from collections import Counter
from collections.abc import Iterable

from vault.models.component import CategorySummary, Component, TagSummary
from vault.normalization.slug import slugify


def category_description(name: str) -> str:
    return f"{name} components"


def summarize_category_names(names: Iterable[str]) -> list[CategorySummary]:
    """Distinct category names (case-insensitive, lowercased) with counts, A-Z."""
    counts = Counter(name.strip().lower() for name in names if name and name.strip())
    return [
        CategorySummary(
            name=name,
            slug=slugify(name),
            description=category_description(name),
            count=count,
        )
        for name, count in sorted(counts.items())
    ]


def summarize_categories(components: Iterable[Component]) -> list[CategorySummary]:
    return summarize_category_names(component.category for component in components)


def summarize_tags(components: Iterable[Component]) -> list[TagSummary]:
    """Distinct tags with reference counts, A-Z."""
    counts = Counter(tag for component in components for tag in component.tags)
    return [TagSummary(name=name, count=count) for name, count in sorted(counts.items())]
