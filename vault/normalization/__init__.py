"""Normalization of raw component records into the canonical Component shape.

- normalizer: field alias table, tag/content folding, media type derivation
- slug: slug derivation and de-duplication
- summaries: derived category and tag listings
"""

from vault.normalization.normalizer import (
    FIELD_SOURCES,
    derive_media_type,
    normalize_component,
    normalize_tags,
    pick,
    resolve_declared_media_type,
)
from vault.normalization.slug import RESERVED_SLUGS, slugify, unique_slug
from vault.normalization.summaries import (
    category_description,
    summarize_categories,
    summarize_category_names,
    summarize_tags,
)

__all__ = [
    "FIELD_SOURCES",
    "RESERVED_SLUGS",
    "derive_media_type",
    "normalize_component",
    "normalize_tags",
    "pick",
    "resolve_declared_media_type",
    "slugify",
    "unique_slug",
    "category_description",
    "summarize_categories",
    "summarize_category_names",
    "summarize_tags",
]
