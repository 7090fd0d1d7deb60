"""URL slug helpers."""

import re
from typing import Container

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

# Fixed path segments under /api/catalog that a component slug would shadow
RESERVED_SLUGS = frozenset({"search", "tags", "categories"})


def slugify(text: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to one hyphen, trim hyphens.

    Example:
        >>> slugify("Stop Motion Button!")
        'stop-motion-button'
    """
    return _NON_ALNUM.sub("-", (text or "").lower()).strip("-")


def unique_slug(base: str, taken: Container[str]) -> str:
    """Append -2, -3, ... to ``base`` until it is not in ``taken``."""
    if base not in taken:
        return base
    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"
