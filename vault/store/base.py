"""Dynamic component store interface.

A thin table gateway over the persisted schema. Rows are plain dicts with
snake_case column names; normalization into Component happens in the
service layer, never here.

Tables:
    components          one row per component
    component_content   one row per component (html, css, js, external_scripts)
    tags                unique tag names
    component_tags      many-to-many join (component_id, tag_id)
    categories          optional authored categories (name, slug, description)

Implementations raise :class:`~vault.core.exceptions.PersistenceError` for
any backend failure, carrying the underlying exception as ``cause``.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

Row = dict[str, Any]

COMPONENTS_TABLE = "components"
CONTENT_TABLE = "component_content"
TAGS_TABLE = "tags"
COMPONENT_TAGS_TABLE = "component_tags"
CATEGORIES_TABLE = "categories"

REQUIRED_TABLES = (
    COMPONENTS_TABLE,
    CONTENT_TABLE,
    TAGS_TABLE,
    COMPONENT_TAGS_TABLE,
    CATEGORIES_TABLE,
)

# Embedded relations returned with every component row
COMPONENT_SELECT = "*, component_tags(tags(name)), component_content(*)"


class ComponentStore(ABC):
    """Abstract persistence backend for dynamic components."""

    name: str = "abstract"

    # -------------------------------------------------------------------------
    # Components
    # -------------------------------------------------------------------------

    @abstractmethod
    def fetch_components(
        self,
        featured: Optional[bool] = None,
        category: Optional[str] = None,
    ) -> list[Row]:
        """Component rows with embedded tags and content, newest first.

        Args:
            featured: Only featured (True) or non-featured (False) rows.
            category: Case-insensitive category match.
        """
        ...

    @abstractmethod
    def fetch_component(self, component_id: str) -> Optional[Row]:
        """One component row with embedded relations, or None."""
        ...

    @abstractmethod
    def fetch_component_by_slug(self, slug: str) -> Optional[Row]:
        ...

    @abstractmethod
    def fetch_slugs(self, prefix: str) -> set[str]:
        """Slugs starting with ``prefix``, for de-duplication."""
        ...

    @abstractmethod
    def insert_component(self, row: Row) -> Row:
        ...

    @abstractmethod
    def update_component(self, component_id: str, row: Row) -> Optional[Row]:
        """Apply ``row`` to an existing component. None if it does not exist."""
        ...

    @abstractmethod
    def delete_component(self, component_id: str) -> None:
        """Delete the component row. Dependents must already be gone."""
        ...

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    @abstractmethod
    def fetch_content(self, component_id: str) -> Optional[Row]:
        ...

    @abstractmethod
    def insert_content(self, row: Row) -> Row:
        ...

    @abstractmethod
    def update_content(self, component_id: str, row: Row) -> None:
        ...

    @abstractmethod
    def delete_content(self, component_id: str) -> None:
        ...

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    @abstractmethod
    def find_tag(self, name: str) -> Optional[Row]:
        ...

    @abstractmethod
    def insert_tag(self, name: str) -> Row:
        ...

    @abstractmethod
    def link_tag(self, component_id: str, tag_id: Any) -> None:
        ...

    @abstractmethod
    def unlink_tags(self, component_id: str) -> None:
        """Remove every tag link of a component. Tags themselves stay."""
        ...

    @abstractmethod
    def fetch_tag_links(self, component_id: str) -> list[Row]:
        ...

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    @abstractmethod
    def fetch_categories(self) -> list[Row]:
        """Authored category rows ordered by name."""
        ...

    @abstractmethod
    def find_category(self, name: str) -> Optional[Row]:
        ...

    @abstractmethod
    def insert_category(self, row: Row) -> Row:
        ...

    @abstractmethod
    def fetch_component_categories(self) -> list[str]:
        """The category value of every component row (may repeat)."""
        ...

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    @abstractmethod
    def health_check(self) -> bool:
        ...
