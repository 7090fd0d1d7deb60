"""Store used when Supabase credentials are missing.

Every operation fails with a PersistenceError whose cause is a
ConfigurationError, so callers see "not configured" instead of a crash at
import time.
"""

from typing import Any, Optional

from vault.core.exceptions import ConfigurationError, PersistenceError
from vault.store.base import ComponentStore, Row

NOT_CONFIGURED_MESSAGE = (
    "Supabase is not configured. Set SUPABASE_URL and SUPABASE_KEY "
    "or use STORE_BACKEND=memory."
)


class UnconfiguredComponentStore(ComponentStore):
    name = "unconfigured"

    def _fail(self, operation: str):
        raise PersistenceError(
            operation,
            ConfigurationError(NOT_CONFIGURED_MESSAGE, config_key="supabase_url"),
        )

    def fetch_components(
        self,
        featured: Optional[bool] = None,
        category: Optional[str] = None,
    ) -> list[Row]:
        self._fail("fetch_components")

    def fetch_component(self, component_id: str) -> Optional[Row]:
        self._fail("fetch_component")

    def fetch_component_by_slug(self, slug: str) -> Optional[Row]:
        self._fail("fetch_component_by_slug")

    def fetch_slugs(self, prefix: str) -> set[str]:
        self._fail("fetch_slugs")

    def insert_component(self, row: Row) -> Row:
        self._fail("insert_component")

    def update_component(self, component_id: str, row: Row) -> Optional[Row]:
        self._fail("update_component")

    def delete_component(self, component_id: str) -> None:
        self._fail("delete_component")

    def fetch_content(self, component_id: str) -> Optional[Row]:
        self._fail("fetch_content")

    def insert_content(self, row: Row) -> Row:
        self._fail("insert_content")

    def update_content(self, component_id: str, row: Row) -> None:
        self._fail("update_content")

    def delete_content(self, component_id: str) -> None:
        self._fail("delete_content")

    def find_tag(self, name: str) -> Optional[Row]:
        self._fail("find_tag")

    def insert_tag(self, name: str) -> Row:
        self._fail("insert_tag")

    def link_tag(self, component_id: str, tag_id: Any) -> None:
        self._fail("link_tag")

    def unlink_tags(self, component_id: str) -> None:
        self._fail("unlink_tags")

    def fetch_tag_links(self, component_id: str) -> list[Row]:
        self._fail("fetch_tag_links")

    def fetch_categories(self) -> list[Row]:
        self._fail("fetch_categories")

    def find_category(self, name: str) -> Optional[Row]:
        self._fail("find_category")

    def insert_category(self, row: Row) -> Row:
        self._fail("insert_category")

    def fetch_component_categories(self) -> list[str]:
        self._fail("fetch_component_categories")

    def health_check(self) -> bool:
        return False
