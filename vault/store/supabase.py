"""Supabase-backed dynamic component store.

Reads are retried on transport failures; writes are issued once. Every
failure is wrapped in PersistenceError with the original exception as cause.
"""

from typing import Any, Optional

import httpx
import structlog
from supabase import Client
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from vault.core.exceptions import PersistenceError
from vault.monitoring.metrics import track_store_operation
from vault.store.base import (
    CATEGORIES_TABLE,
    COMPONENT_SELECT,
    COMPONENT_TAGS_TABLE,
    COMPONENTS_TABLE,
    CONTENT_TABLE,
    TAGS_TABLE,
    ComponentStore,
    Row,
)

logger = structlog.get_logger(__name__)


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so ilike behaves as case-insensitive equality."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@retry(
    retry=retry_if_exception_type(httpx.TransportError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
def _execute_read(query):
    return query.execute()


class SupabaseComponentStore(ComponentStore):
    """Component tables in a Supabase Postgres database."""

    name = "supabase"

    def __init__(self, client: Client):
        self.client = client

    def _run(self, operation: str, query, read: bool = False) -> list[Row]:
        try:
            with track_store_operation(self.name, operation):
                response = _execute_read(query) if read else query.execute()
        except Exception as e:
            logger.error(
                "store_operation_failed",
                store=self.name,
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise PersistenceError(operation, e) from e
        return response.data or []

    def _table(self, name: str):
        return self.client.table(name)

    @staticmethod
    def _first(rows: list[Row]) -> Optional[Row]:
        return rows[0] if rows else None

    # -------------------------------------------------------------------------
    # Components
    # -------------------------------------------------------------------------

    def fetch_components(
        self,
        featured: Optional[bool] = None,
        category: Optional[str] = None,
    ) -> list[Row]:
        query = self._table(COMPONENTS_TABLE).select(COMPONENT_SELECT)
        if featured is not None:
            query = query.eq("featured", featured)
        if category:
            query = query.ilike("category", _escape_like(category))
        query = query.order("date", desc=True)
        return self._run("fetch_components", query, read=True)

    def fetch_component(self, component_id: str) -> Optional[Row]:
        query = (
            self._table(COMPONENTS_TABLE)
            .select(COMPONENT_SELECT)
            .eq("id", component_id)
            .limit(1)
        )
        return self._first(self._run("fetch_component", query, read=True))

    def fetch_component_by_slug(self, slug: str) -> Optional[Row]:
        query = (
            self._table(COMPONENTS_TABLE)
            .select(COMPONENT_SELECT)
            .eq("slug", slug)
            .limit(1)
        )
        return self._first(self._run("fetch_component_by_slug", query, read=True))

    def fetch_slugs(self, prefix: str) -> set[str]:
        query = (
            self._table(COMPONENTS_TABLE)
            .select("slug")
            .like("slug", f"{_escape_like(prefix)}%")
        )
        rows = self._run("fetch_slugs", query, read=True)
        return {row["slug"] for row in rows if row.get("slug")}

    def insert_component(self, row: Row) -> Row:
        rows = self._run("insert_component", self._table(COMPONENTS_TABLE).insert(row))
        return self._first(rows) or row

    def update_component(self, component_id: str, row: Row) -> Optional[Row]:
        query = self._table(COMPONENTS_TABLE).update(row).eq("id", component_id)
        return self._first(self._run("update_component", query))

    def delete_component(self, component_id: str) -> None:
        query = self._table(COMPONENTS_TABLE).delete().eq("id", component_id)
        self._run("delete_component", query)

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def fetch_content(self, component_id: str) -> Optional[Row]:
        query = (
            self._table(CONTENT_TABLE)
            .select("*")
            .eq("component_id", component_id)
            .limit(1)
        )
        return self._first(self._run("fetch_content", query, read=True))

    def insert_content(self, row: Row) -> Row:
        rows = self._run("insert_content", self._table(CONTENT_TABLE).insert(row))
        return self._first(rows) or row

    def update_content(self, component_id: str, row: Row) -> None:
        query = self._table(CONTENT_TABLE).update(row).eq("component_id", component_id)
        self._run("update_content", query)

    def delete_content(self, component_id: str) -> None:
        query = self._table(CONTENT_TABLE).delete().eq("component_id", component_id)
        self._run("delete_content", query)

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    def find_tag(self, name: str) -> Optional[Row]:
        query = self._table(TAGS_TABLE).select("id, name").eq("name", name).limit(1)
        return self._first(self._run("find_tag", query, read=True))

    def insert_tag(self, name: str) -> Row:
        rows = self._run("insert_tag", self._table(TAGS_TABLE).insert({"name": name}))
        tag = self._first(rows)
        if tag is None:
            raise PersistenceError("insert_tag", details={"tag": name})
        return tag

    def link_tag(self, component_id: str, tag_id: Any) -> None:
        row = {"component_id": component_id, "tag_id": tag_id}
        self._run("link_tag", self._table(COMPONENT_TAGS_TABLE).insert(row))

    def unlink_tags(self, component_id: str) -> None:
        query = self._table(COMPONENT_TAGS_TABLE).delete().eq("component_id", component_id)
        self._run("unlink_tags", query)

    def fetch_tag_links(self, component_id: str) -> list[Row]:
        query = (
            self._table(COMPONENT_TAGS_TABLE)
            .select("*")
            .eq("component_id", component_id)
        )
        return self._run("fetch_tag_links", query, read=True)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def fetch_categories(self) -> list[Row]:
        query = self._table(CATEGORIES_TABLE).select("*").order("name")
        return self._run("fetch_categories", query, read=True)

    def find_category(self, name: str) -> Optional[Row]:
        query = (
            self._table(CATEGORIES_TABLE)
            .select("*")
            .ilike("name", _escape_like(name))
            .limit(1)
        )
        return self._first(self._run("find_category", query, read=True))

    def insert_category(self, row: Row) -> Row:
        rows = self._run("insert_category", self._table(CATEGORIES_TABLE).insert(row))
        return self._first(rows) or row

    def fetch_component_categories(self) -> list[str]:
        query = self._table(COMPONENTS_TABLE).select("category")
        rows = self._run("fetch_component_categories", query, read=True)
        return [row["category"] for row in rows if row.get("category")]

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    def health_check(self) -> bool:
        try:
            self._run(
                "health_check",
                self._table(COMPONENTS_TABLE).select("id").limit(1),
                read=True,
            )
        except PersistenceError:
            return False
        return True
