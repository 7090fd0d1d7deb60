"""In-process dynamic component store.

Mirrors the Supabase schema closely enough to exercise the service layer
without a database: unique ids, slugs and tag names are enforced, and a
component cannot be deleted while content rows or tag links still reference
it. Used for tests and for STORE_BACKEND=memory during local development.
"""

import copy
import itertools
from datetime import datetime, timezone
from typing import Any, Optional

import structlog

from vault.core.exceptions import PersistenceError
from vault.models.component import parse_component_date
from vault.monitoring.metrics import track_store_operation
from vault.store.base import ComponentStore, Row

logger = structlog.get_logger(__name__)


class ConstraintViolation(Exception):
    """A write broke a uniqueness or foreign-key constraint."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InMemoryComponentStore(ComponentStore):
    """Dict-backed tables with the same shape as the Postgres schema."""

    name = "memory"

    def __init__(self):
        self.components: dict[str, Row] = {}
        self.content: dict[str, Row] = {}
        self.tags: dict[Any, Row] = {}
        self.tag_links: list[Row] = []
        self.categories: dict[Any, Row] = {}
        self._ids = itertools.count(1)

    def _check(self, operation: str, condition: bool, message: str) -> None:
        if not condition:
            error = ConstraintViolation(message)
            logger.error("store_operation_failed", store=self.name, operation=operation, error=message)
            raise PersistenceError(operation, error)

    def _embed(self, row: Row) -> Row:
        component_id = row["id"]
        embedded = copy.deepcopy(row)
        embedded["component_tags"] = [
            {"tags": {"name": self.tags[link["tag_id"]]["name"]}}
            for link in self.tag_links
            if link["component_id"] == component_id and link["tag_id"] in self.tags
        ]
        content = self.content.get(component_id)
        embedded["component_content"] = [copy.deepcopy(content)] if content else []
        return embedded

    # -------------------------------------------------------------------------
    # Components
    # -------------------------------------------------------------------------

    def fetch_components(
        self,
        featured: Optional[bool] = None,
        category: Optional[str] = None,
    ) -> list[Row]:
        with track_store_operation(self.name, "fetch_components"):
            rows = list(self.components.values())
            if featured is not None:
                rows = [row for row in rows if bool(row.get("featured")) == featured]
            if category:
                wanted = category.lower()
                rows = [row for row in rows if (row.get("category") or "").lower() == wanted]
            rows.sort(key=lambda row: parse_component_date(row.get("date")), reverse=True)
            return [self._embed(row) for row in rows]

    def fetch_component(self, component_id: str) -> Optional[Row]:
        with track_store_operation(self.name, "fetch_component"):
            row = self.components.get(component_id)
            return self._embed(row) if row else None

    def fetch_component_by_slug(self, slug: str) -> Optional[Row]:
        for row in self.components.values():
            if row.get("slug") == slug:
                return self._embed(row)
        return None

    def fetch_slugs(self, prefix: str) -> set[str]:
        return {
            row["slug"]
            for row in self.components.values()
            if row.get("slug", "").startswith(prefix)
        }

    def insert_component(self, row: Row) -> Row:
        with track_store_operation(self.name, "insert_component"):
            self._check("insert_component", bool(row.get("id")), "id is required")
            self._check(
                "insert_component",
                row["id"] not in self.components,
                f"duplicate key components.id={row['id']}",
            )
            self._check(
                "insert_component",
                all(existing.get("slug") != row.get("slug") for existing in self.components.values()),
                f"duplicate key components.slug={row.get('slug')}",
            )
            stored = {"created_at": _now(), "updated_at": _now(), **copy.deepcopy(row)}
            self.components[row["id"]] = stored
            return copy.deepcopy(stored)

    def update_component(self, component_id: str, row: Row) -> Optional[Row]:
        with track_store_operation(self.name, "update_component"):
            existing = self.components.get(component_id)
            if existing is None:
                return None
            new_slug = row.get("slug")
            if new_slug:
                self._check(
                    "update_component",
                    all(
                        other.get("slug") != new_slug
                        for other_id, other in self.components.items()
                        if other_id != component_id
                    ),
                    f"duplicate key components.slug={new_slug}",
                )
            existing.update(copy.deepcopy(row))
            existing["updated_at"] = _now()
            return copy.deepcopy(existing)

    def delete_component(self, component_id: str) -> None:
        with track_store_operation(self.name, "delete_component"):
            self._check(
                "delete_component",
                component_id not in self.content,
                f"component_content still references {component_id}",
            )
            self._check(
                "delete_component",
                all(link["component_id"] != component_id for link in self.tag_links),
                f"component_tags still references {component_id}",
            )
            self.components.pop(component_id, None)

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def fetch_content(self, component_id: str) -> Optional[Row]:
        content = self.content.get(component_id)
        return copy.deepcopy(content) if content else None

    def insert_content(self, row: Row) -> Row:
        with track_store_operation(self.name, "insert_content"):
            component_id = row.get("component_id")
            self._check(
                "insert_content",
                component_id in self.components,
                f"component_content.component_id={component_id} has no component",
            )
            self._check(
                "insert_content",
                component_id not in self.content,
                f"duplicate key component_content.component_id={component_id}",
            )
            self.content[component_id] = copy.deepcopy(row)
            return copy.deepcopy(row)

    def update_content(self, component_id: str, row: Row) -> None:
        with track_store_operation(self.name, "update_content"):
            if component_id in self.content:
                self.content[component_id].update(copy.deepcopy(row))

    def delete_content(self, component_id: str) -> None:
        with track_store_operation(self.name, "delete_content"):
            self.content.pop(component_id, None)

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    def find_tag(self, name: str) -> Optional[Row]:
        for tag in self.tags.values():
            if tag["name"] == name:
                return copy.deepcopy(tag)
        return None

    def insert_tag(self, name: str) -> Row:
        with track_store_operation(self.name, "insert_tag"):
            self._check(
                "insert_tag",
                self.find_tag(name) is None,
                f"duplicate key tags.name={name}",
            )
            tag = {"id": next(self._ids), "name": name}
            self.tags[tag["id"]] = tag
            return copy.deepcopy(tag)

    def link_tag(self, component_id: str, tag_id: Any) -> None:
        with track_store_operation(self.name, "link_tag"):
            self._check(
                "link_tag",
                component_id in self.components and tag_id in self.tags,
                f"component_tags({component_id}, {tag_id}) references a missing row",
            )
            link = {"component_id": component_id, "tag_id": tag_id}
            if link not in self.tag_links:
                self.tag_links.append(link)

    def unlink_tags(self, component_id: str) -> None:
        with track_store_operation(self.name, "unlink_tags"):
            self.tag_links = [
                link for link in self.tag_links if link["component_id"] != component_id
            ]

    def fetch_tag_links(self, component_id: str) -> list[Row]:
        return [
            copy.deepcopy(link)
            for link in self.tag_links
            if link["component_id"] == component_id
        ]

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def fetch_categories(self) -> list[Row]:
        rows = sorted(self.categories.values(), key=lambda row: row["name"])
        return copy.deepcopy(rows)

    def find_category(self, name: str) -> Optional[Row]:
        wanted = name.lower()
        for row in self.categories.values():
            if row["name"].lower() == wanted:
                return copy.deepcopy(row)
        return None

    def insert_category(self, row: Row) -> Row:
        with track_store_operation(self.name, "insert_category"):
            self._check(
                "insert_category",
                self.find_category(row.get("name", "")) is None,
                f"duplicate key categories.name={row.get('name')}",
            )
            stored = {"id": next(self._ids), "created_at": _now(), **copy.deepcopy(row)}
            self.categories[stored["id"]] = stored
            return copy.deepcopy(stored)

    def fetch_component_categories(self) -> list[str]:
        return [row["category"] for row in self.components.values() if row.get("category")]

    def health_check(self) -> bool:
        return True
