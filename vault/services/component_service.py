"""
Component Service.

CRUD over the dynamic component store. Every read goes through the
normalizer, so callers only ever see canonical Component objects.

Write order follows the schema's references:
    create: component row -> content row -> tags (get-or-create, then link)
    delete: tag links -> content row -> component row -> media files

Usage:
    service = ComponentService(store, storage, registry)
    component = await service.create({"title": "Glow Card", "description": "d", "category": "Cards"})
    await service.update(component.id, {"previewImage": url})
"""

import uuid
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Optional, Union

import structlog

from vault.core.exceptions import NotFoundError, ValidationError
from vault.models.component import (
    Component,
    ComponentCreate,
    ComponentSource,
    ComponentUpdate,
    sort_by_date,
)
from vault.monitoring.metrics import track_component_operation
from vault.normalization.normalizer import normalize_component, normalize_tags
from vault.normalization.slug import RESERVED_SLUGS, slugify, unique_slug
from vault.registry.components import ComponentRegistry
from vault.storage.base import StorageAdapter
from vault.store.base import ComponentStore, Row

logger = structlog.get_logger(__name__)


REQUIRED_FIELDS = ("title", "description", "category")

# Component attributes persisted as columns of the components table
COMPONENT_COLUMNS = (
    "slug",
    "title",
    "description",
    "category",
    "date",
    "featured",
    "author",
    "preview_image",
    "preview_video",
    "media_type",
    "implementation",
    "more_information",
    "external_source_url",
    "dependencies",
    "demo_url",
    "github_url",
    "code_snippet",
)

MEDIA_FIELDS = ("preview_image", "preview_video")


# =============================================================================
# Row Mapping
# =============================================================================


def component_row(component: Component) -> Row:
    """Columns of the components table for a normalized component."""
    return component.model_dump(mode="json", include={"id", *COMPONENT_COLUMNS})


def content_row(component: Component) -> Row:
    """The columnar component_content row for a normalized component."""
    return {"component_id": component.id, **component.content.model_dump()}


def _missing_fields(values: Mapping[str, Any], fields: Iterable[str]) -> list[str]:
    missing = []
    for field in fields:
        value = values.get(field)
        if not isinstance(value, str) or not value.strip():
            missing.append(field)
    return missing


# =============================================================================
# Service
# =============================================================================


class ComponentService:
    """CRUD façade over the dynamic store.

    Args:
        store: Dynamic component store.
        storage: Media storage adapter used for best-effort cleanup of
            superseded preview files.
        registry: Static registry. When given, ids that only exist in the
            registry can be read and updated (the update creates a dynamic
            override row), and its slugs count as taken for new components.
    """

    def __init__(
        self,
        store: ComponentStore,
        storage: StorageAdapter,
        registry: Optional[ComponentRegistry] = None,
    ):
        self.store = store
        self.storage = storage
        self.registry = registry

    @staticmethod
    def _normalize(row: Row) -> Component:
        return normalize_component(row, source=ComponentSource.DYNAMIC)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list(
        self,
        featured: Optional[bool] = None,
        category: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> list[Component]:
        """Dynamic components, most recent first.

        ``featured`` and ``category`` are filtered by the store. ``tag`` is
        applied after normalization so the embedded tag list stays complete.
        """
        rows = self.store.fetch_components(featured=featured, category=category)
        components = [self._normalize(row) for row in rows]

        if tag:
            wanted = normalize_tags([tag])
            if wanted:
                components = [c for c in components if wanted[0] in c.tags]

        return sort_by_date(components)

    async def get(self, component_id: str) -> Component:
        """Stored component, or the registry entry when no row overrides it."""
        row = self.store.fetch_component(component_id)
        if row is not None:
            return self._normalize(row)

        registered = self.registry.by_id(component_id) if self.registry else None
        if registered is None:
            raise NotFoundError("Component", component_id)
        return registered

    async def get_by_slug(self, slug: str) -> Component:
        row = self.store.fetch_component_by_slug(slug)
        if row is not None:
            return self._normalize(row)

        registered = self.registry.by_slug(slug) if self.registry else None
        if registered is None:
            raise NotFoundError("Component", slug)
        return registered

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    async def create(self, data: Union[ComponentCreate, Mapping[str, Any]]) -> Component:
        """Validate, persist and return a new dynamic component.

        Raises:
            ValidationError: title, description or category is blank, or an
                explicit slug is already taken.
            PersistenceError: Any store write failed.
        """
        with track_component_operation("create"):
            if not isinstance(data, ComponentCreate):
                data = ComponentCreate.model_validate(dict(data))

            raw = data.model_dump()
            missing = _missing_fields(raw, REQUIRED_FIELDS)
            if missing:
                raise ValidationError(missing)

            raw["id"] = (data.id or "").strip() or str(uuid.uuid4())
            raw["slug"] = self._slug_for_create(data, raw["id"])
            raw["date"] = (data.date or "").strip() or datetime.now(timezone.utc).isoformat()

            component = self._normalize(raw)

            self.store.insert_component(component_row(component))
            self.store.insert_content(content_row(component))
            self._link_tags(component.id, component.tags)

            logger.info(
                "component_created",
                component_id=component.id,
                slug=component.slug,
                category=component.category,
                tags=len(component.tags),
            )
            return await self.get(component.id)

    def _taken_slugs(self, prefix: str, component_id: str, own_slug: Optional[str] = None) -> set[str]:
        """Slugs starting with ``prefix`` that belong to other components.

        Covers the store, the registry (except an entry with the same id) and
        the reserved route segments.
        """
        taken = set(self.store.fetch_slugs(prefix)) - {own_slug}
        if self.registry is not None:
            taken.update(
                component.slug
                for component in self.registry.all()
                if component.id != component_id and component.slug.startswith(prefix)
            )
        return taken | RESERVED_SLUGS

    def _slug_for_create(self, data: ComponentCreate, component_id: str) -> str:
        explicit = slugify(data.slug or "")
        if explicit:
            if explicit in self._taken_slugs(explicit, component_id):
                raise ValidationError(["slug"], f"Slug '{explicit}' is already in use")
            return explicit

        registered = self.registry.by_id(component_id) if self.registry else None
        if registered is not None:
            return registered.slug

        base = slugify(data.title or "") or slugify(component_id) or component_id
        return unique_slug(base, self._taken_slugs(base, component_id))

    def _link_tags(self, component_id: str, tags: Iterable[str]) -> None:
        for name in tags:
            tag = self.store.find_tag(name) or self.store.insert_tag(name)
            self.store.link_tag(component_id, tag["id"])

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    async def update(
        self,
        component_id: str,
        patch: Union[ComponentUpdate, Mapping[str, Any]],
    ) -> Component:
        """Merge ``patch`` onto an existing component.

        Content is upserted, and tags are replaced wholesale when the patch
        carries a tag list. Concurrent updates are last-write-wins.

        Raises:
            NotFoundError: The id is in neither the store nor the registry.
            ValidationError: The patch blanks a required field or reuses a
                slug owned by another component.
            PersistenceError: Any store write failed.
        """
        with track_component_operation("update"):
            if not isinstance(patch, ComponentUpdate):
                patch = ComponentUpdate.model_validate(dict(patch))
            changes = patch.changes()

            row = self.store.fetch_component(component_id)
            if row is not None:
                existing = self._normalize(row)
                is_override = False
            else:
                existing = self.registry.by_id(component_id) if self.registry else None
                if existing is None:
                    raise NotFoundError("Component", component_id)
                is_override = True

            invalid = [
                field for field in REQUIRED_FIELDS
                if field in changes and not (changes[field] or "").strip()
            ]
            if invalid:
                raise ValidationError(invalid)

            merged = self._merge(existing, changes)
            merged["slug"] = self._slug_for_update(existing, merged, changes, patch.regenerate_slug)
            updated = self._normalize(merged)

            if is_override:
                self.store.insert_component(component_row(updated))
                self.store.insert_content(content_row(updated))
                self._link_tags(updated.id, updated.tags)
            else:
                row = component_row(updated)
                row["updated_at"] = datetime.now(timezone.utc).isoformat()
                self.store.update_component(component_id, row)
                self._upsert_content(updated)
                if changes.get("tags") is not None:
                    self.store.unlink_tags(component_id)
                    self._link_tags(component_id, updated.tags)

            for field in MEDIA_FIELDS:
                old_url = getattr(existing, field)
                if old_url and old_url != getattr(updated, field):
                    await self._discard_media(old_url)

            logger.info(
                "component_updated",
                component_id=component_id,
                fields=sorted(changes),
                override=is_override,
            )
            return await self.get(component_id)

    @staticmethod
    def _merge(existing: Component, changes: dict[str, Any]) -> dict[str, Any]:
        merged = existing.model_dump()
        for field, value in changes.items():
            if field == "content":
                if value is not None:
                    merged["content"].update(value)
            elif field in ("tags", "dependencies", "featured", "date"):
                if value is not None:
                    merged[field] = value
            else:
                merged[field] = value

        # A newly attached preview decides the media type unless one is given
        if "media_type" not in changes:
            if changes.get("preview_video"):
                merged["media_type"] = "video"
            elif changes.get("preview_image"):
                merged["media_type"] = "image"
        return merged

    def _slug_for_update(
        self,
        existing: Component,
        merged: dict[str, Any],
        changes: dict[str, Any],
        regenerate: bool,
    ) -> str:
        requested = slugify(changes.get("slug") or "")
        if requested:
            if requested != existing.slug and requested in self._taken_slugs(
                requested, existing.id, existing.slug
            ):
                raise ValidationError(["slug"], f"Slug '{requested}' is already in use")
            return requested

        if regenerate:
            base = slugify(merged.get("title") or "") or existing.slug
            return unique_slug(base, self._taken_slugs(base, existing.id, existing.slug))

        return existing.slug

    def _upsert_content(self, component: Component) -> None:
        row = content_row(component)
        if self.store.fetch_content(component.id) is None:
            self.store.insert_content(row)
        else:
            row.pop("component_id")
            self.store.update_content(component.id, row)

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    async def delete(self, component_id: str) -> None:
        """Delete a dynamic component and its dependents.

        Registry entries cannot be deleted; deleting a dynamic override makes
        the registry version visible again.

        Raises:
            NotFoundError: No dynamic component has this id.
            PersistenceError: Any store write failed.
        """
        with track_component_operation("delete"):
            row = self.store.fetch_component(component_id)
            if row is None:
                raise NotFoundError("Component", component_id)
            component = self._normalize(row)

            self.store.unlink_tags(component_id)
            self.store.delete_content(component_id)
            self.store.delete_component(component_id)

            for field in MEDIA_FIELDS:
                url = getattr(component, field)
                if url:
                    await self._discard_media(url)

            logger.info("component_deleted", component_id=component_id, slug=component.slug)

    # -------------------------------------------------------------------------
    # Media Cleanup
    # -------------------------------------------------------------------------

    async def _discard_media(self, url: str) -> None:
        """Best-effort removal of a superseded managed media file."""
        if not self.storage.is_managed(url):
            return
        try:
            removed = await self.storage.delete(url)
        except Exception as e:
            logger.warning("media_cleanup_failed", url=url, error=str(e))
            return
        if not removed:
            logger.warning("media_cleanup_skipped", url=url)
