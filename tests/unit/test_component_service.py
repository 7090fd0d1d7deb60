"""Unit tests for ComponentService.

Runs against the in-memory store and a local storage adapter in tmp_path.
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from vault.core.exceptions import ConfigurationError, NotFoundError, PersistenceError, ValidationError
from vault.media.types import MediaType
from vault.models.component import ComponentSource
from vault.services.component_service import ComponentService
from vault.store.unconfigured import UnconfiguredComponentStore


class TestCreate:
    """Tests for ComponentService.create."""

    @pytest.mark.asyncio
    async def test_minimal_create(self, service):
        """Test generated id, slug and date with empty content and no tags."""
        component = await service.create(
            {"title": "Magnetic Button", "description": "d", "category": "Buttons"}
        )

        uuid.UUID(component.id)
        assert component.slug == "magnetic-button"
        assert component.date
        assert component.tags == []
        assert component.content.model_dump() == {"html": "", "css": "", "js": "", "external_scripts": ""}
        assert component.source is ComponentSource.DYNAMIC
        assert await service.get(component.id) == component

    @pytest.mark.asyncio
    async def test_tags_normalized(self, service, store, sample_component):
        """Test tags are lowercased, de-duplicated and created once."""
        component = await service.create({**sample_component, "tags": ["UI", "ui", "Animation"]})

        assert component.tags == ["ui", "animation"]
        assert sorted(tag["name"] for tag in store.tags.values()) == ["animation", "ui"]

    @pytest.mark.asyncio
    async def test_existing_tags_reused(self, service, store, sample_component):
        """Test a second component links the existing tag row."""
        await service.create({**sample_component, "tags": ["ui"]})
        await service.create({**sample_component, "tags": ["UI", "hover"]})

        assert len(store.tags) == 2
        assert len(store.tag_links) == 3

    @pytest.mark.asyncio
    async def test_missing_required_fields(self, service):
        """Test every missing required field is reported."""
        with pytest.raises(ValidationError) as exc_info:
            await service.create({"title": "Only a title", "description": "   "})

        assert exc_info.value.fields == ["description", "category"]

    @pytest.mark.asyncio
    async def test_slug_collision_gets_suffix(self, service, sample_component):
        """Test a derived slug is made unique."""
        first = await service.create(sample_component)
        second = await service.create(sample_component)

        assert first.slug == "glow-card"
        assert second.slug == "glow-card-2"

    @pytest.mark.asyncio
    async def test_explicit_slug_taken(self, service, sample_component):
        """Test an explicit slug that is in use is rejected."""
        await service.create(sample_component)

        with pytest.raises(ValidationError) as exc_info:
            await service.create({**sample_component, "slug": "glow-card"})

        assert exc_info.value.fields == ["slug"]

    @pytest.mark.asyncio
    async def test_registry_slug_is_taken(self, service, sample_component):
        """Test a title matching a registry entry never reuses its slug."""
        derived = await service.create({**sample_component, "title": "Burger Menu Button"})

        assert derived.slug == "burger-menu-button-2"
        with pytest.raises(ValidationError) as exc_info:
            await service.create({**sample_component, "slug": "burger-menu-button"})
        assert exc_info.value.fields == ["slug"]

    @pytest.mark.asyncio
    async def test_registry_id_keeps_registry_slug(self, service, sample_component):
        """Test creating a row for a registry id stays reachable under its slug."""
        component = await service.create({**sample_component, "id": "burger-menu-button"})

        assert component.slug == "burger-menu-button"

    @pytest.mark.asyncio
    async def test_reserved_slugs(self, service, sample_component):
        """Test slugs that collide with catalog routes are avoided."""
        derived = await service.create({**sample_component, "title": "Search"})

        assert derived.slug == "search-2"
        with pytest.raises(ValidationError):
            await service.create({**sample_component, "slug": "tags"})

    @pytest.mark.asyncio
    async def test_content_and_flat_fields(self, service, sample_component):
        """Test both the content object and the flat editor fields."""
        nested = await service.create(
            {**sample_component, "content": {"html": "<div></div>", "externalScripts": "gsap"}}
        )
        flat = await service.create({**sample_component, "htmlContent": "<b></b>", "cssContent": "b {}"})

        assert nested.content.html == "<div></div>"
        assert nested.content.external_scripts == "gsap"
        assert flat.content.html == "<b></b>"
        assert flat.content.css == "b {}"

    @pytest.mark.asyncio
    async def test_unconfigured_store(self, storage, sample_component):
        """Test writes against a missing store surface the configuration cause."""
        service = ComponentService(UnconfiguredComponentStore(), storage)

        with pytest.raises(PersistenceError) as exc_info:
            await service.create(sample_component)

        assert isinstance(exc_info.value.cause, ConfigurationError)


class TestRead:
    """Tests for list and get."""

    @pytest.mark.asyncio
    async def test_list_sorted_by_date(self, service, sample_component):
        """Test newest first."""
        await service.create({**sample_component, "title": "Old", "date": "2024-01-01"})
        await service.create({**sample_component, "title": "New", "date": "2024-06-01"})

        components = await service.list()

        assert [c.title for c in components] == ["New", "Old"]

    @pytest.mark.asyncio
    async def test_list_filters(self, service, sample_component):
        """Test category, featured and tag filters."""
        await service.create({**sample_component, "title": "A", "tags": ["UI"], "featured": True})
        await service.create({**sample_component, "title": "B", "category": "Buttons"})

        assert [c.title for c in await service.list(category="CARDS")] == ["A"]
        assert [c.title for c in await service.list(featured=True)] == ["A"]
        assert [c.title for c in await service.list(tag="ui")] == ["A"]
        assert await service.list(tag="missing") == []

    @pytest.mark.asyncio
    async def test_get_missing(self, service):
        with pytest.raises(NotFoundError):
            await service.get("missing")

    @pytest.mark.asyncio
    async def test_get_by_slug(self, service, sample_component):
        created = await service.create(sample_component)

        assert (await service.get_by_slug("glow-card")).id == created.id
        with pytest.raises(NotFoundError):
            await service.get_by_slug("missing")

    @pytest.mark.asyncio
    async def test_get_registry_only_id(self, service):
        """Test an id that can be updated can also be read back."""
        component = await service.get("burger-menu-button")

        assert component.source is ComponentSource.REGISTRY
        assert (await service.get_by_slug("burger-menu-button")).id == "burger-menu-button"

        await service.update("burger-menu-button", {"title": "Burger v2"})
        edited = await service.get("burger-menu-button")

        assert edited.title == "Burger v2"
        assert edited.source is ComponentSource.DYNAMIC


class TestUpdate:
    """Tests for ComponentService.update."""

    @pytest.mark.asyncio
    async def test_merge_keeps_unspecified_fields(self, service, sample_component):
        """Test only the given fields change and the slug is stable."""
        created = await service.create({**sample_component, "tags": ["ui"], "content": {"html": "<div></div>"}})

        updated = await service.update(created.id, {"title": "Glow Card Pro", "content": {"css": ".glow {}"}})

        assert updated.title == "Glow Card Pro"
        assert updated.slug == "glow-card"
        assert updated.description == sample_component["description"]
        assert updated.tags == ["ui"]
        assert updated.content.html == "<div></div>"
        assert updated.content.css == ".glow {}"

    @pytest.mark.asyncio
    async def test_regenerate_slug(self, service, sample_component):
        created = await service.create(sample_component)

        updated = await service.update(created.id, {"title": "Neon Card", "regenerateSlug": True})

        assert updated.slug == "neon-card"

    @pytest.mark.asyncio
    async def test_slug_taken_by_another(self, service, sample_component):
        await service.create({**sample_component, "title": "Neon Card"})
        created = await service.create(sample_component)

        with pytest.raises(ValidationError):
            await service.update(created.id, {"slug": "neon-card"})

    @pytest.mark.asyncio
    async def test_slug_taken_by_registry(self, service, sample_component):
        """Test registry slugs are off limits for renames and regeneration."""
        created = await service.create(sample_component)

        with pytest.raises(ValidationError):
            await service.update(created.id, {"slug": "stop-motion-button"})

        regenerated = await service.update(
            created.id, {"title": "Stop Motion Button", "regenerateSlug": True}
        )
        assert regenerated.slug == "stop-motion-button-2"

    @pytest.mark.asyncio
    async def test_tags_replaced(self, service, store, sample_component):
        """Test a tag list replaces the existing tags; orphans stay in the tags table."""
        created = await service.create({**sample_component, "tags": ["ui", "hover"]})

        updated = await service.update(created.id, {"tags": ["Motion"]})

        assert updated.tags == ["motion"]
        assert len(store.fetch_tag_links(created.id)) == 1
        assert store.find_tag("hover") is not None

    @pytest.mark.asyncio
    async def test_blank_required_field(self, service, sample_component):
        created = await service.create(sample_component)

        with pytest.raises(ValidationError) as exc_info:
            await service.update(created.id, {"category": ""})

        assert exc_info.value.fields == ["category"]

    @pytest.mark.asyncio
    async def test_missing_component(self, service):
        with pytest.raises(NotFoundError):
            await service.update("missing", {"title": "x"})

    @pytest.mark.asyncio
    async def test_registry_override(self, service, store):
        """Test editing a registry component stores a dynamic copy under the same id."""
        updated = await service.update("stop-motion-button", {"title": "Stop Motion Button v2"})

        assert updated.id == "stop-motion-button"
        assert updated.title == "Stop Motion Button v2"
        assert updated.slug == "stop-motion-button"
        assert updated.source is ComponentSource.DYNAMIC
        assert updated.tags == ["ui", "animation", "interactive"]
        assert "stop-motion-button" in store.components

    @pytest.mark.asyncio
    async def test_replacing_preview_removes_old_file(self, service, storage, sample_component):
        """Test a superseded managed preview is deleted."""
        first = await storage.upload(b"one", "abc", "a.jpg", "image/jpeg")
        second = await storage.upload(b"two", "abc", "b.jpg", "image/jpeg")
        created = await service.create({**sample_component, "previewImage": first.url})

        updated = await service.update(created.id, {"previewImage": second.url})

        assert updated.preview_image == second.url
        assert updated.media_type is MediaType.IMAGE
        assert not await storage.exists(first.url)
        assert await storage.exists(second.url)

    @pytest.mark.asyncio
    async def test_attaching_video_sets_media_type(self, service, storage, sample_component):
        created = await service.create(sample_component)
        video = await storage.upload(b"v", created.id, "clip.mp4", "video/mp4")

        updated = await service.update(created.id, {"previewVideo": video.url})

        assert updated.media_type is MediaType.VIDEO

    @pytest.mark.asyncio
    async def test_media_cleanup_failure_is_not_fatal(self, store, sample_component):
        """Test a failing media delete does not fail the update."""
        storage = MagicMock()
        storage.is_managed.return_value = True
        storage.delete = AsyncMock(side_effect=OSError("read-only file system"))
        service = ComponentService(store, storage)

        created = await service.create({**sample_component, "previewImage": "/uploads/images/a/1.jpg"})
        updated = await service.update(created.id, {"previewImage": "/uploads/images/a/2.jpg"})

        assert updated.preview_image == "/uploads/images/a/2.jpg"
        storage.delete.assert_awaited_once_with("/uploads/images/a/1.jpg")


class TestDelete:
    """Tests for ComponentService.delete."""

    @pytest.mark.asyncio
    async def test_delete_cascade(self, service, store, storage, sample_component):
        """Test links, content, row and managed media are removed."""
        upload = await storage.upload(b"img", "abc", "a.png", "image/png")
        created = await service.create({**sample_component, "tags": ["ui"], "previewImage": upload.url})

        await service.delete(created.id)

        assert store.fetch_component(created.id) is None
        assert store.fetch_content(created.id) is None
        assert store.fetch_tag_links(created.id) == []
        assert not await storage.exists(upload.url)
        with pytest.raises(NotFoundError):
            await service.get(created.id)

    @pytest.mark.asyncio
    async def test_delete_keeps_unmanaged_media(self, service, sample_component):
        created = await service.create({**sample_component, "previewImage": "https://cdn.example.com/a.png"})

        await service.delete(created.id)

    @pytest.mark.asyncio
    async def test_delete_registry_only_id(self, service):
        """Test registry entries cannot be deleted."""
        with pytest.raises(NotFoundError):
            await service.delete("stop-motion-button")

    @pytest.mark.asyncio
    async def test_delete_override_reverts_to_registry(self, service):
        await service.update("stop-motion-button", {"title": "Edited"})

        await service.delete("stop-motion-button")
        component = await service.get("stop-motion-button")

        assert component.title == "Stop Motion Button"
        assert component.source is ComponentSource.REGISTRY
