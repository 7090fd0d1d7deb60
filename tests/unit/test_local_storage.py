"""Unit tests for the local filesystem storage backend."""

import pytest

from vault.media.types import MediaType


JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 10240


class TestLocalStorageAdapter:
    """Tests for LocalStorageAdapter."""

    @pytest.mark.asyncio
    async def test_upload_image(self, storage):
        """Test an image lands in images/<component_id>/ with a public URL."""
        result = await storage.upload(JPEG_BYTES, "abc", "preview.jpg", "image/jpeg")

        assert result.ok
        assert result.media_type is MediaType.IMAGE
        assert result.path.startswith("images/abc/")
        assert result.path.endswith(".jpg")
        assert result.url == f"/uploads/{result.path}"
        assert (storage.media_root / result.path).read_bytes() == JPEG_BYTES

    @pytest.mark.asyncio
    async def test_upload_unknown_type(self, storage):
        """Test unrecognized files go to other/."""
        result = await storage.upload(b"notes", "abc", "notes.txt", "text/plain")

        assert result.ok
        assert result.media_type is MediaType.UNKNOWN
        assert result.path.startswith("other/abc/")

    @pytest.mark.asyncio
    async def test_default_component_id(self, storage):
        """Test a blank component id uses the default folder."""
        result = await storage.upload(b"x", "", "clip.mp4", "video/mp4")

        assert result.path.startswith("videos/default/")

    @pytest.mark.asyncio
    async def test_rejects_path_traversal(self, storage):
        """Test an unsafe component id fails without raising."""
        result = await storage.upload(b"x", "../etc", "a.png", "image/png")

        assert not result.ok
        assert result.url == ""
        assert result.error

    @pytest.mark.asyncio
    async def test_exists_and_delete(self, storage):
        """Test delete removes the file and reports whether it did."""
        result = await storage.upload(JPEG_BYTES, "abc", "preview.jpg", "image/jpeg")

        assert await storage.exists(result.url)
        assert await storage.delete(result.url) is True
        assert not await storage.exists(result.url)
        assert await storage.delete(result.url) is False

    @pytest.mark.asyncio
    async def test_unmanaged_urls(self, storage):
        """Test URLs outside the media root are left alone."""
        assert not storage.is_managed("https://cdn.example.com/a.png")
        assert not storage.is_managed("/images/buttons/stop-motion-button.jpg")
        assert not storage.is_managed(None)
        assert await storage.delete("/uploads/../secrets.txt") is False

    @pytest.mark.asyncio
    async def test_health_check_creates_folders(self, storage):
        """Test ensure_ready provisions the media folders."""
        assert await storage.health_check() is True
        for folder in ("images", "videos", "other"):
            assert (storage.media_root / folder).is_dir()
