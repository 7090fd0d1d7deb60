"""Local filesystem storage backend.

Writes uploads under ``media_root`` (a folder inside the public web root) and
returns URLs under ``url_prefix``, e.g. ``/uploads/images/<id>/<uuid>.jpg``.
"""

from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

import structlog

from vault.core.exceptions import MediaError
from vault.media.types import IMAGE_FOLDER, OTHER_FOLDER, VIDEO_FOLDER
from vault.monitoring.metrics import record_media_operation
from vault.storage.base import DEFAULT_COMPONENT_ID, StorageAdapter, UploadResult, storage_path
from vault.storage.registry import StorageBackend, register_storage_backend

logger = structlog.get_logger(__name__)


@register_storage_backend(StorageBackend.LOCAL)
class LocalStorageAdapter(StorageAdapter):
    """Media storage in a local directory tree."""

    backend = StorageBackend.LOCAL.value

    def __init__(self, media_root: Path | str, url_prefix: str = "/uploads"):
        self.media_root = Path(media_root)
        self.url_prefix = "/" + url_prefix.strip("/")

    @classmethod
    def from_settings(cls, settings, **kwargs) -> "LocalStorageAdapter":
        return cls(settings.media_root, settings.media_url_prefix)

    async def ensure_ready(self) -> None:
        for folder in (IMAGE_FOLDER, VIDEO_FOLDER, OTHER_FOLDER):
            (self.media_root / folder).mkdir(parents=True, exist_ok=True)

    async def upload(
        self,
        data: bytes,
        component_id: str = DEFAULT_COMPONENT_ID,
        original_filename: str = "file",
        mime_type: str = "application/octet-stream",
    ) -> UploadResult:
        try:
            await self.ensure_ready()
            media_type, relative_path = storage_path(component_id, original_filename, mime_type)

            full_path = self.media_root / relative_path
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(data)
        except (OSError, MediaError) as e:
            logger.error(
                "media_upload_failed",
                backend=self.backend,
                component_id=component_id,
                filename=original_filename,
                error=str(e),
            )
            record_media_operation(self.backend, "upload", "error")
            return UploadResult.failed(str(e))

        url = f"{self.url_prefix}/{relative_path}"
        logger.info(
            "media_uploaded",
            backend=self.backend,
            component_id=component_id,
            path=relative_path,
            media_type=media_type.value,
            size=len(data),
        )
        record_media_operation(self.backend, "upload", "success")
        return UploadResult(url=url, path=relative_path, media_type=media_type)

    def _resolve(self, url: Optional[str]) -> Optional[Path]:
        """Absolute file path for a managed URL, or None if it is outside media_root."""
        if not self.is_managed(url):
            return None
        relative = urlsplit(url).path[len(self.url_prefix):].lstrip("/")
        if not relative:
            return None
        root = self.media_root.resolve()
        candidate = (root / relative).resolve()
        if root not in candidate.parents:
            return None
        return candidate

    def is_managed(self, url: Optional[str]) -> bool:
        if not url:
            return False
        try:
            path = urlsplit(url).path
        except ValueError:
            return False
        return path.startswith(self.url_prefix + "/")

    async def exists(self, url: str) -> bool:
        path = self._resolve(url)
        return path is not None and path.is_file()

    async def delete(self, url: str) -> bool:
        path = self._resolve(url)
        if path is None or not path.is_file():
            logger.info("media_delete_skipped", backend=self.backend, url=url)
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.warning("media_delete_failed", backend=self.backend, url=url, error=str(e))
            record_media_operation(self.backend, "delete", "error")
            return False

        logger.info("media_deleted", backend=self.backend, url=url)
        record_media_operation(self.backend, "delete", "success")
        return True
