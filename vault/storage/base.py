"""Base storage adapter interface for preview media.

All backends share the destination layout
``{images|videos|other}/{component_id}/{uuid}.{ext}`` and the same error
policy: uploads report failures in the returned :class:`UploadResult`
instead of raising, deletes return False instead of raising.
"""

import re
from abc import ABC, abstractmethod
from typing import ClassVar, Optional

import structlog
from pydantic import BaseModel, Field

from vault.core.exceptions import MediaError
from vault.media.types import (
    MediaType,
    folder_for,
    generate_unique_filename,
    resolve_upload_media_type,
)

logger = structlog.get_logger(__name__)

DEFAULT_COMPONENT_ID = "default"

_SAFE_SEGMENT = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class UploadResult(BaseModel):
    """Outcome of an upload. On failure url/path are empty and error is set."""

    url: str = ""
    path: str = ""
    media_type: MediaType = MediaType.UNKNOWN
    error: Optional[str] = Field(None, description="Failure reason, None on success")

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.url)

    @classmethod
    def failed(cls, error: str, media_type: MediaType = MediaType.UNKNOWN) -> "UploadResult":
        return cls(url="", path="", media_type=media_type, error=error)


def storage_path(component_id: str, original_filename: str, mime_type: str) -> tuple[MediaType, str]:
    """Media type and backend-relative destination for an upload.

    Raises:
        MediaError: If the component id is not a single safe path segment.
    """
    component_id = (component_id or "").strip() or DEFAULT_COMPONENT_ID
    if not _SAFE_SEGMENT.match(component_id) or ".." in component_id:
        raise MediaError("upload", f"Invalid component id for storage path: {component_id!r}")

    media_type = resolve_upload_media_type(original_filename, mime_type)
    filename = generate_unique_filename(original_filename)
    return media_type, f"{folder_for(media_type)}/{component_id}/{filename}"


class StorageAdapter(ABC):
    """Abstract media storage backend.

    Concrete backends register themselves with
    :func:`vault.storage.registry.register_storage_backend`.
    """

    backend: ClassVar[str] = "abstract"

    @abstractmethod
    async def ensure_ready(self) -> None:
        """Provision directories or the bucket. Idempotent."""
        ...

    @abstractmethod
    async def upload(
        self,
        data: bytes,
        component_id: str = DEFAULT_COMPONENT_ID,
        original_filename: str = "file",
        mime_type: str = "application/octet-stream",
    ) -> UploadResult:
        """Store ``data`` and return its public URL, path and media type."""
        ...

    @abstractmethod
    async def delete(self, url: str) -> bool:
        """Remove the object behind ``url``. False if it was already gone or on failure."""
        ...

    @abstractmethod
    async def exists(self, url: str) -> bool:
        """Whether an object currently exists behind ``url``."""
        ...

    @abstractmethod
    def is_managed(self, url: Optional[str]) -> bool:
        """Whether ``url`` points into this backend's storage."""
        ...

    async def health_check(self) -> bool:
        """Check if the backend is reachable."""
        try:
            await self.ensure_ready()
            return True
        except Exception as e:
            logger.warning("storage_health_check_failed", backend=self.backend, error=str(e))
            return False
