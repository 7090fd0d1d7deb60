"""Supabase Storage backend.

Uploads go to a public bucket (``component-media`` by default) and are
addressed by their public URL,
``<project>/storage/v1/object/public/<bucket>/<folder>/<component_id>/<file>``.
"""

from typing import Optional
from urllib.parse import unquote, urlsplit

import structlog
from supabase import Client

from vault.core.exceptions import ConfigurationError, MediaError
from vault.monitoring.metrics import record_media_operation
from vault.storage.base import DEFAULT_COMPONENT_ID, StorageAdapter, UploadResult, storage_path
from vault.storage.registry import StorageBackend, register_storage_backend

logger = structlog.get_logger(__name__)

CACHE_CONTROL_SECONDS = "3600"


@register_storage_backend(StorageBackend.SUPABASE)
class SupabaseStorageAdapter(StorageAdapter):
    """Media storage in a Supabase Storage bucket.

    Without a client the adapter stays usable but every operation takes the
    "not configured" path: uploads fail with a structured error, deletes
    return False and ``ensure_ready`` raises ConfigurationError.
    """

    backend = StorageBackend.SUPABASE.value

    def __init__(self, client: Optional[Client], bucket: str = "component-media"):
        self._client = client
        self.bucket = bucket
        self._ready = False
        self._public_base: Optional[str] = None

    @classmethod
    def from_settings(cls, settings, client: Optional[Client] = None) -> "SupabaseStorageAdapter":
        if client is None and settings.supabase_configured:
            from supabase import create_client

            client = create_client(
                settings.supabase_url,
                settings.supabase_key.get_secret_value(),
            )
        if client is None:
            logger.warning("supabase_storage_not_configured", bucket=settings.storage_bucket)
        return cls(client, settings.storage_bucket)

    def _require_client(self) -> Client:
        if self._client is None:
            raise ConfigurationError(
                "Supabase storage is not configured (set SUPABASE_URL and SUPABASE_KEY)",
                config_key="supabase_url",
            )
        return self._client

    async def ensure_ready(self) -> None:
        if self._ready:
            return

        client = self._require_client()
        buckets = client.storage.list_buckets()
        names = {getattr(bucket, "name", None) or getattr(bucket, "id", None) for bucket in buckets}

        if self.bucket not in names:
            client.storage.create_bucket(self.bucket, options={"public": True})
            logger.info("storage_bucket_created", bucket=self.bucket)

        self._ready = True

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

            bucket = self._require_client().storage.from_(self.bucket)
            bucket.upload(
                relative_path,
                data,
                file_options={
                    "content-type": mime_type,
                    "cache-control": CACHE_CONTROL_SECONDS,
                    "upsert": "false",
                },
            )
            url = bucket.get_public_url(relative_path)
        except (ConfigurationError, MediaError) as e:
            logger.error(
                "media_upload_failed",
                backend=self.backend,
                component_id=component_id,
                error=str(e),
            )
            record_media_operation(self.backend, "upload", "error")
            return UploadResult.failed(e.message)
        except Exception as e:
            logger.error(
                "media_upload_failed",
                backend=self.backend,
                component_id=component_id,
                filename=original_filename,
                error=str(e),
                error_type=type(e).__name__,
            )
            record_media_operation(self.backend, "upload", "error")
            return UploadResult.failed(f"Failed to upload file to storage: {e}")

        logger.info(
            "media_uploaded",
            backend=self.backend,
            bucket=self.bucket,
            component_id=component_id,
            path=relative_path,
            media_type=media_type.value,
            size=len(data),
        )
        record_media_operation(self.backend, "upload", "success")
        return UploadResult(url=url, path=relative_path, media_type=media_type)

    def public_base(self) -> Optional[str]:
        """Public URL of the bucket root, ending in ``/``; None without a client."""
        if self._public_base is None and self._client is not None:
            base = self._client.storage.from_(self.bucket).get_public_url("")
            base = base.split("?", 1)[0]
            self._public_base = base if base.endswith("/") else f"{base}/"
        return self._public_base

    def object_path(self, url: Optional[str]) -> Optional[str]:
        """Bucket-relative object path for a public URL, or None if it is not ours.

        Only URLs under this bucket's public base count, so a foreign host
        with a matching path is never mapped onto one of our objects.
        """
        base = self.public_base()
        if not url or base is None or not url.startswith(base):
            return None
        try:
            path = urlsplit(url[len(base):]).path
        except ValueError:
            return None
        segments = [unquote(part) for part in path.split("/") if part]
        if not segments or ".." in segments:
            return None
        return "/".join(segments)

    def is_managed(self, url: Optional[str]) -> bool:
        return self.object_path(url) is not None

    async def exists(self, url: str) -> bool:
        path = self.object_path(url)
        if path is None or self._client is None:
            return False
        folder, _, name = path.rpartition("/")
        try:
            entries = self._client.storage.from_(self.bucket).list(folder, {"search": name})
        except Exception as e:
            logger.warning("media_exists_check_failed", backend=self.backend, url=url, error=str(e))
            return False
        return any(entry.get("name") == name for entry in entries or [])

    async def delete(self, url: str) -> bool:
        path = self.object_path(url)
        if path is None:
            logger.info("media_delete_skipped", backend=self.backend, url=url)
            return False
        if self._client is None:
            logger.warning("media_delete_not_configured", backend=self.backend, url=url)
            return False

        try:
            removed = self._client.storage.from_(self.bucket).remove([path])
        except Exception as e:
            logger.warning("media_delete_failed", backend=self.backend, url=url, error=str(e))
            record_media_operation(self.backend, "delete", "error")
            return False

        if not removed:
            logger.info("media_already_gone", backend=self.backend, path=path)
            return False

        logger.info("media_deleted", backend=self.backend, path=path)
        record_media_operation(self.backend, "delete", "success")
        return True
