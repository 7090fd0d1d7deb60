"""
Media storage adapters.

Two interchangeable backends behind one interface:

- local: directory tree under the public web root
- supabase: Supabase Storage bucket

Example:
    from vault.storage import get_storage_adapter

    storage = get_storage_adapter(settings)
    result = await storage.upload(data, "glow-card", "preview.jpg", "image/jpeg")
    if not result.ok:
        ...
"""

from vault.storage.base import DEFAULT_COMPONENT_ID, StorageAdapter, UploadResult, storage_path
from vault.storage.local import LocalStorageAdapter
from vault.storage.registry import (
    StorageBackend,
    get_storage_adapter,
    list_storage_backends,
    register_storage_backend,
)
from vault.storage.supabase import SupabaseStorageAdapter

__all__ = [
    "DEFAULT_COMPONENT_ID",
    "StorageAdapter",
    "UploadResult",
    "storage_path",
    "LocalStorageAdapter",
    "SupabaseStorageAdapter",
    "StorageBackend",
    "get_storage_adapter",
    "list_storage_backends",
    "register_storage_backend",
]
