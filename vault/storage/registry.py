"""Storage backend registry for runtime backend selection.

Provides decorator-based registration and a factory that builds the adapter
named by configuration, so callers never branch on the backend.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vault.config.settings import Settings
    from vault.storage.base import StorageAdapter


class StorageBackend(Enum):
    """Supported media storage backends."""

    LOCAL = "local"
    SUPABASE = "supabase"


_backends: dict[StorageBackend, type["StorageAdapter"]] = {}


def register_storage_backend(backend: StorageBackend):
    """Decorator to register a storage adapter class.

    Args:
        backend: The StorageBackend enum value for this adapter.

    Returns:
        Decorator function that registers the class.

    Example:
        @register_storage_backend(StorageBackend.LOCAL)
        class LocalStorageAdapter(StorageAdapter):
            ...
    """

    def decorator(cls: type["StorageAdapter"]):
        _backends[backend] = cls
        return cls

    return decorator


def get_storage_adapter(settings: "Settings", **kwargs) -> "StorageAdapter":
    """Factory function to build the configured storage adapter.

    Args:
        settings: Application settings; ``storage_backend`` selects the class.
        **kwargs: Extra arguments passed to the adapter's ``from_settings``.

    Returns:
        Instantiated adapter.

    Raises:
        ValueError: If the backend is not registered.
    """
    # Import for registration side effects
    import vault.storage.local  # noqa: F401
    import vault.storage.supabase  # noqa: F401

    backend = StorageBackend(settings.storage_backend)
    if backend not in _backends:
        raise ValueError(f"Unknown storage backend: {backend}")
    return _backends[backend].from_settings(settings, **kwargs)


def list_storage_backends() -> list[StorageBackend]:
    """List all registered storage backends."""
    return list(_backends.keys())
