"""
Pytest Configuration and Shared Fixtures.

This module provides common fixtures for all tests:

- store: In-memory dynamic component store
- storage: Local media storage rooted in a temporary directory
- registry: Registry over the bundled sample components
- service: ComponentService wired to the fixtures above
- aggregator: Registry + dynamic catalog view
- sample_component: Minimal valid create payload
- custom_component: Raw custom component record in camelCase
"""

import pytest

from vault.registry.components import build_registry
from vault.services.aggregation import ComponentAggregator, RegistryProvider, ServiceProvider
from vault.services.component_service import ComponentService
from vault.storage.local import LocalStorageAdapter
from vault.store.memory import InMemoryComponentStore


@pytest.fixture
def store() -> InMemoryComponentStore:
    """Return an empty in-memory component store."""
    return InMemoryComponentStore()


@pytest.fixture
def storage(tmp_path) -> LocalStorageAdapter:
    """Return a local storage adapter writing under tmp_path/uploads."""
    return LocalStorageAdapter(tmp_path / "uploads", "/uploads")


@pytest.fixture
def registry():
    """Return the registry over the bundled sample components."""
    return build_registry(include_samples=True)


@pytest.fixture
def service(store, storage, registry) -> ComponentService:
    """Return a component service over the in-memory store."""
    return ComponentService(store, storage, registry)


@pytest.fixture
def aggregator(registry, service) -> ComponentAggregator:
    """Return an aggregator over the registry and the dynamic store."""
    return ComponentAggregator([RegistryProvider(registry), ServiceProvider(service)])


@pytest.fixture
def sample_component() -> dict:
    """Return a minimal valid component payload."""
    return {
        "title": "Glow Card",
        "description": "A card with an animated glow border",
        "category": "Cards",
    }


@pytest.fixture
def custom_component() -> dict:
    """Return a custom component as exported by the admin screens."""
    return {
        "id": "custom-ripple-button",
        "title": "Ripple Button",
        "description": "Material style ripple on click",
        "category": "Buttons",
        "date": "2024-06-01",
        "tags": ["UI", "Click"],
        "previewImage": "/images/buttons/ripple.png",
        "content": {
            "html": "<button class=\"ripple\">Click</button>",
            "css": ".ripple { position: relative; }",
            "js": "",
            "externalScripts": "",
        },
    }
