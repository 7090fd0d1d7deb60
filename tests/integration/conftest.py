"""Integration test configuration.

Builds a TestClient over the real application with the store, storage,
registry and custom components file swapped through dependency overrides.
The lifespan is not entered, so no Supabase client is ever created.
"""

import pytest
from fastapi.testclient import TestClient

from vault.api.dependencies import (
    get_component_store,
    get_local_provider,
    get_registry,
    get_storage,
    reset_dependencies,
)
from vault.api.main import app
from vault.services.migration import LocalComponentProvider


@pytest.fixture
def custom_path(tmp_path):
    return tmp_path / "custom-components.json"


@pytest.fixture
def client(store, storage, registry, custom_path):
    """TestClient wired to the in-memory store and tmp_path media root."""
    app.dependency_overrides[get_component_store] = lambda: store
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_local_provider] = lambda: LocalComponentProvider(custom_path)

    yield TestClient(app)

    app.dependency_overrides.clear()
    reset_dependencies()
