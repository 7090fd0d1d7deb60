"""API tests for The Vault endpoints."""

import json
from unittest.mock import patch

import pytest

from vault.api.dependencies import get_component_store
from vault.api.main import app
from vault.config.settings import Settings
from vault.core.exceptions import PersistenceError
from vault.store.unconfigured import UnconfiguredComponentStore

pytestmark = pytest.mark.integration

MINIMAL = {"title": "Magnetic Button", "description": "d", "category": "Buttons"}


class TestComponentEndpoints:
    """Tests for /api/components."""

    def test_create_and_get(self, client):
        """Test create returns the stored component in camelCase."""
        response = client.post("/api/components", json=MINIMAL)

        assert response.status_code == 201
        body = response.json()
        assert body["slug"] == "magnetic-button"
        assert body["tags"] == []
        assert body["content"] == {"html": "", "css": "", "js": "", "externalScripts": ""}
        assert body["mediaType"] == "unknown"
        assert body["source"] == "dynamic"

        fetched = client.get(f"/api/components/{body['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == body

    def test_create_missing_fields(self, client):
        response = client.post("/api/components", json={"title": "No category"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["fields"] == ["description", "category"]
        assert body["message"]

    def test_registry_id_readable_and_writable(self, client):
        """Test a registry id answers GET before and after a PUT."""
        before = client.get("/api/components/burger-menu-button")
        client.put("/api/components/burger-menu-button", json={"title": "Burger v2"})
        after = client.get("/api/components/burger-menu-button")

        assert before.status_code == 200
        assert before.json()["source"] == "registry"
        assert after.status_code == 200
        assert after.json()["title"] == "Burger v2"
        assert after.json()["source"] == "dynamic"

    def test_get_unknown(self, client):
        response = client.get("/api/components/missing")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_list_with_filters(self, client):
        client.post("/api/components", json={**MINIMAL, "tags": ["UI", "ui", "Animation"], "date": "2024-01-01"})
        client.post("/api/components", json={**MINIMAL, "title": "Newer", "category": "Cards", "date": "2024-06-01"})

        everything = client.get("/api/components").json()
        tagged = client.get("/api/components", params={"tag": "animation"}).json()
        cards = client.get("/api/components", params={"category": "cards"}).json()

        assert [c["title"] for c in everything] == ["Newer", "Magnetic Button"]
        assert tagged[0]["tags"] == ["ui", "animation"]
        assert [c["title"] for c in cards] == ["Newer"]

    def test_update(self, client):
        created = client.post("/api/components", json={**MINIMAL, "tags": ["ui"]}).json()

        response = client.put(
            f"/api/components/{created['id']}",
            json={"description": "Updated", "tags": ["Motion"], "content": {"css": ".a {}"}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["description"] == "Updated"
        assert body["tags"] == ["motion"]
        assert body["content"]["css"] == ".a {}"
        assert body["slug"] == created["slug"]

    def test_delete(self, client):
        created = client.post("/api/components", json=MINIMAL).json()

        response = client.delete(f"/api/components/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Component deleted successfully"}
        assert client.get(f"/api/components/{created['id']}").status_code == 404
        assert client.delete(f"/api/components/{created['id']}").status_code == 404

    def test_store_failure_is_generic(self, client, store):
        """Test store internals are not leaked in the message."""
        def broken(*args, **kwargs):
            raise PersistenceError("fetch_components", RuntimeError("password authentication failed"))

        store.fetch_components = broken

        response = client.get("/api/components")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "persistence_error"
        assert "password" not in body["message"]


class TestCatalogEndpoints:
    """Tests for /api/catalog."""

    def test_registry_components(self, client):
        response = client.get("/api/catalog")

        assert response.status_code == 200
        slugs = {c["slug"] for c in response.json()}
        assert slugs == {"stop-motion-button", "burger-menu-button"}

    def test_dynamic_edit_overrides_registry(self, client):
        """Test PUT on a registry id changes what the catalog serves."""
        response = client.put("/api/components/stop-motion-button", json={"title": "Stop Motion v2"})
        assert response.status_code == 200

        component = client.get("/api/catalog/stop-motion-button").json()
        catalog = client.get("/api/catalog").json()

        assert component["title"] == "Stop Motion v2"
        assert component["source"] == "dynamic"
        assert len(catalog) == 2

    def test_local_custom_components(self, client, custom_path, custom_component):
        custom_path.write_text(json.dumps([custom_component]), encoding="utf-8")

        catalog = {c["id"]: c for c in client.get("/api/catalog").json()}

        assert len(catalog) == 3
        assert catalog["custom-ripple-button"]["source"] == "local"

    def test_route_names_are_not_slugs(self, client):
        """Test components titled like catalog routes stay reachable by slug."""
        created = client.post("/api/components", json={**MINIMAL, "title": "Search"}).json()
        rejected = client.post("/api/components", json={**MINIMAL, "slug": "categories"})

        assert created["slug"] == "search-2"
        assert client.get("/api/catalog/search-2").json()["id"] == created["id"]
        assert rejected.status_code == 400
        assert rejected.json()["fields"] == ["slug"]

    def test_slug_not_found(self, client):
        response = client.get("/api/catalog/does-not-exist")

        assert response.status_code == 404

    def test_search_tags_categories(self, client):
        client.post("/api/components", json={**MINIMAL, "title": "Glow Card", "category": "Cards", "tags": ["glow"]})

        search = client.get("/api/catalog/search", params={"q": "burger"}).json()
        tags = {t["name"]: t["count"] for t in client.get("/api/catalog/tags").json()}
        categories = client.get("/api/catalog/categories").json()
        cards = client.get("/api/catalog/categories/CARDS").json()

        assert [c["slug"] for c in search] == ["burger-menu-button"]
        assert tags == {"animation": 2, "glow": 1, "interactive": 2, "ui": 2}
        assert [(c["name"], c["count"]) for c in categories] == [("buttons", 2), ("cards", 1)]
        assert [c["title"] for c in cards] == ["Glow Card"]

    def test_featured_and_limit(self, client):
        client.post("/api/components", json=MINIMAL)

        featured = client.get("/api/catalog", params={"featured": "true"}).json()
        limited = client.get("/api/catalog", params={"limit": 1}).json()

        assert len(featured) == 2
        assert len(limited) == 1

    def test_unconfigured_store(self, client):
        """Test the catalog degrades to the registry and writes report 503."""
        app.dependency_overrides[get_component_store] = UnconfiguredComponentStore

        catalog = client.get("/api/catalog")
        create = client.post("/api/components", json=MINIMAL)

        assert catalog.status_code == 200
        assert len(catalog.json()) == 2
        assert create.status_code == 503
        assert create.json()["error"] == "not_configured"


class TestCategoryEndpoints:
    """Tests for /api/categories."""

    def test_add_then_add_again(self, client):
        first = client.post("/api/categories", json={"name": "Loaders"})
        second = client.post("/api/categories", json={"name": "loaders"})

        assert first.status_code == 201
        assert first.json()["created"] is True
        assert first.json()["category"]["slug"] == "loaders"
        assert second.status_code == 200
        assert second.json()["created"] is False

    def test_list(self, client):
        client.post("/api/components", json=MINIMAL)

        response = client.get("/api/categories")

        assert response.status_code == 200
        assert response.json() == [
            {"name": "buttons", "slug": "buttons", "description": "buttons components", "count": 1}
        ]

    def test_blank_name(self, client):
        response = client.post("/api/categories", json={"name": " "})

        assert response.status_code == 400


class TestMediaEndpoint:
    """Tests for /api/media/upload."""

    def test_upload_image(self, client, storage):
        response = client.post(
            "/api/media/upload",
            files={"file": ("preview.jpg", b"\xff\xd8\xff" + b"0" * 10240, "image/jpeg")},
            data={"componentId": "abc"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "File uploaded successfully"
        assert body["url"].startswith("/uploads/images/abc/")
        assert body["mediaType"] == "image"
        assert (storage.media_root / body["path"]).is_file()

    def test_upload_without_component_id(self, client):
        response = client.post(
            "/api/media/upload",
            files={"file": ("clip.mp4", b"\x00" * 64, "video/mp4")},
        )

        assert response.status_code == 200
        assert response.json()["path"].startswith("videos/default/")

    def test_missing_file(self, client):
        response = client.post("/api/media/upload", data={"componentId": "abc"})

        assert response.status_code == 400
        assert response.json()["fields"] == ["file"]

    def test_storage_failure(self, client):
        response = client.post(
            "/api/media/upload",
            files={"file": ("a.png", b"x", "image/png")},
            data={"componentId": "../escape"},
        )

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "media_error"
        assert "Failed to upload file to storage" in body["message"]


class TestMigrationEndpoint:
    """Tests for /api/migration."""

    def test_migrate_payload(self, client, custom_component):
        response = client.post(
            "/api/migration",
            json={"components": [custom_component, {"title": "Broken"}]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Migration completed: 1 components migrated successfully, 1 failed"
        assert client.get("/api/components/custom-ripple-button").status_code == 200

    def test_migrate_local_file_with_prune(self, client, custom_path, custom_component):
        custom_path.write_text(json.dumps([custom_component]), encoding="utf-8")

        response = client.post("/api/migration", json={"prune": True})

        assert response.json()["success"] is True
        assert json.loads(custom_path.read_text(encoding="utf-8")) == []

    def test_nothing_to_migrate(self, client):
        response = client.post("/api/migration")

        assert response.json()["message"] == "No components to migrate"


class TestHealthAndAuth:
    """Tests for health probes and API key protection."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["services"]["store"]["status"] == "healthy"

    def test_health_not_configured(self, client):
        app.dependency_overrides[get_component_store] = UnconfiguredComponentStore

        body = client.get("/health").json()
        ready = client.get("/health/ready")

        assert body["status"] == "degraded"
        assert body["services"]["store"]["status"] == "not_configured"
        assert ready.status_code == 200

    def test_liveness(self, client):
        assert client.get("/health/live").json()["status"] == "alive"

    def test_api_key_required_for_writes(self, client):
        settings = Settings(_env_file=None, api_key_enabled=True, api_key="secret")

        with patch("vault.api.main.get_settings", return_value=settings):
            anonymous = client.post("/api/components", json=MINIMAL)
            wrong = client.post("/api/components", json=MINIMAL, headers={"X-API-Key": "nope"})
            authorized = client.post("/api/components", json=MINIMAL, headers={"X-API-Key": "secret"})
            reads = client.get("/api/catalog")

        assert anonymous.status_code == 401
        assert wrong.status_code == 401
        assert authorized.status_code == 201
        assert reads.status_code == 200
