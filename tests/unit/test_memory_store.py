"""Unit tests for the in-memory store, the unconfigured store and the store factory."""

from unittest.mock import MagicMock

import pytest

from vault.config.settings import Settings
from vault.core.exceptions import ConfigurationError, PersistenceError
from vault.store import (
    InMemoryComponentStore,
    SupabaseComponentStore,
    UnconfiguredComponentStore,
    get_component_store,
)
from vault.store.memory import ConstraintViolation


def _row(component_id, slug=None, **extra):
    return {"id": component_id, "slug": slug or component_id, "title": component_id, **extra}


class TestInMemoryComponentStore:
    """Tests for InMemoryComponentStore constraints and queries."""

    def test_embeds_tags_and_content(self, store):
        """Test fetched rows carry the same relations as a Supabase select."""
        store.insert_component(_row("a"))
        store.insert_content({"component_id": "a", "html": "<p></p>", "css": "", "js": "", "external_scripts": ""})
        tag = store.insert_tag("ui")
        store.link_tag("a", tag["id"])

        row = store.fetch_component("a")

        assert row["component_tags"] == [{"tags": {"name": "ui"}}]
        assert row["component_content"][0]["html"] == "<p></p>"
        assert row["created_at"]

    def test_duplicate_id_and_slug(self, store):
        """Test unique constraints on id and slug."""
        store.insert_component(_row("a", "shared"))

        with pytest.raises(PersistenceError):
            store.insert_component(_row("a", "other"))
        with pytest.raises(PersistenceError) as exc_info:
            store.insert_component(_row("b", "shared"))

        assert isinstance(exc_info.value.cause, ConstraintViolation)
        assert exc_info.value.operation == "insert_component"

    def test_content_requires_component(self, store):
        """Test the content foreign key."""
        with pytest.raises(PersistenceError):
            store.insert_content({"component_id": "missing"})

    def test_delete_requires_dependents_removed(self, store):
        """Test a component cannot be deleted while content or links reference it."""
        store.insert_component(_row("a"))
        store.insert_content({"component_id": "a"})
        tag = store.insert_tag("ui")
        store.link_tag("a", tag["id"])

        with pytest.raises(PersistenceError):
            store.delete_component("a")

        store.unlink_tags("a")
        store.delete_content("a")
        store.delete_component("a")

        assert store.fetch_component("a") is None
        assert store.find_tag("ui") is not None

    def test_filters_and_order(self, store):
        """Test featured and case-insensitive category filters, newest first."""
        store.insert_component(_row("old", category="Buttons", date="2024-01-01", featured=True))
        store.insert_component(_row("new", category="buttons", date="2024-06-01"))
        store.insert_component(_row("card", category="Cards", date="2024-03-01"))

        assert [r["id"] for r in store.fetch_components()] == ["new", "card", "old"]
        assert [r["id"] for r in store.fetch_components(category="BUTTONS")] == ["new", "old"]
        assert [r["id"] for r in store.fetch_components(featured=True)] == ["old"]

    def test_slug_lookups(self, store):
        """Test slug queries used for uniqueness."""
        store.insert_component(_row("a", "glow-card"))
        store.insert_component(_row("b", "glow-card-2"))

        assert store.fetch_slugs("glow-card") == {"glow-card", "glow-card-2"}
        assert store.fetch_component_by_slug("glow-card-2")["id"] == "b"
        assert store.fetch_component_by_slug("nope") is None

    def test_categories(self, store):
        """Test case-insensitive category lookup."""
        store.insert_category({"name": "Buttons", "slug": "buttons"})

        assert store.find_category("buttons")["name"] == "Buttons"
        with pytest.raises(PersistenceError):
            store.insert_category({"name": "BUTTONS", "slug": "buttons"})


class TestUnconfiguredComponentStore:
    """Tests for the store used when Supabase credentials are missing."""

    def test_every_operation_fails_with_configuration_cause(self):
        """Test callers can tell 'not configured' apart from other failures."""
        store = UnconfiguredComponentStore()

        with pytest.raises(PersistenceError) as exc_info:
            store.fetch_components()

        assert isinstance(exc_info.value.cause, ConfigurationError)
        with pytest.raises(PersistenceError):
            store.insert_component(_row("a"))
        assert store.health_check() is False


class TestGetComponentStore:
    """Tests for the store factory."""

    def test_memory_backend(self):
        settings = Settings(_env_file=None, store_backend="memory")
        assert isinstance(get_component_store(settings), InMemoryComponentStore)

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_KEY", raising=False)
        settings = Settings(_env_file=None, store_backend="supabase")

        assert isinstance(get_component_store(settings), UnconfiguredComponentStore)

    def test_existing_client(self):
        settings = Settings(_env_file=None, store_backend="supabase")
        store = get_component_store(settings, client=MagicMock())

        assert isinstance(store, SupabaseComponentStore)
