"""
Custom Component Migration.

Custom components authored outside the dynamic store live in a JSON file
(a list of component objects in either spelling). They are served as a third
provider until migrated, then created one by one through the component
service with a per-item report.

Usage:
    provider = LocalComponentProvider(settings.custom_components_path)
    report = await migrate_components(provider.load_raw(), service, provider=provider)
    print(report.message)
"""

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional, Union

import structlog
from pydantic import BaseModel, Field

from vault.core.exceptions import PersistenceError, VaultError
from vault.models.component import Component, ComponentSource
from vault.normalization.normalizer import normalize_component, pick
from vault.services.aggregation import ComponentProvider

logger = structlog.get_logger(__name__)


# =============================================================================
# Models
# =============================================================================


class MigrationItemResult(BaseModel):
    """Outcome for one migrated component."""

    title: str
    success: bool
    component_id: Optional[str] = None
    error: Optional[str] = None


class MigrationReport(BaseModel):
    """Summary of a migration run."""

    success: bool
    message: str
    results: list[MigrationItemResult] = Field(default_factory=list)

    @property
    def migrated(self) -> int:
        return sum(1 for result in self.results if result.success)

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if not result.success)


# =============================================================================
# Local Provider
# =============================================================================


class LocalComponentProvider(ComponentProvider):
    """Custom components read from a JSON file.

    A missing or unset file means no custom components. A file that is not a
    JSON list raises PersistenceError.
    """

    name = "local"

    def __init__(self, path: Optional[Union[Path, str]]):
        self.path = Path(path) if path else None

    def load_raw(self) -> list[dict[str, Any]]:
        if self.path is None or not self.path.is_file():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise PersistenceError("read_local_components", e, {"path": str(self.path)}) from e
        if not isinstance(data, list):
            raise PersistenceError(
                "read_local_components",
                TypeError("expected a JSON list of components"),
                {"path": str(self.path)},
            )
        return [item for item in data if isinstance(item, dict)]

    def _write_raw(self, items: list[dict[str, Any]]) -> None:
        if self.path is None:
            raise PersistenceError("write_local_components", ValueError("no path configured"))
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(items, indent=2), encoding="utf-8")
        except OSError as e:
            raise PersistenceError("write_local_components", e, {"path": str(self.path)}) from e

    async def fetch_components(self) -> list[Component]:
        return [
            normalize_component(item, source=ComponentSource.LOCAL)
            for item in self.load_raw()
        ]

    def remove(self, component_id: str) -> bool:
        """Drop the entry with this id. Returns whether anything was removed.

        Entries without an id are matched by the id they are served under.
        """
        items = self.load_raw()
        kept = [item for item in items if normalize_component(item).id != component_id]
        if len(kept) == len(items):
            return False
        self._write_raw(kept)
        logger.info("local_component_removed", component_id=component_id)
        return True

    def replace(self, component: Union[Component, Mapping[str, Any]]) -> bool:
        """Overwrite the entry with the same id. Returns whether it was found."""
        updated = normalize_component(component, source=ComponentSource.LOCAL)
        items = self.load_raw()
        for index, item in enumerate(items):
            if normalize_component(item).id == updated.id:
                items[index] = updated.to_dict()
                self._write_raw(items)
                logger.info("local_component_replaced", component_id=updated.id)
                return True
        return False


# =============================================================================
# Migration
# =============================================================================


def _item_title(item: Mapping[str, Any]) -> str:
    return str(pick(item, ("title", "id")) or "untitled")


async def migrate_components(
    items: Iterable[Mapping[str, Any]],
    service,
    provider: Optional[LocalComponentProvider] = None,
) -> MigrationReport:
    """Create every item in the dynamic store and report per-item outcomes.

    Args:
        items: Raw custom component records.
        service: ComponentService that performs the creates.
        provider: When given, successfully migrated items are removed from it.

    Returns:
        MigrationReport; ``success`` is True only if every item migrated.
    """
    items = list(items)
    if not items:
        return MigrationReport(success=True, message="No components to migrate")

    results = []
    for item in items:
        title = _item_title(item)
        # Keep the id the local provider serves the item under
        local_id = normalize_component(item).id
        payload = dict(item)
        if local_id and not pick(item, ("id",)):
            payload["id"] = local_id

        try:
            component = await service.create(payload)
        except VaultError as e:
            logger.warning("component_migration_failed", title=title, error=e.message)
            results.append(MigrationItemResult(title=title, success=False, error=e.message))
            continue

        results.append(
            MigrationItemResult(title=title, success=True, component_id=component.id)
        )
        if provider is not None and local_id:
            provider.remove(local_id)

    migrated = sum(1 for result in results if result.success)
    failed = len(results) - migrated
    logger.info("component_migration_completed", migrated=migrated, failed=failed)

    return MigrationReport(
        success=failed == 0,
        message=(
            f"Migration completed: {migrated} components migrated successfully, "
            f"{failed} failed"
        ),
        results=results,
    )
