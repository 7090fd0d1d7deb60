#!/usr/bin/env python3
"""Migrate custom components from a JSON file into the dynamic store.

Reads the custom components file (``CUSTOM_COMPONENTS_PATH`` by default),
creates every entry through the component service and prints a per-item
report. With ``--prune`` the migrated entries are removed from the file.

Usage:
    # Migrate the configured file
    python scripts/migrate_custom_components.py

    # Migrate a specific file and drop migrated entries from it
    python scripts/migrate_custom_components.py data/custom-components.json --prune

    # Show what would be migrated
    python scripts/migrate_custom_components.py --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import structlog

from vault.config.settings import get_settings
from vault.core.exceptions import VaultError
from vault.core.logging import configure_logging
from vault.registry.components import build_registry
from vault.services.component_service import ComponentService
from vault.services.migration import LocalComponentProvider, MigrationReport, migrate_components
from vault.storage.registry import get_storage_adapter
from vault.store import get_component_store

logger = structlog.get_logger(__name__)


def print_report(report: MigrationReport) -> None:
    """Print a migration report in a formatted way."""
    print("\n" + "=" * 70)
    print("Custom Component Migration")
    print("=" * 70)
    print(f"\n{report.message}")

    if report.results:
        print("-" * 70)
        for result in report.results:
            if result.success:
                print(f"  [+] {result.title} -> {result.component_id}")
            else:
                print(f"  [-] {result.title}: {result.error}")

    print("\n" + "=" * 70)


async def run(path: str | None, prune: bool, dry_run: bool) -> int:
    settings = get_settings()
    provider = LocalComponentProvider(path or settings.custom_components_path)
    items = provider.load_raw()

    if dry_run:
        print(f"{len(items)} custom components in {provider.path}")
        for item in items:
            print(f"  - {item.get('title') or item.get('id') or 'untitled'}")
        return 0

    store = get_component_store(settings)
    storage = get_storage_adapter(settings)
    service = ComponentService(
        store,
        storage,
        build_registry(include_samples=settings.show_sample_components),
    )

    report = await migrate_components(items, service, provider=provider if prune else None)
    print_report(report)
    return 0 if report.success else 1


def main():
    parser = argparse.ArgumentParser(
        description='Migrate custom components into the dynamic store',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        'path',
        nargs='?',
        help='Custom components JSON file (default: CUSTOM_COMPONENTS_PATH)'
    )

    parser.add_argument(
        '--prune',
        action='store_true',
        help='Remove migrated entries from the file'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='List the components without migrating them'
    )

    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level, json_logs=False)

    try:
        exit_code = asyncio.run(run(args.path, args.prune, args.dry_run))
    except VaultError as e:
        logger.error("component_migration_aborted", error=e.message)
        print(f"\nError: {e.message}")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == '__main__':
    main()
