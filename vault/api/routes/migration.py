"""Migration endpoint: move custom components into the dynamic store."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends

from vault.api.dependencies import get_component_service, get_local_provider
from vault.api.models import MigrationRequest
from vault.services.component_service import ComponentService
from vault.services.migration import LocalComponentProvider, MigrationReport, migrate_components

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/migration", tags=["Migration"])


@router.post(
    "",
    response_model=MigrationReport,
    summary="Migrate custom components",
    description=(
        "Create each custom component in the dynamic store and report per-item "
        "success or failure. Without a body the configured local file is migrated."
    ),
)
async def migrate(
    request: Optional[MigrationRequest] = None,
    service: ComponentService = Depends(get_component_service),
    provider: LocalComponentProvider = Depends(get_local_provider),
) -> MigrationReport:
    request = request or MigrationRequest()
    if request.components is not None:
        items = request.components
    else:
        items = provider.load_raw()

    logger.info("component_migration_started", items=len(items), prune=request.prune)
    return await migrate_components(
        items,
        service,
        provider=provider if request.prune else None,
    )
