"""Component management endpoints for The Vault API.

Provides CRUD operations over dynamic components. Failures are raised as
Vault exceptions and translated to ``{message, error}`` responses by the
application's exception handlers.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query

from vault.api.dependencies import get_component_service
from vault.api.models import ErrorResponse, MessageResponse
from vault.models.component import Component, ComponentCreate, ComponentUpdate
from vault.services.component_service import ComponentService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/components", tags=["Components"])


@router.get(
    "",
    response_model=list[Component],
    summary="List components",
    description="Dynamic components, most recent first, with optional filters.",
    responses={500: {"model": ErrorResponse, "description": "Store failure"}},
)
async def list_components(
    featured: Optional[bool] = Query(None, description="Only featured components"),
    category: Optional[str] = Query(None, description="Category (case-insensitive)"),
    tag: Optional[str] = Query(None, description="Tag (case-insensitive)"),
    service: ComponentService = Depends(get_component_service),
) -> list[Component]:
    return await service.list(featured=featured, category=category, tag=tag)


@router.post(
    "",
    response_model=Component,
    status_code=201,
    summary="Create a component",
    responses={
        201: {"description": "Component created successfully"},
        400: {"model": ErrorResponse, "description": "Missing required fields"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
)
async def create_component(
    payload: ComponentCreate,
    service: ComponentService = Depends(get_component_service),
) -> Component:
    """
    Create a new dynamic component.

    **Required:** title, description, category. The id, slug and date are
    generated when absent; tags are lowercased and de-duplicated.
    """
    return await service.create(payload)


@router.get(
    "/{component_id}",
    response_model=Component,
    summary="Get a component",
    responses={404: {"model": ErrorResponse, "description": "Component not found"}},
)
async def get_component(
    component_id: str,
    service: ComponentService = Depends(get_component_service),
) -> Component:
    return await service.get(component_id)


@router.put(
    "/{component_id}",
    response_model=Component,
    summary="Update a component",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid update"},
        404: {"model": ErrorResponse, "description": "Component not found"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
)
async def update_component(
    component_id: str,
    patch: ComponentUpdate,
    service: ComponentService = Depends(get_component_service),
) -> Component:
    """
    Merge the given fields onto a component.

    Updating a registry component stores an edited copy that overrides it.
    A tag list replaces the existing tags; superseded managed preview files
    are removed on a best-effort basis.
    """
    return await service.update(component_id, patch)


@router.delete(
    "/{component_id}",
    response_model=MessageResponse,
    summary="Delete a component",
    responses={
        404: {"model": ErrorResponse, "description": "Component not found"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
)
async def delete_component(
    component_id: str,
    service: ComponentService = Depends(get_component_service),
) -> MessageResponse:
    await service.delete(component_id)
    return MessageResponse(message="Component deleted successfully")
