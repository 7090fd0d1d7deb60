"""Public catalog endpoints.

Read-only views over the merged catalog (registry, local custom components
and dynamic store). Every request recomputes the merge.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from vault.api.dependencies import get_aggregator
from vault.api.models import ErrorResponse
from vault.core.exceptions import NotFoundError
from vault.models.component import CategorySummary, Component, TagSummary
from vault.services.aggregation import ComponentAggregator

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get(
    "",
    response_model=list[Component],
    summary="All components",
    description="Merged catalog, most recent first. Dynamic edits override registry entries.",
)
async def list_catalog(
    featured: Optional[bool] = Query(None, description="Only featured (true) or non-featured (false)"),
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum number of results"),
    aggregator: ComponentAggregator = Depends(get_aggregator),
) -> list[Component]:
    components = await aggregator.get_all()
    if featured is not None:
        components = [c for c in components if c.featured == featured]
    if limit is not None:
        components = components[:limit]
    return components


@router.get("/search", response_model=list[Component], summary="Search components")
async def search_catalog(
    q: str = Query("", description="Text matched against title, description and tags"),
    aggregator: ComponentAggregator = Depends(get_aggregator),
) -> list[Component]:
    return await aggregator.search(q)


@router.get("/tags", response_model=list[TagSummary], summary="Tags with counts")
async def list_tags(
    aggregator: ComponentAggregator = Depends(get_aggregator),
) -> list[TagSummary]:
    return await aggregator.tags()


@router.get("/categories", response_model=list[CategorySummary], summary="Categories with counts")
async def list_catalog_categories(
    aggregator: ComponentAggregator = Depends(get_aggregator),
) -> list[CategorySummary]:
    return await aggregator.categories()


@router.get(
    "/categories/{category}",
    response_model=list[Component],
    summary="Components in a category",
)
async def list_by_category(
    category: str,
    aggregator: ComponentAggregator = Depends(get_aggregator),
) -> list[Component]:
    return await aggregator.by_category(category)


@router.get(
    "/{slug}",
    response_model=Component,
    summary="Component by slug",
    responses={404: {"model": ErrorResponse, "description": "Component not found"}},
)
async def get_by_slug(
    slug: str,
    aggregator: ComponentAggregator = Depends(get_aggregator),
) -> Component:
    component = await aggregator.by_slug(slug)
    if component is None:
        raise NotFoundError("Component", slug)
    return component
