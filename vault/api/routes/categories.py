"""Category endpoints for The Vault API."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from vault.api.dependencies import get_category_service
from vault.api.models import CategoryCreate, CategoryResponse, ErrorResponse
from vault.models.component import CategorySummary
from vault.services.categories import CategoryService

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get(
    "",
    response_model=list[CategorySummary],
    summary="List categories",
    description="Authored categories, or the distinct categories of stored components.",
)
async def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> list[CategorySummary]:
    return await service.list_categories()


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=201,
    summary="Add a category",
    responses={
        200: {"model": CategoryResponse, "description": "Category already existed"},
        201: {"description": "Category created"},
        400: {"model": ErrorResponse, "description": "Name missing"},
    },
)
async def add_category(
    payload: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    category, created = await service.add_category(payload.name, payload.description)
    response = CategoryResponse(category=category, created=created)
    if created:
        return response
    return JSONResponse(status_code=200, content=response.to_dict())
