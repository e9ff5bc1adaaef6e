"""Category endpoints."""

from fastapi import APIRouter, Depends, status

from newsdesk.application.schemas import CategoryCreate, CategoryResponse
from newsdesk.application.services import ContentService
from newsdesk.infrastructure.dependencies import get_content_service
from newsdesk.presentation.api.errors import DOMAIN_ERRORS, to_http_exception

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    service: ContentService = Depends(get_content_service),
) -> list[CategoryResponse]:
    """All categories, ordered by name."""
    try:
        categories = await service.list_categories()
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return [CategoryResponse.model_validate(c, from_attributes=True) for c in categories]


@router.get("/{slug}", response_model=CategoryResponse)
async def get_category(
    slug: str,
    service: ContentService = Depends(get_content_service),
) -> CategoryResponse:
    try:
        category = await service.get_category_by_slug(slug)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return CategoryResponse.model_validate(category, from_attributes=True)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    service: ContentService = Depends(get_content_service),
) -> CategoryResponse:
    """Create a category; the slug is derived from the name."""
    try:
        category = await service.create_category(data)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return CategoryResponse.model_validate(category, from_attributes=True)
