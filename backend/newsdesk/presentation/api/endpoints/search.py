"""Title search over published articles."""

from fastapi import APIRouter, Depends, Query

from newsdesk.application.schemas import ArticleWithCategoryResponse
from newsdesk.application.services import ContentService
from newsdesk.infrastructure.dependencies import get_content_service
from newsdesk.presentation.api.errors import DOMAIN_ERRORS, to_http_exception

router = APIRouter(tags=["Search"])


@router.get("/search", response_model=list[ArticleWithCategoryResponse])
async def search_articles(
    q: str = Query(..., min_length=1),
    language: str | None = None,
    service: ContentService = Depends(get_content_service),
) -> list[ArticleWithCategoryResponse]:
    """Up to ten published articles whose title contains ``q``."""
    try:
        items = await service.search_articles(q, language=language or None)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return [ArticleWithCategoryResponse.from_entity(item) for item in items]
