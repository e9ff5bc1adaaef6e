"""Article endpoints: listing, featured, stats, lookup by slug and admin CRUD."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from newsdesk.application.schemas import (
    ArticleCreate,
    ArticleResponse,
    ArticleStatsResponse,
    ArticleUpdate,
    ArticleWithCategoryResponse,
)
from newsdesk.application.services import ContentService
from newsdesk.domain.entities import ArticleFilter, DEFAULT_PAGE_SIZE, PublishedFilter
from newsdesk.infrastructure.dependencies import get_content_service
from newsdesk.presentation.api.errors import DOMAIN_ERRORS, to_http_exception

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.get("", response_model=list[ArticleWithCategoryResponse])
async def list_articles(
    published: PublishedFilter = PublishedFilter.ONLY_PUBLISHED,
    category_id: str | None = Query(None, alias="categoryId"),
    language: str | None = None,
    search: str | None = None,
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=0, le=100),
    offset: int = Query(0, ge=0),
    service: ContentService = Depends(get_content_service),
) -> list[ArticleWithCategoryResponse]:
    """List articles newest first. ``published`` is ``true``, ``false`` or ``all``."""
    try:
        items = await service.list_articles(
            ArticleFilter(
                published=published,
                category_id=category_id or None,
                language=language or None,
                search=search,
                limit=limit,
                offset=offset,
            )
        )
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return [ArticleWithCategoryResponse.from_entity(item) for item in items]


@router.get("/featured", response_model=ArticleWithCategoryResponse)
async def get_featured_article(
    service: ContentService = Depends(get_content_service),
) -> ArticleWithCategoryResponse:
    """The newest published article."""
    try:
        item = await service.get_featured_article()
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No featured article found")
    return ArticleWithCategoryResponse.from_entity(item)


@router.get("/stats", response_model=ArticleStatsResponse)
async def get_article_stats(
    service: ContentService = Depends(get_content_service),
) -> ArticleStatsResponse:
    try:
        stats = await service.get_article_stats()
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleStatsResponse.model_validate(stats, from_attributes=True)


@router.get("/{slug}", response_model=ArticleWithCategoryResponse)
async def get_article(
    slug: str,
    service: ContentService = Depends(get_content_service),
) -> ArticleWithCategoryResponse:
    """Retrieve a single article by slug."""
    try:
        item = await service.get_article_by_slug(slug)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleWithCategoryResponse.from_entity(item)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    service: ContentService = Depends(get_content_service),
) -> ArticleResponse:
    """Create a new article; slug, read time and excerpt are derived."""
    try:
        article = await service.create_article(data)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    data: ArticleUpdate,
    service: ContentService = Depends(get_content_service),
) -> ArticleResponse:
    """Update an existing article."""
    try:
        article = await service.update_article(article_id, data)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    service: ContentService = Depends(get_content_service),
) -> None:
    """Delete an article by ID. Unknown IDs are not an error."""
    try:
        await service.delete_article(article_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
