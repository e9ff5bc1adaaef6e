"""Application service (use case) for articles and categories.

Derives slugs, read times and excerpts before handing records to the
repository port, and applies the configured slug-collision policy.
"""

import logging
from enum import Enum
from collections.abc import Awaitable, Callable
from typing import Any

from newsdesk.application.interfaces import ContentRepository, ViewCounter
from newsdesk.application.schemas import ArticleCreate, ArticleUpdate, CategoryCreate
from newsdesk.domain.entities import (
    Article,
    ArticleFilter,
    ArticleStats,
    ArticleWithCategory,
    Category,
    PublishedFilter,
)
from newsdesk.domain.exceptions import EntityNotFoundError
from newsdesk.domain.text import derive_excerpt, estimate_read_time, slug_candidates, slugify

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 10


class SlugCollisionPolicy(str, Enum):
    """What to do when a derived slug is already taken."""

    REJECT = "reject"
    SUFFIX = "suffix"


class ContentService:
    """Orchestrates article/category business logic. Depends on the repository port (DI)."""

    def __init__(
        self,
        repository: ContentRepository,
        view_counter: ViewCounter,
        slug_policy: SlugCollisionPolicy = SlugCollisionPolicy.REJECT,
    ):
        self._repository = repository
        self._view_counter = view_counter
        self._slug_policy = slug_policy

    # ── Categories ───────────────────────────────────────────────────

    async def list_categories(self) -> list[Category]:
        return await self._repository.get_categories()

    async def get_category_by_slug(self, slug: str) -> Category:
        category = await self._repository.get_category_by_slug(slug)
        if category is None:
            raise EntityNotFoundError("Category", slug)
        return category

    async def create_category(self, data: CategoryCreate) -> Category:
        base = slugify(data.name) or "category"
        slug = await self._resolve_slug(base, self._repository.category_slug_exists)
        category = await self._repository.create_category(data.name, slug)
        logger.info("Created category %s (slug=%s)", category.id, category.slug)
        return category

    # ── Articles ─────────────────────────────────────────────────────

    async def list_articles(self, filters: ArticleFilter) -> list[ArticleWithCategory]:
        return await self._repository.get_articles(filters)

    async def search_articles(self, query: str, language: str | None = None) -> list[ArticleWithCategory]:
        return await self._repository.get_articles(
            ArticleFilter(
                published=PublishedFilter.ONLY_PUBLISHED,
                search=query,
                language=language,
                limit=SEARCH_RESULT_LIMIT,
            )
        )

    async def get_article_by_slug(self, slug: str) -> ArticleWithCategory:
        item = await self._repository.get_article_by_slug(slug)
        if item is None:
            raise EntityNotFoundError("Article", slug)
        return item

    async def get_article(self, article_id: str) -> ArticleWithCategory:
        item = await self._repository.get_article_by_id(article_id)
        if item is None:
            raise EntityNotFoundError("Article", article_id)
        return item

    async def get_featured_article(self) -> ArticleWithCategory | None:
        return await self._repository.get_featured_article()

    async def get_article_stats(self) -> ArticleStats:
        return ArticleStats(
            total_articles=await self._repository.count_published(),
            todays_views=await self._view_counter.todays_views(),
        )

    async def create_article(self, data: ArticleCreate) -> Article:
        base = slugify(data.title) or "article"
        slug = await self._resolve_slug(base, self._repository.article_slug_exists)
        article = Article(
            title=data.title,
            slug=slug,
            content=data.content,
            excerpt=data.excerpt if data.excerpt else derive_excerpt(data.content),
            featured_image=data.featured_image,
            category_id=data.category_id,
            author=data.author,
            author_avatar=data.author_avatar,
            language=data.language,
            tags=list(data.tags),
            read_time=data.read_time or estimate_read_time(data.content),
            published=data.published,
        )
        created = await self._repository.create_article(article)
        logger.info(
            "Created article %s (slug=%s, published=%s)",
            created.id,
            created.slug,
            created.published,
        )
        return created

    async def update_article(self, article_id: str, data: ArticleUpdate) -> Article:
        changes: dict[str, Any] = data.changes()
        current = await self.get_article(article_id)

        if "title" in changes and changes["title"] != current.article.title:
            base = slugify(changes["title"]) or "article"
            if base != current.article.slug:
                changes["slug"] = await self._resolve_slug(
                    base,
                    lambda s: self._slug_taken_by_other(s, article_id),
                )
        if "content" in changes and "read_time" not in changes:
            changes["read_time"] = estimate_read_time(changes["content"])

        updated = await self._repository.update_article(article_id, changes)
        logger.info("Updated article %s (fields=%s)", article_id, sorted(changes))
        return updated

    async def delete_article(self, article_id: str) -> None:
        await self._repository.delete_article(article_id)
        logger.info("Deleted article %s", article_id)

    # ── Helpers ──────────────────────────────────────────────────────

    async def _slug_taken_by_other(self, slug: str, article_id: str) -> bool:
        existing = await self._repository.get_article_by_slug(slug)
        return existing is not None and existing.article.id != article_id

    async def _resolve_slug(self, base: str, exists: Callable[[str], Awaitable[bool]]) -> str:
        """Apply the collision policy. REJECT leaves detection to the repository."""
        if self._slug_policy is SlugCollisionPolicy.REJECT:
            return base
        for candidate in slug_candidates(base):
            if not await exists(candidate):
                if candidate != base:
                    logger.debug("Slug '%s' taken, using '%s'", base, candidate)
                return candidate
        return base
