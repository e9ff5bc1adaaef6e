"""In-process ContentRepository backed by plain lists (volatile).

Writes are serialized by an asyncio.Lock so that the slug check and the
insert/update happen atomically as seen by concurrent callers. Every value
handed out is a deep copy; callers cannot mutate the store.
"""

import asyncio
import copy
import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from newsdesk.application.interfaces import ContentRepository
from newsdesk.domain.entities import (
    Article,
    ArticleFilter,
    ArticleWithCategory,
    Category,
    article_sort_key,
    category_sort_key,
    normalize_changes,
)
from newsdesk.domain.exceptions import DuplicateSlugError, EntityNotFoundError

logger = logging.getLogger(__name__)


class InMemoryContentRepository(ContentRepository):
    """Implements the ContentRepository port over in-process collections."""

    def __init__(self) -> None:
        self._categories: list[Category] = []
        self._articles: list[Article] = []
        self._lock = asyncio.Lock()

    # ── Lookup helpers ───────────────────────────────────────────────

    def _find_category(self, category_id: str) -> Category | None:
        return next((c for c in self._categories if c.id == category_id), None)

    def _find_article(self, article_id: str) -> Article | None:
        return next((a for a in self._articles if a.id == article_id), None)

    def _with_category(self, article: Article) -> ArticleWithCategory:
        category = self._find_category(article.category_id)
        if category is None:
            raise EntityNotFoundError("Category", article.category_id)
        return ArticleWithCategory(
            article=copy.deepcopy(article),
            category=copy.deepcopy(category),
        )

    def _newest_first(self, articles: list[Article]) -> list[Article]:
        return sorted(articles, key=article_sort_key, reverse=True)

    # ── Categories ───────────────────────────────────────────────────

    async def get_categories(self) -> list[Category]:
        return [copy.deepcopy(c) for c in sorted(self._categories, key=category_sort_key)]

    async def get_category_by_slug(self, slug: str) -> Category | None:
        found = next((c for c in self._categories if c.slug == slug), None)
        return copy.deepcopy(found) if found else None

    async def get_category_by_id(self, category_id: str) -> Category | None:
        found = self._find_category(category_id)
        return copy.deepcopy(found) if found else None

    async def create_category(self, name: str, slug: str) -> Category:
        async with self._lock:
            if any(c.slug == slug for c in self._categories):
                raise DuplicateSlugError("Category", slug)
            category = Category(name=name, slug=slug, id=uuid4().hex)
            self._categories.append(category)
        logger.debug("Stored category %s in memory", category.id)
        return copy.deepcopy(category)

    # ── Articles ─────────────────────────────────────────────────────

    async def get_articles(self, filters: ArticleFilter) -> list[ArticleWithCategory]:
        matching = [a for a in self._articles if filters.matches(a)]
        page = self._newest_first(matching)[filters.offset : filters.offset + filters.limit]
        return [self._with_category(a) for a in page]

    async def get_article_by_slug(self, slug: str) -> ArticleWithCategory | None:
        found = next((a for a in self._articles if a.slug == slug), None)
        return self._with_category(found) if found else None

    async def get_article_by_id(self, article_id: str) -> ArticleWithCategory | None:
        found = self._find_article(article_id)
        return self._with_category(found) if found else None

    async def create_article(self, article: Article) -> Article:
        async with self._lock:
            if self._find_category(article.category_id) is None:
                raise EntityNotFoundError("Category", article.category_id)
            if any(a.slug == article.slug for a in self._articles):
                raise DuplicateSlugError("Article", article.slug)
            now = datetime.now(timezone.utc)
            stored = copy.deepcopy(article)
            stored.id = uuid4().hex
            stored.created_at = now
            stored.updated_at = now
            self._articles.append(stored)
        logger.debug("Stored article %s in memory", stored.id)
        return copy.deepcopy(stored)

    async def update_article(self, article_id: str, updates: dict[str, Any]) -> Article:
        changes = normalize_changes(updates)
        async with self._lock:
            current = self._find_article(article_id)
            if current is None:
                raise EntityNotFoundError("Article", article_id)
            if "category_id" in changes and self._find_category(changes["category_id"]) is None:
                raise EntityNotFoundError("Category", changes["category_id"])
            new_slug = changes.get("slug", current.slug)
            if any(a.slug == new_slug and a.id != article_id for a in self._articles):
                raise DuplicateSlugError("Article", new_slug)
            current.update(copy.deepcopy(changes))
        return copy.deepcopy(current)

    async def delete_article(self, article_id: str) -> None:
        async with self._lock:
            self._articles = [a for a in self._articles if a.id != article_id]

    async def get_featured_article(self) -> ArticleWithCategory | None:
        published = self._newest_first([a for a in self._articles if a.published])
        return self._with_category(published[0]) if published else None

    async def count_published(self) -> int:
        return sum(1 for a in self._articles if a.published)
