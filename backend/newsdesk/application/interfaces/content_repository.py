"""Abstract repository interface (port) for articles and categories.

Every storage backend implements this contract with identical observable
behaviour; the contract test suite is the authority, not any one backend.
"""

from abc import ABC, abstractmethod
from typing import Any

from newsdesk.domain.entities import Article, ArticleFilter, ArticleWithCategory, Category


class ContentRepository(ABC):
    """Port for article and category persistence: implemented in the infrastructure layer."""

    # ── Categories ───────────────────────────────────────────────────

    @abstractmethod
    async def get_categories(self) -> list[Category]:
        """All categories, ordered by name (locale-aware)."""
        ...

    @abstractmethod
    async def get_category_by_slug(self, slug: str) -> Category | None:
        ...

    @abstractmethod
    async def get_category_by_id(self, category_id: str) -> Category | None:
        ...

    @abstractmethod
    async def create_category(self, name: str, slug: str) -> Category:
        """Persist a category. Raises DuplicateSlugError if the slug is taken."""
        ...

    # ── Articles ─────────────────────────────────────────────────────

    @abstractmethod
    async def get_articles(self, filters: ArticleFilter) -> list[ArticleWithCategory]:
        """Filtered, newest-first, paginated listing with categories resolved."""
        ...

    @abstractmethod
    async def get_article_by_slug(self, slug: str) -> ArticleWithCategory | None:
        ...

    @abstractmethod
    async def get_article_by_id(self, article_id: str) -> ArticleWithCategory | None:
        ...

    @abstractmethod
    async def create_article(self, article: Article) -> Article:
        """Persist a new article, assigning id and timestamps.

        Raises DuplicateSlugError on slug collision and EntityNotFoundError
        when the referenced category does not exist.
        """
        ...

    @abstractmethod
    async def update_article(self, article_id: str, updates: dict[str, Any]) -> Article:
        """Merge ``updates`` onto an existing article and refresh updated_at.

        Raises EntityNotFoundError for an unknown id or category and
        DuplicateSlugError when the new slug belongs to another article.
        """
        ...

    @abstractmethod
    async def delete_article(self, article_id: str) -> None:
        """Hard delete. Deleting an unknown id is a no-op."""
        ...

    @abstractmethod
    async def get_featured_article(self) -> ArticleWithCategory | None:
        """The newest published article, or None when nothing is published."""
        ...

    @abstractmethod
    async def count_published(self) -> int:
        ...

    async def article_slug_exists(self, slug: str) -> bool:
        return await self.get_article_by_slug(slug) is not None

    async def category_slug_exists(self, slug: str) -> bool:
        return await self.get_category_by_slug(slug) is not None
