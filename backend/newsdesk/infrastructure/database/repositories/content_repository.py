"""Concrete ContentRepository implementation backed by SQLAlchemy."""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.application.interfaces import ContentRepository
from newsdesk.domain.entities import (
    Article,
    ArticleFilter,
    ArticleWithCategory,
    Category,
    category_sort_key,
    normalize_changes,
)
from newsdesk.domain.exceptions import DuplicateSlugError, EntityNotFoundError
from newsdesk.infrastructure.database.models import ArticleModel, CategoryModel

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SQLAlchemyContentRepository(ContentRepository):
    """Implements the ContentRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Mapping ──────────────────────────────────────────────────────

    def _to_category(self, model: CategoryModel) -> Category:
        """Map ORM model → domain entity."""
        return Category(
            id=model.id,
            name=model.name,
            slug=model.slug,
            created_at=_as_utc(model.created_at),
        )

    def _to_article(self, model: ArticleModel) -> Article:
        """Map ORM model → domain entity."""
        return Article(
            id=model.id,
            title=model.title,
            slug=model.slug,
            content=model.content,
            excerpt=model.excerpt,
            featured_image=model.featured_image,
            category_id=model.category_id,
            author=model.author,
            author_avatar=model.author_avatar,
            language=model.language,
            tags=list(model.tags or []),
            read_time=model.read_time,
            published=model.published,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def _to_model(self, entity: Article, article_id: str, now: datetime) -> ArticleModel:
        """Map domain entity → ORM model (for creation)."""
        return ArticleModel(
            id=article_id,
            title=entity.title,
            slug=entity.slug,
            content=entity.content,
            excerpt=entity.excerpt,
            featured_image=entity.featured_image,
            category_id=entity.category_id,
            author=entity.author,
            author_avatar=entity.author_avatar,
            language=entity.language,
            tags=list(entity.tags or []),
            read_time=entity.read_time,
            published=entity.published,
            created_at=now,
            updated_at=now,
        )

    def _joined(self):
        return select(ArticleModel, CategoryModel).join(
            CategoryModel, ArticleModel.category_id == CategoryModel.id
        )

    def _newest_first(self, stmt):
        return stmt.order_by(ArticleModel.created_at.desc(), ArticleModel.id.desc())

    async def _first_joined(self, stmt) -> ArticleWithCategory | None:
        row = (await self._session.execute(stmt.limit(1))).first()
        if row is None:
            return None
        article, category = row
        return ArticleWithCategory(self._to_article(article), self._to_category(category))

    async def _flush(self, entity_type: str, slug: str) -> None:
        """Flush pending changes; a unique-index violation becomes DuplicateSlugError."""
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            logger.warning("Integrity error writing %s slug '%s': %s", entity_type, slug, exc.orig)
            raise DuplicateSlugError(entity_type, slug) from exc

    async def _slug_in_use(self, model, slug: str, exclude_id: str | None = None) -> bool:
        stmt = select(model.id).where(model.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(model.id != exclude_id)
        return (await self._session.execute(stmt.limit(1))).first() is not None

    async def _require_category(self, category_id: str) -> None:
        if await self._session.get(CategoryModel, category_id) is None:
            raise EntityNotFoundError("Category", category_id)

    # ── Categories ───────────────────────────────────────────────────

    async def get_categories(self) -> list[Category]:
        # Sorted in Python so every backend shares one locale-aware collation.
        result = await self._session.execute(select(CategoryModel))
        categories = [self._to_category(row) for row in result.scalars().all()]
        return sorted(categories, key=category_sort_key)

    async def get_category_by_slug(self, slug: str) -> Category | None:
        result = await self._session.execute(
            select(CategoryModel).where(CategoryModel.slug == slug)
        )
        model = result.scalar_one_or_none()
        return self._to_category(model) if model else None

    async def get_category_by_id(self, category_id: str) -> Category | None:
        model = await self._session.get(CategoryModel, category_id)
        return self._to_category(model) if model else None

    async def create_category(self, name: str, slug: str) -> Category:
        if await self._slug_in_use(CategoryModel, slug):
            raise DuplicateSlugError("Category", slug)
        model = CategoryModel(
            id=str(uuid4()),
            name=name,
            slug=slug,
            created_at=datetime.now(timezone.utc),
        )
        self._session.add(model)
        await self._flush("Category", slug)
        return self._to_category(model)

    # ── Articles ─────────────────────────────────────────────────────

    async def get_articles(self, filters: ArticleFilter) -> list[ArticleWithCategory]:
        stmt = self._joined()

        state = filters.published.state
        if state is not None:
            stmt = stmt.where(ArticleModel.published.is_(state))
        if filters.category_id is not None:
            stmt = stmt.where(ArticleModel.category_id == filters.category_id)
        if filters.language is not None:
            stmt = stmt.where(ArticleModel.language == filters.language)
        if filters.search is not None:
            stmt = stmt.where(ArticleModel.title.icontains(filters.search, autoescape=True))

        stmt = self._newest_first(stmt).offset(filters.offset).limit(filters.limit)
        result = await self._session.execute(stmt)
        return [
            ArticleWithCategory(self._to_article(article), self._to_category(category))
            for article, category in result.all()
        ]

    async def get_article_by_slug(self, slug: str) -> ArticleWithCategory | None:
        return await self._first_joined(self._joined().where(ArticleModel.slug == slug))

    async def get_article_by_id(self, article_id: str) -> ArticleWithCategory | None:
        return await self._first_joined(self._joined().where(ArticleModel.id == article_id))

    async def create_article(self, article: Article) -> Article:
        await self._require_category(article.category_id)
        if await self._slug_in_use(ArticleModel, article.slug):
            raise DuplicateSlugError("Article", article.slug)
        model = self._to_model(article, str(uuid4()), datetime.now(timezone.utc))
        self._session.add(model)
        await self._flush("Article", article.slug)
        return self._to_article(model)

    async def update_article(self, article_id: str, updates: dict[str, Any]) -> Article:
        changes = normalize_changes(updates)
        model = await self._session.get(ArticleModel, article_id)
        if model is None:
            raise EntityNotFoundError("Article", article_id)
        if "category_id" in changes:
            await self._require_category(changes["category_id"])
        if "slug" in changes and await self._slug_in_use(
            ArticleModel, changes["slug"], exclude_id=article_id
        ):
            raise DuplicateSlugError("Article", changes["slug"])

        for name, value in changes.items():
            setattr(model, name, list(value) if name == "tags" else value)
        model.updated_at = datetime.now(timezone.utc)
        await self._flush("Article", model.slug)
        return self._to_article(model)

    async def delete_article(self, article_id: str) -> None:
        await self._session.execute(delete(ArticleModel).where(ArticleModel.id == article_id))
        await self._session.flush()

    async def get_featured_article(self) -> ArticleWithCategory | None:
        stmt = self._newest_first(self._joined().where(ArticleModel.published.is_(True)))
        return await self._first_joined(stmt)

    async def count_published(self) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(ArticleModel).where(ArticleModel.published.is_(True))
        )
        return result.scalar_one()
