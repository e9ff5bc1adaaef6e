"""ContentRepository backed by MongoDB through the motor async driver.

Layout: ``categories`` and ``articles`` collections, both with a unique index
on ``slug``. ``articles.category_id`` stores the category's ObjectId and is
populated with a second query per page rather than denormalized.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError

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

logger = logging.getLogger(__name__)

_NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]


def _object_id(value: str | None) -> ObjectId | None:
    """Parse an opaque id; anything that is not an ObjectId matches nothing."""
    if value is None or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def _now() -> datetime:
    # BSON dates carry millisecond precision; truncate so returned values round-trip.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MongoContentRepository(ContentRepository):
    """Implements the ContentRepository port over a motor database handle."""

    def __init__(self, database: AsyncIOMotorDatabase):
        self._categories = database["categories"]
        self._articles = database["articles"]

    async def ensure_indexes(self) -> None:
        """Create the unique slug indexes and the listing index. Idempotent."""
        await self._categories.create_index([("slug", ASCENDING)], unique=True)
        await self._articles.create_index([("slug", ASCENDING)], unique=True)
        await self._articles.create_index(
            [("published", ASCENDING), ("created_at", DESCENDING)]
        )
        logger.debug("MongoDB indexes ensured")

    # ── Mapping ──────────────────────────────────────────────────────

    def _to_category(self, doc: dict[str, Any]) -> Category:
        return Category(
            id=str(doc["_id"]),
            name=doc["name"],
            slug=doc["slug"],
            created_at=_as_utc(doc["created_at"]),
        )

    def _to_article(self, doc: dict[str, Any]) -> Article:
        return Article(
            id=str(doc["_id"]),
            title=doc["title"],
            slug=doc["slug"],
            content=doc["content"],
            excerpt=doc["excerpt"],
            featured_image=doc.get("featured_image"),
            category_id=str(doc["category_id"]),
            author=doc["author"],
            author_avatar=doc.get("author_avatar"),
            language=doc.get("language", "en"),
            tags=list(doc.get("tags") or []),
            read_time=doc.get("read_time", 1),
            published=bool(doc.get("published", False)),
            created_at=_as_utc(doc["created_at"]),
            updated_at=_as_utc(doc["updated_at"]),
        )

    def _to_document(self, entity: Article, category_oid: ObjectId, now: datetime) -> dict[str, Any]:
        return {
            "title": entity.title,
            "slug": entity.slug,
            "content": entity.content,
            "excerpt": entity.excerpt,
            "featured_image": entity.featured_image,
            "category_id": category_oid,
            "author": entity.author,
            "author_avatar": entity.author_avatar,
            "language": entity.language,
            "tags": list(entity.tags or []),
            "read_time": entity.read_time,
            "published": entity.published,
            "created_at": now,
            "updated_at": now,
        }

    async def _populate(self, docs: list[dict[str, Any]]) -> list[ArticleWithCategory]:
        """Resolve each article's category reference with one ``$in`` query."""
        if not docs:
            return []
        ids = list({doc["category_id"] for doc in docs})
        cursor = self._categories.find({"_id": {"$in": ids}})
        categories = {doc["_id"]: self._to_category(doc) for doc in await cursor.to_list(length=None)}
        items = []
        for doc in docs:
            category = categories.get(doc["category_id"])
            if category is None:
                raise EntityNotFoundError("Category", str(doc["category_id"]))
            items.append(ArticleWithCategory(self._to_article(doc), category))
        return items

    async def _require_category(self, category_id: str) -> ObjectId:
        oid = _object_id(category_id)
        if oid is None or await self._categories.find_one({"_id": oid}, {"_id": 1}) is None:
            raise EntityNotFoundError("Category", category_id)
        return oid

    # ── Categories ───────────────────────────────────────────────────

    async def get_categories(self) -> list[Category]:
        docs = await self._categories.find().to_list(length=None)
        return sorted((self._to_category(d) for d in docs), key=category_sort_key)

    async def get_category_by_slug(self, slug: str) -> Category | None:
        doc = await self._categories.find_one({"slug": slug})
        return self._to_category(doc) if doc else None

    async def get_category_by_id(self, category_id: str) -> Category | None:
        oid = _object_id(category_id)
        if oid is None:
            return None
        doc = await self._categories.find_one({"_id": oid})
        return self._to_category(doc) if doc else None

    async def create_category(self, name: str, slug: str) -> Category:
        if await self._categories.find_one({"slug": slug}, {"_id": 1}) is not None:
            raise DuplicateSlugError("Category", slug)
        doc = {"name": name, "slug": slug, "created_at": _now()}
        try:
            result = await self._categories.insert_one(doc)
        except DuplicateKeyError as exc:
            raise DuplicateSlugError("Category", slug) from exc
        doc["_id"] = result.inserted_id
        return self._to_category(doc)

    # ── Articles ─────────────────────────────────────────────────────

    async def get_articles(self, filters: ArticleFilter) -> list[ArticleWithCategory]:
        # limit(0) means "no limit" to MongoDB
        if filters.limit == 0:
            return []

        query: dict[str, Any] = {}
        state = filters.published.state
        if state is not None:
            query["published"] = state
        if filters.category_id is not None:
            oid = _object_id(filters.category_id)
            if oid is None:
                return []
            query["category_id"] = oid
        if filters.language is not None:
            query["language"] = filters.language
        if filters.search is not None:
            query["title"] = {"$regex": re.escape(filters.search), "$options": "i"}

        cursor = self._articles.find(
            query, sort=_NEWEST_FIRST, skip=filters.offset, limit=filters.limit
        )
        return await self._populate(await cursor.to_list(length=None))

    async def get_article_by_slug(self, slug: str) -> ArticleWithCategory | None:
        doc = await self._articles.find_one({"slug": slug})
        if doc is None:
            return None
        return (await self._populate([doc]))[0]

    async def get_article_by_id(self, article_id: str) -> ArticleWithCategory | None:
        oid = _object_id(article_id)
        if oid is None:
            return None
        doc = await self._articles.find_one({"_id": oid})
        if doc is None:
            return None
        return (await self._populate([doc]))[0]

    async def create_article(self, article: Article) -> Article:
        category_oid = await self._require_category(article.category_id)
        if await self._articles.find_one({"slug": article.slug}, {"_id": 1}) is not None:
            raise DuplicateSlugError("Article", article.slug)
        doc = self._to_document(article, category_oid, _now())
        try:
            result = await self._articles.insert_one(doc)
        except DuplicateKeyError as exc:
            raise DuplicateSlugError("Article", article.slug) from exc
        doc["_id"] = result.inserted_id
        return self._to_article(doc)

    async def update_article(self, article_id: str, updates: dict[str, Any]) -> Article:
        changes = normalize_changes(updates)
        oid = _object_id(article_id)
        if oid is None or await self._articles.find_one({"_id": oid}, {"_id": 1}) is None:
            raise EntityNotFoundError("Article", article_id)

        doc_changes: dict[str, Any] = dict(changes)
        if "category_id" in changes:
            doc_changes["category_id"] = await self._require_category(changes["category_id"])
        if "tags" in changes:
            doc_changes["tags"] = list(changes["tags"])
        if "slug" in changes:
            clash = await self._articles.find_one(
                {"slug": changes["slug"], "_id": {"$ne": oid}}, {"_id": 1}
            )
            if clash is not None:
                raise DuplicateSlugError("Article", changes["slug"])
        doc_changes["updated_at"] = _now()

        try:
            await self._articles.update_one({"_id": oid}, {"$set": doc_changes})
        except DuplicateKeyError as exc:
            raise DuplicateSlugError("Article", changes.get("slug", "")) from exc
        doc = await self._articles.find_one({"_id": oid})
        if doc is None:
            raise EntityNotFoundError("Article", article_id)
        return self._to_article(doc)

    async def delete_article(self, article_id: str) -> None:
        oid = _object_id(article_id)
        if oid is not None:
            await self._articles.delete_one({"_id": oid})

    async def get_featured_article(self) -> ArticleWithCategory | None:
        cursor = self._articles.find({"published": True}, sort=_NEWEST_FIRST, limit=1)
        docs = await cursor.to_list(length=None)
        return (await self._populate(docs))[0] if docs else None

    async def count_published(self) -> int:
        return await self._articles.count_documents({"published": True})
