"""Contract suite every ContentRepository backend must pass.

``ContentRepositoryContract`` holds the behaviour; each ``Test*`` subclass
only supplies a ``repository`` fixture for one backend.
"""

import asyncio

import pytest
from mongomock_motor import AsyncMongoMockClient

from newsdesk.application.interfaces import ContentRepository
from newsdesk.domain.entities import ArticleFilter, PublishedFilter
from newsdesk.domain.exceptions import DuplicateSlugError, EntityNotFoundError, ValidationError
from newsdesk.infrastructure.database import Base, build_engine, build_session_factory
from newsdesk.infrastructure.database.repositories import SQLAlchemyContentRepository
from newsdesk.infrastructure.memory.content_repository import InMemoryContentRepository
from newsdesk.infrastructure.mongo import MongoContentRepository

ALL = ArticleFilter(published=PublishedFilter.ANY, limit=100)


class ContentRepositoryContract:
    """Backend-independent behaviour of the content repository."""

    @pytest.fixture
    async def category(self, repository: ContentRepository):
        return await repository.create_category("Technology", "technology")

    @pytest.fixture
    async def create(self, repository: ContentRepository, category, article_factory):
        """Create an article and pause so creation timestamps are strictly ordered."""

        async def _create(title: str, **overrides):
            overrides.setdefault("category_id", category.id)
            article = await repository.create_article(article_factory(title=title, **overrides))
            await asyncio.sleep(0.005)
            return article

        return _create

    # ── Categories ───────────────────────────────────────────────────

    @pytest.mark.asyncio
    async def test_implements_interface(self, repository):
        assert isinstance(repository, ContentRepository)

    @pytest.mark.asyncio
    async def test_categories_empty_by_default(self, repository):
        assert await repository.get_categories() == []

    @pytest.mark.asyncio
    async def test_create_and_lookup_category(self, repository, category):
        assert category.id is not None
        assert category.slug == "technology"
        assert await repository.get_category_by_slug("technology") == category
        assert await repository.get_category_by_id(category.id) == category

    @pytest.mark.asyncio
    async def test_category_lookup_misses_return_none(self, repository):
        assert await repository.get_category_by_slug("missing") is None
        assert await repository.get_category_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_duplicate_category_slug_rejected(self, repository, category):
        with pytest.raises(DuplicateSlugError):
            await repository.create_category("Tech again", "technology")

    @pytest.mark.asyncio
    async def test_categories_sorted_by_name_case_insensitively(self, repository):
        for name in ("banana", "Apple", "cherry"):
            await repository.create_category(name, name.lower())
        names = [c.name for c in await repository.get_categories()]
        assert names == ["Apple", "banana", "cherry"]

    # ── Create / read ────────────────────────────────────────────────

    @pytest.mark.asyncio
    async def test_create_article_round_trip(self, repository, category, create):
        created = await create("Hello, World! 2024", content="Some body text")
        assert created.id is not None
        assert created.slug == "hello-world-2024"

        found = await repository.get_article_by_id(created.id)
        assert found is not None
        assert found.article.title == "Hello, World! 2024"
        assert found.article.content == "Some body text"
        assert found.article.category_id == category.id
        assert found.article.created_at == created.created_at
        assert found.article.updated_at == created.updated_at

    @pytest.mark.asyncio
    async def test_get_by_slug_returns_record_with_category(self, repository, category, create):
        created = await create("Slug lookup")
        found = await repository.get_article_by_slug("slug-lookup")
        assert found is not None
        assert found.article == created
        assert found.category == category

    @pytest.mark.asyncio
    async def test_article_lookup_misses_return_none(self, repository):
        assert await repository.get_article_by_slug("missing") is None
        assert await repository.get_article_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_duplicate_article_slug_rejected(self, repository, create):
        await create("Same title")
        with pytest.raises(DuplicateSlugError):
            await create("Same title")

    @pytest.mark.asyncio
    async def test_create_article_requires_existing_category(self, repository, article_factory):
        with pytest.raises(EntityNotFoundError):
            await repository.create_article(article_factory(category_id="missing", title="Orphan"))

    @pytest.mark.asyncio
    async def test_returned_records_are_detached(self, repository, create):
        created = await create("Detached", tags=["a"])
        created.tags.append("mutated")
        found = await repository.get_article_by_id(created.id)
        assert found.article.tags == ["a"]

    # ── Listing ──────────────────────────────────────────────────────

    @pytest.mark.asyncio
    async def test_published_filter_is_tri_state(self, repository, create):
        await create("Live one", published=True)
        await create("Draft one", published=False)

        live = await repository.get_articles(ArticleFilter())
        drafts = await repository.get_articles(ArticleFilter(published=PublishedFilter.ONLY_DRAFTS))
        everything = await repository.get_articles(ALL)

        assert [i.article.title for i in live] == ["Live one"]
        assert [i.article.title for i in drafts] == ["Draft one"]
        assert {i.article.title for i in everything} == {"Live one", "Draft one"}

    @pytest.mark.asyncio
    async def test_articles_newest_first(self, repository, create):
        for n in range(4):
            await create(f"Article {n}")
        items = await repository.get_articles(ALL)
        stamps = [i.article.created_at for i in items]
        assert stamps == sorted(stamps, reverse=True)
        assert [i.article.title for i in items] == [f"Article {n}" for n in (3, 2, 1, 0)]

    @pytest.mark.asyncio
    async def test_pagination_applies_after_sorting(self, repository, create):
        for n in range(5):
            await create(f"Paged {n}")
        full = await repository.get_articles(ALL)
        page = await repository.get_articles(
            ArticleFilter(published=PublishedFilter.ANY, limit=2, offset=2)
        )
        assert [i.article.id for i in page] == [i.article.id for i in full[2:4]]

    @pytest.mark.asyncio
    async def test_zero_limit_returns_nothing(self, repository, create):
        await create("Anything")
        assert await repository.get_articles(ArticleFilter(limit=0)) == []

    @pytest.mark.asyncio
    async def test_filter_by_category_and_language(self, repository, category, create):
        other = await repository.create_category("Sports", "sports")
        await create("Tech English")
        await create("Tech Hindi", language="hi")
        await create("Sports English", category_id=other.id)

        by_category = await repository.get_articles(ArticleFilter(category_id=other.id))
        by_language = await repository.get_articles(ArticleFilter(language="hi"))
        both = await repository.get_articles(ArticleFilter(category_id=category.id, language="en"))

        assert [i.article.title for i in by_category] == ["Sports English"]
        assert by_category[0].category == other
        assert [i.article.title for i in by_language] == ["Tech Hindi"]
        assert [i.article.title for i in both] == ["Tech English"]

    @pytest.mark.asyncio
    async def test_unknown_category_filter_matches_nothing(self, repository, create):
        await create("Something")
        assert await repository.get_articles(ArticleFilter(category_id="missing")) == []

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_on_title_only(self, repository, create):
        await create("Budget Highlights")
        await create("Weather report", content="The budget was not discussed")

        items = await repository.get_articles(ArticleFilter(search="bUdGeT"))
        assert [i.article.title for i in items] == ["Budget Highlights"]

    @pytest.mark.asyncio
    async def test_search_folds_case_beyond_ascii(self, repository, create):
        await create("Élection Ünited Résultats")
        await create("Election results")

        items = await repository.get_articles(ArticleFilter(search="élection ünited"))
        assert [i.article.title for i in items] == ["Élection Ünited Résultats"]

    @pytest.mark.asyncio
    async def test_search_treats_pattern_characters_literally(self, repository, create):
        await create("C++ (beta) 100% ready")
        await create("Cxx beta ready")

        items = await repository.get_articles(ArticleFilter(search="C++ (beta) 100%"))
        assert [i.article.title for i in items] == ["C++ (beta) 100% ready"]

    # ── Featured / stats ─────────────────────────────────────────────

    @pytest.mark.asyncio
    async def test_featured_is_newest_published(self, repository, create):
        await create("Older", published=True)
        newest = await create("Newest", published=True)
        await create("Newer draft", published=False)

        featured = await repository.get_featured_article()
        first = await repository.get_articles(ArticleFilter(limit=1))
        assert featured is not None
        assert featured.article.id == newest.id
        assert featured == first[0]

    @pytest.mark.asyncio
    async def test_no_featured_without_published(self, repository, create):
        await create("Only a draft", published=False)
        assert await repository.get_featured_article() is None

    @pytest.mark.asyncio
    async def test_count_published(self, repository, create):
        await create("One", published=True)
        await create("Two", published=True)
        await create("Three", published=False)
        assert await repository.count_published() == 2

    # ── Update ───────────────────────────────────────────────────────

    @pytest.mark.asyncio
    async def test_update_merges_fields_and_refreshes_updated_at(self, repository, create):
        created = await create("Original", published=False)
        await asyncio.sleep(0.01)

        updated = await repository.update_article(
            created.id, {"published": True, "tags": ["x", "y"], "id": "ignored"}
        )

        assert updated.id == created.id
        assert updated.title == "Original"
        assert updated.published is True
        assert updated.tags == ["x", "y"]
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

        found = await repository.get_article_by_id(created.id)
        assert found.article == updated

    @pytest.mark.asyncio
    async def test_update_unknown_article_raises_not_found(self, repository):
        with pytest.raises(EntityNotFoundError):
            await repository.update_article("missing", {"title": "x"})

    @pytest.mark.asyncio
    async def test_update_to_foreign_slug_rejected(self, repository, create):
        first = await create("First")
        second = await create("Second")
        with pytest.raises(DuplicateSlugError):
            await repository.update_article(second.id, {"title": "First", "slug": first.slug})

    @pytest.mark.asyncio
    async def test_update_keeping_own_slug_is_allowed(self, repository, create):
        created = await create("Keep slug")
        updated = await repository.update_article(created.id, {"slug": created.slug, "excerpt": "new"})
        assert updated.slug == created.slug
        assert updated.excerpt == "new"

    @pytest.mark.asyncio
    async def test_update_to_unknown_category_rejected(self, repository, create):
        created = await create("Moving")
        with pytest.raises(EntityNotFoundError):
            await repository.update_article(created.id, {"category_id": "missing"})

    @pytest.mark.asyncio
    async def test_update_with_unknown_field_rejected(self, repository, create):
        created = await create("Strict")
        with pytest.raises(ValidationError):
            await repository.update_article(created.id, {"views": 10})

    # ── Delete ───────────────────────────────────────────────────────

    @pytest.mark.asyncio
    async def test_delete_removes_article(self, repository, create):
        created = await create("Short lived")
        await repository.delete_article(created.id)
        assert await repository.get_article_by_id(created.id) is None
        assert await repository.get_article_by_slug(created.slug) is None

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_not_an_error(self, repository, create):
        created = await create("Twice")
        await repository.delete_article(created.id)
        await repository.delete_article(created.id)
        await repository.delete_article("never-existed")


class TestInMemoryContentRepository(ContentRepositoryContract):
    """Contract suite over the in-process backend."""

    @pytest.fixture
    async def repository(self):
        return InMemoryContentRepository()


class TestSQLAlchemyContentRepository(ContentRepositoryContract):
    """Contract suite over the relational backend (in-memory SQLite)."""

    @pytest.fixture
    async def repository(self):
        engine = build_engine("sqlite:///:memory:")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        session_factory = build_session_factory(engine)
        async with session_factory() as session:
            yield SQLAlchemyContentRepository(session)
        await engine.dispose()


class TestMongoContentRepository(ContentRepositoryContract):
    """Contract suite over the document backend (mongomock-motor)."""

    @pytest.fixture
    async def repository(self):
        client = AsyncMongoMockClient()
        repository = MongoContentRepository(client["newsdesk_test"])
        await repository.ensure_indexes()
        return repository
