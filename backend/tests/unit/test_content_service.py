"""Unit tests for the ContentService."""

import pytest

from newsdesk.application.schemas import ArticleCreate, ArticleUpdate, CategoryCreate
from newsdesk.application.services import ContentService, SlugCollisionPolicy
from newsdesk.domain.entities import ArticleFilter, PublishedFilter
from newsdesk.domain.exceptions import DuplicateSlugError, EntityNotFoundError
from newsdesk.infrastructure.analytics.static_view_counter import StaticViewCounter
from newsdesk.infrastructure.memory.content_repository import InMemoryContentRepository


def _service(policy: SlugCollisionPolicy = SlugCollisionPolicy.REJECT) -> ContentService:
    return ContentService(
        repository=InMemoryContentRepository(),
        view_counter=StaticViewCounter(1200),
        slug_policy=policy,
    )


@pytest.fixture
def service() -> ContentService:
    return _service()


async def _category(service: ContentService):
    return await service.create_category(CategoryCreate(name="Business News"))


def _create(category_id: str, **overrides) -> ArticleCreate:
    fields = dict(
        title="Markets Rally Again",
        content=" ".join(["word"] * 450),
        category_id=category_id,
        author="Meera Iyer",
    )
    fields.update(overrides)
    return ArticleCreate(**fields)


@pytest.mark.asyncio
async def test_create_category_derives_slug(service: ContentService):
    category = await _category(service)
    assert category.slug == "business-news"


@pytest.mark.asyncio
async def test_create_category_duplicate_rejected(service: ContentService):
    await _category(service)
    with pytest.raises(DuplicateSlugError):
        await _category(service)


@pytest.mark.asyncio
async def test_create_article_derives_slug_read_time_and_excerpt(service: ContentService):
    category = await _category(service)
    article = await service.create_article(_create(category.id))

    assert article.slug == "markets-rally-again"
    assert article.read_time == 3
    assert article.excerpt.endswith("...")
    assert len(article.excerpt) == 153
    assert article.published is False
    assert article.language == "en"


@pytest.mark.asyncio
async def test_create_article_keeps_supplied_excerpt_and_read_time(service: ContentService):
    category = await _category(service)
    article = await service.create_article(
        _create(category.id, excerpt="Short summary", read_time=7)
    )
    assert article.excerpt == "Short summary"
    assert article.read_time == 7


@pytest.mark.asyncio
async def test_create_article_unknown_category(service: ContentService):
    with pytest.raises(EntityNotFoundError):
        await service.create_article(_create("missing"))


@pytest.mark.asyncio
async def test_duplicate_title_rejected_by_default(service: ContentService):
    category = await _category(service)
    await service.create_article(_create(category.id))
    with pytest.raises(DuplicateSlugError):
        await service.create_article(_create(category.id, title="Markets rally again!"))


@pytest.mark.asyncio
async def test_suffix_policy_disambiguates_slugs():
    service = _service(SlugCollisionPolicy.SUFFIX)
    category = await _category(service)
    first = await service.create_article(_create(category.id))
    second = await service.create_article(_create(category.id))
    third = await service.create_article(_create(category.id))
    assert [first.slug, second.slug, third.slug] == [
        "markets-rally-again",
        "markets-rally-again-2",
        "markets-rally-again-3",
    ]


@pytest.mark.asyncio
async def test_symbol_only_title_falls_back_to_generic_slug(service: ContentService):
    category = await _category(service)
    article = await service.create_article(_create(category.id, title="!!!"))
    assert article.slug == "article"


@pytest.mark.asyncio
async def test_update_title_rederives_slug(service: ContentService):
    category = await _category(service)
    created = await service.create_article(_create(category.id))
    updated = await service.update_article(created.id, ArticleUpdate(title="Markets Slide"))
    assert updated.slug == "markets-slide"
    assert (await service.get_article_by_slug("markets-slide")).article.id == created.id


@pytest.mark.asyncio
async def test_update_title_collision_rejected(service: ContentService):
    category = await _category(service)
    await service.create_article(_create(category.id, title="Taken Title"))
    other = await service.create_article(_create(category.id, title="Other Title"))
    with pytest.raises(DuplicateSlugError):
        await service.update_article(other.id, ArticleUpdate(title="Taken title"))


@pytest.mark.asyncio
async def test_update_title_collision_suffixed_under_suffix_policy():
    service = _service(SlugCollisionPolicy.SUFFIX)
    category = await _category(service)
    await service.create_article(_create(category.id, title="Taken Title"))
    other = await service.create_article(_create(category.id, title="Other Title"))
    updated = await service.update_article(other.id, ArticleUpdate(title="Taken title"))
    assert updated.slug == "taken-title-2"


@pytest.mark.asyncio
async def test_update_content_recomputes_read_time(service: ContentService):
    category = await _category(service)
    created = await service.create_article(_create(category.id))
    updated = await service.update_article(created.id, ArticleUpdate(content="tiny"))
    assert updated.read_time == 1
    assert updated.slug == created.slug


@pytest.mark.asyncio
async def test_update_unknown_article(service: ContentService):
    with pytest.raises(EntityNotFoundError):
        await service.update_article("missing", ArticleUpdate(title="x"))


@pytest.mark.asyncio
async def test_update_can_clear_featured_image(service: ContentService):
    category = await _category(service)
    created = await service.create_article(_create(category.id, featured_image="/uploads/a.png"))
    updated = await service.update_article(created.id, ArticleUpdate(featured_image=None))
    assert updated.featured_image is None


@pytest.mark.asyncio
async def test_delete_is_idempotent(service: ContentService):
    category = await _category(service)
    created = await service.create_article(_create(category.id))
    await service.delete_article(created.id)
    await service.delete_article(created.id)
    with pytest.raises(EntityNotFoundError):
        await service.get_article(created.id)


@pytest.mark.asyncio
async def test_stats_count_published_and_use_view_counter(service: ContentService):
    category = await _category(service)
    await service.create_article(_create(category.id, title="Live", published=True))
    await service.create_article(_create(category.id, title="Draft"))
    stats = await service.get_article_stats()
    assert stats.total_articles == 1
    assert stats.todays_views == 1200


@pytest.mark.asyncio
async def test_search_returns_only_published_title_matches(service: ContentService):
    category = await _category(service)
    await service.create_article(_create(category.id, title="Rupee gains", published=True))
    await service.create_article(_create(category.id, title="Rupee falls"))
    results = await service.search_articles("rupee")
    assert [r.article.title for r in results] == ["Rupee gains"]


@pytest.mark.asyncio
async def test_list_articles_any_state(service: ContentService):
    category = await _category(service)
    await service.create_article(_create(category.id, title="Live", published=True))
    await service.create_article(_create(category.id, title="Draft"))
    items = await service.list_articles(ArticleFilter(published=PublishedFilter.ANY))
    assert len(items) == 2
