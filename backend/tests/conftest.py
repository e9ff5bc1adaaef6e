"""Shared test helpers."""

import pytest

from newsdesk.domain.entities import Article
from newsdesk.domain.text import derive_excerpt, estimate_read_time, slugify


def build_article(category_id: str, title: str, **overrides) -> Article:
    """An unsaved Article with slug, excerpt and read time derived the way the service does."""
    content = overrides.pop("content", f"Body of {title}.")
    fields = {
        "title": title,
        "slug": slugify(title),
        "content": content,
        "excerpt": derive_excerpt(content),
        "category_id": category_id,
        "author": "Asha Rao",
        "language": "en",
        "tags": ["news"],
        "read_time": estimate_read_time(content),
        "published": True,
    }
    fields.update(overrides)
    return Article(**fields)


@pytest.fixture
def article_factory():
    return build_article
