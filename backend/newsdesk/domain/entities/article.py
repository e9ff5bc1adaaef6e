"""Domain entities for articles: pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any

from newsdesk.domain.entities.category import Category
from newsdesk.domain.exceptions import ValidationError

# Fields owned by the store; never overwritten by an update.
IMMUTABLE_FIELDS = frozenset({"id", "created_at", "updated_at"})


@dataclass
class Article:
    """Core domain entity representing a published or draft article."""

    title: str
    slug: str
    content: str
    excerpt: str
    category_id: str
    author: str
    language: str = "en"
    featured_image: str | None = None
    author_avatar: str | None = None
    tags: list[str] = field(default_factory=list)
    read_time: int = 1
    published: bool = False
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, changes: dict[str, Any]) -> None:
        """Merge the given field values and refresh the updated_at timestamp."""
        for name, value in normalize_changes(changes).items():
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)


def normalize_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """Drop store-owned fields and reject names that are not Article fields."""
    known = {f.name for f in fields(Article)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise ValidationError(f"Unknown article field(s): {', '.join(unknown)}")
    cleaned = {k: v for k, v in changes.items() if k not in IMMUTABLE_FIELDS}
    if "tags" in cleaned and cleaned["tags"] is None:
        cleaned["tags"] = []
    return cleaned


@dataclass
class ArticleWithCategory:
    """Read model: an article with its category resolved at query time."""

    article: Article
    category: Category


def article_sort_key(article: Article) -> tuple[datetime, str]:
    """Newest-first ordering key (use with reverse=True); ties fall back to id."""
    return article.created_at, article.id or ""
