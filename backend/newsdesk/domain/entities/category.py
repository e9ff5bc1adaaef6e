"""Domain entity for article categories."""

import unicodedata
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Category:
    """A named grouping of articles. Created once, never renamed by the API."""

    name: str
    slug: str
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def category_sort_key(category: Category) -> tuple[str, str]:
    """Locale-aware ordering key: normalized, case-folded name, then slug."""
    return unicodedata.normalize("NFKC", category.name).casefold(), category.slug
