"""Query objects for article listings."""

from dataclasses import dataclass
from enum import Enum

from newsdesk.domain.entities.article import Article
from newsdesk.domain.exceptions import ValidationError

DEFAULT_PAGE_SIZE = 20


class PublishedFilter(str, Enum):
    """Which publish states a listing should include."""

    ONLY_PUBLISHED = "true"
    ONLY_DRAFTS = "false"
    ANY = "all"

    @property
    def state(self) -> bool | None:
        """The exact ``published`` value to match, or None for no restriction."""
        if self is PublishedFilter.ONLY_PUBLISHED:
            return True
        if self is PublishedFilter.ONLY_DRAFTS:
            return False
        return None


@dataclass(frozen=True)
class ArticleFilter:
    """Filter, search and pagination options for ``get_articles``.

    Results are always ordered newest first; ``limit``/``offset`` apply after
    filtering and ordering.
    """

    published: PublishedFilter = PublishedFilter.ONLY_PUBLISHED
    category_id: str | None = None
    language: str | None = None
    search: str | None = None
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise ValidationError(f"limit must be >= 0, got {self.limit}")
        if self.offset < 0:
            raise ValidationError(f"offset must be >= 0, got {self.offset}")
        if self.search == "":
            object.__setattr__(self, "search", None)

    def matches(self, article: Article) -> bool:
        """Evaluate the filter against a single article (in-process backends)."""
        state = self.published.state
        if state is not None and article.published != state:
            return False
        if self.category_id is not None and article.category_id != self.category_id:
            return False
        if self.language is not None and article.language != self.language:
            return False
        if self.search is not None and self.search.lower() not in article.title.lower():
            return False
        return True
