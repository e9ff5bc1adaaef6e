"""Pydantic DTOs (Data Transfer Objects) for the Article feature.

JSON field names are camelCase (``categoryId``, ``readTime`` ...) to match
what the frontend sends and expects; snake_case is accepted on input too.
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

from newsdesk.application.schemas.category import CategoryResponse
from newsdesk.domain.entities import ArticleWithCategory

_CAMEL = {
    "alias_generator": to_camel,
    "populate_by_name": True,
}

# Fields that may be cleared with an explicit null on update.
_NULLABLE_ON_UPDATE = frozenset({"featured_image", "author_avatar", "tags"})


class ArticleCreate(BaseModel):
    """Schema for creating a new article. Slug and read time are derived server-side."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Digital payments: a new era"])
    content: str = Field(..., min_length=1)
    excerpt: str | None = None
    featured_image: str | None = None
    category_id: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1, max_length=100)
    author_avatar: str | None = None
    language: str = Field("en", min_length=1, max_length=10, examples=["en", "hi", "mr", "ta"])
    tags: list[str] = Field(default_factory=list)
    read_time: int | None = Field(None, ge=1)
    published: bool = False

    model_config = _CAMEL


class ArticleUpdate(BaseModel):
    """Schema for updating an existing article: all fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    excerpt: str | None = None
    featured_image: str | None = None
    category_id: str | None = Field(None, min_length=1)
    author: str | None = Field(None, min_length=1, max_length=100)
    author_avatar: str | None = None
    language: str | None = Field(None, min_length=1, max_length=10)
    tags: list[str] | None = None
    read_time: int | None = Field(None, ge=1)
    published: bool | None = None

    model_config = _CAMEL

    @model_validator(mode="after")
    def _reject_null_required_fields(self) -> "ArticleUpdate":
        for name in self.model_fields_set:
            if name not in _NULLABLE_ON_UPDATE and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    slug: str
    content: str
    excerpt: str
    featured_image: str | None
    category_id: str
    author: str
    author_avatar: str | None
    language: str
    tags: list[str]
    read_time: int
    published: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True, **_CAMEL}


class ArticleWithCategoryResponse(ArticleResponse):
    """Article plus its category, embedded by value."""

    category: CategoryResponse

    @classmethod
    def from_entity(cls, item: ArticleWithCategory) -> "ArticleWithCategoryResponse":
        base = ArticleResponse.model_validate(item.article, from_attributes=True)
        return cls(
            **base.model_dump(),
            category=CategoryResponse.model_validate(item.category, from_attributes=True),
        )


class ArticleStatsResponse(BaseModel):
    total_articles: int
    todays_views: int

    model_config = {"from_attributes": True, **_CAMEL}
