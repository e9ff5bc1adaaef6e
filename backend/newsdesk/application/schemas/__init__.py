from .category import CategoryCreate, CategoryResponse
from .article import (
    ArticleCreate,
    ArticleUpdate,
    ArticleResponse,
    ArticleWithCategoryResponse,
    ArticleStatsResponse,
)
from .upload import UploadResponse

__all__ = [
    "CategoryCreate",
    "CategoryResponse",
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleResponse",
    "ArticleWithCategoryResponse",
    "ArticleStatsResponse",
    "UploadResponse",
]
