from .category import CategoryModel
from .article import ArticleModel

__all__ = [
    "CategoryModel",
    "ArticleModel",
]
