from .category import Category, category_sort_key
from .article import Article, ArticleWithCategory, article_sort_key, normalize_changes
from .article_filter import ArticleFilter, PublishedFilter, DEFAULT_PAGE_SIZE
from .stats import ArticleStats

__all__ = [
    "Category",
    "category_sort_key",
    "Article",
    "ArticleWithCategory",
    "article_sort_key",
    "normalize_changes",
    "ArticleFilter",
    "PublishedFilter",
    "DEFAULT_PAGE_SIZE",
    "ArticleStats",
]
