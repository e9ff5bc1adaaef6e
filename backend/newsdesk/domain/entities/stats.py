"""Aggregate numbers shown on the home page."""

from dataclasses import dataclass


@dataclass
class ArticleStats:
    total_articles: int
    todays_views: int
