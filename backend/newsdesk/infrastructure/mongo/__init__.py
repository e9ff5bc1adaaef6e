from .content_repository import MongoContentRepository

__all__ = [
    "MongoContentRepository",
]
