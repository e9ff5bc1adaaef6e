from .content_service import ContentService, SlugCollisionPolicy

__all__ = [
    "ContentService",
    "SlugCollisionPolicy",
]
