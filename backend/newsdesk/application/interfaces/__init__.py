from .content_repository import ContentRepository
from .view_counter import ViewCounter

__all__ = [
    "ContentRepository",
    "ViewCounter",
]
