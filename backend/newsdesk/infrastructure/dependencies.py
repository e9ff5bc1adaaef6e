"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status

from newsdesk.application.interfaces import ContentRepository
from newsdesk.application.services import ContentService, SlugCollisionPolicy
from newsdesk.config import get_settings
from newsdesk.infrastructure.analytics.static_view_counter import StaticViewCounter
from newsdesk.infrastructure.providers import RepositoryProvider
from newsdesk.infrastructure.storage.local_image_storage import LocalImageStorage


def get_repository_provider(request: Request) -> RepositoryProvider:
    """The provider resolved at startup and stored on ``app.state``."""
    provider: RepositoryProvider | None = getattr(request.app.state, "provider", None)
    if provider is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage backend is not initialised",
        )
    return provider


async def get_content_repository(
    provider: RepositoryProvider = Depends(get_repository_provider),
) -> AsyncGenerator[ContentRepository, None]:
    """Opens one repository unit of work per request."""
    async with provider.session() as repository:
        yield repository


async def get_content_service(
    repository: ContentRepository = Depends(get_content_repository),
) -> AsyncGenerator[ContentService, None]:
    """Provides a ContentService with its repository and view counter wired up."""
    settings = get_settings()
    yield ContentService(
        repository=repository,
        view_counter=StaticViewCounter(settings.todays_views_placeholder),
        slug_policy=SlugCollisionPolicy(settings.slug_collision_policy),
    )


def get_image_storage() -> LocalImageStorage:
    """Provides the local image store configured by settings."""
    settings = get_settings()
    return LocalImageStorage(
        upload_dir=settings.upload_dir,
        max_size_mb=settings.max_image_size_mb,
    )
