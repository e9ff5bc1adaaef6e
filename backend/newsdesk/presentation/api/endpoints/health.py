"""Health check endpoint: no dependencies, always available."""

from fastapi import APIRouter, Request

from newsdesk.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Returns the current application health status and active backend."""
    settings = get_settings()
    provider = getattr(request.app.state, "provider", None)
    return {
        "status": "healthy" if provider is not None else "starting",
        "version": settings.app_version,
        "environment": settings.app_env,
        "backend": provider.name if provider is not None else settings.storage_backend,
    }
