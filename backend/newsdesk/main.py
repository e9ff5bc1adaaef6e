"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from newsdesk.config import get_settings
from newsdesk.domain.exceptions import BackendUnavailableError
from newsdesk.infrastructure.logging.log_config import setup_logging
from newsdesk.infrastructure.providers import RepositoryProvider, start_provider
from newsdesk.infrastructure.seed import seed_sample_content
from newsdesk.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _seed(provider: RepositoryProvider) -> None:
    """Insert the sample categories/articles; failures are logged, not fatal."""
    try:
        async with provider.session() as repository:
            await seed_sample_content(repository)
    except Exception:
        logger.exception("Failed to seed sample content; continuing without it")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: resolve the storage backend once, seed, then serve."""
    settings = get_settings()
    setup_logging(settings)

    # 1. Resolve the backend, unless one was injected into create_app()
    provider: RepositoryProvider | None = app.state.provider
    if provider is None:
        provider = await start_provider(settings)
        app.state.provider = provider
    else:
        await provider.startup()

    # 2. Ensure upload directory exists
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    # 3. Sample content for fresh stores
    if settings.seed_sample_data:
        await _seed(provider)

    yield

    # Shutdown
    await provider.shutdown()


async def _backend_unavailable(request: Request, exc: BackendUnavailableError) -> JSONResponse:
    logger.error("Backend unavailable during %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


def create_app(provider: RepositoryProvider | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    ``provider`` injects a storage backend; when omitted the lifespan builds
    the one named by ``STORAGE_BACKEND``.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.provider = provider

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Raised while committing a unit of work, after the endpoint has returned
    app.add_exception_handler(BackendUnavailableError, _backend_unavailable)

    # Mount API routes
    app.include_router(api_router)

    # Uploaded images
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "newsdesk.main:app",
        host="0.0.0.0",
        port=5000,
        reload=True,
    )
