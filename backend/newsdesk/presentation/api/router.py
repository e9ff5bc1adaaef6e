"""Top-level API router: aggregates all endpoint routers under /api."""

from fastapi import APIRouter

from newsdesk.presentation.api.endpoints.health import router as health_router
from newsdesk.presentation.api.endpoints.articles import router as articles_router
from newsdesk.presentation.api.endpoints.categories import router as categories_router
from newsdesk.presentation.api.endpoints.search import router as search_router
from newsdesk.presentation.api.endpoints.uploads import router as uploads_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(articles_router)
router.include_router(categories_router)
router.include_router(search_router)
router.include_router(uploads_router)
