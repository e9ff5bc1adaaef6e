"""Repository providers: the storage backend is chosen once, at startup.

A provider owns the backend's long-lived resources (engine, client, in-process
store) and hands out a ContentRepository per unit of work. The FastAPI app
receives a provider at construction time; there is no module-level storage
singleton.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine

from newsdesk.application.interfaces import ContentRepository
from newsdesk.config import Settings
from newsdesk.domain.exceptions import BackendUnavailableError
from newsdesk.infrastructure.database import Base, build_engine, build_session_factory
from newsdesk.infrastructure.database.repositories import SQLAlchemyContentRepository
from newsdesk.infrastructure.memory.content_repository import InMemoryContentRepository
from newsdesk.infrastructure.mongo import MongoContentRepository

logger = logging.getLogger(__name__)


class RepositoryProvider(ABC):
    """Owns a storage backend and opens repository units of work on it."""

    name: str = "abstract"

    async def startup(self) -> None:
        """Connect and prepare the schema. Raises BackendUnavailableError."""

    async def shutdown(self) -> None:
        """Release connections."""

    @abstractmethod
    def session(self) -> AbstractAsyncContextManager[ContentRepository]:
        """Async context manager yielding a repository for one unit of work."""
        ...


class InMemoryRepositoryProvider(RepositoryProvider):
    """Volatile store shared by every request in the process."""

    name = "memory"

    def __init__(self, repository: InMemoryContentRepository | None = None):
        self._repository = repository or InMemoryContentRepository()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[ContentRepository]:
        yield self._repository


class SQLAlchemyRepositoryProvider(RepositoryProvider):
    """Relational backend: one AsyncSession per unit of work, committed on success."""

    name = "sql"

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._session_factory = build_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "SQLAlchemyRepositoryProvider":
        return cls(build_engine(database_url, echo=echo))

    async def startup(self) -> None:
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (OperationalError, DBAPIError, OSError) as exc:
            raise BackendUnavailableError(self.name, str(exc)) from exc
        logger.info("SQL backend ready (%s)", self._engine.url.render_as_string(hide_password=True))

    async def shutdown(self) -> None:
        await self._engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[ContentRepository]:
        async with self._session_factory() as session:
            try:
                yield SQLAlchemyContentRepository(session)
                await session.commit()
            except (OperationalError, ConnectionRefusedError) as exc:
                await session.rollback()
                raise BackendUnavailableError(self.name, str(exc)) from exc
            except Exception:
                await session.rollback()
                raise


class MongoRepositoryProvider(RepositoryProvider):
    """Document backend over a shared motor client."""

    name = "mongo"

    def __init__(self, client: AsyncIOMotorClient, database: AsyncIOMotorDatabase):
        self._client = client
        self._repository = MongoContentRepository(database)

    @classmethod
    def from_url(cls, url: str, database_name: str, timeout_ms: int = 3000) -> "MongoRepositoryProvider":
        client = AsyncIOMotorClient(url, serverSelectionTimeoutMS=timeout_ms)
        return cls(client, client[database_name])

    async def startup(self) -> None:
        try:
            await self._client.admin.command("ping")
            await self._repository.ensure_indexes()
        except ConnectionFailure as exc:
            raise BackendUnavailableError(self.name, str(exc)) from exc
        logger.info("MongoDB backend ready")

    async def shutdown(self) -> None:
        self._client.close()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[ContentRepository]:
        try:
            yield self._repository
        except ConnectionFailure as exc:
            raise BackendUnavailableError(self.name, str(exc)) from exc


def build_provider(settings: Settings) -> RepositoryProvider:
    """Create the provider named by ``settings.storage_backend`` (not yet started).

    - 'memory' (default): InMemoryRepositoryProvider
    - 'sql': SQLAlchemyRepositoryProvider on ``database_url``
    - 'mongo': MongoRepositoryProvider on ``mongodb_url``/``mongodb_database``
    """
    if settings.storage_backend == "sql":
        return SQLAlchemyRepositoryProvider.from_url(
            settings.database_url,
            echo=(settings.app_env == "development" and settings.log_level_sql == "DEBUG"),
        )
    if settings.storage_backend == "mongo":
        return MongoRepositoryProvider.from_url(
            settings.mongodb_url,
            settings.mongodb_database,
            timeout_ms=settings.mongodb_timeout_ms,
        )
    return InMemoryRepositoryProvider()


async def start_provider(settings: Settings) -> RepositoryProvider:
    """Build and start the configured provider, optionally falling back to memory."""
    provider = build_provider(settings)
    try:
        await provider.startup()
    except BackendUnavailableError as exc:
        if not settings.fallback_to_memory or provider.name == "memory":
            raise
        logger.warning("%s; continuing with the in-memory backend", exc)
        await provider.shutdown()
        provider = InMemoryRepositoryProvider()
        await provider.startup()
    logger.info("Using '%s' storage backend", provider.name)
    return provider
