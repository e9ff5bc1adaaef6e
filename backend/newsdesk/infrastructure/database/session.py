"""SQLAlchemy engine and session factory helpers.

Engines are built by the SQL repository provider at startup; nothing here
holds module-level connection state.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool


def get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _unicode_lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None


def _register_unicode_lower(dbapi_connection, connection_record) -> None:
    # SQLite's built-in lower() only folds ASCII; icontains() relies on it.
    dbapi_connection.create_function("lower", 1, _unicode_lower)


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; in-memory SQLite shares one connection."""
    async_url = get_async_url(database_url)
    if not async_url.startswith("sqlite+aiosqlite://"):
        return create_async_engine(async_url, echo=echo, pool_pre_ping=True)

    if ":memory:" in async_url:
        engine = create_async_engine(
            async_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_async_engine(async_url, echo=echo, pool_pre_ping=True)
    event.listen(engine.sync_engine, "connect", _register_unicode_lower)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
