"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from quill.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg-backed engine described by `settings.database`."""
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used for one session per request.

    Objects stay loaded after commit since repositories map rows to domain
    models before the request ends.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
