"""
Database connection management.

Async engine, session factory and the FastAPI session dependency. The
engine is built from DatabaseSettings; SQLite URLs (local runs, tests)
skip the connection-pool options PostgreSQL uses.

Dependencies: sqlalchemy, docchat.configs
System role: Database connection lifecycle management
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from docchat.configs import get_settings
from docchat.configs.database import DatabaseSettings


def get_async_engine(db_config: DatabaseSettings | None = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Args:
        db_config: Database settings (application settings if None)

    Returns:
        AsyncEngine: Configured async engine
    """
    db_config = db_config or get_settings().database
    url = db_config.async_database_url

    if url.startswith("sqlite"):
        return create_async_engine(url, echo=db_config.echo_sql)

    return create_async_engine(
        url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker:
    """
    Create async session factory with explicit transaction control.

    Args:
        engine: Engine to bind (a new engine from settings if None)

    Returns:
        async_sessionmaker: Factory producing AsyncSession objects
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


_session_factory: async_sessionmaker | None = None


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one session per request.

    The session commits when the route returns and rolls back if it raises.

    Yields:
        AsyncSession: Request-scoped session
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = get_async_session_factory()

    async with _session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
