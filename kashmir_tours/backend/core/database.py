"""
Database Configuration.

SQLAlchemy async engine and session management.
Uses lazy initialization to prevent import-time failures when .env is not configured.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from kashmir_tours.backend.core.logging import get_logger

logger = get_logger(__name__)

# Module-level state for lazy initialization
_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def _create_engine() -> AsyncEngine:
    """Create async SQLAlchemy engine."""
    from kashmir_tours.backend.core.config import get_app_config, get_database_url

    db_config = get_app_config().database
    url = get_database_url()

    engine_kwargs: dict[str, Any] = {"echo": db_config.echo}
    if not db_config.driver.startswith("sqlite"):
        engine_kwargs.update(
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_recycle=db_config.pool_recycle,
            pool_pre_ping=True,
        )

    engine = create_async_engine(url, **engine_kwargs)
    logger.debug(
        "Database engine created",
        extra={"driver": db_config.driver, "host": db_config.host, "database": db_config.name},
    )
    return engine


def get_engine() -> AsyncEngine:
    """
    Get the database engine, creating it on first use.

    Raises:
        RuntimeError: If database configuration is invalid
    """
    global _engine
    if _engine is None:
        _engine = _create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory, creating it on first use."""
    global _async_session_factory
    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _async_session_factory


async def dispose_engine() -> None:
    """Close all pooled connections. Called on application shutdown."""
    global _engine, _async_session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.debug("Database engine disposed")
    _engine = None
    _async_session_factory = None


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    The session commits when the request handler returns and rolls back
    if it raises.

    Usage in endpoints:
        @router.get("/tours")
        async def list_tours(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
