"""Database session configuration with connection pooling."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from loginlog.core.config import Settings, settings
from loginlog.db.base import Base

logger = logging.getLogger(__name__)


def engine_options(config: Settings) -> dict[str, Any]:
    """
    Build create_async_engine keyword arguments for the configured backend.

    SQLite has no server-side pool; an in-memory database must share a single
    connection or every checkout sees an empty database.
    """
    options: dict[str, Any] = {"echo": config.DEBUG}

    if config.is_sqlite:
        if ":memory:" in config.DATABASE_URL:
            options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
        return options

    options.update(
        pool_size=config.DATABASE_POOL_SIZE,  # Number of connections to maintain
        max_overflow=config.DATABASE_MAX_OVERFLOW,  # Additional connections allowed beyond pool_size
        pool_timeout=30,  # Seconds to wait before giving up on getting a connection
        pool_recycle=3600,  # Recycle connections after 1 hour (prevents stale connections)
        pool_pre_ping=True,  # Verify connections before using them
    )
    return options


def create_engine(config: Settings = settings) -> AsyncEngine:
    return create_async_engine(config.DATABASE_URL, **engine_options(config))


engine = create_engine()

async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(bind: AsyncEngine = engine) -> None:
    """Create missing tables. Alembic migrations remain the managed path."""
    # Models must be imported so their tables are registered on Base.metadata
    from loginlog import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def dispose_engine(bind: AsyncEngine = engine) -> None:
    await bind.dispose()
