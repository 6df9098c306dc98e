"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is created from Base.metadata (create_all) by the deployment or by
tests; migrations are managed outside this service.

Engine and session factory are created lazily on first use (get_db /
get_db_transactional) so import does not trigger Settings validation.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from taskhub.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _engine_kwargs(database_url: str) -> dict[str, Any]:
    settings = get_settings()
    if database_url.startswith("sqlite"):
        # One shared connection so an in-memory database survives across sessions.
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size if settings.db_pool_size is not None else 20,
        "max_overflow": (
            settings.db_max_overflow if settings.db_max_overflow is not None else 30
        ),
        "pool_recycle": 3600,
    }


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        **_engine_kwargs(settings.database_url),
    )
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    logger.debug("Database engine created for %s", engine.url.render_as_string(hide_password=True))


def get_engine() -> Any:
    """Return the lazily created engine (for lifespan disposal and instrumentation)."""
    _ensure_engine()
    return engine


async def dispose_engine() -> None:
    """Dispose the engine if it was created and forget the session factory."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


async def get_db():
    """Database session dependency for read operations.

    Does not commit; use get_db_transactional for writes.
    Yields a session and closes it on exit.
    """
    _ensure_engine()
    async with AsyncSessionLocal() as session:
        yield session


async def get_db_transactional():
    """Database session dependency for write operations.

    Begins a transaction, commits on success, rolls back on exception.
    Task rows and their log entries share this transaction.
    Use for POST, PUT, PATCH, DELETE endpoints.
    """
    _ensure_engine()
    async with AsyncSessionLocal() as session:
        async with session.begin():
            yield session
