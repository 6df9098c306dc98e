"""Pytest configuration and fixtures for taskhub.

Environment is set before taskhub.main is imported so Settings validation
passes and the app is built against an in-memory SQLite database.
Repository and API tests share one engine per test; the schema is
created with Base.metadata.create_all.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taskhub.core.config import get_settings

get_settings.cache_clear()

from taskhub.domain.enums import Role  # noqa: E402
from taskhub.infrastructure.persistence import models  # noqa: E402,F401
from taskhub.infrastructure.persistence.database import (  # noqa: E402
    Base,
    get_db,
    get_db_transactional,
)
from taskhub.infrastructure.persistence.models import User  # noqa: E402
from taskhub.main import app  # noqa: E402


@pytest.fixture
async def engine():
    """Fresh in-memory SQLite engine with the full schema."""
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Session for repository tests. Rolls back after the test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded_users(session_factory) -> dict[str, str]:
    """Insert an admin, an owner customer and an outsider customer; return their ids."""
    users = {
        "admin": User(id="u-admin", email="admin@example.com", full_name="Ada Admin", role=Role.ADMIN.value),
        "owner": User(id="u-owner", email="owner@example.com", full_name="Olga Owner", role=Role.CUSTOMER.value),
        "outsider": User(id="u-outsider", email="out@example.com", full_name="Oscar Out", role=Role.CUSTOMER.value),
    }
    async with session_factory() as session:
        async with session.begin():
            session.add_all(users.values())
    return {key: u.id for key, u in users.items()}


@pytest.fixture
async def client(session_factory) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) bound to the test database."""

    async def _get_db():
        async with session_factory() as session:
            yield session

    async def _get_db_transactional():
        async with session_factory() as session:
            async with session.begin():
                yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_db_transactional] = _get_db_transactional
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
