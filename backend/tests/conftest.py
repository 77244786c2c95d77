"""Pytest fixtures for backend tests."""

import os
from collections.abc import AsyncGenerator

# Point the application at SQLite before any loginlog module reads settings
os.environ.setdefault("DATABASE_URI", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from loginlog.api.deps import get_ingest_service, get_record_store  # noqa: E402
from loginlog.db.base import Base  # noqa: E402
from loginlog.main import app  # noqa: E402
from loginlog.services.ingest import IngestService  # noqa: E402
from loginlog.services.record_store import LoginAttemptStore  # noqa: E402

# Lowest cost bcrypt accepts; keeps hashing fast in tests
TEST_BCRYPT_ROUNDS = 4


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine backed by a throwaway SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def store(session_factory: async_sessionmaker[AsyncSession]) -> LoginAttemptStore:
    return LoginAttemptStore(session_factory)


@pytest_asyncio.fixture(scope="function")
async def broken_store(tmp_path) -> AsyncGenerator[LoginAttemptStore, None]:
    """A store whose database has no tables, so every query fails."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}", echo=False)
    yield LoginAttemptStore(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def ingest_service(store: LoginAttemptStore) -> IngestService:
    return IngestService(store, rounds=TEST_BCRYPT_ROUNDS)


async def _client_for(store: LoginAttemptStore) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_ingest_service] = lambda: IngestService(store, rounds=TEST_BCRYPT_ROUNDS)

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def client(store: LoginAttemptStore) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client bound to the test store."""
    async for ac in _client_for(store):
        yield ac


@pytest_asyncio.fixture(scope="function")
async def broken_client(broken_store: LoginAttemptStore) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client whose store cannot reach its tables."""
    async for ac in _client_for(broken_store):
        yield ac
