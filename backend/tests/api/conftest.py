"""API test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with both tables
    - get_db dependency overridden to use the test session factory
    - db_manager patched so /healthz probes the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific behaviour is not exercised by these routes)
"""

from contextlib import asynccontextmanager

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from library_api.db.base import Base
from library_api.infrastructure.database import get_db, DatabaseSessionManager
import library_api.infrastructure.database as db_module
import library_api.models  # noqa: F401
from library_api.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


def _fake_manager(engine, session_factory) -> DatabaseSessionManager:
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = engine
    manager._session_factory = session_factory
    return manager


@asynccontextmanager
async def _client_for(engine, session_factory):
    """AsyncClient over the app with get_db and db_manager bound to engine."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    original_manager = db_module.db_manager
    db_module.db_manager = _fake_manager(engine, session_factory)
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        ) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
        db_module.db_manager = original_manager


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async with _client_for(test_engine, test_session_factory) as c:
        yield c


@pytest.fixture
async def file_client(tmp_path):
    """Client on a file-backed SQLite database with a real connection pool.

    The in-memory engine shares one connection across sessions, so concurrent
    requests need this one.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'library.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with _client_for(engine, factory) as c:
        yield c
    await engine.dispose()


@pytest.fixture
async def broken_storage_client(tmp_path):
    """Client whose database file lives in a directory that does not exist."""
    missing = tmp_path / "missing" / "library.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{missing}")
    factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with _client_for(engine, factory) as c:
        yield c
    await engine.dispose()


@pytest.fixture
async def seed_user(test_db):
    """Insert a user directly into the test DB."""
    from library_api.models.user import User

    user = User(name="Ada Lovelace")
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user
