"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test database
    - db_manager patched so readiness probes see the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, tables survive across sessions
    - Fixtures live here (not per-directory): services/ and api/ tests share them
"""

import os

# Never reach a real database from tests
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from campuscoffee.db.base import Base  # noqa: E402
import campuscoffee.models  # noqa: E402,F401
from campuscoffee.infrastructure.database import get_db, DatabaseSessionManager  # noqa: E402
from campuscoffee.infrastructure.user_repository import SqlAlchemyUserRepository  # noqa: E402
import campuscoffee.infrastructure.database as db_module  # noqa: E402
from campuscoffee.services.user_service import UserService  # noqa: E402
from campuscoffee.main import app  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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


@pytest.fixture
async def user_service(test_db):
    """UserService backed by the SQLite test database."""
    return UserService(SqlAlchemyUserRepository(test_db))


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
