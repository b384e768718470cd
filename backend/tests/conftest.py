"""Root conftest: shared test configuration and in-memory database fixtures.

Invariants:
    - Every test that asks for db_manager gets a fresh in-memory SQLite database
    - The module-level db_manager is restored after each test
"""

import os

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

# Tests never reach a real PostgreSQL instance
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")

from dynamic_crud.db.base import Base  # noqa: E402
import dynamic_crud.models  # noqa: E402,F401
from dynamic_crud.infrastructure.database import DatabaseSessionManager  # noqa: E402
import dynamic_crud.infrastructure.database as db_module  # noqa: E402


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
async def db_manager(test_engine, test_session_factory):
    """Swap the process-wide session manager for one bound to the test engine."""
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager
    yield fake_manager
    db_module.db_manager = original_manager
