"""Database: the pooled async engine behind every generated repository.

Invariants:
    - A failed unit of work is rolled back before the error leaves session()
    - SQLAlchemy failures surface as DatabaseError; driver text is logged, never returned
    - Repositories look up db_manager per call, so tests can swap it
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from dynamic_crud.core.errors import DatabaseError

logger = logging.getLogger(__name__)


def _to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    if isinstance(exc, IntegrityError):
        return DatabaseError("Integrity constraint violated", "commit")
    return DatabaseError("Storage unavailable or statement rejected", "query")


class DatabaseSessionManager:
    """Owns the engine and hands out one AsyncSession per repository call."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
        )
        # records stay readable after commit for serialization
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(
                f"{type(e).__name__} during repository call: {e}",
                extra={"error_code": "database_error"},
            )
            raise _to_database_error(e) from e
        finally:
            await session.close()

    async def is_reachable(self) -> bool:
        """True when a trivial statement round-trips."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DatabaseError, OSError):
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    """Create the process-wide manager. Called from the app lifespan."""
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def get_db_manager() -> DatabaseSessionManager:
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    return db_manager
