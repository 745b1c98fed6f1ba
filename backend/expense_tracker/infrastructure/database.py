"""Expense Store Connection - engine, request-scoped sessions, storage error mapping.

Invariants:
    - One AsyncSession per request; closed on every exit path, cancellation included
    - A storage failure rolls the session back before DatabaseError is raised
    - Driver exceptions never cross this module: callers only see DatabaseError
    - SQLite URLs (tests, local runs) get no pool sizing arguments

Design Decisions:
    - Module-level db_manager set by init_db during lifespan; get_db reads it lazily
      so tests can swap the manager without touching the app
    - expire_on_commit=False: handlers return entities after save_changes()
      without triggering lazy loads outside the session
    - Error mapping is an ordered table (most specific first) instead of stacked excepts
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from expense_tracker.core.errors import DatabaseError
from expense_tracker.db.base import Base

logger = logging.getLogger(__name__)

POOL_RECYCLE_SECONDS = 3600

# (exception type, client-safe message, operation) - first match wins
STORAGE_ERROR_MAP: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Expense store unavailable", "execute"),
    (DBAPIError, "Expense store driver error", "query"),
    (SQLAlchemyError, "Expense store operation failed", "unknown"),
)


def build_engine(
    database_url: str, pool_size: int, max_overflow: int,
) -> AsyncEngine:
    options: dict = {"pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_recycle=POOL_RECYCLE_SECONDS,
        )
    return create_async_engine(database_url, **options)


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    """Translate a SQLAlchemy exception into the domain DatabaseError."""
    for exc_type, message, operation in STORAGE_ERROR_MAP:
        if isinstance(exc, exc_type):
            return DatabaseError(message, operation)
    return DatabaseError("Expense store operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = build_engine(database_url, pool_size, max_overflow)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            await session.rollback()
            error = to_database_error(exc)
            logger.error(
                f"Storage failure during {error.operation}: {exc}",
                extra={"error_code": error.code},
            )
            raise error from exc
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create the schema without migrations (local runs and tests)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """True when a trivial round-trip to the store succeeds."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as exc:
            logger.error(f"Readiness check failed: {exc}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
