"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - One engine (one bounded pool) per process, created by init_db, disposed by close_db
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to StorageError (core/errors.py); detail is logged only
    - No retries: every statement is attempted at most once

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - max_overflow=0 + pool_timeout: excess requests queue for a free connection, then
      fail as a storage error instead of opening unbounded connections
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import make_url, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from library_api.core.errors import StorageError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def storage_errors(operation: str) -> AsyncGenerator[None, None]:
    """Translate SQLAlchemy failures inside the block into StorageError."""
    try:
        yield
    except IntegrityError as e:
        logger.error(
            f"DB integrity error during {operation}: {e}",
            extra={"operation": operation},
        )
        raise StorageError(operation, "Integrity constraint violated") from e
    except PoolTimeoutError as e:
        logger.error(
            f"DB pool exhausted during {operation}: {e}",
            extra={"operation": operation},
        )
        raise StorageError(operation, "Connection pool exhausted") from e
    except OperationalError as e:
        logger.error(
            f"DB operational error during {operation}: {e}",
            extra={"operation": operation},
        )
        raise StorageError(operation, "Connection or operational error") from e
    except DBAPIError as e:
        logger.error(
            f"DB driver error during {operation}: {e}",
            extra={"operation": operation},
        )
        raise StorageError(operation, "Database driver error") from e
    except SQLAlchemyError as e:
        logger.error(
            f"SQLAlchemy error during {operation}: {e}",
            extra={"operation": operation},
        )
        raise StorageError(operation, "Database operation failed") from e


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 0,
        pool_timeout: float = 30.0,
    ):
        pool_kwargs = {}
        # SQLite (local dev) uses StaticPool/NullPool, which reject queue sizing
        if make_url(database_url).get_backend_name() != "sqlite":
            pool_kwargs = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_timeout": pool_timeout,
                "pool_recycle": 3600,
            }
        self.engine = create_async_engine(
            database_url, pool_pre_ping=True, **pool_kwargs,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        """Dispose the engine, closing every pooled connection."""
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.close()
        logger.info("Database connections closed")
    db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise StorageError("open a database session", "Database not initialized")
    async with db_manager.session() as session:
        yield session
