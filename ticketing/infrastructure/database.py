"""Database Session Manager: async connection pool with transactions, rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - A failing rollback/close is logged; the DatabaseError for the original failure still propagates
    - transaction() commits on success and rolls back on ANY exception, cancellation included
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py) with the original chained
    - Connection pool uses pool_pre_ping for stale connection detection
    - SQLite engines get PRAGMA foreign_keys=ON so ON DELETE CASCADE holds everywhere

Design Decisions:
    - Manager is injected into repositories, never imported as a global
      (ADR: lifespan owns the pool, tests hand in their own engine)
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)

from ticketing.core.errors import DatabaseError

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async def _rollback_quietly(session: AsyncSession) -> None:
    """Roll back without letting a dead connection replace the error being handled."""
    try:
        await session.rollback()
    except SQLAlchemyError as e:
        logger.warning(f"DB rollback failed: {e}")


async def _close_quietly(session: AsyncSession) -> None:
    try:
        await session.close()
    except SQLAlchemyError as e:
        logger.warning(f"DB session close failed: {e}")


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        if engine.dialect.name == "sqlite":
            _enable_sqlite_foreign_keys(engine)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(
        cls,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        pool_recycle: int = 3600,
    ) -> "DatabaseSessionManager":
        engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=pool_recycle,
        )
        return cls(engine)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await _rollback_quietly(session)
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit") from e
        except OperationalError as e:
            await _rollback_quietly(session)
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute") from e
        except DBAPIError as e:
            await _rollback_quietly(session)
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query") from e
        except SQLAlchemyError as e:
            await _rollback_quietly(session)
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown") from e
        finally:
            await _close_quietly(session)

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session inside one transaction: commit on exit, rollback on error."""
        async with self.session() as session:
            async with session.begin():
                yield session

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
