"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Every session is closed on every exit path, success or error
    - Connection pool uses pool_pre_ping for stale connection detection
    - SQLAlchemy exceptions map to DatabaseError (core/errors.py) via translate_store_errors
    - A driver OverflowError (value outside a column range) is a DatabaseError too

Design Decisions:
    - Manager built in the FastAPI lifespan and kept on app.state: handlers reach it
      through get_db, nothing lives in module globals
    - expire_on_commit=False: prevents lazy-load issues in async context
    - NoResultFound passes through untranslated: it is a missing-record condition,
      routes map it to 404
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, NoResultFound, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from stockroom.core.errors import DatabaseError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def translate_store_errors(operation: str) -> AsyncGenerator[None, None]:
    """Re-raise SQLAlchemy failures inside the block as DatabaseError(operation)."""
    try:
        yield
    except NoResultFound:
        raise
    except IntegrityError as e:
        logger.debug(f"DB integrity error during {operation}: {e}")
        raise DatabaseError(operation, cause=e) from e
    except OperationalError as e:
        logger.debug(f"DB operational error during {operation}: {e}")
        raise DatabaseError(operation, cause=e) from e
    except DBAPIError as e:
        logger.debug(f"DB driver error during {operation}: {e}")
        raise DatabaseError(operation, cause=e) from e
    except SQLAlchemyError as e:
        logger.debug(f"SQLAlchemy error during {operation}: {e}")
        raise DatabaseError(operation, cause=e) from e
    except OverflowError as e:
        # sqlite3 refuses out-of-range ints before SQLAlchemy can wrap them
        logger.debug(f"DB value overflow during {operation}: {e}")
        raise DatabaseError(operation, cause=e) from e


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 10, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        # SQLite (tests, local runs) manages its own pool class
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
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
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    manager: DatabaseSessionManager | None = getattr(
        request.app.state, "db_manager", None,
    )
    if manager is None:
        raise RuntimeError("Database not initialized")
    async with manager.session() as session:
        yield session
