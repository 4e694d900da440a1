"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Environment is forced to "test" before any stockroom module is imported
    - Every test gets a fresh in-memory SQLite database with the full schema

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route and
      repository tests (PostgreSQL-specific features not exercised)
"""

import logging
import os

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from stockroom.core.domain_types import Environment  # noqa: E402
from stockroom.db.base import Base  # noqa: E402
from stockroom.infrastructure.observability import ContextLogger  # noqa: E402
import stockroom.models  # noqa: E402,F401


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


@pytest.fixture
def context_logger():
    """ContextLogger in the test environment (no stacks, no debug)."""
    return ContextLogger(logging.getLogger("stockroom.tests"), Environment.TEST)
