"""Database Session Manager — error translation, rollback and health checks.

Invariants:
    - translate_store_errors maps SQLAlchemy failures and driver overflow to DatabaseError(operation)
    - NoResultFound and non-store exceptions pass through unchanged
    - session() rolls back and closes on error
    - health_check is True for a reachable store and False otherwise
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, NoResultFound, OperationalError, SQLAlchemyError,
)

from stockroom.core.errors import DatabaseError, ErrorKind
from stockroom.infrastructure.database import (
    DatabaseSessionManager, translate_store_errors,
)


@pytest.mark.parametrize("cause", [
    IntegrityError("INSERT", {}, Exception("unique")),
    OperationalError("SELECT", {}, Exception("timeout")),
    DBAPIError("SELECT", {}, Exception("driver")),
    SQLAlchemyError("generic"),
    OverflowError("Python int too large to convert to SQLite INTEGER"),
])
async def test_store_errors_become_database_error(cause):
    with pytest.raises(DatabaseError) as exc_info:
        async with translate_store_errors("update"):
            raise cause
    assert exc_info.value.kind is ErrorKind.DATABASE
    assert exc_info.value.operation == "update"
    assert exc_info.value.cause is cause
    assert exc_info.value.__cause__ is cause


async def test_no_result_found_passes_through():
    with pytest.raises(NoResultFound):
        async with translate_store_errors("delete"):
            raise NoResultFound("No row was found")


async def test_other_exceptions_pass_through():
    with pytest.raises(ValueError):
        async with translate_store_errors("get"):
            raise ValueError("not a store error")


async def test_health_check_true_for_sqlite():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    try:
        assert await manager.health_check() is True
    finally:
        await manager.close()


async def test_health_check_false_when_unreachable(tmp_path):
    missing = tmp_path / "no-such-dir" / "store.db"
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{missing}")
    try:
        assert await manager.health_check() is False
    finally:
        await manager.close()


async def test_session_rolls_back_and_closes_on_error():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    fake_session = AsyncMock()
    manager._session_factory = lambda: fake_session
    try:
        with pytest.raises(RuntimeError):
            async with manager.session():
                raise RuntimeError("handler failed")
    finally:
        await manager.close()
    fake_session.rollback.assert_awaited_once()
    fake_session.close.assert_awaited_once()


async def test_session_closes_without_rollback_on_success():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    fake_session = AsyncMock()
    manager._session_factory = lambda: fake_session
    try:
        async with manager.session() as db:
            assert db is fake_session
    finally:
        await manager.close()
    fake_session.rollback.assert_not_awaited()
    fake_session.close.assert_awaited_once()
