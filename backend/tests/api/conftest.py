"""API test fixtures — FastAPI test client over the in-memory test database.

Invariants:
    - get_db dependency overridden to use the test session factory
    - app.state.db_manager points at the test engine for the readiness probe
    - Default ASGITransport (raise_app_exceptions=True): any exception that escapes
      the app to the server fails the test

Design Decisions:
    - Lifespan not run by ASGITransport: state that lifespan would create is patched in here
"""

import pytest
from httpx import ASGITransport, AsyncClient

from stockroom.infrastructure.database import DatabaseSessionManager, get_db
from stockroom.main import app


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = getattr(app.state, "db_manager", None)
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db_manager = original_manager


@pytest.fixture
def override_repository():
    """Install a stand-in repository for failure-injection tests."""
    from stockroom.api.dependencies import get_product_repository

    def install(repo):
        app.dependency_overrides[get_product_repository] = lambda: repo

    return install


@pytest.fixture
async def seed_product(client):
    """Create one product through the API and return its JSON."""
    res = await client.post(
        "/api/products",
        json={
            "name": "Widget",
            "description": "A blue widget",
            "quantity": 5,
            "imageUrl": "https://example.com/widget.png",
        },
    )
    assert res.status_code == 201
    return res.json()
