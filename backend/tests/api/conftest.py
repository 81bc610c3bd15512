"""API test fixtures — FastAPI app wired to the per-test database.

Invariants:
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the readiness probe sees the test engine
    - auth_headers carries a valid admin bearer token

Design Decisions:
    - ASGITransport does not run the lifespan: no seed, no logging setup in API tests
    - error_client disables raise_app_exceptions so 500 responses can be asserted
"""

import pytest
from httpx import ASGITransport, AsyncClient

from user_management_api.core.security import ROLE_ADMIN, create_access_token
import user_management_api.infrastructure.database as db_module
from user_management_api.infrastructure.database import DatabaseSessionManager, get_db
from user_management_api.main import app


@pytest.fixture
def override_db(test_engine, test_session_factory):
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    yield

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def client(override_db):
    """FastAPI test client with DB dependency overridden."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def error_client(override_db):
    """Client that returns 500 responses instead of re-raising app exceptions."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def auth_headers():
    issued = create_access_token("admin", ROLE_ADMIN)
    return {"Authorization": f"Bearer {issued.token}"}


@pytest.fixture
def new_user_payload():
    return {
        "name": "Noura",
        "email": "noura@example.com",
        "password": "P@ssw0rd!",
    }


@pytest.fixture
async def created_user(client, auth_headers, new_user_payload):
    res = await client.post("/users", json=new_user_payload, headers=auth_headers)
    assert res.status_code == 201
    return res.json()
