"""
Bars API Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Overview:
    Unit tests (no database):
    ├── mock_db_session: AsyncMock standing in for AsyncSession
    ├── owner / stranger: lightweight user stand-ins
    └── sample_bar: MagicMock shaped like a Bar row

    API tests (temporary SQLite database):
    ├── database: creates all tables before the test, drops them after
    ├── test_client: HTTPX AsyncClient bound to the FastAPI app
    └── make_user: signs up + signs in a user, returns (user_json, headers)
"""

import os
import tempfile
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Must run before any bars_api import: settings and the engine are created
# at module import time
_db_dir = tempfile.mkdtemp(prefix="bars_api_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.get.return_value = bar
        await bar_service.delete_bar(mock_db_session, owner, bar.id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def owner():
    return SimpleNamespace(id=uuid4(), email="owner@example.com")


@pytest.fixture
def stranger():
    return SimpleNamespace(id=uuid4(), email="stranger@example.com")


@pytest.fixture
def sample_bar(owner):
    """A Bar-shaped mock owned by `owner`."""
    now = datetime.now(timezone.utc)
    bar = MagicMock()
    bar.id = uuid4()
    bar.name = "Joe's"
    bar.city = "Boston"
    bar.address = "1 Main St"
    bar.price = "$$"
    bar.owner_id = owner.id
    bar.owner = owner
    bar.created_at = now
    bar.updated_at = now
    return bar


# ══════════════════════════════════════════════════════════════════════════
# API-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database():
    """Fresh schema for every test."""
    from bars_api.database import dispose_engine, drop_models, init_models

    await init_models()
    yield
    await drop_models()
    await dispose_engine()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient routed straight into the FastAPI app (no server).

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/bars")
            assert response.status_code == 200
    """
    from bars_api.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_user(test_client):
    """
    Factory: sign up and sign in a user.

    Returns (user_dict, auth_headers) where user_dict contains id, email
    and token from the sign-in response.
    """

    async def _make_user(email: str, password: str = "s3cret-pass"):
        response = await test_client.post(
            "/sign-up",
            json={
                "credentials": {
                    "email": email,
                    "password": password,
                    "password_confirmation": password,
                }
            },
        )
        assert response.status_code == 201, response.text

        response = await test_client.post(
            "/sign-in",
            json={"credentials": {"email": email, "password": password}},
        )
        assert response.status_code == 201, response.text
        user = response.json()["user"]
        return user, {"Authorization": f"Bearer {user['token']}"}

    return _make_user
