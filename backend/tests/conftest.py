"""
Pytest configuration and fixtures for IMF Gadget API tests.
"""

import os
from typing import AsyncGenerator

# Settings are read at import time, so the environment must be ready first
os.environ["JWT_SECRET"] = "q8Zr4Lm2Wx7Np1Vb6Tc9Yh3Jk5Gf0Ds8Ua2Ei4Ol"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DEBUG"] = "false"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from imf_api.database import build_engine, build_session_factory, get_db, init_db


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def async_engine():
    """Fresh in-memory database per test."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(async_engine):
    return build_session_factory(async_engine)


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide database session for tests."""
    async with session_factory() as session:
        yield session


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def app(session_factory):
    """FastAPI application bound to the test database."""
    from imf_api.main import app as application

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API tests."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def credentials() -> dict:
    return {"email": "a@x.com", "password": "pw123456"}


@pytest_asyncio.fixture
async def token(client, credentials) -> str:
    """Register and sign in an agent, returning the session token."""
    response = await client.post("/auth/signup", json=credentials)
    assert response.status_code == 200
    response = await client.post("/auth/signin", json=credentials)
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(token) -> dict:
    return {"Authorization": f"Bearer {token}"}
