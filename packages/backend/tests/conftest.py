"""Test fixtures — a fresh in-memory database per test.

Each test gets its own SQLite engine (StaticPool, so every session sees
the same in-memory database) with the schema created from the models.
The app's get_db is overridden to hand out sessions from that engine,
one per request, so requests behave as they do in production: separate
sessions over a shared store.

Environment defaults are set before pressroom is imported so the
settings singleton picks them up (cheap bcrypt, test environment).
"""

import os

os.environ.setdefault("PRESSROOM_ENVIRONMENT", "test")
os.environ.setdefault("PRESSROOM_BCRYPT_ROUNDS", "4")
os.environ.setdefault("PRESSROOM_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from pressroom.db import engine as engine_module  # noqa: E402
from pressroom.db.engine import get_db  # noqa: E402
from pressroom.db.models import Base  # noqa: E402
from pressroom.main import app  # noqa: E402

API = "/api"


@pytest_asyncio.fixture()
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """A session for arranging data and inspecting what requests wrote."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client running the real auth pipeline against the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    # The health check uses the module engine directly; drop its pooled
    # connection so it is not reused from another event loop.
    await engine_module.engine.dispose()


@pytest_asyncio.fixture()
async def register(client):
    """Register a user through the API and return the response's data."""

    async def _register(
        email: str = "jane@example.com",
        password: str = "correct-horse",
        name: str = "Jane",
    ) -> dict:
        r = await client.post(
            f"{API}/register",
            json={
                "name": name,
                "email": email,
                "password": password,
                "password_confirmation": password,
            },
        )
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _register


@pytest_asyncio.fixture()
async def auth_headers(register):
    user = await register(email="writer@example.com")
    return {"Authorization": f"Bearer {user['api_token']}"}
