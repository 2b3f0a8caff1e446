"""API test fixtures: async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test engine
    - db_manager patched so the readiness probe sees the test engine
    - Cookies persist across requests of one client, like a browser;
      other_client and third_client are separate browsers on the same app

Design Decisions:
    - StaticPool: every session shares the single in-memory connection,
      otherwise each new connection would see an empty database
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import community_api.infrastructure.database as db_module
from community_api.db.base import Base
from community_api.infrastructure.database import DatabaseSessionManager, get_db
from community_api.main import app
from community_api.models import Role


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
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


def _make_client(raise_app_exceptions: bool = True) -> AsyncClient:
    transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with _make_client() as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def other_client(client):
    """A second browser: same app and database, separate cookie jar."""
    async with _make_client() as c:
        yield c


# ─── Helpers ─────────────────────────────────────────────────────

@pytest.fixture
def sign_up():
    """Sign up through the API; the client keeps the session cookie."""

    async def _sign_up(
        c: AsyncClient, name: str, email: str, password: str = "secret",
    ) -> dict:
        res = await c.post(
            "/v1/auth/signup",
            json={"name": name, "email": email, "password": password},
        )
        assert res.status_code == 200, res.text
        return res.json()["content"]["data"]

    return _sign_up


@pytest.fixture
def create_community():

    async def _create(c: AsyncClient, name: str) -> dict:
        res = await c.post("/v1/community", json={"name": name})
        assert res.status_code == 200, res.text
        return res.json()["content"]["data"]

    return _create


@pytest.fixture
async def seed_role(test_db):
    """Insert a role row directly and return its id."""

    async def _seed(role_id: str, name: str) -> str:
        test_db.add(Role(id=role_id, name=name))
        await test_db.commit()
        return role_id

    return _seed


@pytest.fixture
async def third_client(client):
    async with _make_client() as c:
        yield c


@pytest.fixture
async def unguarded_client(client):
    """Client that receives the catch-all response instead of the re-raised error.

    ServerErrorMiddleware sends the handler's response and then re-raises;
    with raise_app_exceptions=False the transport keeps the response.
    """
    async with _make_client(raise_app_exceptions=False) as c:
        yield c
