"""Test fixtures — every store-backed test runs against both backends.

Learn: The ``store`` fixture is parametrized over the in-memory store and
the SQLAlchemy store, so the same test body checks that both honor the
same contract.

- memory: a fresh ``MemoryStore`` per test
- sql: a fresh schema per test on SKILLSWAP_TEST_DATABASE_URL
  (defaults to an in-memory SQLite database via aiosqlite)

The ``client`` fixture overrides ``get_store`` so HTTP tests hit the
same parametrized store.
"""

import os

# Settings are read at import time, so these must be set first.
os.environ.setdefault("SKILLSWAP_BCRYPT_ROUNDS", "4")
os.environ.setdefault("SKILLSWAP_STORAGE_BACKEND", "memory")
os.environ.setdefault("SKILLSWAP_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from skillswap.db.models import Base  # noqa: E402
from skillswap.main import app  # noqa: E402
from skillswap.services.message_service import MessageService  # noqa: E402
from skillswap.services.request_service import RequestService  # noqa: E402
from skillswap.services.user_service import UserService  # noqa: E402
from skillswap.storage import MemoryStore, get_store  # noqa: E402
from skillswap.storage.sql import SqlStore  # noqa: E402

TEST_DB_URL = os.environ.get(
    "SKILLSWAP_TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:"
)


class FakeClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(seconds=1)
        return self.now


def _make_engine():
    if TEST_DB_URL.startswith("sqlite"):
        return create_async_engine(
            TEST_DB_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(TEST_DB_URL)


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request):
    """A clean store of each kind."""
    if request.param == "memory":
        yield MemoryStore()
        return

    engine = _make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    session = AsyncSession(engine, expire_on_commit=False)
    try:
        yield SqlStore(session)
    finally:
        await session.close()
        await engine.dispose()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def users(store, clock):
    return UserService(store, clock)


@pytest.fixture()
def requests_svc(store, clock):
    return RequestService(store, clock)


@pytest.fixture()
def messages_svc(store, clock):
    return MessageService(store, clock)


@pytest_asyncio.fixture()
async def alice(users):
    return await users.register("Alice@Example.com", "alice-password", "Alice")


@pytest_asyncio.fixture()
async def bob(users):
    return await users.register("bob@example.com", "bob-password", "Bob")


@pytest_asyncio.fixture()
async def carol(users):
    return await users.register("carol@example.com", "carol-password", "Carol")


@pytest_asyncio.fixture()
async def client(store):
    """HTTP client with get_store pointed at the test store.

    Learn: Auth is NOT overridden — tests register, take the token from
    the response, and send it back, so the real auth pipeline runs.
    """
    async def override_get_store():
        yield store

    app.dependency_overrides[get_store] = override_get_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture()
def signup(client):
    """Register through the API. Returns (token, user, auth headers)."""

    async def _signup(name: str, email: str | None = None, password: str = "password_123"):
        r = await client.post(
            "/api/register",
            json={
                "email": email or f"{name.lower()}@example.com",
                "password": password,
                "name": name,
            },
        )
        assert r.status_code == 201, r.text
        body = r.json()
        return body["token"], body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _signup
