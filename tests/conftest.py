"""Pytest configuration and shared fixtures"""

import os

# Settings are read at import time; point the app at SQLite before importing it
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

import time
from typing import AsyncGenerator, Dict, Optional

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fieldops.config import settings
from fieldops.database import Base, get_db
from fieldops.main import app
from fieldops.models import User
from fieldops.services.access_control import ActorContext
from fieldops.services.auth_service import AuthService
from fieldops.services.redis_service import RedisService
from fieldops.services.session_service import SessionService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "TestPassword123!"
# bcrypt is slow on purpose; hash once per run
TEST_PASSWORD_HASH = AuthService.hash_password(TEST_PASSWORD)


class FakeRedis:
    """In-memory stand-in for the redis.asyncio client, honouring TTLs"""

    def __init__(self):
        self.store: Dict[str, str] = {}
        self.expiry: Dict[str, float] = {}

    def _purge(self, key: str) -> None:
        deadline = self.expiry.get(key)
        if deadline is not None and deadline <= time.monotonic():
            self.store.pop(key, None)
            self.expiry.pop(key, None)

    async def get(self, key: str) -> Optional[str]:
        self._purge(key)
        return self.store.get(key)

    async def setex(self, key: str, ttl: int, value) -> bool:
        self.store[key] = str(value)
        self.expiry[key] = time.monotonic() + ttl
        return True

    async def expire(self, key: str, ttl: int) -> bool:
        self._purge(key)
        if key not in self.store:
            return False
        self.expiry[key] = time.monotonic() + ttl
        return True

    async def ttl(self, key: str) -> int:
        self._purge(key)
        if key not in self.store:
            return -2
        deadline = self.expiry.get(key)
        return -1 if deadline is None else int(deadline - time.monotonic())

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
            self.expiry.pop(key, None)
        return removed

    async def incr(self, key: str) -> int:
        self._purge(key)
        value = int(self.store.get(key, 0)) + 1
        self.store[key] = str(value)
        return value

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        pass


@pytest.fixture
def client():
    """FastAPI test client fixture"""
    return TestClient(app)


@pytest.fixture(autouse=True)
def fake_redis():
    """Replace the shared Redis client with an in-memory one for every test"""
    fake = FakeRedis()
    RedisService._client = fake
    yield fake
    RedisService._client = None


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing"""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession):
    """Create async test client with database override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def _make_user(db_session: AsyncSession, email: str, role: str, first_name: str) -> User:
    user = User(
        email=email,
        first_name=first_name,
        last_name="Tester",
        role=role,
        password_hash=TEST_PASSWORD_HASH,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "admin@example.com", "admin", "Ada")


@pytest_asyncio.fixture
async def sample_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "worker@example.com", "user", "Walt")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "other@example.com", "user", "Olga")


def actor_for(user: User) -> ActorContext:
    return ActorContext(user_id=user.id, role=user.role)


async def login_as(client: AsyncClient, user: User) -> str:
    """
    Give the client a session for ``user`` without going through the
    password check; the login endpoint itself is covered in test_auth_api.
    """
    session_id = await SessionService().create(user.id)
    client.cookies.clear()
    client.cookies.set(settings.session_cookie_name, session_id)
    return session_id
