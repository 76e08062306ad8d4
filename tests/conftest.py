import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CACHE_BACKEND", "memory")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from app.main import app
from app.core.cache import MemoryCache, get_cache
from app.core.security import get_password_hash
from app.db import models  # noqa: F401
from app.db.models import Category, User, UserRole
from app.db.session import get_session
from app.services.sms_provider import get_sms_provider
from tests.fakes import FakeClock, FakeSmsProvider


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return MemoryCache(clock=clock)


@pytest.fixture
def sms_provider():
    return FakeSmsProvider()


@pytest_asyncio.fixture
async def client(session_maker, cache, sms_provider):
    async def override_get_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_sms_provider] = lambda: sms_provider

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def create_user(session):
    counter = {"n": 0}

    async def _create_user(role: str = UserRole.CONSUMER.value, password: str = "secret-password") -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            name=f"User {n}",
            email=f"user{n}@example.com",
            phone=f"+1415555{n:04d}",
            password_hash=get_password_hash(password),
            role=role,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _create_user


@pytest.fixture
def login(client):
    async def _login(user: User, password: str = "secret-password") -> dict:
        res = await client.post("/api/v1/auth/login", json={"email": user.email, "password": password})
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['access_token']}"}

    return _login


@pytest_asyncio.fixture
async def category(session):
    category = Category(title="Snakes", slug="snakes", sort_order=1)
    session.add(category)
    await session.commit()
    await session.refresh(category)
    return category
