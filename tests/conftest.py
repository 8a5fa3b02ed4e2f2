"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Generator
from contextlib import asynccontextmanager
from pathlib import Path
from uuid import uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.services.user_service import UserService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base

# Test database URL (SQLite in memory, one connection shared per test)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory bound to the test database."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture(autouse=True)
def _reset_user_cache() -> None:
    """Each test starts with an empty database, so forget provisioned users."""
    UserService.clear_provisioned_cache()


@pytest.fixture
def test_user() -> TokenUser:
    """The primary test user."""
    return TokenUser(
        id=uuid4(),
        email="test@example.com",
        display_name="Test User",
        avatar_url="https://avatars.example.com/test.png",
    )


@pytest.fixture
def other_user() -> TokenUser:
    """A second user, for ownership checks."""
    return TokenUser(
        id=uuid4(),
        email="other@example.com",
        display_name="Other User",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
) -> Generator[FastAPI, None, None]:
    """
    Create an app wired to the test database.

    Services are rebuilt on a UoW factory that uses the in-memory database and
    the auth provider is swapped for the test one. Requests still carry real
    bearer tokens (see ``make_client``).
    """
    from api.dependencies.auth import get_auth_provider, get_user_service
    from api.v1.dependencies import get_post_service, get_profile_service
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from infrastructure.database.session import get_async_session
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    user_service = UserService(test_uow_factory)
    profile_service = ProfileService(test_uow_factory)
    post_service = PostService(test_uow_factory)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_post_service] = lambda: post_service

    async def test_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = test_session

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def make_client(app: FastAPI, auth_provider: JWTAuthProvider):
    """
    Build a client that authenticates as the given user.

    Each client sends a real bearer token for its user, so several users can
    act against the same app in one test.
    """

    @asynccontextmanager
    async def _make(user: TokenUser) -> AsyncGenerator[AsyncClient, None]:
        token = auth_provider.create_token(user)
        transport = ASGITransport(app=app)
        async with AsyncClient(
            transport=transport,
            base_url="http://test",
            headers={"Authorization": f"Bearer {token}"},
        ) as c:
            yield c

    return _make


@pytest.fixture
async def authenticated_client(
    make_client, test_user: TokenUser
) -> AsyncGenerator[AsyncClient, None]:
    """Client authenticated as ``test_user``."""
    async with make_client(test_user) as c:
        yield c


@pytest.fixture
async def other_client(make_client, other_user: TokenUser) -> AsyncGenerator[AsyncClient, None]:
    """Client authenticated as ``other_user``."""
    async with make_client(other_user) as c:
        yield c
