"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator, Callable
from typing import Any

# Configure the app for tests before anything reads settings
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["IDENTITY_SECRET_KEY"] = ""
os.environ["AWS_S3_BUCKET_NAME"] = ""

import orjson
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from core.exceptions import AvatarStorageError
from domain.entities.profile import AvatarUpload
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IdentityUser, TokenUser
from infrastructure.database.models import Base


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeIdentityDirectory:
    """Identity provider user directory backed by a dict."""

    def __init__(self) -> None:
        self.users: dict[str, IdentityUser] = {}

    async def get_user(self, user_id: str) -> IdentityUser | None:
        return self.users.get(user_id)


class FakeAvatarStore:
    """Avatar store that records uploads and deletes in memory."""

    BASE_URL = "https://avatars.test.s3.amazonaws.com/profile-images"

    def __init__(self) -> None:
        self.uploads: list[tuple[str, AvatarUpload]] = []
        self.deleted: list[str] = []
        self.fail = False

    async def upload(self, user_id: str, avatar: AvatarUpload) -> str:
        if self.fail:
            raise AvatarStorageError("Access denied! Check your AWS IAM permissions.")
        self.uploads.append((user_id, avatar))
        return f"{self.BASE_URL}/{user_id}-{len(self.uploads)}.{avatar.extension}"

    async def delete(self, url: str) -> None:
        self.deleted.append(url)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret",
        algorithm="HS256",
        expire_minutes=30,
        jwks_url="",
    )


@pytest.fixture
def headers_for(auth_provider: JWTAuthProvider) -> Callable[..., dict[str, str]]:
    """Build Authorization headers for an arbitrary user ID."""

    def _headers(user_id: str, name: str | None = None) -> dict[str, str]:
        token = auth_provider.create_token(TokenUser(id=user_id, display_name=name))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def identity_directory() -> FakeIdentityDirectory:
    return FakeIdentityDirectory()


@pytest.fixture
def avatar_store() -> FakeAvatarStore:
    return FakeAvatarStore()


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
    identity_directory: FakeIdentityDirectory,
    avatar_store: FakeAvatarStore,
) -> FastAPI:
    """
    Create the application wired to the test database and fakes.

    - Uses an in-memory SQLite database
    - Validates HS256 tokens signed with the test secret
    - Stores avatars and looks up identity users in memory
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_follow_service,
        get_like_service,
        get_notification_service,
        get_profile_service,
    )
    from domain.services.follow_service import FollowService
    from domain.services.like_service import LikeService
    from domain.services.notification_service import NotificationService
    from domain.services.profile_service import ProfileService
    from infrastructure.database.session import get_async_session
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    def uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    notifications = NotificationService(uow_factory, identity_directory=identity_directory)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app = create_app()
    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_notification_service] = lambda: notifications
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(
        uow_factory, avatar_store=avatar_store
    )
    app.dependency_overrides[get_follow_service] = lambda: FollowService(
        uow_factory, notification_service=notifications
    )
    app.dependency_overrides[get_like_service] = lambda: LikeService(
        uow_factory, notification_service=notifications
    )
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def create_profile(
    client: AsyncClient, headers_for: Callable[..., dict[str, str]]
) -> Callable[..., Any]:
    """POST a profile for ``user_id`` and return the response data."""

    async def _create(user_id: str, name: str, interests: list[str] | None = None, **form: str):
        data = {
            "name": name,
            "bio": form.pop("bio", f"{name}'s bio"),
            "headline": form.pop("headline", f"{name}'s headline"),
            "interests": orjson.dumps(interests or []).decode(),
            **form,
        }
        response = await client.post("/api/profiles", data=data, headers=headers_for(user_id))
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
