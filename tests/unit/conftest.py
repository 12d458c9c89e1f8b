"""Shared fixtures for unit tests."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.profile import Profile


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.follows = AsyncMock()
        self.likes = AsyncMock()
        self.notifications = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> str:
    """An external user ID."""
    return "user_alice"


@pytest.fixture
def actor_id() -> str:
    """An external actor ID (distinct from user_id)."""
    return "user_bob"


@pytest.fixture
def profile_id() -> UUID:
    """A random profile row ID."""
    return uuid4()


def _build_profile(user_id: str = "user_alice", name: str = "Alice", **overrides: Any) -> Profile:
    fields: dict[str, Any] = {
        "user_id": user_id,
        "name": name,
        "bio": f"{name}'s bio",
        "headline": f"{name}'s headline",
        "interests": ["hiking"],
    }
    fields.update(overrides)
    return Profile(**fields)


@pytest.fixture
def make_profile() -> Callable[..., Profile]:
    """Factory for Profile entities with sensible defaults."""
    return _build_profile
