"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.principal import Principal
from domain.entities.user import User


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.profiles = AsyncMock()
        self.posts = AsyncMock()
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


def echo_update(uow: FakeUnitOfWork) -> None:
    """Make ``update``/``create`` on every repository return what they were given."""
    for repo in (uow.profiles, uow.posts, uow.users):
        repo.update.side_effect = lambda entity: entity
        repo.create.side_effect = lambda entity: entity


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def principal(user_id: UUID) -> Principal:
    """The principal acting in a test."""
    return Principal(id=user_id)


@pytest.fixture
def other_principal() -> Principal:
    """A principal distinct from ``principal``."""
    return Principal(id=uuid4())


@pytest.fixture
def user(user_id: UUID) -> User:
    """The User record behind ``principal``."""
    return User(id=user_id, email="jane@example.com", name="Jane Doe", avatar="https://a/j.png")
