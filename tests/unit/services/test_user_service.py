"""Unit tests for UserService."""

from uuid import UUID

import pytest
from sqlalchemy.exc import IntegrityError

from domain.entities.user import User
from domain.services.user_service import UserService
from tests.unit.conftest import FakeUnitOfWork, echo_update


@pytest.fixture
def service(uow: FakeUnitOfWork) -> UserService:
    echo_update(uow)
    return UserService(lambda: uow)


class TestEnsureUser:
    @pytest.mark.asyncio
    async def test_creates_record_for_new_subject(
        self, service: UserService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.return_value = None

        created = await service.ensure_user(
            user_id, email="jane@example.com", display_name="Jane", avatar_url="https://a/j"
        )

        assert created == User(
            id=user_id,
            email="jane@example.com",
            name="Jane",
            avatar="https://a/j",
            created_at=created.created_at,
        )
        assert uow.committed

    @pytest.mark.asyncio
    async def test_name_falls_back_to_email_local_part(
        self, service: UserService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.return_value = None

        created = await service.ensure_user(user_id, email="jdoe@example.com")

        assert created.name == "jdoe"

    @pytest.mark.asyncio
    async def test_existing_record_is_left_alone(
        self, service: UserService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.return_value = User(id=user_id, email="a@b.c", name="A")

        assert await service.ensure_user(user_id, email="a@b.c") is None
        uow.users.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_cached_subject_skips_the_database(
        self, service: UserService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.return_value = None
        await service.ensure_user(user_id, email="a@b.c")
        uow.users.get.reset_mock()

        await service.ensure_user(user_id, email="a@b.c")

        uow.users.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_forget_drops_cache_entry(
        self, service: UserService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.return_value = None
        await service.ensure_user(user_id, email="a@b.c")

        UserService.forget(user_id)
        await service.ensure_user(user_id, email="a@b.c")

        assert uow.users.get.call_count == 2

    @pytest.mark.asyncio
    async def test_race_with_same_subject_is_treated_as_provisioned(
        self, service: UserService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.side_effect = [None, User(id=user_id, email="a@b.c", name="A")]
        uow.users.create.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: users.id")
        )

        assert await service.ensure_user(user_id, email="a@b.c") is None
        assert uow.rolled_back

    @pytest.mark.asyncio
    async def test_integrity_error_without_record_propagates_and_is_not_cached(
        self, service: UserService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.return_value = None
        uow.users.create.side_effect = IntegrityError(
            "INSERT", {}, Exception("duplicate key value violates unique constraint")
        )

        with pytest.raises(IntegrityError):
            await service.ensure_user(user_id, email="a@b.c")

        uow.users.create.side_effect = lambda entity: entity
        created = await service.ensure_user(user_id, email="a@b.c")

        assert created is not None
        assert created.id == user_id

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(
        self, service: UserService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.return_value = None
        uow.users.create.side_effect = IntegrityError(
            "INSERT", {}, Exception("NOT NULL constraint failed: users.name")
        )

        with pytest.raises(IntegrityError):
            await service.ensure_user(user_id, email="a@b.c")
