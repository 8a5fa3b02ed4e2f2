"""Unit tests for ProfileService."""

from datetime import date
from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
    ValidationFailedError,
)
from domain.entities.principal import Principal
from domain.entities.profile import Education, Experience, Profile, SocialLinks
from domain.entities.user import User
from domain.services.profile_service import ProfileService
from domain.services.user_service import UserService
from tests.unit.conftest import FakeUnitOfWork, echo_update


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ProfileService:
    echo_update(uow)
    return ProfileService(lambda: uow)


@pytest.fixture
def profile(user_id: UUID) -> Profile:
    return Profile(user_id=user_id, status="Developer", skills=["python"])


# --- reads ---


class TestGetOwn:
    @pytest.mark.asyncio
    async def test_returns_profile_with_user(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        principal: Principal,
        profile: Profile,
        user: User,
    ):
        uow.profiles.get_by_user.return_value = profile
        uow.users.get.return_value = user

        result = await service.get_own(principal)

        assert result.profile is profile
        assert result.user.name == "Jane Doe"

    @pytest.mark.asyncio
    async def test_missing_profile_raises_not_found(
        self, service: ProfileService, uow: FakeUnitOfWork, principal: Principal
    ):
        uow.profiles.get_by_user.return_value = None

        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.get_own(principal)

        assert exc_info.value.message == "There is no profile for this user"


class TestGetAll:
    @pytest.mark.asyncio
    async def test_populates_users_in_one_batch(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user: User
    ):
        orphan = Profile(user_id=uuid4(), status="Student", skills=["go"])
        uow.profiles.get_all.return_value = [profile, orphan]
        uow.users.get_many.return_value = {user.id: user}

        result = await service.get_all()

        assert [item.user for item in result] == [user, None]
        uow.users.get_many.assert_called_once_with([profile.user_id, orphan.user_id])


class TestGetByUserId:
    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, service: ProfileService, uow: FakeUnitOfWork):
        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.get_by_user_id("not-a-uuid")

        assert exc_info.value.message == "Profile not found"
        uow.profiles.get_by_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.get_by_user.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.get_by_user_id(str(uuid4()))


# --- upsert ---


class TestUpsert:
    @pytest.mark.asyncio
    async def test_creates_profile_with_normalized_skills(
        self, service: ProfileService, uow: FakeUnitOfWork, principal: Principal
    ):
        uow.profiles.get_by_user.return_value = None

        result = await service.upsert(
            principal, status="Developer", skills="node, react , css", twitter="https://t/me"
        )

        assert result.profile.skills == ["node", "react", "css"]
        assert result.profile.user_id == principal.id
        assert result.profile.social.twitter == "https://t/me"
        uow.profiles.create.assert_called_once()
        uow.profiles.update.assert_not_called()
        assert uow.committed

    @pytest.mark.asyncio
    async def test_updates_existing_profile_instead_of_creating(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        principal: Principal,
        profile: Profile,
    ):
        profile.company = "Acme"
        profile.bio = "Hello"
        profile.social = SocialLinks(linkedin="https://l/me")
        uow.profiles.get_by_user.return_value = profile

        result = await service.upsert(
            principal, status="Senior Developer", skills="python,rust", company="Initech"
        )

        assert result.profile.id == profile.id
        assert result.profile.status == "Senior Developer"
        assert result.profile.skills == ["python", "rust"]
        assert result.profile.company == "Initech"
        # Omitted fields keep their stored values
        assert result.profile.bio == "Hello"
        assert result.profile.social.linkedin == "https://l/me"
        uow.profiles.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_repeated_upsert_never_creates_twice(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        principal: Principal,
    ):
        stored: list[Profile] = []

        async def get_by_user(user_id: UUID) -> Profile | None:
            return stored[0] if stored else None

        async def create(p: Profile) -> Profile:
            stored.append(p)
            return p

        uow.profiles.get_by_user.side_effect = get_by_user
        uow.profiles.create.side_effect = create

        first = await service.upsert(principal, status="Dev", skills="python")
        second = await service.upsert(principal, status="Dev", skills="python")

        assert len(stored) == 1
        assert first.profile.id == second.profile.id

    @pytest.mark.asyncio
    async def test_missing_status_is_validation_failure(
        self, service: ProfileService, uow: FakeUnitOfWork, principal: Principal
    ):
        with pytest.raises(ValidationFailedError) as exc_info:
            await service.upsert(principal, status="  ", skills="python")

        assert exc_info.value.details == [{"field": "status", "message": "status is required"}]
        uow.profiles.get_by_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_skills_without_any_skill_is_validation_failure(
        self, service: ProfileService, uow: FakeUnitOfWork, principal: Principal
    ):
        with pytest.raises(ValidationFailedError):
            await service.upsert(principal, status="Dev", skills=" , ,")

        assert not uow.committed


# --- delete ---


class TestDeleteOwn:
    @pytest.mark.asyncio
    async def test_removes_profile_and_user_but_keeps_posts(
        self, service: ProfileService, uow: FakeUnitOfWork, principal: Principal
    ):
        UserService._provisioned_users.add(principal.id)

        await service.delete_own(principal)

        uow.profiles.delete_by_user.assert_called_once_with(principal.id)
        uow.users.delete.assert_called_once_with(principal.id)
        uow.posts.delete_all_for_user.assert_not_called()
        assert uow.committed
        assert principal.id not in UserService._provisioned_users

    @pytest.mark.asyncio
    async def test_can_be_configured_to_remove_posts(
        self, uow: FakeUnitOfWork, principal: Principal
    ):
        uow.posts.delete_all_for_user.return_value = 3
        service = ProfileService(lambda: uow, delete_posts_with_user=True)

        await service.delete_own(principal)

        uow.posts.delete_all_for_user.assert_called_once_with(principal.id)


# --- experience / education ---


class TestExperience:
    @pytest.mark.asyncio
    async def test_add_puts_newest_entry_first(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        principal: Principal,
        profile: Profile,
    ):
        older = Experience(title="Intern", company="Acme", from_date=date(2018, 1, 1))
        profile.experience.push_front(older)
        uow.profiles.get_by_user.return_value = profile

        result = await service.add_experience(
            principal, title="Engineer", company="Initech", from_date=date(2020, 3, 1)
        )

        titles = [e.title for e in result.profile.experience]
        assert titles == ["Engineer", "Intern"]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_add_requires_title(
        self, service: ProfileService, uow: FakeUnitOfWork, principal: Principal
    ):
        with pytest.raises(ValidationFailedError) as exc_info:
            await service.add_experience(
                principal, title="", company="Initech", from_date=date(2020, 3, 1)
            )

        assert exc_info.value.details[0]["field"] == "title"
        uow.profiles.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_without_profile_is_not_found(
        self, service: ProfileService, uow: FakeUnitOfWork, principal: Principal
    ):
        uow.profiles.get_by_user.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.add_experience(
                principal, title="Engineer", company="Initech", from_date=date(2020, 3, 1)
            )

    @pytest.mark.asyncio
    async def test_remove_by_id(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        principal: Principal,
        profile: Profile,
    ):
        keep = Experience(title="Keep", company="A", from_date=date(2018, 1, 1))
        drop = Experience(title="Drop", company="B", from_date=date(2019, 1, 1))
        profile.experience.push_front(keep)
        profile.experience.push_front(drop)
        uow.profiles.get_by_user.return_value = profile

        result = await service.remove_experience(principal, str(drop.id))

        assert [e.title for e in result.profile.experience] == ["Keep"]

    @pytest.mark.asyncio
    async def test_remove_unknown_id_is_not_found_without_write(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        principal: Principal,
        profile: Profile,
    ):
        uow.profiles.get_by_user.return_value = profile

        with pytest.raises(ExperienceNotFoundError) as exc_info:
            await service.remove_experience(principal, str(uuid4()))

        assert exc_info.value.message == "ID not found"
        uow.profiles.update.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_remove_malformed_id_is_not_found(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        principal: Principal,
        profile: Profile,
    ):
        uow.profiles.get_by_user.return_value = profile

        with pytest.raises(ExperienceNotFoundError):
            await service.remove_experience(principal, "abc")


class TestEducation:
    @pytest.mark.asyncio
    async def test_add_and_remove(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        principal: Principal,
        profile: Profile,
    ):
        uow.profiles.get_by_user.return_value = profile

        added = await service.add_education(
            principal,
            school="MIT",
            degree="BSc",
            fieldofstudy="CS",
            from_date=date(2014, 9, 1),
            to_date=date(2018, 6, 1),
        )
        entry = next(iter(added.profile.education))
        assert entry.school == "MIT"

        removed = await service.remove_education(principal, str(entry.id))

        assert len(removed.profile.education) == 0

    @pytest.mark.asyncio
    async def test_add_lists_every_missing_field(
        self, service: ProfileService, principal: Principal
    ):
        with pytest.raises(ValidationFailedError) as exc_info:
            await service.add_education(
                principal, school="", degree="", fieldofstudy="CS", from_date=date(2014, 9, 1)
            )

        assert [e["field"] for e in exc_info.value.details] == ["school", "degree"]

    @pytest.mark.asyncio
    async def test_remove_another_users_entry_is_not_found(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        principal: Principal,
        profile: Profile,
    ):
        foreign = Education(
            school="Elsewhere", degree="BA", fieldofstudy="Art", from_date=date(2010, 1, 1)
        )
        uow.profiles.get_by_user.return_value = profile

        with pytest.raises(EducationNotFoundError):
            await service.remove_education(principal, str(foreign.id))
