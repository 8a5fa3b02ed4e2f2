"""Profile service layer with business logic."""

from collections.abc import Callable
from datetime import date

import structlog

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
    ValidationFailedError,
)
from core.identifiers import parse_uuid
from domain.entities.principal import Principal
from domain.entities.profile import (
    Education,
    Experience,
    Profile,
    ProfileWithUser,
    parse_skills,
)
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.user_service import UserService
from domain.services.validation import require_fields

logger = structlog.get_logger()

_OWN_PROFILE_MISSING = "There is no profile for this user"


class ProfileService:
    """Service layer for the Profile aggregate.

    Experience and education entries are only ever resolved from the caller's
    own profile, so removing another user's entry is impossible by
    construction and needs no separate ownership check.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        delete_posts_with_user: bool = False,
    ) -> None:
        self._uow_factory = uow_factory
        self._delete_posts_with_user = delete_posts_with_user

    async def get_own(self, principal: Principal) -> ProfileWithUser:
        """Get the caller's profile with the owner's name and avatar."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(principal.id)
            if not profile:
                raise ProfileNotFoundError(_OWN_PROFILE_MISSING)
            return await self._with_user(uow, profile)

    async def get_all(self) -> list[ProfileWithUser]:
        """Get every profile with owner fields populated (public listing)."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.get_all()
            users = await uow.users.get_many([p.user_id for p in profiles])
            return [ProfileWithUser(profile=p, user=users.get(p.user_id)) for p in profiles]

    async def get_by_user_id(self, user_id: str) -> ProfileWithUser:
        """Get any user's profile. A malformed id is reported as not found."""
        parsed = parse_uuid(user_id)
        if parsed is None:
            raise ProfileNotFoundError()

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(parsed)
            if not profile:
                raise ProfileNotFoundError()
            return await self._with_user(uow, profile)

    async def upsert(
        self,
        principal: Principal,
        *,
        status: str,
        skills: str,
        company: str | None = None,
        website: str | None = None,
        location: str | None = None,
        bio: str | None = None,
        githubusername: str | None = None,
        youtube: str | None = None,
        facebook: str | None = None,
        twitter: str | None = None,
        instagram: str | None = None,
        linkedin: str | None = None,
    ) -> ProfileWithUser:
        """Create the caller's profile, or update the supplied fields of it.

        Optional fields that are omitted or empty are left untouched on
        update, social links included.
        """
        require_fields({"status": status, "skills": skills})
        skill_list = parse_skills(skills)
        if not skill_list:
            raise ValidationFailedError(
                [{"field": "skills", "message": "skills must list at least one skill"}]
            )

        optional = {
            "company": company,
            "website": website,
            "location": location,
            "bio": bio,
            "githubusername": githubusername,
        }
        supplied = {name: value for name, value in optional.items() if value}
        social = {
            "youtube": youtube,
            "facebook": facebook,
            "twitter": twitter,
            "instagram": instagram,
            "linkedin": linkedin,
        }

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(principal.id)

            if profile:
                profile.status = status
                profile.skills = skill_list
                for name, value in supplied.items():
                    setattr(profile, name, value)
                profile.social.merge(**social)
                profile.touch()
                saved = await uow.profiles.update(profile)
                event = "profile_updated"
            else:
                profile = Profile(
                    user_id=principal.id,
                    status=status,
                    skills=skill_list,
                    **supplied,
                )
                profile.social.merge(**social)
                saved = await uow.profiles.create(profile)
                event = "profile_created"

            await uow.commit()
            logger.info(event, user_id=str(principal.id), profile_id=str(saved.id))
            return await self._with_user(uow, saved)

    async def delete_own(self, principal: Principal) -> None:
        """Delete the caller's profile and user record.

        Posts, likes and comments the user left elsewhere are kept (their
        ``user_id`` then dangles) unless the service was built with
        ``delete_posts_with_user``, which removes the user's own posts.
        """
        async with self._uow_factory() as uow:
            await uow.profiles.delete_by_user(principal.id)
            deleted_posts = 0
            if self._delete_posts_with_user:
                deleted_posts = await uow.posts.delete_all_for_user(principal.id)
            await uow.users.delete(principal.id)
            await uow.commit()

        UserService.forget(principal.id)
        logger.info(
            "account_deleted",
            user_id=str(principal.id),
            deleted_posts=deleted_posts,
        )

    async def add_experience(
        self,
        principal: Principal,
        *,
        title: str,
        company: str,
        from_date: date,
        location: str | None = None,
        to_date: date | None = None,
        current: bool = False,
        description: str | None = None,
    ) -> ProfileWithUser:
        """Add a work history entry at the head of the caller's experience."""
        require_fields({"title": title, "company": company, "from": from_date})
        entry = Experience(
            title=title,
            company=company,
            from_date=from_date,
            location=location,
            to_date=to_date,
            current=current,
            description=description,
        )

        async with self._uow_factory() as uow:
            profile = await self._require_own_profile(uow, principal)
            profile.add_experience(entry)
            saved = await uow.profiles.update(profile)
            await uow.commit()
            logger.info("experience_added", user_id=str(principal.id), entry_id=str(entry.id))
            return await self._with_user(uow, saved)

    async def remove_experience(self, principal: Principal, entry_id: str) -> ProfileWithUser:
        """Remove an experience entry from the caller's profile by its id."""
        parsed = parse_uuid(entry_id)

        async with self._uow_factory() as uow:
            profile = await self._require_own_profile(uow, principal)
            if parsed is None or profile.remove_experience(parsed) is None:
                raise ExperienceNotFoundError(entry_id)
            saved = await uow.profiles.update(profile)
            await uow.commit()
            logger.info("experience_removed", user_id=str(principal.id), entry_id=entry_id)
            return await self._with_user(uow, saved)

    async def add_education(
        self,
        principal: Principal,
        *,
        school: str,
        degree: str,
        fieldofstudy: str,
        from_date: date,
        to_date: date | None = None,
        current: bool = False,
        description: str | None = None,
    ) -> ProfileWithUser:
        """Add an education entry at the head of the caller's education."""
        require_fields(
            {
                "school": school,
                "degree": degree,
                "fieldofstudy": fieldofstudy,
                "from": from_date,
            }
        )
        entry = Education(
            school=school,
            degree=degree,
            fieldofstudy=fieldofstudy,
            from_date=from_date,
            to_date=to_date,
            current=current,
            description=description,
        )

        async with self._uow_factory() as uow:
            profile = await self._require_own_profile(uow, principal)
            profile.add_education(entry)
            saved = await uow.profiles.update(profile)
            await uow.commit()
            logger.info("education_added", user_id=str(principal.id), entry_id=str(entry.id))
            return await self._with_user(uow, saved)

    async def remove_education(self, principal: Principal, entry_id: str) -> ProfileWithUser:
        """Remove an education entry from the caller's profile by its id."""
        parsed = parse_uuid(entry_id)

        async with self._uow_factory() as uow:
            profile = await self._require_own_profile(uow, principal)
            if parsed is None or profile.remove_education(parsed) is None:
                raise EducationNotFoundError(entry_id)
            saved = await uow.profiles.update(profile)
            await uow.commit()
            logger.info("education_removed", user_id=str(principal.id), entry_id=entry_id)
            return await self._with_user(uow, saved)

    async def _require_own_profile(self, uow: IUnitOfWork, principal: Principal) -> Profile:
        profile = await uow.profiles.get_by_user(principal.id)
        if not profile:
            raise ProfileNotFoundError(_OWN_PROFILE_MISSING)
        return profile

    async def _with_user(self, uow: IUnitOfWork, profile: Profile) -> ProfileWithUser:
        user = await uow.users.get(profile.user_id)
        return ProfileWithUser(profile=profile, user=user)
