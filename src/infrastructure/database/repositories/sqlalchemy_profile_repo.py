"""SQLAlchemy implementation of Profile repository."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.entry_list import EntryList
from domain.entities.profile import Education, Experience, Profile, SocialLinks
from infrastructure.database.models import ProfileModel


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _experience_to_doc(entry: Experience) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "title": entry.title,
        "company": entry.company,
        "location": entry.location,
        "from": entry.from_date.isoformat(),
        "to": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def _experience_from_doc(doc: dict[str, Any]) -> Experience:
    return Experience(
        id=UUID(doc["id"]),
        title=doc["title"],
        company=doc["company"],
        location=doc.get("location"),
        from_date=date.fromisoformat(doc["from"]),
        to_date=_date_or_none(doc.get("to")),
        current=doc.get("current", False),
        description=doc.get("description"),
    )


def _education_to_doc(entry: Education) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "school": entry.school,
        "degree": entry.degree,
        "fieldofstudy": entry.fieldofstudy,
        "from": entry.from_date.isoformat(),
        "to": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def _education_from_doc(doc: dict[str, Any]) -> Education:
    return Education(
        id=UUID(doc["id"]),
        school=doc["school"],
        degree=doc["degree"],
        fieldofstudy=doc["fieldofstudy"],
        from_date=date.fromisoformat(doc["from"]),
        to_date=_date_or_none(doc.get("to")),
        current=doc.get("current", False),
        description=doc.get("description"),
    )


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = ProfileModel(id=profile.id, user_id=profile.user_id, created_at=profile.created_at)
        self._apply(profile, model)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Write every field of the aggregate back to its row."""
        model = await self._get_model(profile.user_id)

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        self._apply(profile, model)
        await self._session.flush()
        return self._to_entity(model)

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def _get_model(self, user_id: UUID) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _apply(self, entity: Profile, model: ProfileModel) -> None:
        """Copy entity state onto the model.

        JSON columns are reassigned with fresh lists so the change is detected.
        """
        model.company = entity.company
        model.website = entity.website
        model.location = entity.location
        model.bio = entity.bio
        model.status = entity.status
        model.skills = list(entity.skills)
        model.githubusername = entity.githubusername
        model.social = entity.social.as_dict()
        model.experience = [_experience_to_doc(e) for e in entity.experience]
        model.education = [_education_to_doc(e) for e in entity.education]
        model.updated_at = entity.updated_at

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            status=model.status,
            skills=list(model.skills or []),
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            githubusername=model.githubusername,
            social=SocialLinks(**(model.social or {})),
            experience=EntryList(_experience_from_doc(d) for d in model.experience or []),
            education=EntryList(_education_from_doc(d) for d in model.education or []),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
