"""Profile aggregate: profile document with embedded experience and education."""

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from uuid import UUID, uuid4

from domain.entities.entry_list import EntryList
from domain.entities.user import User


@dataclass
class SocialLinks:
    """Optional social network URLs."""

    youtube: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None

    def merge(self, **links: str | None) -> None:
        """Overwrite the links that were supplied, keep the others."""
        for f in fields(self):
            value = links.get(f.name)
            if value:
                setattr(self, f.name, value)

    def as_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}


@dataclass
class Experience:
    """A work history entry."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Education:
    """An education history entry."""

    school: str
    degree: str
    fieldofstudy: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


def parse_skills(raw: str) -> list[str]:
    """Split a comma-delimited skills string into trimmed, non-empty items."""
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


@dataclass
class Profile:
    """Domain entity for a user's professional profile (one per user)."""

    user_id: UUID
    status: str
    skills: list[str]
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    social: SocialLinks = field(default_factory=SocialLinks)
    experience: EntryList[Experience] = field(default_factory=EntryList)
    education: EntryList[Education] = field(default_factory=EntryList)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def add_experience(self, entry: Experience) -> None:
        self.experience.push_front(entry)
        self.touch()

    def remove_experience(self, entry_id: UUID) -> Experience | None:
        removed = self.experience.remove(entry_id)
        if removed:
            self.touch()
        return removed

    def add_education(self, entry: Education) -> None:
        self.education.push_front(entry)
        self.touch()

    def remove_education(self, entry_id: UUID) -> Education | None:
        removed = self.education.remove(entry_id)
        if removed:
            self.touch()
        return removed

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass(frozen=True, slots=True)
class ProfileWithUser:
    """Read-only value object: a Profile bundled with its owner's record."""

    profile: Profile
    user: User | None
