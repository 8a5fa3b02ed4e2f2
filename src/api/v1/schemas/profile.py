"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    ``skills`` is a comma-separated string. Omitted optional fields keep
    their stored value on update.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "Developer",
                "skills": "python, fastapi, postgres",
                "company": "Acme",
                "githubusername": "octocat",
                "linkedin": "https://linkedin.com/in/octocat",
            }
        },
    )

    status: str = Field(..., min_length=1, max_length=255)
    skills: str = Field(..., min_length=1, max_length=1000)
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=2000)
    githubusername: str | None = Field(None, max_length=100)
    youtube: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)


class ExperienceCreate(BaseModel):
    """Schema for adding an experience entry. Dates use the keys ``from``/``to``."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = Field(None, max_length=2000)


class EducationCreate(BaseModel):
    """Schema for adding an education entry."""

    model_config = ConfigDict(populate_by_name=True)

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    fieldofstudy: str = Field(..., min_length=1, max_length=255)
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = Field(None, max_length=2000)


class UserSummary(BaseModel):
    """Owner fields populated into profile responses."""

    id: UUID
    name: str
    avatar: str | None = None


class SocialLinksResponse(BaseModel):
    youtube: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    company: str
    location: str | None
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None


class EducationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    school: str
    degree: str
    fieldofstudy: str
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    id: UUID
    user: UserSummary | None
    status: str
    skills: list[str]
    company: str | None
    website: str | None
    location: str | None
    bio: str | None
    githubusername: str | None
    social: SocialLinksResponse
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime
    updated_at: datetime


class ProfileListResponse(BaseModel):
    """Schema for list of Profiles."""

    data: list[ProfileResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class RepositoryResponse(BaseModel):
    """A public GitHub repository summary."""

    name: str
    full_name: str
    html_url: str
    description: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    watchers_count: int = 0
    forks_count: int = 0
    created_at: str | None = None


class RepositoryListResponse(BaseModel):
    data: list[RepositoryResponse]
