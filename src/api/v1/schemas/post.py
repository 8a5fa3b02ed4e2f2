"""Pydantic schemas for Post API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    text: str = Field(..., min_length=1, max_length=5000)


class CommentCreate(BaseModel):
    """Schema for commenting on a Post."""

    text: str = Field(..., min_length=1, max_length=2000)


class LikeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar: str | None
    date: datetime


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "456e4567-e89b-12d3-a456-426614174000",
                "text": "Shipped the new release today",
                "name": "Jane Doe",
                "avatar": None,
                "likes": [],
                "comments": [],
                "date": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar: str | None
    likes: list[LikeResponse]
    comments: list[CommentResponse]
    date: datetime


class PostListResponse(BaseModel):
    """Schema for list of Posts, newest first."""

    data: list[PostResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class PostDetailResponse(BaseModel):
    """Schema for single Post."""

    data: PostResponse


class LikeListResponse(BaseModel):
    """A post's likes after a like/unlike."""

    data: list[LikeResponse]


class CommentListResponse(BaseModel):
    """A post's comments after adding or deleting one, newest first."""

    data: list[CommentResponse]
