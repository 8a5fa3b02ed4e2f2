"""Schemas shared by every v1 route."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class FieldError(BaseModel):
    """One entry of a validation failure's ``details``."""

    field: str
    message: str
    type: str | None = None


class ErrorResponse(BaseModel):
    """Envelope of every error answer."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": "POST_NOT_FOUND",
                "message": "Post not found",
                "details": {"post_id": "123e4567-e89b-12d3-a456-426614174000"},
            }
        },
    )

    error_code: str
    message: str
    details: list[FieldError] | dict[str, Any] | None = None


class MessageResponse(BaseModel):
    """Answer of a whole-aggregate deletion."""

    message: str
