"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    NOT_POST_OWNER = "NOT_POST_OWNER"
    NOT_COMMENT_AUTHOR = "NOT_COMMENT_AUTHOR"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    EXPERIENCE_NOT_FOUND = "EXPERIENCE_NOT_FOUND"
    EDUCATION_NOT_FOUND = "EDUCATION_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    GITHUB_PROFILE_NOT_FOUND = "GITHUB_PROFILE_NOT_FOUND"

    # Validation errors (422)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    POST_ALREADY_LIKED = "POST_ALREADY_LIKED"
    POST_NOT_LIKED = "POST_NOT_LIKED"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authenticated principal does not own the target resource."""

    def __init__(
        self,
        message: str = "Access denied",
        error_code: ErrorCode = ErrorCode.FORBIDDEN,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=403,
        )


class NotPostOwnerError(AuthorizationError):
    """Only the author of a post may delete it."""

    def __init__(self) -> None:
        super().__init__(
            message="User not authorized to delete this post",
            error_code=ErrorCode.NOT_POST_OWNER,
        )


class NotCommentAuthorError(AuthorizationError):
    """Only the author of a comment may delete it."""

    def __init__(self) -> None:
        super().__init__(
            message="User not authorized to delete this comment",
            error_code=ErrorCode.NOT_COMMENT_AUTHOR,
        )


class ValidationFailedError(AppException):
    """One or more required fields are missing or empty.

    ``errors`` is a list of ``{"field": ..., "message": ...}`` items, the same
    shape the request validation handler produces.
    """

    def __init__(self, errors: list[dict[str, str]]) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="Request validation failed",
            status_code=422,
            details=errors,
        )


class UserNotFoundError(AppException):
    """User record not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message="User not found",
            status_code=404,
            details={"user_id": user_id},
        )


class ProfileNotFoundError(AppException):
    """Profile not found (also raised for malformed user ids)."""

    def __init__(self, message: str = "Profile not found") -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=message,
            status_code=404,
        )


class ExperienceNotFoundError(AppException):
    """Experience entry not found in the caller's profile."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.EXPERIENCE_NOT_FOUND,
            message="ID not found",
            status_code=404,
            details={"entry_id": entry_id},
        )


class EducationNotFoundError(AppException):
    """Education entry not found in the caller's profile."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.EDUCATION_NOT_FOUND,
            message="ID not found",
            status_code=404,
            details={"entry_id": entry_id},
        )


class PostNotFoundError(AppException):
    """Post not found (also raised for malformed post ids)."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_FOUND,
            message="Post not found",
            status_code=404,
            details={"post_id": post_id},
        )


class CommentNotFoundError(AppException):
    """Comment not found on the post."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.COMMENT_NOT_FOUND,
            message="Comment does not exist",
            status_code=404,
            details={"comment_id": comment_id},
        )


class GitHubProfileNotFoundError(AppException):
    """GitHub answered with a non-success status for the username."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.GITHUB_PROFILE_NOT_FOUND,
            message="No GitHub profile found",
            status_code=404,
            details={"username": username},
        )


class PostAlreadyLikedError(AppException):
    """The principal already liked the post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_ALREADY_LIKED,
            message="Post already liked",
            status_code=409,
            details={"post_id": post_id},
        )


class PostNotLikedError(AppException):
    """The principal has not liked the post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_LIKED,
            message="Post has not yet been liked",
            status_code=409,
            details={"post_id": post_id},
        )


class UpstreamServiceError(AppException):
    """An external collaborator could not be reached.

    The message is generic; the cause is logged where the
    failure is caught.
    """

    def __init__(self, service: str) -> None:
        super().__init__(
            error_code=ErrorCode.UPSTREAM_ERROR,
            message="Upstream service unavailable",
            status_code=502,
            details={"service": service},
        )
