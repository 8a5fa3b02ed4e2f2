"""Dependency injection factories for API v1."""

from functools import lru_cache

from api.dependencies.database import get_uow_factory
from core.config import settings
from domain.services.post_service import PostService
from domain.services.profile_service import ProfileService
from infrastructure.github.client import GitHubClient


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(
        get_uow_factory(),
        delete_posts_with_user=settings.delete_posts_with_user,
    )


@lru_cache
def get_post_service() -> PostService:
    """Get Post service instance (shared, it tracks background writes)."""
    return PostService(
        get_uow_factory(),
        await_comment_persistence=settings.await_comment_persistence,
    )


@lru_cache
def get_github_client() -> GitHubClient:
    """Get GitHub client instance."""
    return GitHubClient()
