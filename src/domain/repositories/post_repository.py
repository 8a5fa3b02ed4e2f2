"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Post


class IPostRepository(Protocol):
    """Repository interface for Post aggregates."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        ...

    async def get_all(self) -> list[Post]:
        """Get every post (unordered)."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def update(self, post: Post) -> Post:
        """Persist the whole aggregate, likes and comments included."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post and return success status."""
        ...

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every post authored by a user, returning the count."""
        ...
