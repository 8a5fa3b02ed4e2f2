"""SQLAlchemy implementation of Post repository."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.entry_list import EntryList
from domain.entities.post import Comment, Like, Post, new_like_list
from infrastructure.database.models import PostModel


def _like_to_doc(like: Like) -> dict[str, Any]:
    return {"id": str(like.id), "user_id": str(like.user_id)}


def _like_from_doc(doc: dict[str, Any]) -> Like:
    return Like(id=UUID(doc["id"]), user_id=UUID(doc["user_id"]))


def _comment_to_doc(comment: Comment) -> dict[str, Any]:
    return {
        "id": str(comment.id),
        "user_id": str(comment.user_id),
        "text": comment.text,
        "name": comment.name,
        "avatar": comment.avatar,
        "date": comment.date.isoformat(),
    }


def _comment_from_doc(doc: dict[str, Any]) -> Comment:
    return Comment(
        id=UUID(doc["id"]),
        user_id=UUID(doc["user_id"]),
        text=doc["text"],
        name=doc["name"],
        avatar=doc.get("avatar"),
        date=datetime.fromisoformat(doc["date"]),
    )


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        model = await self._session.get(PostModel, id)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Post]:
        """Get every post."""
        result = await self._session.execute(select(PostModel))
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = PostModel(
            id=post.id,
            user_id=post.user_id,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            likes=[_like_to_doc(like) for like in post.likes],
            comments=[_comment_to_doc(c) for c in post.comments],
            date=post.date,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, post: Post) -> Post:
        """Write the embedded likes and comments back to the row.

        Author, snapshot and date are immutable and never rewritten.
        """
        model = await self._session.get(PostModel, post.id)

        if not model:
            raise ValueError(f"Post {post.id} not found")

        model.text = post.text
        model.likes = [_like_to_doc(like) for like in post.likes]
        model.comments = [_comment_to_doc(c) for c in post.comments]

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a post."""
        model = await self._session.get(PostModel, id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every post authored by a user."""
        stmt = delete(PostModel).where(PostModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount or 0

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            likes=new_like_list([_like_from_doc(d) for d in model.likes or []]),
            comments=EntryList(_comment_from_doc(d) for d in model.comments or []),
            date=model.date,
        )
