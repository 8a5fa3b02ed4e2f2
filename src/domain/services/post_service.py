"""Post service layer with business logic."""

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import (
    CommentNotFoundError,
    NotCommentAuthorError,
    NotPostOwnerError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    UserNotFoundError,
)
from core.identifiers import parse_uuid
from domain.entities.post import Comment, Like, Post
from domain.entities.principal import Principal, is_owner
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.validation import require_fields

logger = structlog.get_logger()


class PostService:
    """Service layer for the Post aggregate.

    Every mutation is a read-modify-write of the whole post inside one unit of
    work. Two concurrent mutations of the same post are last-writer-wins.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        await_comment_persistence: bool = True,
    ) -> None:
        self._uow_factory = uow_factory
        self._await_comment_persistence = await_comment_persistence
        self._background_tasks: set[asyncio.Task[None]] = set()

    async def create(self, principal: Principal, text: str) -> Post:
        """Create a post, snapshotting the author's current name and avatar."""
        require_fields({"text": text})

        async with self._uow_factory() as uow:
            user = await self._require_user(uow, principal)
            post = Post(
                user_id=principal.id,
                text=text,
                name=user.name,
                avatar=user.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()
            logger.info("post_created", post_id=str(created.id), user_id=str(principal.id))
            return created

    async def get_all(self) -> list[Post]:
        """Get every post, newest first."""
        async with self._uow_factory() as uow:
            posts = await uow.posts.get_all()
        return sorted(posts, key=lambda p: p.date, reverse=True)

    async def get(self, post_id: str) -> Post:
        """Get a single post. A malformed id is reported as not found."""
        async with self._uow_factory() as uow:
            return await self._require_post(uow, post_id)

    async def delete(self, principal: Principal, post_id: str) -> None:
        """Delete a post. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not is_owner(principal, post):
                raise NotPostOwnerError()
            await uow.posts.delete(post.id)
            await uow.commit()
            logger.info("post_deleted", post_id=str(post.id), user_id=str(principal.id))

    async def like(self, principal: Principal, post_id: str) -> list[Like]:
        """Like a post once. A second like by the same user is a conflict."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.has_liked(principal.id):
                raise PostAlreadyLikedError(post_id)
            post.add_like(principal.id)
            await uow.posts.update(post)
            await uow.commit()
            logger.info("post_liked", post_id=post_id, user_id=str(principal.id))
            return list(post.likes)

    async def unlike(self, principal: Principal, post_id: str) -> list[Like]:
        """Remove the caller's like. Unliking a post never liked is a conflict."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.has_liked(principal.id):
                raise PostNotLikedError(post_id)
            post.remove_like(principal.id)
            await uow.posts.update(post)
            await uow.commit()
            logger.info("post_unliked", post_id=post_id, user_id=str(principal.id))
            return list(post.likes)

    async def add_comment(self, principal: Principal, post_id: str, text: str) -> list[Comment]:
        """Add a comment at the head of the post's comments.

        With ``await_comment_persistence`` off, the write is handed to a
        background task and the comments are returned before it is durable.
        """
        require_fields({"text": text})

        async with self._uow_factory() as uow:
            user = await self._require_user(uow, principal)
            post = await self._require_post(uow, post_id)
            comment = Comment(
                user_id=principal.id,
                text=text,
                name=user.name,
                avatar=user.avatar,
            )
            post.add_comment(comment)

            if self._await_comment_persistence:
                await uow.posts.update(post)
                await uow.commit()

        if not self._await_comment_persistence:
            self._schedule(self._persist_in_background(post))

        logger.info(
            "comment_added",
            post_id=post_id,
            comment_id=str(comment.id),
            user_id=str(principal.id),
        )
        return list(post.comments)

    async def delete_comment(
        self, principal: Principal, post_id: str, comment_id: str
    ) -> list[Comment]:
        """Delete a comment. Only its author may do so, whoever owns the post."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)

            parsed = parse_uuid(comment_id)
            comment = post.comments.get(parsed) if parsed else None
            if comment is None:
                raise CommentNotFoundError(comment_id)
            if not is_owner(principal, comment):
                raise NotCommentAuthorError()

            post.remove_comment(comment.id)
            await uow.posts.update(post)
            await uow.commit()
            logger.info(
                "comment_deleted",
                post_id=post_id,
                comment_id=comment_id,
                user_id=str(principal.id),
            )
            return list(post.comments)

    async def wait_for_background_writes(self) -> None:
        """Wait until every scheduled comment write has finished."""
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks)

    def _schedule(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def _persist_in_background(self, post: Post) -> None:
        try:
            async with self._uow_factory() as uow:
                await uow.posts.update(post)
                await uow.commit()
        except Exception:
            logger.exception("comment_persist_failed", post_id=str(post.id))

    async def _require_post(self, uow: IUnitOfWork, post_id: str | UUID) -> Post:
        parsed = parse_uuid(post_id)
        post = await uow.posts.get(parsed) if parsed else None
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    async def _require_user(self, uow: IUnitOfWork, principal: Principal) -> User:
        user = await uow.users.get(principal.id)
        if not user:
            raise UserNotFoundError(str(principal.id))
        return user
