"""Post aggregate: post document with embedded likes and comments."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.entry_list import EntryList


@dataclass
class Like:
    """A like left on a post. At most one per user."""

    user_id: UUID
    id: UUID = field(default_factory=uuid4)


@dataclass
class Comment:
    """A comment on a post, with an author snapshot taken at creation."""

    user_id: UUID
    text: str
    name: str
    avatar: str | None = None
    id: UUID = field(default_factory=uuid4)
    date: datetime = field(default_factory=datetime.utcnow)


def _like_key(like: Like) -> UUID:
    return like.user_id


def new_like_list(likes: list[Like] | None = None) -> EntryList[Like]:
    """Likes are keyed by the liking user, not by the like's own id."""
    return EntryList(likes or (), key=_like_key)


@dataclass
class Post:
    """Domain entity for a Post."""

    user_id: UUID
    text: str
    name: str
    avatar: str | None = None
    id: UUID = field(default_factory=uuid4)
    likes: EntryList[Like] = field(default_factory=new_like_list)
    comments: EntryList[Comment] = field(default_factory=EntryList)
    date: datetime = field(default_factory=datetime.utcnow)

    def has_liked(self, user_id: UUID) -> bool:
        return user_id in self.likes

    def add_like(self, user_id: UUID) -> Like:
        like = Like(user_id=user_id)
        self.likes.push_front(like)
        return like

    def remove_like(self, user_id: UUID) -> Like | None:
        return self.likes.remove(user_id)

    def add_comment(self, comment: Comment) -> None:
        self.comments.push_front(comment)

    def remove_comment(self, comment_id: UUID) -> Comment | None:
        return self.comments.remove(comment_id)
