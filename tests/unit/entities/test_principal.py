"""Unit tests for the ownership check."""

from uuid import uuid4

from domain.entities.post import Comment, Post
from domain.entities.principal import Principal, is_owner


class TestIsOwner:
    def test_author_owns_post(self):
        author = Principal(id=uuid4())
        post = Post(user_id=author.id, text="hello", name="Author")

        assert is_owner(author, post)

    def test_other_user_does_not_own_post(self):
        post = Post(user_id=uuid4(), text="hello", name="Author")

        assert not is_owner(Principal(id=uuid4()), post)

    def test_comment_ownership_ignores_post_owner(self):
        post_owner = Principal(id=uuid4())
        commenter = Principal(id=uuid4())
        post = Post(user_id=post_owner.id, text="hello", name="Owner")
        comment = Comment(user_id=commenter.id, text="nice", name="Commenter")
        post.add_comment(comment)

        assert is_owner(commenter, comment)
        assert not is_owner(post_owner, comment)
