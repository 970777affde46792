"""Annotation Schemas — likes and comments attached to a post.

Invariants:
    - Both expose `author` (user id) and `post` (post id), not nested objects
"""

from datetime import datetime

from pydantic import BaseModel, Field

from snapfeed.models.comment import Comment
from snapfeed.models.like import Like


class LikeOut(BaseModel):
    id: int
    author: int
    post: int
    created_at: datetime

    @classmethod
    def from_like(cls, like: Like) -> "LikeOut":
        return cls(
            id=like.id, author=like.user_id, post=like.post_id,
            created_at=like.created_at,
        )


class CommentCreate(BaseModel):
    comment: str = Field(min_length=1, max_length=2000)


class CommentOut(BaseModel):
    id: int
    comment: str
    author: int
    post: int
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentOut":
        return cls(
            id=comment.id, comment=comment.comment, author=comment.author_id,
            post=comment.post_id, created_at=comment.created_at,
        )
