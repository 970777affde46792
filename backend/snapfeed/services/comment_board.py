"""Comment Board — add and list comments on a post.

Invariants:
    - Comments on unknown posts raise ResourceNotFoundError (404)
    - Listing is oldest-first and windowed by the shared pagination policy
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.core.domain_types import PageWindow, PostId, UserId
from snapfeed.models.comment import Comment
from snapfeed.services.lookups import require_post

logger = logging.getLogger(__name__)


class CommentBoard:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, author_id: UserId, post_id: PostId, text: str) -> Comment:
        await require_post(self.db, post_id)
        comment = Comment(author_id=author_id, post_id=post_id, comment=text)
        self.db.add(comment)
        await self.db.commit()
        await self.db.refresh(comment)
        logger.info("Comment added", extra={"user_id": author_id, "post_id": post_id})
        return comment

    async def list_comments(
        self, post_id: PostId, window: PageWindow,
    ) -> list[Comment]:
        await require_post(self.db, post_id)
        result = await self.db.execute(
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(Comment.id)
            .offset(window.offset)
            .limit(window.limit),
        )
        return list(result.scalars().all())
