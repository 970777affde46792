"""Like Ledger — idempotent per-user-per-post likes.

Invariants:
    - like() twice == like() once: the second call inserts nothing and raises nothing
    - Likes on unknown posts raise ResourceNotFoundError (404)
    - list_likes() returns likes in insertion order

Design Decisions:
    - INSERT ... ON CONFLICT DO NOTHING over check-then-insert: a racing duplicate
      is resolved by the unique constraint without an exception round-trip
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.core.domain_types import PostId, UserId
from snapfeed.infrastructure.database import insert_ignore
from snapfeed.models.like import Like
from snapfeed.services.lookups import require_post

logger = logging.getLogger(__name__)


class LikeLedger:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def like(self, user_id: UserId, post_id: PostId) -> bool:
        """Record the like. Returns False when it was already recorded."""
        await require_post(self.db, post_id)
        result = await self.db.execute(
            insert_ignore(self.db, Like.__table__, ["user_id", "post_id"])
            .values(user_id=user_id, post_id=post_id),
        )
        await self.db.commit()
        created = result.rowcount == 1
        logger.info(
            "Like recorded" if created else "Like already present",
            extra={"user_id": user_id, "post_id": post_id},
        )
        return created

    async def list_likes(self, post_id: PostId) -> list[Like]:
        await require_post(self.db, post_id)
        result = await self.db.execute(
            select(Like).where(Like.post_id == post_id).order_by(Like.id),
        )
        return list(result.scalars().all())
