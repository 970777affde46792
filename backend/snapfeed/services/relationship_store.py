"""Relationship Store — follow edges: id sub-selects for the planner, follow/unfollow writes.

Invariants:
    - following_ids()/follower_ids()/feed_author_ids() return un-executed
      SELECTs; callers embed them as sub-queries so the edge set is never
      materialized in Python
    - follow() is insert-or-no-op on the unique (user_id, following_id) pair:
      concurrent duplicate follows resolve in the database, not via IntegrityError
    - unfollow() is idempotent (deleting a missing edge is a no-op)
    - Self-follow rejected before touching the database (check constraint backs it up)

Design Decisions:
    - Module-level sub-select builders, not methods: the planner composes them
      without needing a RelationshipStore instance or a session
"""

import logging

from sqlalchemy import CompoundSelect, Integer, Select, delete, literal, select, union
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.core.domain_types import UserId
from snapfeed.core.errors import SelfFollowError
from snapfeed.infrastructure.database import insert_ignore
from snapfeed.models.user_following import UserFollowing
from snapfeed.services.lookups import require_user

logger = logging.getLogger(__name__)


def following_ids(user_id: UserId) -> Select:
    """SELECT following_id FROM user_followings WHERE user_id = :user_id"""
    return select(UserFollowing.following_id).where(
        UserFollowing.user_id == user_id,
    )


def follower_ids(user_id: UserId) -> Select:
    """SELECT user_id FROM user_followings WHERE following_id = :user_id"""
    return select(UserFollowing.user_id).where(
        UserFollowing.following_id == user_id,
    )


def feed_author_ids(user_id: UserId) -> CompoundSelect:
    """SELECT :user_id UNION SELECT following_id FROM user_followings WHERE user_id = :user_id"""
    return union(
        select(literal(user_id, Integer).label("author_id")),
        following_ids(user_id),
    )


class RelationshipStore:
    """Writes on follow edges."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def follow(self, follower_id: UserId, followee_id: UserId) -> bool:
        """Create the edge. Returns False when it already existed."""
        if follower_id == followee_id:
            raise SelfFollowError(follower_id)
        await require_user(self.db, followee_id)

        stmt = insert_ignore(
            self.db, UserFollowing.__table__, ["user_id", "following_id"],
        ).values(user_id=follower_id, following_id=followee_id)
        result = await self.db.execute(stmt)
        await self.db.commit()

        created = result.rowcount == 1
        if created:
            logger.info(
                "Follow edge created",
                extra={"user_id": follower_id, "followee_id": followee_id},
            )
        else:
            logger.debug(
                "Follow edge already present",
                extra={"user_id": follower_id, "followee_id": followee_id},
            )
        return created

    async def unfollow(self, follower_id: UserId, followee_id: UserId) -> bool:
        """Delete the edge. Returns False when there was nothing to delete."""
        await require_user(self.db, followee_id)
        result = await self.db.execute(
            delete(UserFollowing)
            .where(UserFollowing.user_id == follower_id)
            .where(UserFollowing.following_id == followee_id),
        )
        await self.db.commit()
        removed = result.rowcount > 0
        if removed:
            logger.info(
                "Follow edge removed",
                extra={"user_id": follower_id, "followee_id": followee_id},
            )
        return removed
