"""Query Planner — feed, follower/following posts, and follower/following listings.

Invariants:
    - Every listing issues exactly two statements: the subject lookup (404 on miss)
      and ONE ordered, windowed SELECT whose author/user filter is a sub-select on
      user_followings. Follow edges are never fetched into Python first.
    - Post listings order by created_at DESC, then id DESC (stable across pages)
    - User listings order by edge id ASC (follow insertion order)
    - Post listings load only id, description, author_id, created_at; the image
      blob and relationships are never touched

Design Decisions:
    - Feed filter is `author_id IN (SELECT :me UNION SELECT following_id ...)`: the
      author set is one sub-select shared with resolve_feed_author_set(), so the
      listing and the set can never disagree
    - The id tiebreak is an addition over plain created_at ordering so that offset
      pagination partitions the feed even when several posts share a timestamp
"""

import logging

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only

from snapfeed.core.domain_types import FollowDirection, PageWindow, UserId
from snapfeed.models.post import Post
from snapfeed.models.user import User
from snapfeed.models.user_following import UserFollowing
from snapfeed.services.lookups import require_user
from snapfeed.services.relationship_store import (
    feed_author_ids, follower_ids, following_ids,
)

logger = logging.getLogger(__name__)


class FeedQueryPlanner:
    """Set-based read queries over the follow graph and posts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Author sets ────────────────────────────────────────────

    async def resolve_feed_author_set(self, user_id: UserId) -> set[UserId]:
        """{user_id} ∪ everyone user_id follows, as ids.

        Executes the same sub-select list_feed() embeds; listings never call this.
        """
        await require_user(self.db, user_id)
        result = await self.db.execute(feed_author_ids(user_id))
        return {UserId(author_id) for author_id in result.scalars()}

    # ─── Post listings ──────────────────────────────────────────

    async def list_feed(self, user_id: UserId, window: PageWindow) -> list[Post]:
        """Posts by the user and everyone they follow, newest first."""
        await require_user(self.db, user_id)
        return await self._list_posts(
            Post.author_id.in_(feed_author_ids(user_id)), window,
        )

    async def list_following_posts(
        self, user_id: UserId, window: PageWindow,
    ) -> list[Post]:
        """Posts by everyone the user follows (the user's own posts excluded)."""
        await require_user(self.db, user_id)
        return await self._list_posts(
            Post.author_id.in_(following_ids(user_id)), window,
        )

    async def list_follower_posts(
        self, user_id: UserId, window: PageWindow,
    ) -> list[Post]:
        """Posts by everyone who follows the user."""
        await require_user(self.db, user_id)
        return await self._list_posts(
            Post.author_id.in_(follower_ids(user_id)), window,
        )

    async def _list_posts(
        self, author_filter: ColumnElement[bool], window: PageWindow,
    ) -> list[Post]:
        query = (
            select(Post)
            .options(load_only(
                Post.id, Post.description, Post.author_id, Post.created_at,
            ))
            .where(author_filter)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(window.offset)
            .limit(window.limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    # ─── User listings ──────────────────────────────────────────

    async def list_following(
        self, user_id: UserId, window: PageWindow,
    ) -> list[User]:
        """Users the subject follows, in follow order."""
        return await self._list_related_users(
            user_id, FollowDirection.FOLLOWING, window,
        )

    async def list_followers(
        self, user_id: UserId, window: PageWindow,
    ) -> list[User]:
        """Users following the subject, in follow order."""
        return await self._list_related_users(
            user_id, FollowDirection.FOLLOWERS, window,
        )

    async def _list_related_users(
        self, user_id: UserId, direction: FollowDirection, window: PageWindow,
    ) -> list[User]:
        await require_user(self.db, user_id)
        if direction is FollowDirection.FOLLOWING:
            join_on = UserFollowing.following_id == User.id
            subject = UserFollowing.user_id == user_id
        else:
            join_on = UserFollowing.user_id == User.id
            subject = UserFollowing.following_id == user_id

        query = (
            select(User)
            .join(UserFollowing, join_on)
            .where(subject)
            .order_by(UserFollowing.id)
            .offset(window.offset)
            .limit(window.limit)
        )
        result = await self.db.execute(query)
        users = list(result.scalars().all())
        logger.debug(
            f"Listed {len(users)} {direction.value} users",
            extra={"user_id": user_id, "offset": window.offset, "limit": window.limit},
        )
        return users
