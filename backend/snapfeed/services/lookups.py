"""Lookups — subject resolution shared by every service and route.

Invariants:
    - Unknown ids raise ResourceNotFoundError (404), never return None to callers
    - Ids outside 1..MAX_SQL_INT are unknown by definition and never reach the
      driver (a 20-digit path id would otherwise overflow the INTEGER bind)
    - require_user() always issues exactly one SELECT for an in-range id
      (no identity-map shortcut), so the planner's statement count is predictable
    - get_post_or_404(with_references=True) eagerly loads tags and tagged users
      in two extra batched SELECTs and refreshes anything stale in the session
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from snapfeed.core.domain_types import MAX_SQL_INT, PostId, UserId
from snapfeed.core.errors import ResourceNotFoundError
from snapfeed.models.post import Post
from snapfeed.models.user import User


def _check_id_range(resource_type: str, resource_id: int) -> None:
    if not 1 <= resource_id <= MAX_SQL_INT:
        raise ResourceNotFoundError(resource_type, str(resource_id))


async def require_user(db: AsyncSession, user_id: UserId) -> None:
    """Raise 404 unless the user exists."""
    _check_id_range("User", user_id)
    found = await db.scalar(select(User.id).where(User.id == user_id))
    if found is None:
        raise ResourceNotFoundError("User", str(user_id))


async def get_user_or_404(db: AsyncSession, user_id: UserId) -> User:
    _check_id_range("User", user_id)
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise ResourceNotFoundError("User", str(user_id))
    return user


async def require_post(db: AsyncSession, post_id: PostId) -> None:
    """Raise 404 unless the post exists."""
    _check_id_range("Post", post_id)
    found = await db.scalar(select(Post.id).where(Post.id == post_id))
    if found is None:
        raise ResourceNotFoundError("Post", str(post_id))


async def get_post_or_404(
    db: AsyncSession, post_id: PostId, with_references: bool = False,
) -> Post:
    _check_id_range("Post", post_id)
    query = select(Post).where(Post.id == post_id)
    if with_references:
        query = query.options(
            selectinload(Post.tags), selectinload(Post.tagged_users),
        ).execution_options(populate_existing=True)
    result = await db.execute(query)
    post = result.scalar_one_or_none()
    if not post:
        raise ResourceNotFoundError("Post", str(post_id))
    return post
