"""Users Routes — accounts, profiles, follow graph listings, and the feed.

Invariants:
    - Every listing takes its window from the page_window dependency and echoes it
    - feed is public; the other listings and profile reads require a token
    - Routes never build SQL: the query planner and stores own every query
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.api.dependencies import get_current_user, page_window
from snapfeed.config import get_settings
from snapfeed.core.domain_types import PageWindow, UserId
from snapfeed.infrastructure.database import get_db
from snapfeed.models.post import Post
from snapfeed.models.user import User
from snapfeed.schemas.envelope import Envelope, PageEnvelope
from snapfeed.schemas.post import PostOut
from snapfeed.schemas.user import LogInRequest, SignUpRequest, UserFollowOut, UserOut
from snapfeed.services.lookups import get_user_or_404
from snapfeed.services.query_planner import FeedQueryPlanner
from snapfeed.services.relationship_store import RelationshipStore
from snapfeed.services.user_accounts import UserAccounts

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


def _post_page(posts: list[Post], window: PageWindow) -> PageEnvelope[list[PostOut]]:
    return PageEnvelope[list[PostOut]](
        result=[PostOut.model_validate(p) for p in posts],
        offset=window.offset, limit=window.limit,
    )


def _user_page(
    users: list[User], window: PageWindow,
) -> PageEnvelope[list[UserFollowOut]]:
    return PageEnvelope[list[UserFollowOut]](
        result=[UserFollowOut.model_validate(u) for u in users],
        offset=window.offset, limit=window.limit,
    )


# ─── Accounts ───────────────────────────────────────────────────

@router.post(
    "/sign_up", response_model=Envelope[int],
    status_code=status.HTTP_201_CREATED,
)
async def sign_up(body: SignUpRequest, db: AsyncSession = Depends(get_db)):
    """Register a user. Result is the new user id."""
    user = await UserAccounts(db).sign_up(
        username=body.username,
        email=body.email,
        password=body.password,
        birthdate=body.birthdate,
        description=body.description,
        gender=body.gender,
    )
    return Envelope[int](result=user.id)


@router.post("/log_in", response_model=Envelope[str])
async def log_in(body: LogInRequest, db: AsyncSession = Depends(get_db)):
    """Exchange credentials for an auth token."""
    accounts = UserAccounts(db, token_ttl_hours=get_settings().token_ttl_hours)
    token = await accounts.log_in(body.username, body.password)
    return Envelope[str](result=token)


# ─── Profiles ───────────────────────────────────────────────────

@router.get("", response_model=PageEnvelope[list[UserOut]])
async def list_users(
    window: PageWindow = Depends(page_window),
    db: AsyncSession = Depends(get_db),
    _caller: User = Depends(get_current_user),
):
    """All users ordered by id."""
    users = await UserAccounts(db).list_users(window)
    return PageEnvelope[list[UserOut]](
        result=[UserOut.model_validate(u) for u in users],
        offset=window.offset, limit=window.limit,
    )


@router.get("/{user_id}", response_model=Envelope[UserOut])
async def show_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    _caller: User = Depends(get_current_user),
):
    user = await get_user_or_404(db, UserId(user_id))
    return Envelope[UserOut](result=UserOut.model_validate(user))


# ─── Follow graph ───────────────────────────────────────────────

@router.get("/{user_id}/following", response_model=PageEnvelope[list[UserFollowOut]])
async def following(
    user_id: int,
    window: PageWindow = Depends(page_window),
    db: AsyncSession = Depends(get_db),
    _caller: User = Depends(get_current_user),
):
    users = await FeedQueryPlanner(db).list_following(UserId(user_id), window)
    return _user_page(users, window)


@router.get("/{user_id}/followers", response_model=PageEnvelope[list[UserFollowOut]])
async def followers(
    user_id: int,
    window: PageWindow = Depends(page_window),
    db: AsyncSession = Depends(get_db),
    _caller: User = Depends(get_current_user),
):
    users = await FeedQueryPlanner(db).list_followers(UserId(user_id), window)
    return _user_page(users, window)


@router.post(
    "/{user_id}/follow", response_model=Envelope[bool],
    status_code=status.HTTP_201_CREATED,
)
async def follow(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    caller: User = Depends(get_current_user),
):
    """Caller follows user_id. Result tells whether a new edge was created."""
    created = await RelationshipStore(db).follow(UserId(caller.id), UserId(user_id))
    return Envelope[bool](result=created)


@router.delete("/{user_id}/follow", response_model=Envelope[bool])
async def unfollow(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    caller: User = Depends(get_current_user),
):
    removed = await RelationshipStore(db).unfollow(UserId(caller.id), UserId(user_id))
    return Envelope[bool](result=removed)


# ─── Post listings ──────────────────────────────────────────────

@router.get("/{user_id}/feed", response_model=PageEnvelope[list[PostOut]])
async def feed(
    user_id: int,
    window: PageWindow = Depends(page_window),
    db: AsyncSession = Depends(get_db),
):
    """Posts by the user and everyone they follow, newest first."""
    posts = await FeedQueryPlanner(db).list_feed(UserId(user_id), window)
    return _post_page(posts, window)


@router.get("/{user_id}/following_posts", response_model=PageEnvelope[list[PostOut]])
async def following_posts(
    user_id: int,
    window: PageWindow = Depends(page_window),
    db: AsyncSession = Depends(get_db),
    _caller: User = Depends(get_current_user),
):
    posts = await FeedQueryPlanner(db).list_following_posts(UserId(user_id), window)
    return _post_page(posts, window)


@router.get("/{user_id}/followers_posts", response_model=PageEnvelope[list[PostOut]])
async def followers_posts(
    user_id: int,
    window: PageWindow = Depends(page_window),
    db: AsyncSession = Depends(get_db),
    _caller: User = Depends(get_current_user),
):
    posts = await FeedQueryPlanner(db).list_follower_posts(UserId(user_id), window)
    return _post_page(posts, window)
