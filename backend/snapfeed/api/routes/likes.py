"""Likes Routes — like a post, list a post's likes.

Invariants:
    - Liking twice returns 201 both times; the ledger keeps one row
    - Listing likes is public
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.api.dependencies import get_current_user
from snapfeed.core.domain_types import PostId, UserId
from snapfeed.infrastructure.database import get_db
from snapfeed.models.user import User
from snapfeed.schemas.annotation import LikeOut
from snapfeed.schemas.envelope import Envelope
from snapfeed.services.like_ledger import LikeLedger

router = APIRouter(prefix="/api/v1/post", tags=["likes"])


@router.post(
    "/{post_id}/like", response_model=Envelope[bool],
    status_code=status.HTTP_201_CREATED,
)
async def like_post(
    post_id: int,
    db: AsyncSession = Depends(get_db),
    caller: User = Depends(get_current_user),
):
    """Result tells whether this call recorded a new like."""
    created = await LikeLedger(db).like(UserId(caller.id), PostId(post_id))
    return Envelope[bool](result=created)


@router.get("/{post_id}/likes", response_model=Envelope[list[LikeOut]])
async def list_likes(post_id: int, db: AsyncSession = Depends(get_db)):
    likes = await LikeLedger(db).list_likes(PostId(post_id))
    return Envelope[list[LikeOut]](result=[LikeOut.from_like(like) for like in likes])
