"""Posts Routes — show, create, and partially update a post.

Invariants:
    - show is public; create/update require a token
    - The author is always the caller, never a field of the request body
    - Update forwards only the keys present in the body (PostUpdate.changes())
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.api.dependencies import get_current_user
from snapfeed.core.domain_types import PostId, UserId
from snapfeed.infrastructure.database import get_db
from snapfeed.models.user import User
from snapfeed.schemas.envelope import Envelope
from snapfeed.schemas.post import PostCreate, PostDetailOut, PostUpdate
from snapfeed.services.lookups import get_post_or_404
from snapfeed.services.post_writer import PostWriter

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/post", tags=["posts"])


@router.post(
    "/create", response_model=Envelope[PostDetailOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    body: PostCreate,
    db: AsyncSession = Depends(get_db),
    caller: User = Depends(get_current_user),
):
    post = await PostWriter(db).create(
        author_id=UserId(caller.id),
        image=body.image,
        description=body.description,
        tags=body.tags,
        user_tags=body.user_tags,
    )
    return Envelope[PostDetailOut](result=PostDetailOut.model_validate(post))


@router.get("/{post_id}", response_model=Envelope[PostDetailOut])
async def show_post(post_id: int, db: AsyncSession = Depends(get_db)):
    post = await get_post_or_404(db, PostId(post_id), with_references=True)
    return Envelope[PostDetailOut](result=PostDetailOut.model_validate(post))


@router.patch("/{post_id}/update", response_model=Envelope[PostDetailOut])
async def update_post(
    post_id: int,
    body: PostUpdate,
    db: AsyncSession = Depends(get_db),
    caller: User = Depends(get_current_user),
):
    post = await PostWriter(db).update(
        PostId(post_id), UserId(caller.id), body.changes(),
    )
    return Envelope[PostDetailOut](result=PostDetailOut.model_validate(post))
