"""Comments Routes — add a comment to a post, list a post's comments."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.api.dependencies import get_current_user, page_window
from snapfeed.core.domain_types import PageWindow, PostId, UserId
from snapfeed.infrastructure.database import get_db
from snapfeed.models.user import User
from snapfeed.schemas.annotation import CommentCreate, CommentOut
from snapfeed.schemas.envelope import Envelope, PageEnvelope
from snapfeed.services.comment_board import CommentBoard

router = APIRouter(prefix="/api/v1/post", tags=["comments"])


@router.post(
    "/{post_id}/comments", response_model=Envelope[CommentOut],
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: int,
    body: CommentCreate,
    db: AsyncSession = Depends(get_db),
    caller: User = Depends(get_current_user),
):
    comment = await CommentBoard(db).add(UserId(caller.id), PostId(post_id), body.comment)
    return Envelope[CommentOut](result=CommentOut.from_comment(comment))


@router.get("/{post_id}/comments", response_model=PageEnvelope[list[CommentOut]])
async def list_comments(
    post_id: int,
    window: PageWindow = Depends(page_window),
    db: AsyncSession = Depends(get_db),
):
    comments = await CommentBoard(db).list_comments(PostId(post_id), window)
    return PageEnvelope[list[CommentOut]](
        result=[CommentOut.from_comment(c) for c in comments],
        offset=window.offset, limit=window.limit,
    )
