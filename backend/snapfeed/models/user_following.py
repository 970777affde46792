"""UserFollowing ORM — directed follow edges ("user_id follows following_id").

Invariants:
    - At most one edge per ordered pair (unique constraint)
    - No self-edges (check constraint)
    - Edges cascade away with either endpoint user
    - id is monotonically increasing: listing order = insertion order

Design Decisions:
    - The unique constraint doubles as the (user_id, following_id) index used by
      the feed sub-select; a second index covers the follower direction
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Index, Integer, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from snapfeed.db.base import Base


class UserFollowing(Base):
    """Directed follow edge between two users."""
    __tablename__ = "user_followings"
    __table_args__ = (
        UniqueConstraint("user_id", "following_id", name="uq_user_followings_pair"),
        CheckConstraint("user_id != following_id", name="ck_user_followings_no_self"),
        Index("ix_user_followings_following_id", "following_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    following_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
