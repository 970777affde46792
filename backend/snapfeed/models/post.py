"""Post ORM — authored image posts plus their tag and tagged-user join tables.

Invariants:
    - author_id is required and immutable after creation
    - created_at is set once at insert and never updated
    - post_tags / post_tagged_users rows are written only by services/post_writer.py
      (delete-all-then-insert on update, never an ORM collection diff)
    - Relationships are lazy="raise": listings load scalar columns only, so an
      accidental per-row relationship load fails loudly instead of issuing N+1 queries

Design Decisions:
    - (author_id, created_at) index serves the feed's author-set filter + ordering
    - Join tables as Core Table objects: they carry no data of their own
    - Relationships are viewonly: writes go through explicit DELETE/INSERT statements
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Column, DateTime, ForeignKey, Index, Integer, LargeBinary, String, Table, Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snapfeed.db.base import Base


post_tags = Table(
    "post_tags",
    Base.metadata,
    Column(
        "post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

post_tagged_users = Table(
    "post_tagged_users",
    Base.metadata,
    Column(
        "post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Post(Base):
    """An image post authored by a user."""
    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_author_id_created_at", "author_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    image_content_type: Mapped[str] = mapped_column(String(50), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships (read-only views over the join tables)
    tags: Mapped[list["Tag"]] = relationship(
        "Tag", secondary=post_tags, viewonly=True,
        order_by="Tag.id", lazy="raise",
    )
    tagged_users: Mapped[list["User"]] = relationship(
        "User", secondary=post_tagged_users, viewonly=True,
        order_by="User.id", lazy="raise",
    )
