"""User ORM — account identity plus public profile fields.

Invariants:
    - id is an integer primary key, immutable
    - username and email are unique
    - password_digest is a passlib hash, never the plain password
    - Users are never hard-deleted by the API (follow edges would cascade if they were)

Design Decisions:
    - No ORM relationships to follow edges: follower/following sets are always
      resolved by the query planner as sub-selects, never by loading collections
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from snapfeed.db.base import Base


class User(Base):
    """A registered user."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_digest: Mapped[str] = mapped_column(String(255), nullable=False)
    birthdate: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
