"""Tag ORM — unique free-text labels attached to posts.

Invariants:
    - text is unique; tags are upserted by text and never deleted
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from snapfeed.db.base import Base


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
