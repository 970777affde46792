"""Post Schemas — create/update payloads and list/detail representations.

Invariants:
    - PostCreate.image stays optional at the schema level: a missing image is a
      fatal write failure (500) raised by the writer, not a 400 validation error
    - Tag texts fit tags.text (100 chars) and usernames fit users.username (30),
      so an oversized reference is a 400, never a database error
    - PostUpdate is partial: only keys present in the body are applied
      (see changes()), an explicit `"tags": []` clears the tags
    - List view exposes id, description, author_id, created_at only;
      the detail view adds tags (texts) and tagged_users
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from snapfeed.schemas.user import UserFollowOut

TagText = Annotated[str, Field(max_length=100)]
Username = Annotated[str, Field(max_length=30)]


class PostCreate(BaseModel):
    image: str | None = None
    description: str | None = Field(None, max_length=2200)
    tags: list[TagText] = Field(default_factory=list, max_length=30)
    user_tags: list[Username] = Field(default_factory=list, max_length=30)


class PostUpdate(BaseModel):
    description: str | None = Field(None, max_length=2200)
    tags: list[TagText] | None = None
    user_tags: list[Username] | None = None

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(include=self.model_fields_set)


class PostOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str | None = None
    author_id: int
    created_at: datetime


class PostDetailOut(PostOut):
    tags: list[str] = []
    tagged_users: list[UserFollowOut] = []

    @field_validator("tags", mode="before")
    @classmethod
    def tag_texts(cls, v):
        return [getattr(tag, "text", tag) for tag in v]
