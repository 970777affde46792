"""User Schemas — sign-up/log-in requests and public user representations.

Invariants:
    - Public user output never includes email or password_digest
    - username: 3-30 chars of letters, digits, underscore, dot
    - password: 6-128 chars
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignUpRequest(BaseModel):
    username: str = Field(min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_.]+$")
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    birthdate: date | None = None
    description: str | None = Field(None, max_length=1000)
    gender: str | None = Field(None, max_length=20)


class LogInRequest(BaseModel):
    username: str
    password: str


class UserOut(BaseModel):
    """Public profile."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    birthdate: date | None = None
    description: str | None = None
    gender: str | None = None


class UserFollowOut(BaseModel):
    """Compact user used in follower/following lists and tagged users."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
