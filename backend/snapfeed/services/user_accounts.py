"""User Accounts — sign-up, log-in token issuance, and token authentication.

Invariants:
    - Passwords are stored only as passlib hashes
    - Duplicate username/email → ValidationFailedError; no partial user is committed
    - Bad credentials and bad tokens both raise UnauthorizedError with a generic
      message (never reveals whether the username exists)
    - Tokens are opaque random strings that expire after settings.token_ttl_hours

Design Decisions:
    - pbkdf2_sha256 scheme: pure-Python passlib handler, no native bcrypt build
    - Uniqueness pre-checked for a field-specific message; the IntegrityError path
      only covers the race between check and insert
"""

import logging
import secrets
from datetime import date, datetime, timedelta, timezone

from passlib.context import CryptContext
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.core.domain_types import PageWindow
from snapfeed.core.errors import UnauthorizedError, ValidationFailedError
from snapfeed.models.auth_token import AuthToken
from snapfeed.models.user import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class UserAccounts:
    """Account lifecycle backed by the users and auth_tokens tables."""

    def __init__(self, db: AsyncSession, token_ttl_hours: int = 24 * 30):
        self.db = db
        self.token_ttl = timedelta(hours=token_ttl_hours)

    async def sign_up(
        self,
        username: str,
        email: str,
        password: str,
        birthdate: date | None = None,
        description: str | None = None,
        gender: str | None = None,
    ) -> User:
        result = await self.db.execute(
            select(User.username, User.email).where(
                or_(User.username == username, User.email == email),
            ),
        )
        for taken_username, taken_email in result.all():
            if taken_username == username:
                raise ValidationFailedError("Username already taken", "username")
            if taken_email == email:
                raise ValidationFailedError("Email already registered", "email")

        user = User(
            username=username,
            email=email,
            password_digest=hash_password(password),
            birthdate=birthdate,
            description=description,
            gender=gender,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ValidationFailedError("Username or email already taken", "username")
        await self.db.refresh(user)
        logger.info("User signed up", extra={"user_id": user.id})
        return user

    async def log_in(self, username: str, password: str) -> str:
        """Verify credentials and issue a new token."""
        result = await self.db.execute(
            select(User).where(User.username == username),
        )
        user = result.scalar_one_or_none()
        if not user or not verify_password(password, user.password_digest):
            logger.warning("Failed log-in attempt")
            raise UnauthorizedError("Invalid credentials")

        now = datetime.now(timezone.utc)
        token = AuthToken(
            token=secrets.token_urlsafe(32),
            user_id=user.id,
            created_at=now,
            expires_at=now + self.token_ttl,
        )
        self.db.add(token)
        await self.db.commit()
        logger.info("Token issued", extra={"user_id": user.id})
        return token.token

    async def list_users(self, window: PageWindow) -> list[User]:
        result = await self.db.execute(
            select(User).order_by(User.id).offset(window.offset).limit(window.limit),
        )
        return list(result.scalars().all())

    async def authenticate(self, token: str | None) -> User:
        """Resolve a live token to its user."""
        if not token:
            raise UnauthorizedError()
        result = await self.db.execute(
            select(User)
            .join(AuthToken, AuthToken.user_id == User.id)
            .where(AuthToken.token == token)
            .where(AuthToken.expires_at > datetime.now(timezone.utc)),
        )
        user = result.scalar_one_or_none()
        if not user:
            raise UnauthorizedError("Invalid or expired token")
        return user
