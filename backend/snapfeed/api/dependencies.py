"""API Dependencies — pagination window and authenticated caller.

Invariants:
    - page_window is the ONLY place offset/limit query parameters are read
    - offset/limit are taken as raw strings so malformed values are clamped
      by the pagination policy instead of rejected with a 400
    - get_current_user accepts "Authorization: <token>" and "Authorization: Bearer <token>"
"""

from fastapi import Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from snapfeed.config import get_settings
from snapfeed.core.domain_types import PageWindow
from snapfeed.core.pagination import normalize_window
from snapfeed.infrastructure.database import get_db
from snapfeed.models.user import User
from snapfeed.services.user_accounts import UserAccounts


def page_window(
    offset: str | None = Query(None, description="Rows to skip (clamped to >= 0)"),
    limit: str | None = Query(None, description="Page size (clamped to 1..max)"),
) -> PageWindow:
    settings = get_settings()
    return normalize_window(
        offset, limit,
        default_limit=settings.page_default_limit,
        max_limit=settings.page_max_limit,
    )


def _extract_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() == "bearer":
        return credentials.strip() or None
    return authorization.strip()


async def get_current_user(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    accounts = UserAccounts(db, token_ttl_hours=get_settings().token_ttl_hours)
    return await accounts.authenticate(_extract_token(authorization))
