"""User Accounts — verifies sign-up uniqueness, log-in, and token authentication."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from snapfeed.core.domain_types import PageWindow
from snapfeed.core.errors import UnauthorizedError, ValidationFailedError
from snapfeed.models.auth_token import AuthToken
from snapfeed.models.user import User
from snapfeed.services.user_accounts import UserAccounts, hash_password, verify_password


async def test_sign_up_hashes_password(test_db):
    user = await UserAccounts(test_db).sign_up("ann", "ann@example.com", "secret1")
    assert user.id is not None
    assert user.password_digest != "secret1"
    assert verify_password("secret1", user.password_digest)


@pytest.mark.parametrize("username,email,field", [
    ("ann", "other@example.com", "username"),
    ("other", "ann@example.com", "email"),
])
async def test_sign_up_duplicates_rejected(test_db, username, email, field):
    accounts = UserAccounts(test_db)
    await accounts.sign_up("ann", "ann@example.com", "secret1")

    with pytest.raises(ValidationFailedError) as exc_info:
        await accounts.sign_up(username, email, "secret1")
    assert exc_info.value.field == field
    assert await test_db.scalar(select(func.count()).select_from(User)) == 1


async def test_log_in_issues_token_that_authenticates(test_db):
    accounts = UserAccounts(test_db)
    user = await accounts.sign_up("ann", "ann@example.com", "secret1")

    token = await accounts.log_in("ann", "secret1")
    assert (await accounts.authenticate(token)).id == user.id


async def test_each_log_in_issues_a_new_token(test_db):
    accounts = UserAccounts(test_db)
    await accounts.sign_up("ann", "ann@example.com", "secret1")
    assert await accounts.log_in("ann", "secret1") != await accounts.log_in("ann", "secret1")


@pytest.mark.parametrize("username,password", [
    ("ann", "wrong-password"),
    ("nobody", "secret1"),
])
async def test_log_in_bad_credentials(test_db, username, password):
    accounts = UserAccounts(test_db)
    await accounts.sign_up("ann", "ann@example.com", "secret1")

    with pytest.raises(UnauthorizedError, match="Invalid credentials"):
        await accounts.log_in(username, password)


@pytest.mark.parametrize("token", [None, "", "not-a-token"])
async def test_authenticate_rejects_missing_or_unknown(test_db, token):
    with pytest.raises(UnauthorizedError):
        await UserAccounts(test_db).authenticate(token)


async def test_authenticate_rejects_expired_token(test_db, make_user):
    ann = await make_user("ann")
    past = datetime.now(timezone.utc) - timedelta(days=2)
    test_db.add(AuthToken(
        token="expired", user_id=ann.id,
        created_at=past, expires_at=past + timedelta(hours=1),
    ))
    await test_db.commit()

    with pytest.raises(UnauthorizedError, match="expired"):
        await UserAccounts(test_db).authenticate("expired")


async def test_list_users_ordered_by_id_and_windowed(test_db, make_user):
    for name in ("ann", "bob", "cat"):
        await make_user(name)
    users = await UserAccounts(test_db).list_users(PageWindow(offset=1, limit=5))
    assert [u.username for u in users] == ["bob", "cat"]


def test_hash_password_is_salted():
    assert hash_password("secret1") != hash_password("secret1")
