"""Service test fixtures — async DB, seed factories, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness check uses the test engine
    - Seed factories commit immediately; assertions read scalar columns, not
      cached ORM instances, so writes made by the app are always visible

Design Decisions:
    - SQLite in-memory + StaticPool: one shared connection, so the test session
      and the app's request sessions see the same database
    - Seeded users get a placeholder password digest; only log-in tests hash
      real passwords (pbkdf2 is deliberately slow)
"""

import base64
import secrets
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

import snapfeed.models  # noqa: F401
from snapfeed.db.base import Base
from snapfeed.infrastructure.database import (
    get_db, DatabaseSessionManager, enable_sqlite_foreign_keys,
)
from snapfeed.models.auth_token import AuthToken
from snapfeed.models.post import Post
from snapfeed.models.user import User
from snapfeed.models.user_following import UserFollowing
import snapfeed.infrastructure.database as db_module
from snapfeed.main import app

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
IMAGE_URI = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def statement_log(test_engine):
    """Records every SQL statement the engine sends while the test runs."""
    log = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        log.append(statement)

    event.listen(test_engine.sync_engine, "before_cursor_execute", _record)
    yield log
    event.remove(test_engine.sync_engine, "before_cursor_execute", _record)


# ─── Seed factories ─────────────────────────────────────────────

@pytest.fixture
def make_user(test_db):
    async def _make(username: str, **profile) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_digest="unused",
            **profile,
        )
        test_db.add(user)
        await test_db.commit()
        return user
    return _make


@pytest.fixture
def make_post(test_db):
    """Posts are stamped BASE_TIME + minutes so feed order is deterministic."""
    async def _make(author: User, minutes: int = 0, description: str | None = None) -> Post:
        post = Post(
            author_id=author.id,
            description=description,
            image=PNG_BYTES,
            image_content_type="image/png",
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )
        test_db.add(post)
        await test_db.commit()
        return post
    return _make


@pytest.fixture
def make_follow(test_db):
    async def _make(follower: User, followee: User) -> None:
        test_db.add(UserFollowing(user_id=follower.id, following_id=followee.id))
        await test_db.commit()
    return _make


@pytest.fixture
def auth_headers(test_db):
    """Issue a live token for a user and return the Authorization header."""
    async def _issue(user: User) -> dict[str, str]:
        now = datetime.now(timezone.utc)
        token = AuthToken(
            token=secrets.token_urlsafe(32),
            user_id=user.id,
            created_at=now,
            expires_at=now + timedelta(hours=1),
        )
        test_db.add(token)
        await test_db.commit()
        return {"Authorization": token.token}
    return _issue


@pytest.fixture
def image_uri() -> str:
    return IMAGE_URI
