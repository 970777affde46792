"""Relationship Store — verifies follow/unfollow idempotency and edge rules."""

import pytest
from sqlalchemy import func, select

from snapfeed.core.domain_types import UserId
from snapfeed.core.errors import ResourceNotFoundError, SelfFollowError
from snapfeed.models.user_following import UserFollowing
from snapfeed.services.relationship_store import RelationshipStore


async def _edge_count(db) -> int:
    return await db.scalar(select(func.count()).select_from(UserFollowing))


async def _has_edge(db, follower_id, followee_id) -> bool:
    found = await db.scalar(
        select(UserFollowing.id)
        .where(UserFollowing.user_id == follower_id)
        .where(UserFollowing.following_id == followee_id),
    )
    return found is not None


async def test_follow_creates_edge(test_db, make_user):
    ann, bob = await make_user("ann"), await make_user("bob")
    store = RelationshipStore(test_db)

    assert await store.follow(UserId(ann.id), UserId(bob.id)) is True
    assert await _has_edge(test_db, ann.id, bob.id)
    assert not await _has_edge(test_db, bob.id, ann.id)


async def test_duplicate_follow_keeps_one_edge(test_db, make_user):
    ann, bob = await make_user("ann"), await make_user("bob")
    store = RelationshipStore(test_db)

    await store.follow(UserId(ann.id), UserId(bob.id))
    assert await store.follow(UserId(ann.id), UserId(bob.id)) is False
    assert await _edge_count(test_db) == 1


async def test_self_follow_rejected(test_db, make_user):
    ann = await make_user("ann")
    with pytest.raises(SelfFollowError):
        await RelationshipStore(test_db).follow(UserId(ann.id), UserId(ann.id))
    assert await _edge_count(test_db) == 0


async def test_follow_unknown_user_raises_not_found(test_db, make_user):
    ann = await make_user("ann")
    with pytest.raises(ResourceNotFoundError):
        await RelationshipStore(test_db).follow(UserId(ann.id), UserId(999))


async def test_unfollow_removes_edge(test_db, make_user, make_follow):
    ann, bob = await make_user("ann"), await make_user("bob")
    await make_follow(ann, bob)

    assert await RelationshipStore(test_db).unfollow(UserId(ann.id), UserId(bob.id)) is True
    assert await _edge_count(test_db) == 0


async def test_unfollow_missing_edge_is_noop(test_db, make_user):
    ann, bob = await make_user("ann"), await make_user("bob")
    assert await RelationshipStore(test_db).unfollow(UserId(ann.id), UserId(bob.id)) is False


async def test_edges_cascade_with_user(test_db, make_user, make_follow):
    ann, bob = await make_user("ann"), await make_user("bob")
    await make_follow(ann, bob)

    await test_db.delete(bob)
    await test_db.commit()
    assert await _edge_count(test_db) == 0
