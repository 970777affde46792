"""Likes & Comments Routes — verifies like idempotency and comment listing over HTTP."""


async def test_like_twice_keeps_one_like(client, make_user, make_post, auth_headers):
    ann = await make_user("ann")
    post = await make_post(ann)
    headers = await auth_headers(ann)

    first = await client.post(f"/api/v1/post/{post.id}/like", headers=headers)
    second = await client.post(f"/api/v1/post/{post.id}/like", headers=headers)
    assert first.status_code == second.status_code == 201
    assert first.json()["result"] is True
    assert second.json()["result"] is False

    likes = (await client.get(f"/api/v1/post/{post.id}/likes")).json()["result"]
    assert len(likes) == 1
    assert likes[0]["author"] == ann.id
    assert likes[0]["post"] == post.id


async def test_like_requires_token(client, make_user, make_post):
    post = await make_post(await make_user("ann"))
    resp = await client.post(f"/api/v1/post/{post.id}/like")
    assert resp.status_code == 401


async def test_like_unknown_post_is_404(client, make_user, auth_headers):
    headers = await auth_headers(await make_user("ann"))
    resp = await client.post("/api/v1/post/999/like", headers=headers)
    assert resp.status_code == 404


async def test_comments_added_and_paginated(client, make_user, make_post, auth_headers):
    ann, bob = await make_user("ann"), await make_user("bob")
    post = await make_post(ann)
    headers = await auth_headers(bob)

    for text in ("first", "second", "third"):
        resp = await client.post(
            f"/api/v1/post/{post.id}/comments", headers=headers, json={"comment": text},
        )
        assert resp.status_code == 201
        assert resp.json()["result"]["author"] == bob.id

    resp = await client.get(f"/api/v1/post/{post.id}/comments?offset=1&limit=5")
    body = resp.json()
    assert [c["comment"] for c in body["result"]] == ["second", "third"]
    assert (body["offset"], body["limit"]) == (1, 5)


async def test_empty_comment_is_400(client, make_user, make_post, auth_headers):
    ann = await make_user("ann")
    post = await make_post(ann)
    resp = await client.post(
        f"/api/v1/post/{post.id}/comments", headers=await auth_headers(ann),
        json={"comment": ""},
    )
    assert resp.status_code == 400


async def test_comments_on_unknown_post_is_404(client):
    resp = await client.get("/api/v1/post/999/comments")
    assert resp.status_code == 404
