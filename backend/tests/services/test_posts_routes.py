"""Posts Routes — verifies create/show/update over HTTP."""

from sqlalchemy import func, select

from snapfeed.models.post import Post


async def test_create_and_show(client, make_user, auth_headers, image_uri):
    ann, bob = await make_user("ann"), await make_user("bob")
    headers = await auth_headers(ann)

    resp = await client.post("/api/v1/post/create", headers=headers, json={
        "image": image_uri, "description": "hello",
        "tags": ["t1", "t2"], "user_tags": ["bob", "ghost"],
    })
    assert resp.status_code == 201
    created = resp.json()["result"]
    assert created["author_id"] == ann.id
    assert created["tags"] == ["t1", "t2"]
    assert created["tagged_users"] == [{"id": bob.id, "username": "bob"}]

    resp = await client.get(f"/api/v1/post/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["result"] == created


async def test_create_requires_token(client, image_uri):
    resp = await client.post("/api/v1/post/create", json={"image": image_uri})
    assert resp.status_code == 401


async def test_create_without_image_is_500_and_persists_nothing(
    client, test_db, make_user, auth_headers,
):
    headers = await auth_headers(await make_user("ann"))
    resp = await client.post("/api/v1/post/create", headers=headers, json={
        "description": "no picture",
    })
    assert resp.status_code == 500
    assert resp.json()["success"] is False
    assert resp.json()["error"]["code"] == "IMAGE_PAYLOAD_INVALID"
    assert await test_db.scalar(select(func.count()).select_from(Post)) == 0


async def test_show_unknown_post_is_404(client):
    resp = await client.get("/api/v1/post/999")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_partial_update(client, make_user, auth_headers, image_uri):
    ann = await make_user("ann")
    await make_user("bob")
    headers = await auth_headers(ann)
    created = (await client.post("/api/v1/post/create", headers=headers, json={
        "image": image_uri, "description": "before", "tags": ["t1"], "user_tags": ["bob"],
    })).json()["result"]

    resp = await client.patch(
        f"/api/v1/post/{created['id']}/update", headers=headers,
        json={"tags": ["t2", "t3"]},
    )
    assert resp.status_code == 200
    updated = resp.json()["result"]
    assert updated["tags"] == ["t2", "t3"]
    assert updated["description"] == "before"
    assert [u["username"] for u in updated["tagged_users"]] == ["bob"]


async def test_update_by_other_user_is_403(client, make_user, auth_headers, image_uri):
    ann, bob = await make_user("ann"), await make_user("bob")
    created = (await client.post(
        "/api/v1/post/create", headers=await auth_headers(ann),
        json={"image": image_uri},
    )).json()["result"]

    resp = await client.patch(
        f"/api/v1/post/{created['id']}/update", headers=await auth_headers(bob),
        json={"description": "hijacked"},
    )
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "FORBIDDEN"


async def test_show_out_of_range_post_id_is_404(client):
    resp = await client.get("/api/v1/post/99999999999999999999")
    assert resp.status_code == 404
    assert resp.json()["success"] is False


async def test_like_out_of_range_post_id_is_404(client, make_user, auth_headers):
    headers = await auth_headers(await make_user("ann"))
    resp = await client.post("/api/v1/post/99999999999999999999/like", headers=headers)
    assert resp.status_code == 404


async def test_oversized_tag_is_400_and_persists_nothing(
    client, test_db, make_user, auth_headers, image_uri,
):
    headers = await auth_headers(await make_user("ann"))
    resp = await client.post("/api/v1/post/create", headers=headers, json={
        "image": image_uri, "tags": ["x" * 101],
    })
    assert resp.status_code == 400
    assert await test_db.scalar(select(func.count()).select_from(Post)) == 0
