"""User Routes — CRUD, password hiding, uniqueness and validation mapping."""

from uuid import uuid4

USER = {"name": "Jane Roe", "email": "jane@example.com", "password": "Secret123"}


async def _create(client, **overrides):
    res = await client.post("/api/users", json={**USER, **overrides})
    assert res.status_code == 201, res.text
    return res.json()["data"]


async def test_create_user_hides_password(client):
    data = await _create(client, email="  Jane@Example.com ")
    assert data["email"] == "jane@example.com"
    assert data["role"] == "customer"
    assert "password" not in data


async def test_list_and_count_users(client):
    await _create(client)
    await _create(client, email="second@example.com")
    body = (await client.get("/api/users")).json()
    assert body["count"] == 2
    assert all("password" not in u for u in body["data"])
    assert (await client.get("/api/users/stats/count")).json()["count"] == 2


async def test_duplicate_email_is_409(client):
    await _create(client)
    res = await client.post("/api/users", json={**USER, "email": "JANE@example.com"})
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "DUPLICATE_CONSTRAINT"
    assert "email" in error["fields"]


async def test_invalid_user_payload_is_400(client):
    res = await client.post(
        "/api/users",
        json={"name": "J", "email": "bad", "password": "weak", "isAdmin": True},
    )
    assert res.status_code == 400
    fields = res.json()["error"]["fields"]
    assert {"name", "email", "password", "isAdmin"} <= set(fields)


async def test_update_user(client):
    user = await _create(client)
    res = await client.put(f"/api/users/{user['id']}", json={"phone": "+1 555 123 4567"})
    assert res.status_code == 200
    assert res.json()["data"]["phone"] == "+1 555 123 4567"


async def test_empty_user_update_is_400(client):
    user = await _create(client)
    res = await client.put(f"/api/users/{user['id']}", json={})
    assert res.status_code == 400
    assert "body" in res.json()["error"]["fields"]


async def test_update_to_taken_email_is_409(client):
    await _create(client)
    other = await _create(client, email="other@example.com")
    res = await client.put(f"/api/users/{other['id']}", json={"email": "jane@example.com"})
    assert res.status_code == 409


async def test_delete_user(client):
    user = await _create(client)
    assert (await client.delete(f"/api/users/{user['id']}")).status_code == 200
    assert (await client.get(f"/api/users/{user['id']}")).status_code == 404


async def test_unknown_user_is_404(client):
    res = await client.get(f"/api/users/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["message"].startswith("User not found")
