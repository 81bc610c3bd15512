"""User Routes — status codes and bodies for every CRUD operation.

Invariants:
    - 201 + Location on create, 204 on update/delete, 200 on reads
    - 404 for unknown ids, 409 for duplicate emails (case-insensitive), 400 for rule violations
    - Password never appears in any response
"""

import pytest


# --- List ---------------------------------------------------------------------

async def test_list_users_empty_returns_empty_array(client, auth_headers):
    res = await client.get("/users", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == []


async def test_list_users_returns_created_users_in_id_order(client, auth_headers):
    for name, email in [("Alice", "alice@example.com"), ("Bob", "bob@example.com")]:
        res = await client.post(
            "/users",
            json={"name": name, "email": email, "password": "Str0ng!pass"},
            headers=auth_headers,
        )
        assert res.status_code == 201

    res = await client.get("/users", headers=auth_headers)
    body = res.json()
    assert [u["name"] for u in body] == ["Alice", "Bob"]
    assert body[0]["id"] < body[1]["id"]


# --- Create -------------------------------------------------------------------

async def test_create_user_returns_201_with_location(client, auth_headers, new_user_payload):
    res = await client.post("/users", json=new_user_payload, headers=auth_headers)
    assert res.status_code == 201
    body = res.json()
    assert res.headers["location"] == f"/users/{body['id']}"
    assert body["name"] == "Noura"
    assert body["email"] == "noura@example.com"
    assert "createdAt" in body


async def test_create_user_never_returns_password(client, auth_headers, new_user_payload):
    res = await client.post("/users", json=new_user_payload, headers=auth_headers)
    body = res.json()
    assert "password" not in body
    assert "password_hash" not in body
    assert "P@ssw0rd!" not in res.text


async def test_create_user_trims_name_and_email(client, auth_headers):
    res = await client.post(
        "/users",
        json={"name": "  Noura  ", "email": "  noura@example.com ", "password": "P@ssw0rd!"},
        headers=auth_headers,
    )
    assert res.status_code == 201
    assert res.json()["name"] == "Noura"
    assert res.json()["email"] == "noura@example.com"


async def test_create_user_keeps_email_as_entered(client, auth_headers):
    res = await client.post(
        "/users",
        json={"name": "Noura", "email": "Noura@EXAMPLE.COM", "password": "P@ssw0rd!"},
        headers=auth_headers,
    )
    assert res.status_code == 201
    assert res.json()["email"] == "Noura@EXAMPLE.COM"

    res = await client.get(res.headers["location"], headers=auth_headers)
    assert res.json()["email"] == "Noura@EXAMPLE.COM"


async def test_create_user_rejects_display_name_email(client, auth_headers):
    res = await client.post(
        "/users",
        json={"name": "Joe", "email": "Joe Bloggs <joe@example.org>", "password": "P@ssw0rd!"},
        headers=auth_headers,
    )
    assert res.status_code == 400
    details = res.json()["error"]["details"]
    assert details == [
        {"field": "email", "message": "Email is invalid.", "type": "value_error"},
    ]


async def test_create_duplicate_email_returns_409(client, auth_headers, created_user):
    res = await client.post(
        "/users",
        json={"name": "Other", "email": "noura@example.com", "password": "P@ssw0rd!"},
        headers=auth_headers,
    )
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "DUPLICATE_EMAIL"
    assert error["message"] == "Email is already in use."


async def test_create_duplicate_email_is_case_insensitive(client, auth_headers, created_user):
    res = await client.post(
        "/users",
        json={"name": "Other", "email": "NOURA@Example.com", "password": "P@ssw0rd!"},
        headers=auth_headers,
    )
    assert res.status_code == 409


@pytest.mark.parametrize("payload, field", [
    ({"name": "N", "email": "n@example.com", "password": "P@ssw0rd!"}, "name"),
    ({"name": "Noura", "email": "not-an-email", "password": "P@ssw0rd!"}, "email"),
    ({"name": "Noura", "email": "n@example.com", "password": "weak"}, "password"),
    ({"email": "n@example.com", "password": "P@ssw0rd!"}, "name"),
])
async def test_create_invalid_payload_returns_400(client, auth_headers, payload, field):
    res = await client.post("/users", json=payload, headers=auth_headers)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert field in [d["field"] for d in error["details"]]


async def test_create_weak_password_reports_every_failed_rule(client, auth_headers):
    res = await client.post(
        "/users",
        json={"name": "Noura", "email": "n@example.com", "password": "abc"},
        headers=auth_headers,
    )
    details = res.json()["error"]["details"]
    assert [d["field"] for d in details] == ["password"] * 4
    assert [d["message"] for d in details] == [
        "Password must be at least 8 characters long.",
        "Password must contain at least one uppercase letter.",
        "Password must contain at least one digit.",
        "Password must contain at least one special character.",
    ]


# --- Get ----------------------------------------------------------------------

async def test_get_user_returns_200(client, auth_headers, created_user):
    res = await client.get(f"/users/{created_user['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == created_user


async def test_get_unknown_user_returns_404(client, auth_headers):
    res = await client.get("/users/42", headers=auth_headers)
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["message"] == "User with id 42 was not found."


# --- Update -------------------------------------------------------------------

async def test_update_user_returns_204_and_applies_changes(client, auth_headers, created_user):
    res = await client.put(
        f"/users/{created_user['id']}",
        json={"name": "Noura B", "email": "noura.b@example.com"},
        headers=auth_headers,
    )
    assert res.status_code == 204
    assert res.content == b""

    res = await client.get(f"/users/{created_user['id']}", headers=auth_headers)
    assert res.json()["name"] == "Noura B"
    assert res.json()["email"] == "noura.b@example.com"


async def test_update_blank_fields_are_left_unchanged(client, auth_headers, created_user):
    res = await client.put(
        f"/users/{created_user['id']}",
        json={"name": "   ", "email": "", "password": None},
        headers=auth_headers,
    )
    assert res.status_code == 204

    res = await client.get(f"/users/{created_user['id']}", headers=auth_headers)
    assert res.json()["name"] == created_user["name"]
    assert res.json()["email"] == created_user["email"]


async def test_update_own_email_with_different_case_is_allowed(
    client, auth_headers, created_user,
):
    res = await client.put(
        f"/users/{created_user['id']}",
        json={"email": "Noura@example.com"},
        headers=auth_headers,
    )
    assert res.status_code == 204


async def test_update_to_other_users_email_returns_409(client, auth_headers, created_user):
    res = await client.post(
        "/users",
        json={"name": "Bob", "email": "bob@example.com", "password": "Str0ng!pass"},
        headers=auth_headers,
    )
    bob_id = res.json()["id"]

    res = await client.put(
        f"/users/{bob_id}", json={"email": "noura@example.com"}, headers=auth_headers,
    )
    assert res.status_code == 409


async def test_update_weak_password_returns_400(client, auth_headers, created_user):
    res = await client.put(
        f"/users/{created_user['id']}", json={"password": "short"}, headers=auth_headers,
    )
    assert res.status_code == 400


async def test_update_unknown_user_returns_404(client, auth_headers):
    res = await client.put("/users/999", json={"name": "Ghost"}, headers=auth_headers)
    assert res.status_code == 404


async def test_update_password_allows_login_with_new_password(
    client, auth_headers, created_user,
):
    res = await client.put(
        f"/users/{created_user['id']}",
        json={"password": "N3w-Secret!"},
        headers=auth_headers,
    )
    assert res.status_code == 204

    res = await client.post(
        "/login", json={"username": "noura@example.com", "password": "N3w-Secret!"},
    )
    assert res.status_code == 200


# --- Delete -------------------------------------------------------------------

async def test_delete_user_returns_204_then_404(client, auth_headers, created_user):
    res = await client.delete(f"/users/{created_user['id']}", headers=auth_headers)
    assert res.status_code == 204

    res = await client.get(f"/users/{created_user['id']}", headers=auth_headers)
    assert res.status_code == 404


async def test_delete_unknown_user_returns_404(client, auth_headers):
    res = await client.delete("/users/999", headers=auth_headers)
    assert res.status_code == 404


async def test_deleted_email_can_be_reused(client, auth_headers, created_user, new_user_payload):
    await client.delete(f"/users/{created_user['id']}", headers=auth_headers)

    res = await client.post("/users", json=new_user_payload, headers=auth_headers)
    assert res.status_code == 201
