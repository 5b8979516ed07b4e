import uuid

import pytest


pytestmark = pytest.mark.asyncio


async def register_user(client, username: str, email: str | None, password: str):
    resp = await client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    return resp


async def login_user(client, username: str, password: str):
    return await client.post(
        "/api/v1/auth/login",
        json={"username": username, "password": password},
    )


async def test_register_and_login_flow(client):
    username = f"user_{uuid.uuid4().hex[:6]}"
    email = f"{username}@example.com"
    password = "StrongPass!23"

    resp = await register_user(client, username, email, password)
    body = resp.json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert body["data"]["user"]["username"] == username
    assert body["data"]["user"]["credits"] == 20
    assert body["data"]["user"]["isBanned"] is False
    assert body["data"]["accessToken"]

    # Duplicate username should fail
    dup_resp = await register_user(client, username, f"other_{email}", password)
    dup_body = dup_resp.json()
    assert dup_resp.status_code == 200
    assert dup_body["success"] is False
    assert dup_body["error"]["code"] == "USERNAME_EXISTS"

    # Duplicate email should fail
    dup_email = await register_user(client, f"{username}_2", email, password)
    assert dup_email.json()["error"]["code"] == "EMAIL_EXISTS"

    # Successful login
    login_resp = await login_user(client, username, password)
    login_body = login_resp.json()
    assert login_resp.status_code == 200
    assert login_body["success"] is True
    assert "accessToken" in login_body["data"]
    assert "accessToken" in login_resp.cookies

    # Invalid password
    bad_login = await login_user(client, username, "wrong")
    assert bad_login.status_code == 401
    assert bad_login.json()["detail"]["code"] == "AUTH_INVALID_CREDENTIALS"


async def test_usernames_are_case_insensitive(client):
    resp = await register_user(client, "  Alice  ", None, "Wonder#123")
    assert resp.json()["data"]["user"]["username"] == "alice"

    dup_resp = await register_user(client, "ALICE", None, "Wonder#123")
    assert dup_resp.json()["error"]["code"] == "USERNAME_EXISTS"

    login_resp = await login_user(client, "Alice", "Wonder#123")
    assert login_resp.status_code == 200


async def test_register_rejects_short_password(client):
    resp = await register_user(client, "shorty", None, "123")
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "BAD_REQUEST"


async def test_me_change_password_and_logout(client):
    username = f"user_{uuid.uuid4().hex[:6]}"
    password = "UserInit#123"
    new_password = "UserNew#456"
    await register_user(client, username, f"{username}@example.com", password)

    login_resp = await login_user(client, username, password)
    token = login_resp.json()["data"]["accessToken"]
    headers = {"Authorization": f"Bearer {token}"}

    me_resp = await client.get("/api/v1/auth/me", headers=headers)
    me_body = me_resp.json()
    assert me_resp.status_code == 200
    assert me_body["data"]["username"] == username
    assert me_body["data"]["credits"] == 20

    short_resp = await client.post(
        "/api/v1/auth/change-password",
        json={"newPassword": "abc"},
        headers=headers,
    )
    assert short_resp.status_code == 400

    change_resp = await client.post(
        "/api/v1/auth/change-password",
        json={"newPassword": new_password},
        headers=headers,
    )
    assert change_resp.status_code == 200
    assert change_resp.json()["data"]["ok"] is True

    # Old password should fail, new password succeeds
    old_login = await login_user(client, username, password)
    assert old_login.status_code == 401
    new_login = await login_user(client, username, new_password)
    assert new_login.status_code == 200

    logout_resp = await client.post("/api/v1/auth/logout", headers=headers)
    assert logout_resp.status_code == 200
    assert logout_resp.json()["success"] is True


async def test_cookie_authenticates_without_header(client, create_user):
    user, password = await create_user()
    await login_user(client, user.username, password)

    me_resp = await client.get("/api/v1/auth/me")
    assert me_resp.status_code == 200
    assert me_resp.json()["data"]["id"] == str(user.id)


async def test_auth_requires_token(client):
    unauth_me = await client.get("/api/v1/auth/me")
    assert unauth_me.status_code == 401
    assert unauth_me.json()["detail"] == "AUTH_REQUIRED"

    bad_token = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer nope"})
    assert bad_token.status_code == 401
    assert bad_token.json()["detail"] == "AUTH_INVALID_TOKEN"

    unauth_chat = await client.post("/api/v1/chat/new", json={"firstMessage": "hi"})
    assert unauth_chat.status_code == 401
