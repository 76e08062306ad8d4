import pytest


@pytest.mark.asyncio
async def test_login_and_me(client, create_user, login):
    user = await create_user()
    headers = await login(user)

    res = await client.get("/api/v1/users/me", headers=headers)

    assert res.status_code == 200
    assert res.json()["email"] == user.email


@pytest.mark.asyncio
async def test_login_with_wrong_password(client, create_user):
    user = await create_user()
    res = await client.post("/api/v1/auth/login", json={"email": user.email, "password": "nope-nope"})
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_logout_revokes_token(client, create_user, login):
    user = await create_user()
    headers = await login(user)

    res = await client.post("/api/v1/auth/logout", headers=headers)
    assert res.status_code == 204

    res = await client.get("/api/v1/users/me", headers=headers)
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_me_requires_token(client):
    res = await client.get("/api/v1/users/me")
    assert res.status_code == 401

    res = await client.get("/api/v1/users/me", headers={"Authorization": "Bearer garbage"})
    assert res.status_code == 401
