"""Auth API: register, login, refresh, logout, password, me."""

from httpx import AsyncClient

from tests.conftest import register_user


async def test_register_returns_session_and_regular_profile(client: AsyncClient) -> None:
    user_id, headers = await register_user(client, first_name="Ana")
    response = await client.get("/api/v1/auth/me", headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == user_id
    assert data["role"] == "Regular"
    assert data["department"] == "Engineering"


async def test_register_rejects_duplicate_email(client: AsyncClient) -> None:
    await register_user(client, email="dup@example.com")
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "dup@example.com", "password": "secret123", "first_name": "Dup"},
    )
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "email"


async def test_register_rejects_short_password(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "a@example.com", "password": "123", "first_name": "A"},
    )
    assert response.status_code == 422


async def test_login_with_wrong_password_is_401(client: AsyncClient) -> None:
    await register_user(client, email="ana@example.com")
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "ana@example.com", "password": "wrong-password"},
    )
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
    assert response.headers["www-authenticate"] == "Bearer"


async def test_login_is_case_insensitive_on_email(client: AsyncClient) -> None:
    user_id, _ = await register_user(client, email="ana@example.com")
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "ANA@example.com", "password": "secret123"},
    )
    assert response.status_code == 200
    assert response.json()["user_id"] == user_id
    assert response.json()["token_type"] == "bearer"


async def test_logout_revokes_the_session(client: AsyncClient) -> None:
    _, headers = await register_user(client)
    response = await client.post("/api/v1/auth/logout", headers=headers)
    assert response.status_code == 204
    response = await client.get("/api/v1/auth/me", headers=headers)
    assert response.status_code == 401
    assert response.json()["details"]["redirect_to"] == "/login"


async def test_refresh_replaces_the_session(client: AsyncClient) -> None:
    _, headers = await register_user(client)
    response = await client.post("/api/v1/auth/refresh", headers=headers)
    assert response.status_code == 200
    new_headers = {"Authorization": f"Bearer {response.json()['access_token']}"}
    assert (await client.get("/api/v1/auth/me", headers=headers)).status_code == 401
    assert (await client.get("/api/v1/auth/me", headers=new_headers)).status_code == 200


async def test_update_password_requires_matching_confirmation(client: AsyncClient) -> None:
    _, headers = await register_user(client, email="ana@example.com")
    response = await client.put(
        "/api/v1/auth/password",
        json={"password": "newsecret", "confirm_password": "different"},
        headers=headers,
    )
    assert response.status_code == 422
    response = await client.put(
        "/api/v1/auth/password",
        json={"password": "newsecret", "confirm_password": "newsecret"},
        headers=headers,
    )
    assert response.status_code == 200
    login = await client.post(
        "/api/v1/auth/login", json={"email": "ana@example.com", "password": "newsecret"}
    )
    assert login.status_code == 200


async def test_garbage_token_is_unauthenticated(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401
    assert response.json()["details"] == {"redirect_to": "/login", "replace": True}
