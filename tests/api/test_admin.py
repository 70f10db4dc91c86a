"""Admin API, navigation guard, announcement and reports over HTTP."""

from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import AsyncClient
from starlette.websockets import WebSocketDisconnect

import pytest

from tests.conftest import Backends, register_user


async def test_regular_user_is_redirected_from_admin_routes(client: AsyncClient, user) -> None:
    _, headers = user
    response = await client.get("/api/v1/admin/tasks", headers=headers)
    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "PERMISSION_DENIED"
    assert body["details"]["redirect_to"] == "/dashboard"
    assert body["details"]["replace"] is True
    assert body["message"] == "You do not have permission to view this page."


async def test_admin_lists_everyone_with_owner(
    client: AsyncClient, user, admin, backends: Backends
) -> None:
    user_id, user_headers = user
    _, admin_headers = admin
    await client.post("/api/v1/tasks", json={"title": "Ana's"}, headers=user_headers)

    response = await client.get(
        "/api/v1/admin/tasks", params={"department": "Engineering"}, headers=admin_headers
    )
    assert response.status_code == 200
    (row,) = response.json()
    assert row["task"]["title"] == "Ana's"
    assert row["owner_first_name"] == "Ana"
    assert row["owner_department"] == "Engineering"

    summary = await client.get("/api/v1/admin/task-summary", headers=admin_headers)
    assert summary.json()["total"] == 1

    users = await client.get("/api/v1/admin/users", headers=admin_headers)
    assert {u["email"] for u in users.json()} == {"ana@example.com", "boss@example.com"}

    departments = await client.get("/api/v1/admin/departments", headers=admin_headers)
    assert departments.json() == ["Engineering", "Operations"]

    everyone = await client.get(
        "/api/v1/tasks", params={"view_all": "true"}, headers=admin_headers
    )
    assert [t["user_id"] for t in everyone.json()] == [user_id]


async def test_role_is_reread_on_every_request(
    client: AsyncClient, user, backends: Backends
) -> None:
    user_id, headers = user
    assert (await client.get("/api/v1/admin/task-summary", headers=headers)).status_code == 403
    backends.profiles.promote(user_id)
    assert (await client.get("/api/v1/admin/task-summary", headers=headers)).status_code == 200


async def test_role_lookup_failure_denies_admin_route(
    client: AsyncClient, admin, backends: Backends
) -> None:
    _, headers = admin
    backends.profiles.fail = True
    response = await client.get("/api/v1/admin/users", headers=headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Could not retrieve user role. Please try again."


@pytest.mark.parametrize(
    ("path", "state", "redirect_to"),
    [
        ("/login", "authorized", None),
        ("/dashboard", "denied", "/login"),
        ("/admin/users-tasks", "denied", "/login"),
    ],
)
async def test_navigation_without_session(
    client: AsyncClient, path: str, state: str, redirect_to: str | None
) -> None:
    response = await client.get("/api/v1/navigation/resolve", params={"path": path})
    assert response.status_code == 200
    data = response.json()
    assert data["state"] == state
    assert data["redirect_to"] == redirect_to


async def test_navigation_with_regular_session(client: AsyncClient, user) -> None:
    _, headers = user
    detail = await client.get(
        "/api/v1/navigation/resolve", params={"path": "/tasks/detail/t1"}, headers=headers
    )
    assert detail.json()["state"] == "authorized"
    assert detail.json()["params"] == {"taskId": "t1"}

    admin_page = await client.get(
        "/api/v1/navigation/resolve",
        params={"path": "/admin/users-tasks"},
        headers=headers,
    )
    data = admin_page.json()
    assert data["state"] == "denied"
    assert data["redirect_to"] == "/dashboard"
    assert data["replace"] is True
    assert data["notice"] == "You do not have permission to view this page."

    unknown = await client.get(
        "/api/v1/navigation/resolve", params={"path": "/nowhere"}, headers=headers
    )
    assert unknown.status_code == 404


async def test_announcement_visibility(client: AsyncClient, user, admin) -> None:
    _, user_headers = user
    _, admin_headers = admin
    assert (await client.get("/api/v1/announcement", headers=user_headers)).status_code == 204

    denied = await client.put(
        "/api/v1/announcement",
        json={"content": "Quarterly review on Monday", "is_visible": True},
        headers=user_headers,
    )
    assert denied.status_code == 403

    saved = await client.put(
        "/api/v1/announcement",
        json={"content": "Quarterly review on Monday", "is_visible": True},
        headers=admin_headers,
    )
    assert saved.status_code == 200
    visible = await client.get("/api/v1/announcement", headers=user_headers)
    assert visible.json()["content"] == "Quarterly review on Monday"

    await client.put(
        "/api/v1/announcement",
        json={"content": "Quarterly review on Monday", "is_visible": False},
        headers=admin_headers,
    )
    assert (await client.get("/api/v1/announcement", headers=user_headers)).status_code == 204
    hidden = await client.get("/api/v1/announcement/admin", headers=admin_headers)
    assert hidden.json()["is_visible"] is False

    too_short = await client.put(
        "/api/v1/announcement", json={"content": "short"}, headers=admin_headers
    )
    assert too_short.status_code == 422


async def test_reports_are_pdf_attachments(client: AsyncClient, user, admin) -> None:
    _, user_headers = user
    _, admin_headers = admin
    await client.post("/api/v1/tasks", json={"title": "Report me"}, headers=user_headers)

    mine = await client.get(
        "/api/v1/reports/me", params={"period": "week"}, headers=user_headers
    )
    assert mine.status_code == 200
    assert mine.headers["content-type"] == "application/pdf"
    disposition = mine.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="My_Task_Report_')
    assert disposition.endswith('.pdf"')
    assert mine.headers["x-report-rows"] == "1"

    assert (
        await client.get("/api/v1/reports/admin", headers=user_headers)
    ).status_code == 403
    summary = await client.get(
        "/api/v1/reports/admin",
        params={"period": "month", "department": "all"},
        headers=admin_headers,
    )
    assert summary.status_code == 200
    assert 'filename="Task_Report_' in summary.headers["content-disposition"]

    bad = await client.get(
        "/api/v1/reports/me", params={"period": "year"}, headers=user_headers
    )
    assert bad.status_code == 422


def test_session_events_socket_closes_after_sign_out(app: FastAPI) -> None:
    with TestClient(app) as tc:
        response = tc.post(
            "/api/v1/auth/register",
            json={"email": "ws@example.com", "password": "secret123", "first_name": "Wes"},
        )
        token = response.json()["access_token"]
        headers = {"Authorization": f"Bearer {token}"}
        bus = app.state.auth_bus

        with tc.websocket_connect(f"/api/v1/session/events?token={token}") as ws:
            assert tc.post("/api/v1/auth/logout", headers=headers).status_code == 204
            message = ws.receive_json()
            assert message["event"] == "SIGNED_OUT"
            with pytest.raises(WebSocketDisconnect):
                ws.receive_json()
    # Leaving the client waits for the socket handler to finish.
    assert bus.subscriber_count == 0


def test_session_events_socket_rejects_bad_token(app: FastAPI) -> None:
    with TestClient(app) as tc:
        with tc.websocket_connect("/api/v1/session/events?token=nope") as ws:
            with pytest.raises(WebSocketDisconnect):
                ws.receive_json()


def test_signing_out_another_device_leaves_the_socket_open(app: FastAPI) -> None:
    with TestClient(app) as tc:
        credentials = {"email": "two@example.com", "password": "secret123"}
        first = tc.post("/api/v1/auth/register", json={**credentials, "first_name": "Tia"})
        token_a = first.json()["access_token"]
        token_b = tc.post("/api/v1/auth/login", json=credentials).json()["access_token"]
        headers_a = {"Authorization": f"Bearer {token_a}"}

        with tc.websocket_connect(f"/api/v1/session/events?token={token_a}") as ws:
            logout_b = tc.post(
                "/api/v1/auth/logout", headers={"Authorization": f"Bearer {token_b}"}
            )
            assert logout_b.status_code == 204
            assert tc.get("/api/v1/auth/me", headers=headers_a).status_code == 200

            # The first frame is the password change, not the other device's sign-out.
            changed = tc.put(
                "/api/v1/auth/password",
                json={"password": "newsecret", "confirm_password": "newsecret"},
                headers=headers_a,
            )
            assert changed.status_code == 200
            assert ws.receive_json()["event"] == "USER_UPDATED"

            assert tc.post("/api/v1/auth/logout", headers=headers_a).status_code == 204
            assert ws.receive_json()["event"] == "SIGNED_OUT"
            with pytest.raises(WebSocketDisconnect):
                ws.receive_json()


def test_socket_follows_its_session_across_refresh(app: FastAPI) -> None:
    with TestClient(app) as tc:
        response = tc.post(
            "/api/v1/auth/register",
            json={"email": "fresh@example.com", "password": "secret123", "first_name": "Rae"},
        )
        token = response.json()["access_token"]

        with tc.websocket_connect(f"/api/v1/session/events?token={token}") as ws:
            refreshed = tc.post(
                "/api/v1/auth/refresh", headers={"Authorization": f"Bearer {token}"}
            )
            assert refreshed.status_code == 200
            assert ws.receive_json()["event"] == "TOKEN_REFRESHED"

            renewed = {"Authorization": f"Bearer {refreshed.json()['access_token']}"}
            assert tc.post("/api/v1/auth/logout", headers=renewed).status_code == 204
            assert ws.receive_json()["event"] == "SIGNED_OUT"
            with pytest.raises(WebSocketDisconnect):
                ws.receive_json()
