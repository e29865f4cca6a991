# tests/test_admin_guard.py
import pytest

from conftest import expire_sessions

ADMIN_API = [
    ("GET", "/api/v1/admin/posts"),
    ("POST", "/api/v1/admin/posts"),
    ("GET", "/api/v1/admin/projects"),
    ("DELETE", "/api/v1/admin/projects/some-id"),
    ("GET", "/api/v1/admin/profile"),
    ("PUT", "/api/v1/admin/profile"),
    ("GET", "/api/v1/admin/stats"),
]


@pytest.mark.parametrize("method, path", ADMIN_API)
def test_admin_api_requires_session(client, method, path):
    response = client.request(method, path)
    assert response.status_code == 401
    assert response.json() == {"detail": "Not authenticated"}


@pytest.mark.parametrize("method, path", ADMIN_API)
def test_admin_api_rejects_regular_users(user_client, method, path):
    response = user_client.request(method, path)
    assert response.status_code == 403
    assert response.json() == {"detail": "Admin access required"}


def test_admin_api_allows_admins(admin_client):
    response = admin_client.get("/api/v1/admin/stats")
    assert response.status_code == 200
    stats = response.json()["stats"]
    assert stats["posts"]["totalPosts"] == 0
    assert stats["projects"]["byStatus"] == {
        "completed": 0,
        "in-progress": 0,
        "planned": 0,
        "on-hold": 0,
    }


@pytest.mark.parametrize("path", ["/admin", "/admin/posts", "/admin/posts/edit/123"])
def test_admin_pages_redirect_anonymous_to_login(client, path):
    response = client.get(path, follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"] == "/login"
    assert "set-cookie" not in response.headers


def test_admin_pages_clear_stale_cookie(client):
    client.cookies.set("auth-token", "forged-token")
    response = client.get("/admin/projects", follow_redirects=False)
    assert response.headers["location"] == "/login"
    assert "max-age=0" in response.headers["set-cookie"].lower()


def test_admin_pages_redirect_expired_session_to_login(user_client, db_call):
    db_call(expire_sessions)
    response = user_client.get("/admin", follow_redirects=False)
    assert response.headers["location"] == "/login"


@pytest.mark.parametrize("path", ["/admin", "/admin/profile"])
def test_admin_pages_redirect_non_admin_to_unauthorized(user_client, path):
    response = user_client.get(path, follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"] == "/unauthorized"


def test_admin_pages_render_for_admin(admin_client):
    response = admin_client.get("/admin", follow_redirects=False)
    assert response.status_code == 200
    body = response.json()
    assert body["page"] == "dashboard"
    assert body["user"]["isAdmin"] is True
    assert "posts" in body["stats"]

    response = admin_client.get("/admin/posts/edit/42", follow_redirects=False)
    assert response.status_code == 200
    assert response.json()["page"] == "posts/edit/42"


def test_unauthorized_page_is_public(client):
    response = client.get("/unauthorized")
    assert response.status_code == 200
    assert response.json()["page"] == "unauthorized"
