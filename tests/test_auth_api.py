# tests/test_auth_api.py
import pytest

from conftest import PASSWORD, expire_sessions, login, signup
from folio.app.services import users as user_service

AUTH = "/api/v1/auth"


def cookie_cleared(response):
    header = response.headers.get("set-cookie", "").lower()
    return "auth-token=" in header and "max-age=0" in header


def test_signup_returns_summary_without_password(client):
    response = signup(client, username="  alice  ", email="  Alice@Example.COM ")
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User created successfully"
    assert body["user"]["username"] == "alice"
    assert body["user"]["email"] == "alice@example.com"
    assert set(body["user"]) == {"id", "username", "email"}
    assert "password" not in response.text.lower()


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"username": ""}, "All fields are required"),
        ({"username": "   "}, "All fields are required"),
        ({"email": "  "}, "All fields are required"),
        ({"gender": None}, "All fields are required"),
        ({"email": "not-an-email"}, "Invalid email format"),
        ({"email": "a b@example.com"}, "Invalid email format"),
        ({"phoneNumber": "12345"}, "Phone number must be exactly 10 digits"),
        ({"phoneNumber": "01234567ab"}, "Phone number must be exactly 10 digits"),
        ({"gender": "robot"}, "Invalid gender selection"),
        ({"password": "12345"}, "Password must be at least 6 characters long"),
    ],
)
def test_signup_validation(client, overrides, message):
    body = {
        "username": "alice",
        "email": "alice@example.com",
        "phoneNumber": "0123456789",
        "gender": "female",
        "password": PASSWORD,
    }
    body.update(overrides)
    response = client.post(f"{AUTH}/signup", json=body)
    assert response.status_code == 400
    assert response.json() == {"detail": message}


def test_signup_without_body(client):
    response = client.post(f"{AUTH}/signup")
    assert response.status_code == 400
    assert response.json()["detail"] == "All fields are required"


def test_signup_duplicates_have_distinct_messages(client):
    assert signup(client).status_code == 201

    response = signup(client, username="ALICE", email="other@example.com", phone_number="0111111111")
    assert response.json() == {"detail": "Username already exists"}

    response = signup(client, username="bob", email="Alice@example.com", phone_number="0111111111")
    assert response.json() == {"detail": "Email already exists"}

    response = signup(client, username="bob", email="bob@example.com")
    assert response.status_code == 400
    assert response.json() == {"detail": "Phone number already exists"}


def test_signup_losing_a_concurrent_race_reports_duplicate(client, monkeypatch):
    assert signup(client).status_code == 201

    real_lookup = user_service.duplicate_field
    calls = []

    async def lookup_misses_first_time(db, data):
        # The first check runs before the other signup has committed
        calls.append(data.username)
        if len(calls) == 1:
            return None
        return await real_lookup(db, data)

    monkeypatch.setattr(user_service, "duplicate_field", lookup_misses_first_time)

    response = signup(client)
    assert response.status_code == 400
    assert response.json() == {"detail": "Username already exists"}
    assert len(calls) == 2


def test_login_with_username_or_email_sets_cookie(client):
    signup(client)
    for identifier in ("alice", "  alice@example.com  ", "ALICE@example.com"):
        response = login(client, identifier)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["user"]["username"] == "alice"
        assert body["user"]["phoneNumber"] == "0123456789"
        assert body["user"]["isAdmin"] is False
        assert "passwordHash" not in body["user"]

        header = response.headers["set-cookie"].lower()
        assert header.startswith("auth-token=")
        assert "httponly" in header
        assert "samesite=strict" in header
        assert "path=/" in header
        assert "max-age=604800" in header


def test_login_failure_does_not_reveal_account_existence(client):
    signup(client)
    wrong_password = login(client, "alice", "wrong-password")
    unknown_user = login(client, "nobody", PASSWORD)
    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"detail": "Invalid credentials"}
    assert "set-cookie" not in wrong_password.headers


def test_login_validation(client):
    response = client.post(f"{AUTH}/login", json={"emailOrUsername": "   ", "password": "x"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Email or username is required"}

    response = client.post(f"{AUTH}/login", json={"emailOrUsername": "alice"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Password is required"}


def test_me_and_verify(user_client):
    response = user_client.get(f"{AUTH}/me")
    assert response.status_code == 200
    assert response.json()["user"]["username"] == "alice"

    response = user_client.get(f"{AUTH}/verify")
    assert response.status_code == 200
    assert response.json()["user"]["email"] == "alice@example.com"


def test_me_and_verify_anonymous(client):
    assert client.get(f"{AUTH}/me").json() == {"user": None}

    response = client.get(f"{AUTH}/verify")
    assert response.status_code == 401
    assert response.json() == {"detail": "Not authenticated"}


def test_stale_cookie_is_cleared(client):
    client.cookies.set("auth-token", "forged-token")
    response = client.get(f"{AUTH}/me")
    assert response.json() == {"user": None}
    assert cookie_cleared(response)

    client.cookies.set("auth-token", "forged-token")
    response = client.get(f"{AUTH}/verify")
    assert response.status_code == 401
    assert cookie_cleared(response)


def test_expired_session_is_rejected(user_client, db_call):
    db_call(expire_sessions)
    response = user_client.get(f"{AUTH}/me")
    assert response.json() == {"user": None}
    assert cookie_cleared(response)


def test_logout(user_client):
    token = user_client.cookies.get("auth-token")
    response = user_client.post(f"{AUTH}/logout")
    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}
    assert cookie_cleared(response)

    # The server-side session is gone too
    user_client.cookies.set("auth-token", token)
    assert user_client.get(f"{AUTH}/me").json() == {"user": None}


def test_logout_without_session_still_succeeds(client):
    response = client.post(f"{AUTH}/logout")
    assert response.status_code == 200


def test_sessions_are_independent(client):
    signup(client)
    login(client)
    first = client.cookies.get("auth-token")
    client.cookies.clear()
    login(client)
    second = client.cookies.get("auth-token")
    assert first != second

    client.post(f"{AUTH}/logout")
    client.cookies.set("auth-token", first)
    assert client.get(f"{AUTH}/me").json()["user"]["username"] == "alice"


def test_delete_account(user_client):
    response = user_client.request("DELETE", f"{AUTH}/delete-account", json={"password": PASSWORD})
    assert response.status_code == 200
    assert response.json() == {"message": "Account deleted successfully"}
    assert cookie_cleared(response)

    assert login(user_client).status_code == 401


def test_delete_account_errors(client, db_call):
    response = client.request("DELETE", f"{AUTH}/delete-account", json={"password": PASSWORD})
    assert response.status_code == 401
    assert response.json() == {"detail": "Not authenticated"}

    signup(client)
    login(client)

    response = client.request("DELETE", f"{AUTH}/delete-account", json={})
    assert response.status_code == 400
    assert response.json() == {"detail": "Password is required"}

    response = client.request("DELETE", f"{AUTH}/delete-account", json={"password": "nope-nope"})
    assert response.status_code == 401
    assert response.json() == {"detail": "Incorrect password"}

    db_call(expire_sessions)
    response = client.request("DELETE", f"{AUTH}/delete-account", json={"password": PASSWORD})
    assert response.status_code == 401
    assert response.json() == {"detail": "Session expired"}
