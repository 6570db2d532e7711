"""API endpoint tests for authentication and user administration."""

from conftest import TEST_PASSWORD, register


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client):
    """Test user registration."""
    response = register(client, "New User", "newuser@example.com")
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "newuser@example.com"
    assert data["role"] == "USER"
    assert "password" not in data
    assert "password_hash" not in data


def test_register_duplicate_email(client, auth_headers):
    """Test registration with duplicate email fails with a conflict."""
    response = register(client, "Duplicate", auth_headers.email)
    assert response.status_code == 409
    assert "already registered" in response.json()["detail"]


def test_register_short_password(client):
    response = register(client, "Shorty", "short@example.com", password="short")
    assert response.status_code == 400
    assert any(error["field"] == "password" for error in response.json()["errors"])


def test_register_invalid_email(client):
    response = register(client, "Bad Email", "not-an-email")
    assert response.status_code == 400
    assert any(error["field"] == "email" for error in response.json()["errors"])


def test_register_invalid_role(client):
    response = register(client, "Bad Role", "badrole@example.com", role="SUPERUSER")
    assert response.status_code == 400


def test_register_admin_role_requires_admin(client, auth_headers):
    anonymous = register(client, "Eve", "eve@example.com", role="ADMIN")
    assert anonymous.status_code == 403

    as_user = register(client, "Eve", "eve@example.com", role="ADMIN", headers=auth_headers)
    assert as_user.status_code == 403


def test_admin_registers_editor(client, admin_headers):
    response = register(client, "Ed", "ed@example.com", role="EDITOR", headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["role"] == "EDITOR"


def test_login_sets_http_only_cookie(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": TEST_PASSWORD}
    )
    assert response.status_code == 200
    assert response.json()["user"]["email"] == auth_headers.email
    assert "access_token" not in response.json()

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("auth-token=")
    assert "HttpOnly" in set_cookie
    assert "Max-Age=604800" in set_cookie
    assert "samesite=lax" in set_cookie.lower()


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"
    assert "set-cookie" not in response.headers


def test_login_unknown_email_matches_wrong_password(client, auth_headers):
    """Unknown email and wrong password are indistinguishable."""
    wrong_password = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    unknown_email = client.post(
        "/api/v1/auth/login", json={"email": "ghost@example.com", "password": "wrongpass"}
    )
    assert unknown_email.status_code == wrong_password.status_code == 401
    assert unknown_email.json() == wrong_password.json()


def test_get_current_user_with_cookie(client, auth_headers):
    """The cookie set at login authenticates later requests."""
    client.post("/api/v1/auth/login", json={"email": auth_headers.email, "password": TEST_PASSWORD})
    response = client.get("/api/v1/auth/me")
    assert response.status_code == 200
    assert response.json()["user"]["email"] == auth_headers.email


def test_get_current_user_with_bearer(client, auth_headers):
    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["id"] == auth_headers.user_id
    assert set(user) == {"id", "name", "email", "role"}


def test_get_current_user_unauthenticated(client):
    response = client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_invalid_token_is_unauthenticated(client):
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_logout_clears_cookie(client, auth_headers):
    client.post("/api/v1/auth/login", json={"email": auth_headers.email, "password": TEST_PASSWORD})
    assert client.get("/api/v1/auth/me").status_code == 200

    response = client.post("/api/v1/auth/logout")
    assert response.status_code == 200
    assert 'auth-token=""' in response.headers["set-cookie"]

    assert client.get("/api/v1/auth/me").status_code == 401


def test_list_users_requires_admin(client, auth_headers):
    assert client.get("/api/v1/users").status_code == 401
    assert client.get("/api/v1/users", headers=auth_headers).status_code == 403


def test_list_users_as_admin(client, auth_headers, admin_headers):
    response = client.get("/api/v1/users", headers=admin_headers)
    assert response.status_code == 200
    users = response.json()
    assert {u["email"] for u in users} == {auth_headers.email, admin_headers.email}
    assert all("password_hash" not in u for u in users)


def test_role_change_applies_to_next_request(client, auth_headers, admin_headers):
    """The user's existing token reflects the new role immediately."""
    assert client.get("/api/v1/users", headers=auth_headers).status_code == 403

    response = client.patch(
        f"/api/v1/users/{auth_headers.user_id}/role",
        headers=admin_headers,
        json={"role": "ADMIN"},
    )
    assert response.status_code == 200
    assert response.json()["role"] == "ADMIN"

    assert client.get("/api/v1/users", headers=auth_headers).status_code == 200


def test_role_change_requires_admin(client, auth_headers):
    response = client.patch(
        f"/api/v1/users/{auth_headers.user_id}/role",
        headers=auth_headers,
        json={"role": "ADMIN"},
    )
    assert response.status_code == 403


def test_role_change_validation(client, auth_headers, admin_headers):
    invalid = client.patch(
        f"/api/v1/users/{auth_headers.user_id}/role",
        headers=admin_headers,
        json={"role": "OWNER"},
    )
    assert invalid.status_code == 400

    missing = client.patch("/api/v1/users/99999/role", headers=admin_headers, json={"role": "USER"})
    assert missing.status_code == 404


def test_cannot_demote_last_admin(client, admin_headers):
    response = client.patch(
        f"/api/v1/users/{admin_headers.user_id}/role",
        headers=admin_headers,
        json={"role": "USER"},
    )
    assert response.status_code == 409
