"""Integration tests for authentication flow.

Tests the complete session lifecycle with real database and HTTP endpoints:
1. Login for each subject type → access protected endpoint
2. Refresh token rotation, replay and logout
3. Login and token failure responses
4. User email lookups and the startup secret check
"""

import pytest
from fastapi.testclient import TestClient

from app.infrastructure.config.settings import Settings, get_settings
from app.main import app
from tests.integration.conftest import (
    MODERATOR_PASSWORD,
    ORGANIZATION_PASSWORD,
    USER_PASSWORD,
)

pytestmark = pytest.mark.integration


def _login_user(client: TestClient) -> dict:
    response = client.post(
        "/api/v1/auth/user/login",
        json={"email": "user@example.com", "password": USER_PASSWORD},
    )
    assert response.status_code == 200
    return response.json()


# === LOGIN ===


def test_user_login_and_me(client: TestClient):
    """Test complete flow: login → access protected endpoint."""
    # Step 1: Login with credentials
    token_data = _login_user(client)
    assert token_data["token_type"] == "bearer"
    assert token_data["expires_in"] == 900
    assert token_data["subject_type"] == "user"
    assert token_data["subject_id"] == 42
    assert token_data["organization_id"] == 5
    assert token_data["license"] == "LIC-001"

    # Step 2: Access protected endpoint with token
    me_response = client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {token_data['access_token']}"},
    )
    assert me_response.status_code == 200
    me_data = me_response.json()
    assert me_data["subject_type"] == "user"
    assert me_data["subject_id"] == 42
    assert me_data["claims"] == {
        "role": "user",
        "organization_id": 5,
        "group_id": 3,
        "license": "LIC-001",
    }


def test_moderator_login_with_bcrypt_hash(client: TestClient):
    """Test moderators with bcrypt hashes from the existing store can log in."""
    response = client.post(
        "/api/v1/auth/moderator/login",
        json={"user_name": "mod01", "password": MODERATOR_PASSWORD},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["subject_type"] == "moderator"
    assert data["subject_id"] == 1


def test_organization_login(client: TestClient):
    response = client.post(
        "/api/v1/auth/organization/login",
        json={"email": "org@example.com", "password": ORGANIZATION_PASSWORD},
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Example Org"


def test_login_with_wrong_password(client: TestClient):
    """Test login fails with incorrect password."""
    response = client.post(
        "/api/v1/auth/user/login",
        json={"email": "user@example.com", "password": "wrongpassword"},
    )

    assert response.status_code == 401
    assert response.json() == {
        "detail": "Invalid credentials",
        "error_code": "INVALID_CREDENTIALS",
    }


def test_login_unknown_email(client: TestClient):
    response = client.post(
        "/api/v1/auth/user/login",
        json={"email": "nobody@example.com", "password": USER_PASSWORD},
    )

    assert response.status_code == 401
    assert response.json()["error_code"] == "INVALID_CREDENTIALS"


def test_login_inactive_user(client: TestClient):
    response = client.post(
        "/api/v1/auth/user/login",
        json={"email": "inactive@example.com", "password": USER_PASSWORD},
    )

    assert response.status_code == 403
    assert response.json() == {"detail": "User inactive", "error_code": "SUBJECT_INACTIVE"}


def test_login_inactive_organization(client: TestClient):
    response = client.post(
        "/api/v1/auth/organization/login",
        json={"email": "closed@example.com", "password": ORGANIZATION_PASSWORD},
    )

    assert response.status_code == 403
    assert response.json()["detail"] == "Organization inactive"


def test_login_organization_without_password(client: TestClient):
    response = client.post(
        "/api/v1/auth/organization/login",
        json={"email": "new@example.com", "password": "anything"},
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "PASSWORD_NOT_SET"


def test_login_missing_email(client: TestClient):
    """Test request validation errors use the custom format."""
    response = client.post(
        "/api/v1/auth/user/login",
        json={"password": USER_PASSWORD},
    )

    assert response.status_code == 422
    data = response.json()
    assert data["error_code"] == "VALIDATION_ERROR"
    assert data["errors"][0]["field"] == "body.email"


def test_user_login_with_special_use_domain(client: TestClient):
    """Test stored emails on non-deliverable domains can still log in."""
    response = client.post(
        "/api/v1/auth/user/login",
        json={"email": "staff@corp.local", "password": USER_PASSWORD},
    )

    assert response.status_code == 200
    assert response.json()["subject_id"] == 44


# === EMAIL LOOKUPS ===


@pytest.mark.parametrize(
    "email, expected",
    [
        ("user@example.com", True),
        ("staff@corp.local", True),
        ("org@example.com", False),
        ("nobody@example.com", False),
    ],
)
def test_verify_email(client: TestClient, email, expected):
    response = client.post("/api/v1/auth/user/verify-email", json={"email": email})

    assert response.status_code == 200
    assert response.json() == {"exists": expected}


def test_verify_email_license(client: TestClient):
    """Test the license must belong to the user with that email."""
    match = client.post(
        "/api/v1/auth/user/verify-email-license",
        json={"email": "user@example.com", "license": "LIC-001"},
    )
    mismatch = client.post(
        "/api/v1/auth/user/verify-email-license",
        json={"email": "user@example.com", "license": "LIC-003"},
    )

    assert match.json() == {"exists": True}
    assert mismatch.json() == {"exists": False}


def test_verify_email_license_requires_license(client: TestClient):
    response = client.post(
        "/api/v1/auth/user/verify-email-license",
        json={"email": "user@example.com"},
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "body.license"


# === REFRESH AND LOGOUT ===


def test_refresh_rotates_and_rejects_replay(client: TestClient):
    """Test refresh returns a new pair and the old token stops working."""
    # Arrange
    r1 = _login_user(client)["refresh_token"]

    # Act
    rotate = client.post("/api/v1/auth/refresh", json={"refresh_token": r1})
    replay = client.post("/api/v1/auth/refresh", json={"refresh_token": r1})

    # Assert
    assert rotate.status_code == 200
    r2 = rotate.json()["refresh_token"]
    assert r2 != r1
    assert replay.status_code == 401
    assert replay.json() == {"detail": "Refresh token revoked", "error_code": "TOKEN_REVOKED"}

    # The successor still works after the replay attempt
    r3 = client.post("/api/v1/auth/refresh", json={"refresh_token": r2})
    assert r3.status_code == 200
    assert r3.json()["refresh_token"] not in (r1, r2)


def test_rotated_access_token_keeps_claims(client: TestClient):
    r1 = _login_user(client)["refresh_token"]

    rotated = client.post("/api/v1/auth/refresh", json={"refresh_token": r1}).json()
    me = client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {rotated['access_token']}"},
    )

    assert me.status_code == 200
    assert me.json()["claims"]["organization_id"] == 5


def test_logout_then_refresh_fails(client: TestClient):
    """Test a logged-out refresh token cannot be rotated."""
    refresh_token = _login_user(client)["refresh_token"]

    logout = client.post("/api/v1/auth/logout", json={"refresh_token": refresh_token})
    refresh = client.post("/api/v1/auth/refresh", json={"refresh_token": refresh_token})

    assert logout.status_code == 204
    assert logout.content == b""
    assert refresh.status_code == 401
    assert refresh.json()["error_code"] == "TOKEN_REVOKED"


def test_logout_is_idempotent(client: TestClient):
    refresh_token = _login_user(client)["refresh_token"]

    first = client.post("/api/v1/auth/logout", json={"refresh_token": refresh_token})
    second = client.post("/api/v1/auth/logout", json={"refresh_token": refresh_token})
    unknown = client.post("/api/v1/auth/logout", json={"refresh_token": "garbage-string"})

    assert first.status_code == second.status_code == unknown.status_code == 204


def test_refresh_with_garbage_token(client: TestClient):
    response = client.post("/api/v1/auth/refresh", json={"refresh_token": "garbage-string"})

    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid refresh token", "error_code": "INVALID_TOKEN"}


def test_refresh_with_access_token(client: TestClient):
    """Test an access token is refused at the refresh endpoint."""
    access_token = _login_user(client)["access_token"]

    response = client.post("/api/v1/auth/refresh", json={"refresh_token": access_token})

    assert response.status_code == 401
    assert response.json()["error_code"] == "INVALID_TOKEN"


def test_refresh_missing_body_field(client: TestClient):
    response = client.post("/api/v1/auth/refresh", json={})

    assert response.status_code == 422


# === PROTECTED ENDPOINT ===


def test_me_without_token(client: TestClient):
    response = client.get("/api/v1/auth/me")

    assert response.status_code == 401
    assert response.json()["error_code"] == "INVALID_TOKEN"


def test_me_with_refresh_token(client: TestClient):
    """Test refresh tokens are not bearer tokens."""
    refresh_token = _login_user(client)["refresh_token"]

    response = client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {refresh_token}"}
    )

    assert response.status_code == 401


def test_access_token_survives_logout(client: TestClient):
    """Test access tokens stay valid until expiry even after logout."""
    tokens = _login_user(client)
    client.post("/api/v1/auth/logout", json={"refresh_token": tokens["refresh_token"]})

    response = client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"}
    )

    assert response.status_code == 200


# === CONFIGURATION ===


def test_missing_secrets_fail_login_opaquely(client: TestClient):
    """Test unset signing secrets give an opaque 500 instead of leaking details."""
    app.dependency_overrides[get_settings] = lambda: Settings(
        access_token_secret="",
        refresh_token_secret="",
        _env_file=None,
    )

    response = client.post(
        "/api/v1/auth/user/login",
        json={"email": "user@example.com", "password": USER_PASSWORD},
    )

    assert response.status_code == 500
    assert response.json() == {
        "detail": "An internal server error occurred",
        "error_code": "TOKEN_CONFIGURATION_ERROR",
    }


def test_health_check(client: TestClient):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


# === STARTUP ===


def _start_app_with(settings: Settings) -> None:
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        with TestClient(app):
            pass
    finally:
        app.dependency_overrides.clear()


def _startup_warnings(caplog) -> list[str]:
    return [
        record.getMessage()
        for record in caplog.records
        if record.name == "app.main" and record.levelname == "WARNING"
    ]


def test_startup_uses_overridden_settings(test_settings, caplog):
    """Test the secret check at startup reads the same settings as requests."""
    caplog.set_level("WARNING", logger="app.main")

    _start_app_with(test_settings)

    assert _startup_warnings(caplog) == []


def test_startup_warns_without_secrets(caplog):
    caplog.set_level("WARNING", logger="app.main")

    _start_app_with(
        Settings(access_token_secret="", refresh_token_secret="", _env_file=None)
    )

    warnings = _startup_warnings(caplog)
    assert len(warnings) == 1
    assert "REFRESH_TOKEN_SECRET is not set" in warnings[0]
