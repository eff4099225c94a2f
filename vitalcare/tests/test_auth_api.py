"""Tests for the auth API."""

import pytest

pytestmark = pytest.mark.integration

from vitalcare.core.auth.events import AUTH_USER_REGISTERED
from vitalcare.core.auth.models import JWTBlocklist, SessionToken
from vitalcare.core.users.models import User
from vitalcare.platform.outbox.models import OutboxMessage


def _register(client, email="new.user@vitalcare.io", password="Passw0rd!", full_name="New User"):
    return client.post("/auth/register", json={"email": email, "password": password, "full_name": full_name})


class TestRegister:
    def test_register_creates_user_with_default_role_and_tokens(self, client):
        resp = _register(client, email="New.User@VitalCare.io")
        assert resp.status_code == 201
        data = resp.get_json()
        assert data["ok"] is True
        assert data["user"]["email"] == "new.user@vitalcare.io"
        assert data["user"]["role_codes"] == ["user"]
        assert data["access_token"] and data["refresh_token"] and data["csrf_token"]

        user = User.query.filter_by(email="new.user@vitalcare.io").one()
        assert OutboxMessage.query.filter_by(event_type=AUTH_USER_REGISTERED, user_id=user.id).count() == 1

    def test_duplicate_email_rejected(self, client):
        assert _register(client).status_code == 201
        resp = _register(client)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "email_already_exists"

    @pytest.mark.parametrize("password", ["short1", "lettersonly", "1234567890"])
    def test_weak_password_rejected(self, client, password):
        resp = _register(client, password=password)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "validation_error"


class TestLoginFlow:
    def test_login_me_refresh_logout(self, client):
        _register(client)
        resp = client.post("/auth/login", json={"email": "new.user@vitalcare.io", "password": "Passw0rd!"})
        assert resp.status_code == 200
        tokens = resp.get_json()
        assert SessionToken.query.count() == 2  # register + login

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
        assert me.status_code == 200
        assert me.get_json()["user"]["email"] == "new.user@vitalcare.io"

        refresh_headers = {"Authorization": f"Bearer {tokens['refresh_token']}"}
        refreshed = client.post("/auth/refresh", headers=refresh_headers)
        assert refreshed.status_code == 200
        assert refreshed.get_json()["access_token"]

        assert client.post("/auth/logout", headers=refresh_headers).status_code == 200
        assert JWTBlocklist.query.count() == 1

        again = client.post("/auth/refresh", headers=refresh_headers)
        assert again.status_code == 401
        assert again.get_json()["error"] == "token_revoked"

    def test_invalid_credentials(self, client, patient):
        resp = client.post("/auth/login", json={"email": "patient@example.com", "password": "wrong-pass1"})
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "invalid_credentials"

    def test_logout_checks_csrf_when_enabled(self, app, client):
        _register(client)
        tokens = client.post(
            "/auth/login", json={"email": "new.user@vitalcare.io", "password": "Passw0rd!"}
        ).get_json()
        app.config["WTF_CSRF_ENABLED"] = True
        headers = {"Authorization": f"Bearer {tokens['refresh_token']}"}

        assert client.post("/auth/logout", headers=headers).status_code == 403
        ok = client.post("/auth/logout", headers={**headers, "X-CSRF-Token": tokens["csrf_token"]})
        assert ok.status_code == 200

    def test_me_requires_token(self, client):
        resp = client.get("/auth/me")
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "unauthorized"

    def test_garbage_token_is_invalid(self, client):
        resp = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "invalid_token"


def test_health_endpoints(client):
    assert client.get("/health").get_json() == {"ok": True}
    assert client.get("/api/v1/ping").get_json() == {"pong": True}
