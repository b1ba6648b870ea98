"""Integration tests for authentication endpoints."""

from __future__ import annotations

import pytest
from authsvc.infra.redis import RedisRevocationStore
from authsvc.services import EXTENSION_KEY, AuthService
from authsvc.services._shared.errors import UserStoreError

PASSWORD = "secret-pass-123"


@pytest.fixture()
def revocation_enabled(app, fake_redis, monkeypatch):
    """Swap the app's service for one backed by a fakeredis denylist."""
    current = app.extensions[EXTENSION_KEY]
    service = AuthService(
        users=current.users,
        hasher=current.hasher,
        tokens=current.tokens,
        revocations=RedisRevocationStore(fake_redis, prefix=app.config["REVOCATION_KEY_PREFIX"]),
    )
    monkeypatch.setitem(app.extensions, EXTENSION_KEY, service)
    return fake_redis


def _register(client, email="user@example.com", password=PASSWORD, name="User"):
    return client.post(
        "/api/v1/auth/register", json={"email": email, "password": password, "name": name}
    )


def _login(client, email="user@example.com", password=PASSWORD):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password})


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestRegister:
    def test_register_returns_public_user(self, client) -> None:
        resp = _register(client, email="New.User@Example.com")

        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["email"] == "new.user@example.com"
        assert data["name"] == "User"
        assert isinstance(data["id"], int)
        assert "password" not in data
        assert "password_hash" not in data

    def test_duplicate_email_conflicts(self, client) -> None:
        _register(client)

        resp = _register(client)

        assert resp.status_code == 409
        assert resp.mimetype == "application/problem+json"
        assert "email already exists" in resp.get_json()["detail"]

    @pytest.mark.parametrize(
        "payload",
        [
            {"password": PASSWORD},
            {"email": "not-an-email", "password": PASSWORD},
            {"email": "user@example.com", "password": "short"},
        ],
    )
    def test_validation_errors(self, client, payload) -> None:
        resp = client.post("/api/v1/auth/register", json=payload)

        assert resp.status_code == 422
        assert resp.get_json()["code"] == "validation_error"


class TestLogin:
    def test_login_issues_token_pair(self, client) -> None:
        _register(client)

        resp = _login(client)

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["token_type"] == "bearer"

    def test_bad_password_and_unknown_email_look_identical(self, client) -> None:
        _register(client)

        wrong_password = _login(client, password="definitely-wrong")
        unknown_email = _login(client, email="ghost@example.com")

        assert wrong_password.status_code == unknown_email.status_code == 401
        a, b = wrong_password.get_json(), unknown_email.get_json()
        assert a["detail"] == b["detail"] == "invalid credentials"
        assert a["code"] == b["code"]


class TestMe:
    def test_me_returns_current_user(self, client) -> None:
        user = _register(client).get_json()["data"]
        tokens = _login(client).get_json()["data"]

        resp = client.get("/api/v1/me", headers=_bearer(tokens["access_token"]))

        assert resp.status_code == 200
        assert resp.get_json()["data"]["id"] == user["id"]
        assert resp.get_json()["data"]["email"] == "user@example.com"

    def test_me_requires_bearer(self, client) -> None:
        resp = client.get("/api/v1/me")

        assert resp.status_code == 401
        assert resp.get_json()["code"] == "missing_token"

    def test_me_rejects_refresh_token(self, client) -> None:
        _register(client)
        tokens = _login(client).get_json()["data"]

        resp = client.get("/api/v1/me", headers=_bearer(tokens["refresh_token"]))

        assert resp.status_code == 401
        assert resp.get_json()["detail"] == "invalid or expired token"

    def test_me_rejects_garbage(self, client) -> None:
        resp = client.get("/api/v1/me", headers=_bearer("garbage"))

        assert resp.status_code == 401
        assert resp.get_json()["code"] == "token_invalid"


class TestRefresh:
    def test_refresh_rotates_and_is_single_use(self, client, revocation_enabled) -> None:
        _register(client)
        tokens = _login(client).get_json()["data"]

        first = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
        replay = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

        assert first.status_code == 200
        assert first.get_json()["data"]["refresh_token"] != tokens["refresh_token"]
        assert replay.status_code == 401
        assert replay.get_json()["code"] == "token_revoked"

    def test_refresh_rejects_access_token(self, client) -> None:
        _register(client)
        tokens = _login(client).get_json()["data"]

        resp = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["access_token"]})

        assert resp.status_code == 401
        assert resp.get_json()["detail"] == "invalid or expired token"

    def test_refresh_with_user_store_down_is_generic_401(self, app, client, monkeypatch) -> None:
        _register(client)
        tokens = _login(client).get_json()["data"]
        users = app.extensions[EXTENSION_KEY].users

        def _unavailable(user_id):
            raise UserStoreError()

        monkeypatch.setattr(users, "get_by_id", _unavailable)

        resp = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

        assert resp.status_code == 401
        assert resp.get_json()["code"] == "token_invalid"
        assert resp.get_json()["detail"] == "invalid or expired token"

    def test_refresh_requires_token(self, client) -> None:
        resp = client.post("/api/v1/auth/refresh", json={})

        assert resp.status_code == 422


class TestLogout:
    def test_logout_revokes_both_tokens(self, client, revocation_enabled) -> None:
        _register(client)
        tokens = _login(client).get_json()["data"]

        resp = client.post(
            "/api/v1/auth/logout",
            json={"refresh_token": tokens["refresh_token"]},
            headers=_bearer(tokens["access_token"]),
        )

        assert resp.status_code == 200
        assert len(revocation_enabled.keys("blacklist:*")) == 2

        me = client.get("/api/v1/me", headers=_bearer(tokens["access_token"]))
        refresh = client.post(
            "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert me.status_code == 401
        assert me.get_json()["detail"] == "token has been revoked"
        assert refresh.status_code == 401

    def test_logout_with_invalid_refresh_token_still_succeeds(
        self, client, revocation_enabled
    ) -> None:
        _register(client)
        tokens = _login(client).get_json()["data"]

        resp = client.post(
            "/api/v1/auth/logout",
            json={"refresh_token": "garbage"},
            headers=_bearer(tokens["access_token"]),
        )

        assert resp.status_code == 200
        assert len(revocation_enabled.keys("blacklist:*")) == 1

    def test_logout_without_revocation_backend(self, client) -> None:
        _register(client)
        tokens = _login(client).get_json()["data"]

        resp = client.post(
            "/api/v1/auth/logout",
            json={"refresh_token": tokens["refresh_token"]},
            headers=_bearer(tokens["access_token"]),
        )

        assert resp.status_code == 200
        # Degraded mode: the access token keeps working until it expires
        assert client.get("/api/v1/me", headers=_bearer(tokens["access_token"])).status_code == 200

    def test_logout_requires_bearer(self, client) -> None:
        resp = client.post("/api/v1/auth/logout", json={"refresh_token": "x"})

        assert resp.status_code == 401


class TestHealth:
    def test_health_reports_components(self, client) -> None:
        resp = client.get("/api/v1/health")

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "ok"
        assert body["db"] == "ok"
        assert body["revocation"] == "disabled"

    def test_unknown_route_is_problem_json(self, client) -> None:
        resp = client.get("/api/v1/nope")

        assert resp.status_code == 404
        assert resp.mimetype == "application/problem+json"
        assert resp.get_json()["request_id"]
