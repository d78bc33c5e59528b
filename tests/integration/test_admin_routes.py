"""End-to-end tests for the admin API over a temporary SQLite database."""

import sqlite3
from datetime import UTC, datetime, timedelta
from pathlib import Path

import jwt
import pytest
from fastapi.testclient import TestClient

from rolegate.application.api.rest.app import create_app
from rolegate.config import (
    AdminConfig,
    AuthConfig,
    BootstrapOwner,
    Config,
    DatabaseConfig,
    JwtConfig,
)

SECRET = "integration-secret-key-32-bytes!"


def bearer(account_id: int, role: int) -> dict[str, str]:
    token = jwt.encode(
        {
            "sub": str(account_id),
            "role": role,
            "aud": "authenticated",
            "exp": datetime.now(UTC) + timedelta(minutes=5),
        },
        SECRET,
        "HS256",
    )
    return {"Authorization": f"Bearer {token}"}


OWNER = bearer(1, 5)


def account_body(n: int, role: int) -> dict:
    return {
        "firstname": f"First{n}",
        "lastname": f"Last{n}",
        "username": f"user_{n}",
        "email": f"User{n}@Example.com",
        "phone": f"55500000{n:02d}",
        "password": "password-123",
        "role": role,
    }


@pytest.fixture
def client(tmp_path: Path):
    config = Config(
        database=DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'rolegate.db'}"),
        auth=AuthConfig(jwt=JwtConfig(secret=SECRET), password_hash_rounds=4),
        admin=AdminConfig(
            bootstrap_owner=BootstrapOwner(
                username="owner",
                email="owner@example.com",
                phone="5559999999",
                password="owner-password",
            )
        ),
    )
    with TestClient(create_app(config)) as test_client:
        yield test_client


def create(client: TestClient, n: int, role: int, headers: dict[str, str] = OWNER) -> int:
    response = client.post("/api/v1/admin/users/create", json=account_body(n, role), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["account"]["id"]


class TestAuthentication:
    def test_health_is_public(self, client: TestClient) -> None:
        assert client.get("/api/v1/health").json() == {"status": "ok"}

    def test_missing_token_is_401(self, client: TestClient) -> None:
        response = client.get("/api/v1/admin/users")

        assert response.status_code == 401
        assert response.json()["code"] == "missing_token"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_garbage_token_is_401(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/admin/users", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401

    def test_moderator_is_403(self, client: TestClient) -> None:
        response = client.get("/api/v1/admin/users", headers=bearer(7, 2))

        assert response.status_code == 403
        assert response.json()["code"] == "access_denied"


class TestAccountLifecycle:
    def test_bootstrap_owner_present(self, client: TestClient) -> None:
        response = client.get("/api/v1/admin/users/1", headers=OWNER)

        assert response.status_code == 200
        account = response.json()["account"]
        assert account["role"] == "Owner"
        assert account["role_level"] == 5

    def test_create_normalizes_email(self, client: TestClient) -> None:
        account_id = create(client, 2, 1)

        account = client.get(f"/api/v1/admin/users/{account_id}", headers=OWNER).json()["account"]
        assert account["email"] == "user2@example.com"
        assert account["account_status"] == "active"
        assert account["email_verified"] is False

    def test_admin_cannot_create_above_own_role(self, client: TestClient) -> None:
        admin_id = create(client, 2, 3)

        response = client.post(
            "/api/v1/admin/users/create", json=account_body(3, 4), headers=bearer(admin_id, 3)
        )

        assert response.status_code == 403
        assert response.json()["code"] == "role_too_high"

    def test_duplicate_is_409(self, client: TestClient) -> None:
        create(client, 2, 1)

        response = client.post(
            "/api/v1/admin/users/create", json=account_body(2, 1), headers=OWNER
        )

        assert response.status_code == 409
        assert response.json()["code"] == "account_exists"

    def test_out_of_range_role_rejected_at_boundary(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/admin/users/create", json=account_body(2, 6), headers=OWNER
        )
        assert response.status_code == 422

    def test_update_and_delete(self, client: TestClient) -> None:
        account_id = create(client, 2, 1)

        updated = client.put(
            f"/api/v1/admin/users/{account_id}",
            json={"account_status": "suspended", "phone_verified": True},
            headers=OWNER,
        )
        assert updated.status_code == 200
        assert updated.json()["account"]["account_status"] == "suspended"

        assert client.delete(f"/api/v1/admin/users/{account_id}", headers=OWNER).status_code == 204
        again = client.delete(f"/api/v1/admin/users/{account_id}", headers=OWNER)
        assert again.status_code == 404

    def test_empty_update_is_422(self, client: TestClient) -> None:
        account_id = create(client, 2, 1)

        response = client.put(f"/api/v1/admin/users/{account_id}", json={}, headers=OWNER)

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_peer_admin_cannot_delete_peer(self, client: TestClient) -> None:
        admin_a = create(client, 2, 3)
        admin_b = create(client, 3, 3)

        response = client.delete(f"/api/v1/admin/users/{admin_b}", headers=bearer(admin_a, 3))

        assert response.status_code == 403
        assert response.json()["code"] == "insufficient_hierarchy"

    def test_owner_cannot_delete_self(self, client: TestClient) -> None:
        response = client.delete("/api/v1/admin/users/1", headers=OWNER)

        assert response.status_code == 403
        assert response.json()["code"] == "self_action"

    def test_store_failure_is_500_and_writes_nothing(
        self, client: TestClient, tmp_path: Path
    ) -> None:
        account_id = create(client, 2, 1)
        with sqlite3.connect(tmp_path / "rolegate.db") as db:
            db.execute("UPDATE accounts SET role = 9 WHERE id = ?", (account_id,))

        response = client.delete(f"/api/v1/admin/users/{account_id}", headers=OWNER)

        assert response.status_code == 500
        assert response.json()["code"] == "invalid_stored_role"
        with sqlite3.connect(tmp_path / "rolegate.db") as db:
            (status,) = db.execute(
                "SELECT status FROM accounts WHERE id = ?", (account_id,)
            ).fetchone()
        assert status == "active"

    def test_missing_target_is_404(self, client: TestClient) -> None:
        response = client.put(
            "/api/v1/admin/users/999", json={"email_verified": True}, headers=OWNER
        )
        assert response.status_code == 404

    def test_reset_password(self, client: TestClient) -> None:
        account_id = create(client, 2, 1)

        response = client.put(
            f"/api/v1/admin/users/{account_id}/password",
            json={"password": "another-password"},
            headers=OWNER,
        )
        assert response.status_code == 204

    def test_short_password_rejected(self, client: TestClient) -> None:
        account_id = create(client, 2, 1)

        response = client.put(
            f"/api/v1/admin/users/{account_id}/password", json={"password": "short"}, headers=OWNER
        )
        assert response.status_code == 422


class TestRoleChanges:
    def test_change_role_reports_previous(self, client: TestClient) -> None:
        account_id = create(client, 2, 2)

        response = client.put(
            f"/api/v1/admin/users/{account_id}/role", json={"role": 4}, headers=OWNER
        )

        assert response.status_code == 200
        body = response.json()
        assert body["previous_role"] == {"role": "Moderator", "role_level": 2}
        assert body["account"]["role"] == "Super Admin"

    def test_admin_promotion_ceiling(self, client: TestClient) -> None:
        admin_id = create(client, 2, 3)
        target_id = create(client, 3, 2)

        response = client.put(
            f"/api/v1/admin/users/{target_id}/role", json={"role": 4}, headers=bearer(admin_id, 3)
        )

        assert response.status_code == 403
        assert response.json()["code"] == "promotion_ceiling"

    def test_self_role_change_forbidden(self, client: TestClient) -> None:
        response = client.put("/api/v1/admin/users/1/role", json={"role": 1}, headers=OWNER)

        assert response.status_code == 403
        assert response.json()["code"] == "self_action"


class TestListing:
    def test_list_with_filters(self, client: TestClient) -> None:
        create(client, 2, 1)
        create(client, 3, 3)

        response = client.get("/api/v1/admin/users?role=3&limit=10", headers=OWNER)

        assert response.status_code == 200
        body = response.json()
        assert [u["username"] for u in body["users"]] == ["user_3"]
        assert body["pagination"] == {"page": 1, "limit": 10, "total_users": 1, "total_pages": 1}
        assert body["filters"]["role"] == {"role": "Admin", "role_level": 3}

    def test_search(self, client: TestClient) -> None:
        create(client, 2, 1)

        response = client.get(
            "/api/v1/admin/users/search?q=USER2&fields=email", headers=OWNER
        )

        assert response.status_code == 200
        body = response.json()
        assert [u["username"] for u in body["users"]] == ["user_2"]
        assert body["fields_searched"] == ["email"]

    def test_search_with_no_valid_fields(self, client: TestClient) -> None:
        response = client.get("/api/v1/admin/users/search?q=x&fields=password", headers=OWNER)

        assert response.status_code == 422
        assert response.json()["field"] == "fields"

    def test_dashboard_stats(self, client: TestClient) -> None:
        create(client, 2, 1)

        response = client.get("/api/v1/admin/users/stats/dashboard", headers=OWNER)

        assert response.status_code == 200
        stats = response.json()["statistics"]
        assert stats["total_users"] == 2
        assert stats["active_users"] == 2
        assert stats["new_users_week"] == 2
