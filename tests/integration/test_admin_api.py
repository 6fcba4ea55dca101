# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the admin API.

Runs the full application against a temporary SQLite database with a
bootstrap super admin.
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

ADMIN_ROUTES = [
    ("post", "/admin/create-admin"),
    ("get", "/admin/list-admins"),
    ("delete", "/admin/delete-admin/1"),
    ("get", "/admin/teachers/pending"),
    ("post", "/admin/teachers/1/approve"),
    ("delete", "/admin/teachers/1/reject"),
]

SUPER_ADMIN_ROUTES = [
    ("get", "/admin/deleted-admins"),
    ("post", "/admin/restore-admin/1"),
    ("get", "/admin/audit-logs"),
]


def new_admin_body(**overrides):
    body = {
        "full_name": "Second Admin",
        "email": "second@example.com",
        "phone": "555-0102",
        "password": "second-password",
    }
    body.update(overrides)
    return body


@pytest.fixture
def student_token(client: TestClient, login_as) -> str:
    """Token of a freshly signed-up student."""
    client.post(
        "/auth/signup",
        json={
            "full_name": "Student",
            "email": "student@example.com",
            "password": "student-password",
            "phone": "555-0103",
            "role": "STUDENT",
        },
    )
    return login_as("student@example.com", "student-password")


class TestAccessControl:
    """Tests for role gating on admin routes."""

    @pytest.mark.parametrize("method,path", ADMIN_ROUTES + SUPER_ADMIN_ROUTES)
    def test_anonymous_is_401(self, client: TestClient, method: str, path: str) -> None:
        """Test that every admin route requires a token."""
        response = getattr(client, method)(path)

        assert response.status_code == 401
        assert "message" in response.json()

    @pytest.mark.parametrize("method,path", ADMIN_ROUTES + SUPER_ADMIN_ROUTES)
    def test_student_is_403(
        self,
        client: TestClient,
        bearer,
        student_token: str,
        method: str,
        path: str,
    ) -> None:
        """Test that non-admins are refused."""
        response = getattr(client, method)(path, headers=bearer(student_token))

        assert response.status_code == 403
        assert response.json() == {"message": "Access denied"}

    @pytest.mark.parametrize("method,path", SUPER_ADMIN_ROUTES)
    def test_plain_admin_is_403_on_super_routes(
        self,
        client: TestClient,
        bearer,
        admin_token: str,
        method: str,
        path: str,
    ) -> None:
        """Test that super-admin routes refuse plain admins."""
        response = getattr(client, method)(path, headers=bearer(admin_token))

        assert response.status_code == 403

    def test_garbage_token_is_401(self, client: TestClient, bearer) -> None:
        """Test that an undecodable token is treated as anonymous."""
        response = client.get("/admin/list-admins", headers=bearer("not-a-jwt"))

        assert response.status_code == 401


class TestCreateAdmin:
    """Tests for POST /admin/create-admin."""

    def test_super_admin_creates_admin(
        self,
        client: TestClient,
        bearer,
        super_admin_token: str,
        login_as,
    ) -> None:
        """Test creation and that the new admin can log in."""
        response = client.post(
            "/admin/create-admin", json=new_admin_body(), headers=bearer(super_admin_token)
        )

        assert response.status_code == 201
        assert response.json()["message"] == "ADMIN created successfully"
        assert response.json()["user"]["role"] == "ADMIN"
        assert login_as("second@example.com", "second-password")

    def test_super_admin_creates_super_admin(
        self,
        client: TestClient,
        bearer,
        super_admin_token: str,
    ) -> None:
        """Test that a super admin can grant SUPER_ADMIN."""
        response = client.post(
            "/admin/create-admin",
            json=new_admin_body(role="SUPER_ADMIN"),
            headers=bearer(super_admin_token),
        )

        assert response.status_code == 201
        assert response.json()["message"] == "SUPER ADMIN created successfully"
        assert response.json()["user"]["role"] == "SUPER_ADMIN"

    def test_plain_admin_request_is_clamped(
        self,
        client: TestClient,
        bearer,
        admin_token: str,
    ) -> None:
        """Test that a plain admin asking for SUPER_ADMIN creates an ADMIN."""
        response = client.post(
            "/admin/create-admin",
            json=new_admin_body(role="SUPER_ADMIN"),
            headers=bearer(admin_token),
        )

        assert response.status_code == 201
        assert response.json()["user"]["role"] == "ADMIN"

    def test_missing_field(self, client: TestClient, bearer, super_admin_token: str) -> None:
        """Test that an omitted field yields 400."""
        body = new_admin_body()
        del body["password"]

        response = client.post(
            "/admin/create-admin", json=body, headers=bearer(super_admin_token)
        )

        assert response.status_code == 400

    def test_duplicate_email(
        self,
        client: TestClient,
        bearer,
        super_admin_token: str,
        settings,
    ) -> None:
        """Test that an existing email yields 409."""
        response = client.post(
            "/admin/create-admin",
            json=new_admin_body(email=settings.bootstrap.super_admin_email),
            headers=bearer(super_admin_token),
        )

        assert response.status_code == 409
        assert response.json() == {"message": "Email already exists"}


class TestListAdmins:
    """Tests for GET /admin/list-admins."""

    def test_lists_newest_first(
        self,
        client: TestClient,
        bearer,
        admin_token: str,
        admin_credentials: dict[str, Any],
        settings,
    ) -> None:
        """Test that both admins are listed without password data."""
        response = client.get("/admin/list-admins", headers=bearer(admin_token))

        assert response.status_code == 200
        admins = response.json()
        assert [a["email"] for a in admins] == [
            admin_credentials["email"],
            settings.bootstrap.super_admin_email,
        ]
        assert set(admins[0]) == {"id", "full_name", "email", "role", "created_at"}


class TestDeleteAndRestore:
    """Tests for admin soft-delete and restore."""

    def test_full_cycle(
        self,
        client: TestClient,
        bearer,
        super_admin_token: str,
        admin_credentials: dict[str, Any],
        login_as,
    ) -> None:
        """Test delete, refused login, restore, then login again."""
        admin_id = admin_credentials["id"]
        credentials = {
            "email": admin_credentials["email"],
            "password": admin_credentials["password"],
        }

        deleted = client.delete(
            f"/admin/delete-admin/{admin_id}", headers=bearer(super_admin_token)
        )
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Admin deleted successfully"}

        refused = client.post("/auth/login", json=credentials)
        assert refused.status_code == 403
        assert refused.json() == {"message": "Account disabled"}

        tombstones = client.get(
            "/admin/deleted-admins", headers=bearer(super_admin_token)
        ).json()
        assert len(tombstones) == 1
        assert tombstones[0]["original_user_id"] == admin_id
        assert "password_hash" not in tombstones[0]

        restored = client.post(
            f"/admin/restore-admin/{tombstones[0]['id']}",
            headers=bearer(super_admin_token),
        )
        assert restored.status_code == 200
        assert restored.json() == {"message": "Admin restored successfully"}

        assert login_as(credentials["email"], credentials["password"])
        assert client.get(
            "/admin/deleted-admins", headers=bearer(super_admin_token)
        ).json() == []

    def test_self_delete_is_400(
        self,
        client: TestClient,
        bearer,
        admin_token: str,
        admin_credentials: dict[str, Any],
    ) -> None:
        """Test that an admin cannot delete themselves."""
        response = client.delete(
            f"/admin/delete-admin/{admin_credentials['id']}", headers=bearer(admin_token)
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Cannot delete your own account"}

    def test_super_admin_is_protected(
        self,
        client: TestClient,
        bearer,
        admin_token: str,
        super_admin_token: str,
    ) -> None:
        """Test that a super admin cannot be deleted."""
        root_id = client.get("/auth/me", headers=bearer(super_admin_token)).json()["id"]

        response = client.delete(
            f"/admin/delete-admin/{root_id}", headers=bearer(admin_token)
        )

        assert response.status_code == 403
        assert response.json() == {"message": "Cannot delete Super Admin"}

    def test_unknown_admin_is_404(
        self,
        client: TestClient,
        bearer,
        super_admin_token: str,
    ) -> None:
        """Test deleting a missing admin."""
        response = client.delete(
            "/admin/delete-admin/9999", headers=bearer(super_admin_token)
        )

        assert response.status_code == 404

    def test_unknown_tombstone_is_404(
        self,
        client: TestClient,
        bearer,
        super_admin_token: str,
    ) -> None:
        """Test restoring a missing tombstone."""
        response = client.post(
            "/admin/restore-admin/9999", headers=bearer(super_admin_token)
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Deleted admin not found"}


class TestTeachers:
    """Tests for teacher moderation routes."""

    def _signup_teacher(self, client: TestClient, email: str) -> int:
        response = client.post(
            "/auth/signup",
            json={
                "full_name": "Teacher",
                "email": email,
                "password": "teach",
                "phone": "555-0104",
                "role": "TEACHER",
            },
        )
        return response.json()["user"]["id"]

    def test_pending_lists_newest_first(
        self,
        client: TestClient,
        bearer,
        admin_token: str,
    ) -> None:
        """Test pending teacher ordering and shape."""
        first = self._signup_teacher(client, "t1@example.com")
        second = self._signup_teacher(client, "t2@example.com")

        response = client.get("/admin/teachers/pending", headers=bearer(admin_token))

        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [second, first]
        assert set(response.json()[0]) == {"id", "full_name", "email", "phone", "created_at"}

    def test_reject_removes_teacher(
        self,
        client: TestClient,
        bearer,
        admin_token: str,
    ) -> None:
        """Test that a rejected teacher can no longer log in."""
        teacher_id = self._signup_teacher(client, "t@example.com")

        response = client.delete(
            f"/admin/teachers/{teacher_id}/reject", headers=bearer(admin_token)
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Teacher rejected and removed"}

        login = client.post("/auth/login", json={"email": "t@example.com", "password": "teach"})
        assert login.status_code == 401

    def test_approve_unknown_is_404(
        self,
        client: TestClient,
        bearer,
        admin_token: str,
    ) -> None:
        """Test approving a missing teacher."""
        response = client.post("/admin/teachers/9999/approve", headers=bearer(admin_token))

        assert response.status_code == 404
        assert response.json() == {"message": "Teacher not found"}

    def test_reject_unknown_is_404(
        self,
        client: TestClient,
        bearer,
        admin_token: str,
    ) -> None:
        """Test rejecting a missing teacher."""
        response = client.delete("/admin/teachers/9999/reject", headers=bearer(admin_token))

        assert response.status_code == 404


class TestOutOfRangeIds:
    """Tests for path ids larger than any stored key."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("delete", "/admin/delete-admin/99999999999999999999"),
            ("post", "/admin/restore-admin/99999999999999999999"),
            ("post", "/admin/teachers/99999999999999999999/approve"),
            ("delete", "/admin/teachers/99999999999999999999/reject"),
        ],
    )
    def test_huge_id_is_404(
        self,
        client: TestClient,
        bearer,
        super_admin_token: str,
        method: str,
        path: str,
    ) -> None:
        """Test that an unstorable id is reported as not found."""
        response = getattr(client, method)(path, headers=bearer(super_admin_token))

        assert response.status_code == 404
        assert "message" in response.json()


class TestAuditLogs:
    """Tests for GET /admin/audit-logs."""

    def test_records_privileged_actions(
        self,
        client: TestClient,
        bearer,
        super_admin_token: str,
        admin_credentials: dict[str, Any],
    ) -> None:
        """Test that create and delete appear newest first."""
        client.delete(
            f"/admin/delete-admin/{admin_credentials['id']}",
            headers=bearer(super_admin_token),
        )

        response = client.get("/admin/audit-logs", headers=bearer(super_admin_token))

        assert response.status_code == 200
        actions = [entry["action_type"] for entry in response.json()]
        assert actions == ["DELETE_ADMIN", "CREATE_ADMIN"]
        assert all(e["entity_id"] == admin_credentials["id"] for e in response.json())

    def test_limit_is_validated(
        self,
        client: TestClient,
        bearer,
        super_admin_token: str,
    ) -> None:
        """Test that an out-of-range limit yields 400."""
        response = client.get(
            "/admin/audit-logs?limit=0", headers=bearer(super_admin_token)
        )

        assert response.status_code == 400


class TestHealth:
    """Tests for GET /health."""

    def test_reports_database(self, client: TestClient) -> None:
        """Test that health is public and reports the database."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"]["status"] == "healthy"
        assert data["version"] == "1.0.0"
