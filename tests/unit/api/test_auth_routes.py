"""Unit tests for auth routes."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from werkzeug.security import generate_password_hash

from campushub.notices import NoticeBoard, NoticeType
from campushub.session import SessionManager
from campushub.store import CampusStore, ProfileExistsError, Role


@pytest.mark.unit
class TestLogin:
    """Tests for POST /auth/login/{role}."""

    def test_login_student(self, client: TestClient, provision) -> None:
        profile = provision("sam@x.com", Role.STUDENT)

        response = client.post(
            "/api/v1/auth/login/student", json={"email": "sam@x.com", "password": "secret1"}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["signed_in"] is True
        assert data["user_id"] == profile.id
        assert data["role"] == "student"
        assert data["resolving"] is False

    def test_bad_password(self, client: TestClient, provision) -> None:
        provision("sam@x.com", Role.STUDENT)

        response = client.post(
            "/api/v1/auth/login/student", json={"email": "sam@x.com", "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["data"] is None
        assert response.json()["error"]

    def test_pending_organizer(
        self, client: TestClient, provision, manager: SessionManager
    ) -> None:
        provision("jane@x.com", Role.ORGANIZER, "pending")

        response = client.post(
            "/api/v1/auth/login/organizer", json={"email": "jane@x.com", "password": "secret1"}
        )

        assert response.status_code == 403
        assert response.json()["details"] == {"reason": "pending approval"}
        assert manager.state.identity is None

    def test_role_mismatch(self, client: TestClient, provision) -> None:
        provision("sam@x.com", Role.STUDENT)

        response = client.post(
            "/api/v1/auth/login/admin", json={"email": "sam@x.com", "password": "secret1"}
        )

        assert response.status_code == 403
        assert response.json()["details"] == {"reason": "role mismatch"}

    def test_unknown_role(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/auth/login/janitor", json={"email": "sam@x.com", "password": "secret1"}
        )

        assert response.status_code == 422
        assert "role" in response.json()["details"]["fields"]

    def test_missing_profile(self, client: TestClient, store: CampusStore) -> None:
        store.create_credential("ghost@x.com", generate_password_hash("secret1"))

        response = client.post(
            "/api/v1/auth/login/student", json={"email": "ghost@x.com", "password": "secret1"}
        )

        assert response.status_code == 502


@pytest.mark.unit
class TestRegister:
    """Tests for POST /auth/register/{role}."""

    def test_register_organizer(self, client: TestClient, store: CampusStore) -> None:
        response = client.post(
            "/api/v1/auth/register/organizer",
            json={"email": "jane@x.com", "password": "secret1", "name": "Jane"},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["role"] == "organizer"
        assert data["approval_status"] == "pending"
        assert store.get_profile(data["id"]) is not None

    def test_register_ends_session(self, client: TestClient) -> None:
        client.post(
            "/api/v1/auth/register/student",
            json={"email": "sam@x.com", "password": "secret1", "name": "Sam"},
        )

        response = client.get("/api/v1/auth/session")

        assert response.json()["data"]["signed_in"] is False

    def test_register_admin_forbidden(self, client: TestClient, store: CampusStore) -> None:
        response = client.post(
            "/api/v1/auth/register/admin",
            json={"email": "boss@x.com", "password": "secret1", "name": "Boss"},
        )

        assert response.status_code == 403
        assert store.list_profiles() == []

    def test_validation_errors(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/auth/register/student", json={"email": "nope", "password": "123"}
        )

        assert response.status_code == 422
        assert set(response.json()["details"]["fields"]) == {"email", "password", "name"}

    def test_identity_with_existing_profile(self, client: TestClient, store: CampusStore) -> None:
        existing = ProfileExistsError("Profile already exists")

        with patch.object(store, "create_profile", side_effect=existing):
            response = client.post(
                "/api/v1/auth/register/student",
                json={"email": "sam@x.com", "password": "secret1", "name": "Sam"},
            )

        assert response.status_code == 422
        assert "email" in response.json()["details"]["fields"]
        assert client.get("/api/v1/auth/session").json()["data"]["signed_in"] is False

    def test_duplicate_email(self, client: TestClient, provision) -> None:
        provision("sam@x.com", Role.STUDENT)

        response = client.post(
            "/api/v1/auth/register/student",
            json={"email": "sam@x.com", "password": "secret1", "name": "Sam"},
        )

        assert response.status_code == 401


@pytest.mark.unit
class TestLogoutAndSession:
    """Tests for POST /auth/logout and GET /auth/session."""

    def test_session_signed_out(self, client: TestClient) -> None:
        data = client.get("/api/v1/auth/session").json()["data"]

        assert data == {
            "signed_in": False,
            "loading": False,
            "resolving": False,
            "user_id": None,
            "email": None,
            "name": None,
            "role": None,
            "approval_status": None,
        }

    def test_logout(self, client: TestClient, login, board: NoticeBoard) -> None:
        login(Role.STUDENT)
        subscriber = board.subscribe()

        response = client.post("/api/v1/auth/logout")

        assert response.status_code == 200
        assert response.json()["data"]["signed_in"] is False
        types = []
        while not subscriber.queue.empty():
            types.append(subscriber.queue.get_nowait().notice_type)
        assert NoticeType.NAVIGATE in types

    def test_logout_without_session(self, client: TestClient) -> None:
        response = client.post("/api/v1/auth/logout")

        assert response.status_code == 200
        assert response.json()["data"]["signed_in"] is False
