"""Unit tests for organizer review routes."""

import pytest
from fastapi.testclient import TestClient

from campushub.store import ApprovalStatus, CampusStore, Role


@pytest.mark.unit
class TestOrganizerReview:
    """Tests for /organizers."""

    def test_list_pending(self, client: TestClient, login, provision) -> None:
        login(Role.ADMIN)
        pending = provision("jane@x.com", Role.ORGANIZER, "pending")
        provision("ann@x.com", Role.ORGANIZER, "approved")

        response = client.get("/api/v1/organizers/pending")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()["data"]] == [pending.id]

    def test_approve(self, client: TestClient, login, provision, store: CampusStore) -> None:
        login(Role.ADMIN)
        jane = provision("jane@x.com", Role.ORGANIZER, "pending")

        response = client.post(
            f"/api/v1/organizers/{jane.id}/decision", json={"decision": "approved"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["approval_status"] == "approved"
        assert store.get_profile(jane.id).profile_approval == ApprovalStatus.APPROVED

    def test_unknown_profile(self, client: TestClient, login) -> None:
        login(Role.ADMIN)

        response = client.post("/api/v1/organizers/missing/decision", json={"decision": "approved"})

        assert response.status_code == 404

    def test_requires_admin(self, client: TestClient, login) -> None:
        login(Role.STUDENT)

        response = client.get("/api/v1/organizers/pending")

        assert response.status_code == 403
        assert response.json()["details"] == {"redirect_to": "/login/admin"}
