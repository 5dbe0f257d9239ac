"""Unit tests for event routes."""

import pytest
from fastapi.testclient import TestClient

from campushub.store import CampusStore, EventStatus, Role, Venue


def _payload(venue: Venue, **overrides) -> dict:
    payload = {
        "title": "Robotics Night",
        "description": "Build and race small robots together.",
        "date": "2026-05-01",
        "time": "18:00",
        "venue_id": venue.id,
    }
    payload.update(overrides)
    return payload


@pytest.mark.unit
class TestCreateEvent:
    """Tests for POST /events."""

    def test_approved_organizer_creates_pending_event(
        self, client: TestClient, login, venue: Venue
    ) -> None:
        organizer = login(Role.ORGANIZER, "approved")

        response = client.post("/api/v1/events", json=_payload(venue))

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["status"] == "pending"
        assert data["organizer_id"] == organizer.id
        assert data["venue_name"] == "Main Hall"

    def test_client_cannot_choose_status(
        self, client: TestClient, login, venue: Venue
    ) -> None:
        login(Role.ORGANIZER, "approved")

        response = client.post("/api/v1/events", json=_payload(venue, status="approved"))

        assert response.json()["data"]["status"] == "pending"

    def test_validation(self, client: TestClient, login, venue: Venue) -> None:
        login(Role.ORGANIZER, "approved")

        response = client.post("/api/v1/events", json={"title": "Hi", "venue_id": venue.id})

        assert response.status_code == 422
        assert set(response.json()["details"]["fields"]) == {"title", "description", "date", "time"}

    def test_unknown_venue(self, client: TestClient, login, venue: Venue) -> None:
        login(Role.ORGANIZER, "approved")

        response = client.post("/api/v1/events", json=_payload(venue, venue_id="nowhere"))

        assert response.status_code == 404

    def test_student_forbidden(self, client: TestClient, login, venue: Venue) -> None:
        login(Role.STUDENT)

        response = client.post("/api/v1/events", json=_payload(venue))

        assert response.status_code == 403
        assert response.json()["details"] == {"redirect_to": "/login/organizer"}

    def test_signed_out_forbidden(self, client: TestClient, venue: Venue) -> None:
        response = client.post("/api/v1/events", json=_payload(venue))

        assert response.status_code == 403


@pytest.mark.unit
class TestListEvents:
    """Tests for the role-specific listings."""

    def test_my_events(self, client: TestClient, login, make_event) -> None:
        organizer = login(Role.ORGANIZER, "approved")
        make_event(title="Mine", organizer_id=organizer.id, status=EventStatus.REJECTED)
        make_event(title="Not mine", organizer_id="someone-else")

        response = client.get("/api/v1/events/mine")

        assert [e["title"] for e in response.json()["data"]] == ["Mine"]

    def test_pending_for_admin(self, client: TestClient, login, make_event) -> None:
        login(Role.ADMIN)
        make_event(title="Pending")
        make_event(title="Approved", status=EventStatus.APPROVED)

        response = client.get("/api/v1/events/pending")

        assert [e["title"] for e in response.json()["data"]] == ["Pending"]

    def test_pending_requires_admin(self, client: TestClient, login) -> None:
        login(Role.ORGANIZER, "approved")

        assert client.get("/api/v1/events/pending").status_code == 403

    def test_approved_for_students(self, client: TestClient, login, make_event) -> None:
        login(Role.STUDENT)
        make_event(title="Pending")
        make_event(title="Approved", status=EventStatus.APPROVED)

        response = client.get("/api/v1/events/approved")

        assert [e["title"] for e in response.json()["data"]] == ["Approved"]


@pytest.mark.unit
class TestDecideEvent:
    """Tests for POST /events/{id}/decision."""

    def test_approve(self, client: TestClient, login, make_event, store: CampusStore) -> None:
        admin = login(Role.ADMIN)
        event = make_event()

        response = client.post(f"/api/v1/events/{event.id}/decision", json={"decision": "approved"})

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "approved"
        assert store.get_event(event.id).reviewed_by == admin.id

    def test_already_decided(self, client: TestClient, login, make_event) -> None:
        login(Role.ADMIN)
        event = make_event(status=EventStatus.REJECTED)

        response = client.post(f"/api/v1/events/{event.id}/decision", json={"decision": "approved"})

        assert response.status_code == 409

    def test_invalid_decision(self, client: TestClient, login, make_event) -> None:
        login(Role.ADMIN)
        event = make_event()

        response = client.post(f"/api/v1/events/{event.id}/decision", json={"decision": "maybe"})

        assert response.status_code == 422

    def test_unknown_event(self, client: TestClient, login) -> None:
        login(Role.ADMIN)

        response = client.post("/api/v1/events/missing/decision", json={"decision": "approved"})

        assert response.status_code == 404

    def test_organizer_cannot_decide(self, client: TestClient, login, make_event) -> None:
        login(Role.ORGANIZER, "approved")
        event = make_event()

        response = client.post(f"/api/v1/events/{event.id}/decision", json={"decision": "approved"})

        assert response.status_code == 403
