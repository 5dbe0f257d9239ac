"""Unit tests for registration routes."""

import pytest
from fastapi.testclient import TestClient

from campushub.store import EventStatus, Role


@pytest.mark.unit
class TestRegistration:
    """Tests for /events/{id}/registration."""

    def test_register_and_status(self, client: TestClient, login, make_event) -> None:
        login(Role.STUDENT)
        event = make_event(status=EventStatus.APPROVED)

        response = client.post(f"/api/v1/events/{event.id}/registration")

        assert response.status_code == 201
        assert response.json()["data"] == {
            "event_id": event.id,
            "registered": True,
            "registrations": 1,
        }
        status = client.get(f"/api/v1/events/{event.id}/registration").json()["data"]
        assert status["registered"] is True

    def test_register_twice(self, client: TestClient, login, make_event) -> None:
        login(Role.STUDENT)
        event = make_event(status=EventStatus.APPROVED)
        client.post(f"/api/v1/events/{event.id}/registration")

        response = client.post(f"/api/v1/events/{event.id}/registration")

        assert response.status_code == 409

    def test_pending_event(self, client: TestClient, login, make_event) -> None:
        login(Role.STUDENT)
        event = make_event()

        response = client.post(f"/api/v1/events/{event.id}/registration")

        assert response.status_code == 409

    def test_unknown_event(self, client: TestClient, login) -> None:
        login(Role.STUDENT)

        response = client.post("/api/v1/events/missing/registration")

        assert response.status_code == 404

    def test_cancel_is_idempotent(self, client: TestClient, login, make_event) -> None:
        login(Role.STUDENT)
        event = make_event(status=EventStatus.APPROVED)
        client.post(f"/api/v1/events/{event.id}/registration")

        first = client.delete(f"/api/v1/events/{event.id}/registration")
        second = client.delete(f"/api/v1/events/{event.id}/registration")

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["data"]["registered"] is False
        assert second.json()["data"]["registrations"] == 0

    def test_organizer_cannot_register(self, client: TestClient, login, make_event) -> None:
        login(Role.ORGANIZER, "approved")
        event = make_event(status=EventStatus.APPROVED)

        response = client.post(f"/api/v1/events/{event.id}/registration")

        assert response.status_code == 403


@pytest.mark.unit
class TestListRegistrations:
    """Tests for GET /registrations."""

    def test_lists_own_registrations(self, client: TestClient, login, make_event, store) -> None:
        login(Role.STUDENT)
        mine = make_event(title="Mine", status=EventStatus.APPROVED)
        other = make_event(title="Other", status=EventStatus.APPROVED)
        client.post(f"/api/v1/events/{mine.id}/registration")
        store.create_registration(other.id, "another-student")

        response = client.get("/api/v1/registrations")

        assert [e["title"] for e in response.json()["data"]] == ["Mine"]
