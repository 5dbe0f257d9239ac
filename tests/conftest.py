"""Shared pytest fixtures and configuration."""

import pytest

from campushub.store import CampusStore, EventStatus, Venue


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def store():
    """Create an in-memory CampusStore."""
    s = CampusStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def venue(store: CampusStore) -> Venue:
    """A venue to hold events at."""
    return store.create_venue(name="Main Hall", capacity=200, location="North Campus")


@pytest.fixture
def make_event(store: CampusStore, venue: Venue):
    """Factory creating an event, optionally already decided."""

    def _make(
        title: str = "Robotics Night",
        organizer_id: str = "organizer-1",
        status: EventStatus = EventStatus.PENDING,
        date: str = "2026-05-01",
        time: str = "18:00",
    ):
        event = store.create_event(
            title=title,
            description="Build and race small robots together.",
            date=date,
            time=time,
            venue_id=venue.id,
            organizer_id=organizer_id,
        )
        if status != EventStatus.PENDING:
            event = store.decide_event(event.id, status, reviewed_by="admin-1")
        return event

    return _make
