"""Data models for the event lifecycle."""

from __future__ import annotations

from dataclasses import dataclass

from campushub.store.models import EventStatus

MIN_TITLE_LENGTH = 3
MIN_DESCRIPTION_LENGTH = 10

DECISIONS = (EventStatus.APPROVED, EventStatus.REJECTED)


@dataclass(frozen=True)
class EventDraft:
    """Event fields as submitted by an organizer, whitespace stripped.

    Attributes:
        title: At least MIN_TITLE_LENGTH characters.
        description: At least MIN_DESCRIPTION_LENGTH characters.
        date: Event date, e.g. ``2026-05-01``.
        time: Start time, e.g. ``18:30``.
        venue_id: ID of an existing venue.
    """

    title: str
    description: str
    date: str
    time: str
    venue_id: str

    @classmethod
    def from_input(
        cls,
        title: str | None,
        description: str | None,
        date: str | None,
        time: str | None,
        venue_id: str | None,
    ) -> EventDraft:
        return cls(
            title=(title or "").strip(),
            description=(description or "").strip(),
            date=(date or "").strip(),
            time=(time or "").strip(),
            venue_id=(venue_id or "").strip(),
        )

    def errors(self) -> dict[str, str]:
        """Field-level problems; empty when the draft is valid."""
        errors: dict[str, str] = {}
        if len(self.title) < MIN_TITLE_LENGTH:
            errors["title"] = f"Title must be at least {MIN_TITLE_LENGTH} characters"
        if len(self.description) < MIN_DESCRIPTION_LENGTH:
            errors["description"] = (
                f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters"
            )
        if not self.date:
            errors["date"] = "Date is required"
        if not self.time:
            errors["time"] = "Time is required"
        if not self.venue_id:
            errors["venue_id"] = "Venue is required"
        return errors
