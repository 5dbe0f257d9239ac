"""EventLifecycle - proposal, review and listing of events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from campushub.exceptions import ReferenceNotFoundError, ValidationError
from campushub.lifecycle.exceptions import InvalidTransitionError
from campushub.lifecycle.models import DECISIONS, EventDraft
from campushub.store import (
    EventNotFoundError,
    EventNotPendingError,
    EventStatus,
    VenueNotFoundError,
)

if TYPE_CHECKING:
    from campushub.notices import NoticeBoard
    from campushub.store import CampusStore, Event

logger = logging.getLogger(__name__)


class EventLifecycle:
    """Manages events through pending -> approved | rejected.

    Events always start pending, whatever the caller submits. A decision
    is final: only pending events can be approved or rejected.
    """

    def __init__(self, store: CampusStore, notices: NoticeBoard | None = None) -> None:
        self._store = store
        self._notices = notices

    def create(
        self,
        organizer_id: str,
        title: str,
        description: str,
        date: str,
        time: str,
        venue_id: str,
    ) -> Event:
        """Propose an event.

        Args:
            organizer_id: Profile ID of the proposing organizer.
            title: Event title.
            description: Event description.
            date: Event date.
            time: Event start time.
            venue_id: ID of the venue hosting the event.

        Returns:
            The created event, status pending.

        Raises:
            ValidationError: With every failing field.
            ReferenceNotFoundError: If the venue doesn't exist.
        """
        draft = EventDraft.from_input(title, description, date, time, venue_id)
        errors = draft.errors()
        if errors:
            raise ValidationError(errors)

        try:
            event = self._store.create_event(
                title=draft.title,
                description=draft.description,
                date=draft.date,
                time=draft.time,
                venue_id=draft.venue_id,
                organizer_id=organizer_id,
            )
        except VenueNotFoundError as e:
            raise ReferenceNotFoundError("venue", draft.venue_id) from e

        logger.info("Event %s proposed by %s: %s", event.id, organizer_id, event.title)
        if self._notices is not None:
            self._notices.emit_event_submitted(event.id, organizer_id, event.title)
        return event

    def transition(
        self,
        event_id: str,
        decision: EventStatus | str,
        acting_admin_id: str,
    ) -> Event:
        """Approve or reject a pending event.

        Raises:
            ValidationError: If ``decision`` is not approved or rejected.
            ReferenceNotFoundError: If the event doesn't exist.
            InvalidTransitionError: If the event was already decided.
        """
        try:
            status = EventStatus(decision)
        except ValueError:
            status = None
        if status not in DECISIONS:
            raise ValidationError({"decision": "Decision must be 'approved' or 'rejected'"})

        try:
            event = self._store.decide_event(event_id, status, reviewed_by=acting_admin_id)
        except EventNotFoundError as e:
            raise ReferenceNotFoundError("event", event_id) from e
        except EventNotPendingError as e:
            logger.info("Rejected transition of %s to %s: %s", event_id, status.value, e)
            raise InvalidTransitionError(str(e)) from e

        logger.info("Event %s %s by %s", event_id, status.value, acting_admin_id)
        if self._notices is not None:
            self._notices.emit_event_decided(event_id, status.value, acting_admin_id)
        return event

    def get(self, event_id: str) -> Event:
        try:
            return self._store.get_event(event_id)
        except EventNotFoundError as e:
            raise ReferenceNotFoundError("event", event_id) from e

    def list_for_organizer(self, organizer_id: str) -> list[Event]:
        """All events of one organizer, newest first, any status."""
        return self._store.list_events(organizer_id=organizer_id)

    def list_pending_for_admin(self) -> list[Event]:
        """Events awaiting review, oldest first."""
        return self._store.list_events(status=EventStatus.PENDING, oldest_first=True)

    def list_approved_for_students(self) -> list[Event]:
        """Approved events by date, then time."""
        return self._store.list_events_by_schedule(EventStatus.APPROVED)
