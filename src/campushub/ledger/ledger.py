"""RegistrationLedger - which students are registered for which events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from campushub.exceptions import ReferenceNotFoundError
from campushub.ledger.exceptions import (
    AlreadyRegisteredError,
    DuplicateError,
    EventNotApprovedError,
)
from campushub.store import DuplicateRegistrationError, EventNotFoundError, EventStatus

if TYPE_CHECKING:
    from campushub.store import CampusStore, Event, Registration

logger = logging.getLogger(__name__)


class RegistrationLedger:
    """Student registrations for approved events.

    ``register`` checks for an existing registration before inserting. Two
    concurrent attempts can both pass that check; the unique constraint on
    (event_id, student_id) then rejects the second insert, reported as
    DuplicateError.
    """

    def __init__(self, store: CampusStore) -> None:
        self._store = store

    def register(self, event_id: str, student_id: str) -> Registration:
        """Register a student for an approved event.

        Raises:
            ReferenceNotFoundError: If the event doesn't exist.
            EventNotApprovedError: If the event is pending or rejected.
            AlreadyRegisteredError: If the pair is already registered.
            DuplicateError: If a concurrent registration won the insert.
        """
        try:
            event = self._store.get_event(event_id)
        except EventNotFoundError as e:
            raise ReferenceNotFoundError("event", event_id) from e

        if event.event_status != EventStatus.APPROVED:
            raise EventNotApprovedError()
        if self._store.find_registration(event_id, student_id) is not None:
            raise AlreadyRegisteredError()

        try:
            registration = self._store.create_registration(event_id, student_id)
        except DuplicateRegistrationError as e:
            logger.info("Concurrent registration of %s for %s", student_id, event_id)
            raise DuplicateError() from e
        except EventNotFoundError as e:
            raise ReferenceNotFoundError("event", event_id) from e

        logger.info("Student %s registered for event %s", student_id, event_id)
        return registration

    def cancel(self, event_id: str, student_id: str) -> bool:
        """Remove a registration. Cancelling twice is not an error.

        Returns:
            True if a registration was removed.
        """
        removed = self._store.delete_registration(event_id, student_id)
        if removed:
            logger.info("Student %s cancelled registration for %s", student_id, event_id)
        return removed

    def is_registered(self, event_id: str, student_id: str) -> bool:
        return self._store.find_registration(event_id, student_id) is not None

    def list_for_student(self, student_id: str) -> list[Event]:
        return self._store.list_registered_events(student_id)
