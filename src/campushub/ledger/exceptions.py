"""Exceptions for the registration ledger."""

from campushub.exceptions import CampusHubError


class AlreadyRegisteredError(CampusHubError):
    """The student already holds a registration for the event."""

    default_message = "You are already registered for this event"


class DuplicateError(AlreadyRegisteredError):
    """A concurrent registration for the same pair won the insert."""


class EventNotApprovedError(CampusHubError):
    """Registration is only open for approved events."""

    default_message = "This event is not open for registration"
