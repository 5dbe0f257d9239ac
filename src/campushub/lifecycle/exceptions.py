"""Exceptions for the event lifecycle."""

from campushub.exceptions import CampusHubError


class InvalidTransitionError(CampusHubError):
    """The event has already been decided and cannot change status."""

    default_message = "This event has already been reviewed"
