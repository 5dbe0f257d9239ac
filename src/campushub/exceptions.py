"""Errors shared by every CampusHub component.

Each error carries a user-safe message. Component packages define their own
subclasses in their ``exceptions`` modules.
"""

from __future__ import annotations


class CampusHubError(Exception):
    """Base exception for all CampusHub domain errors."""

    default_message = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CampusHubError):
    """Input failed validation; recoverable by correcting the fields.

    Attributes:
        errors: Field name to message.
    """

    default_message = "Invalid input"

    def __init__(self, errors: dict[str, str], message: str | None = None) -> None:
        self.errors = dict(errors)
        if message is None:
            message = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(message)


class ReferenceNotFoundError(CampusHubError):
    """An id refers to a venue, event or profile that does not exist."""

    default_message = "Referenced record not found"

    def __init__(self, kind: str, ref_id: str) -> None:
        self.kind = kind
        self.ref_id = ref_id
        super().__init__(f"{kind.capitalize()} '{ref_id}' not found")


class ServiceError(CampusHubError):
    """A collaborator (identity service, database) is unavailable."""

    default_message = "Service unavailable, please try again later"


class AccessDeniedError(CampusHubError):
    """The current session may not use a role-gated operation.

    Attributes:
        redirect_to: Where the client should go instead.
    """

    default_message = "Access denied"

    def __init__(self, message: str | None = None, redirect_to: str | None = None) -> None:
        self.redirect_to = redirect_to
        super().__init__(message)


class SessionResolvingError(CampusHubError):
    """The session is still loading; no access decision can be made yet."""

    default_message = "Session is still resolving"
