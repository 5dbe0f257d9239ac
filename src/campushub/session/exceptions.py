"""Exceptions for the session layer."""

from __future__ import annotations

from campushub.exceptions import CampusHubError


class ApprovalError(CampusHubError):
    """The role gate refused the claimed role.

    Attributes:
        reason: Gate reason, ``"role mismatch"`` or ``"pending approval"``.
    """

    default_message = "This account may not sign in with the selected role"

    def __init__(self, reason: str, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message)


class ProfileFetchError(CampusHubError):
    """The profile of an authenticated identity could not be loaded."""

    default_message = "Could not load your profile"


class RegistrationError(CampusHubError):
    """Self-service registration is not allowed for this request."""

    default_message = "Registration is not available"
