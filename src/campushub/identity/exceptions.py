"""Exceptions for the identity layer."""

from campushub.exceptions import CampusHubError


class AuthError(CampusHubError):
    """Credentials were rejected or the account cannot be created."""

    default_message = "Invalid email or password"
