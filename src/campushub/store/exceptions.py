"""Custom exceptions for the campus store."""


class StoreError(Exception):
    """Base exception for campus store errors."""


class CredentialExistsError(StoreError):
    """A credential with this email already exists."""


class CredentialNotFoundError(StoreError):
    """Credential with given email or ID does not exist."""


class ProfileExistsError(StoreError):
    """A profile for this identity already exists."""


class ProfileNotFoundError(StoreError):
    """Profile with given ID does not exist."""


class VenueNotFoundError(StoreError):
    """Venue with given ID does not exist."""


class EventNotFoundError(StoreError):
    """Event with given ID does not exist."""


class EventNotPendingError(StoreError):
    """Conditional status update found the event already decided."""


class DuplicateRegistrationError(StoreError):
    """Registration for this (event, student) pair already exists."""
