"""Campus Store - persistent storage for profiles, venues, events and registrations."""

from campushub.store.exceptions import (
    CredentialExistsError,
    CredentialNotFoundError,
    DuplicateRegistrationError,
    EventNotFoundError,
    EventNotPendingError,
    ProfileExistsError,
    ProfileNotFoundError,
    StoreError,
    VenueNotFoundError,
)
from campushub.store.models import (
    ApprovalStatus,
    Credential,
    Event,
    EventStatus,
    Profile,
    Registration,
    Role,
    Venue,
)
from campushub.store.store import CampusStore

__all__ = [
    "ApprovalStatus",
    "CampusStore",
    "Credential",
    "CredentialExistsError",
    "CredentialNotFoundError",
    "DuplicateRegistrationError",
    "Event",
    "EventNotFoundError",
    "EventNotPendingError",
    "EventStatus",
    "Profile",
    "ProfileExistsError",
    "ProfileNotFoundError",
    "Registration",
    "Role",
    "StoreError",
    "Venue",
    "VenueNotFoundError",
]
