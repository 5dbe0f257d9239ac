"""Registration Ledger - student registrations for approved events."""

from campushub.ledger.exceptions import (
    AlreadyRegisteredError,
    DuplicateError,
    EventNotApprovedError,
)
from campushub.ledger.ledger import RegistrationLedger

__all__ = [
    "AlreadyRegisteredError",
    "DuplicateError",
    "EventNotApprovedError",
    "RegistrationLedger",
]
