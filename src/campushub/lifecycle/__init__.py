"""Event Lifecycle - organizers propose, admins decide, students see approved."""

from campushub.lifecycle.exceptions import InvalidTransitionError
from campushub.lifecycle.lifecycle import EventLifecycle
from campushub.lifecycle.models import (
    DECISIONS,
    MIN_DESCRIPTION_LENGTH,
    MIN_TITLE_LENGTH,
    EventDraft,
)

__all__ = [
    "DECISIONS",
    "EventDraft",
    "EventLifecycle",
    "InvalidTransitionError",
    "MIN_DESCRIPTION_LENGTH",
    "MIN_TITLE_LENGTH",
]
