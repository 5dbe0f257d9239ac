"""REST API for CampusHub."""

from campushub.api.app import create_app
from campushub.api.models import (
    APIResponse,
    EventResponse,
    ProfileResponse,
    SessionResponse,
)

__all__ = [
    "APIResponse",
    "EventResponse",
    "ProfileResponse",
    "SessionResponse",
    "create_app",
]
