"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from campushub.session import GuardDecision, SessionState

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None
    details: dict[str, Any] | None = None


# Auth models


class LoginRequest(BaseModel):
    """Request model for signing in."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=1024)


class RegisterRequest(BaseModel):
    """Request model for self-service registration.

    Fields are checked by the session manager so that a disallowed role is
    reported before any field problem.
    """

    email: str = Field(default="", max_length=255)
    password: str = Field(default="", max_length=1024)
    name: str = Field(default="", max_length=255)


class SessionResponse(BaseModel):
    """Response model for the current session."""

    signed_in: bool
    loading: bool
    resolving: bool
    user_id: str | None = None
    email: str | None = None
    name: str | None = None
    role: str | None = None
    approval_status: str | None = None


def session_to_response(state: SessionState) -> SessionResponse:
    """Convert a SessionState to SessionResponse."""
    profile = state.profile
    return SessionResponse(
        signed_in=state.identity is not None,
        loading=state.loading,
        resolving=state.resolving,
        user_id=state.identity.id if state.identity else None,
        email=state.identity.email if state.identity else None,
        name=profile.name if profile else None,
        role=profile.role if profile else None,
        approval_status=profile.approval_status if profile else None,
    )


class ProfileResponse(BaseModel):
    """Response model for a profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    role: str
    approval_status: str
    created_at: datetime


def profile_to_response(profile: Any) -> ProfileResponse:
    return ProfileResponse.model_validate(profile)


# Navigation models


class GuardResponse(BaseModel):
    """Response model for a route guard decision."""

    path: str
    action: str
    location: str | None = None


def guard_to_response(path: str, decision: GuardDecision) -> GuardResponse:
    return GuardResponse(path=path, action=decision.action.value, location=decision.location)


# Venue models


class VenueResponse(BaseModel):
    """Response model for a venue."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    capacity: int
    location: str


# Event models


class EventCreate(BaseModel):
    """Request model for proposing an event.

    There is no status field; new events are always pending.
    """

    title: str = Field(default="", max_length=255)
    description: str = Field(default="", max_length=10_000)
    date: str = Field(default="", max_length=32)
    time: str = Field(default="", max_length=32)
    venue_id: str = Field(default="", max_length=36)


class DecisionRequest(BaseModel):
    """Request model for an approve/reject decision."""

    decision: str = Field(..., min_length=1, max_length=20)


class EventResponse(BaseModel):
    """Response model for an event."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    date: str
    time: str
    venue_id: str
    venue_name: str | None
    organizer_id: str
    status: str
    reviewed_by: str | None
    reviewed_at: datetime | None
    created_at: datetime


def event_to_response(event: Any) -> EventResponse:
    """Convert an Event model to EventResponse."""
    return EventResponse.model_validate(event)


# Registration models


class RegistrationStatusResponse(BaseModel):
    """Whether the signed-in student is registered for an event."""

    event_id: str
    registered: bool
    registrations: int
