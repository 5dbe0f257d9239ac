"""Event proposal and review endpoints."""

from fastapi import APIRouter, status

from campushub.api.dependencies import AdminDep, LifecycleDep, OrganizerDep, StudentDep
from campushub.api.models import (
    APIResponse,
    DecisionRequest,
    EventCreate,
    EventResponse,
    event_to_response,
)

router = APIRouter(prefix="/events", tags=["events"])


@router.post(
    "",
    response_model=APIResponse[EventResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_event(
    event: EventCreate, organizer: OrganizerDep, lifecycle: LifecycleDep
) -> APIResponse[EventResponse]:
    """Propose an event. It starts pending until an admin decides."""
    created = lifecycle.create(
        organizer_id=organizer.id,
        title=event.title,
        description=event.description,
        date=event.date,
        time=event.time,
        venue_id=event.venue_id,
    )
    return APIResponse(data=event_to_response(created))


@router.get("/mine", response_model=APIResponse[list[EventResponse]])
def list_my_events(
    organizer: OrganizerDep, lifecycle: LifecycleDep
) -> APIResponse[list[EventResponse]]:
    """List the signed-in organizer's events, newest first."""
    events = lifecycle.list_for_organizer(organizer.id)
    return APIResponse(data=[event_to_response(e) for e in events])


@router.get("/pending", response_model=APIResponse[list[EventResponse]])
def list_pending_events(
    _admin: AdminDep, lifecycle: LifecycleDep
) -> APIResponse[list[EventResponse]]:
    """List events awaiting review, oldest first."""
    events = lifecycle.list_pending_for_admin()
    return APIResponse(data=[event_to_response(e) for e in events])


@router.get("/approved", response_model=APIResponse[list[EventResponse]])
def list_approved_events(
    _student: StudentDep, lifecycle: LifecycleDep
) -> APIResponse[list[EventResponse]]:
    """List approved events by date."""
    events = lifecycle.list_approved_for_students()
    return APIResponse(data=[event_to_response(e) for e in events])


@router.post("/{event_id}/decision", response_model=APIResponse[EventResponse])
def decide_event(
    event_id: str, request: DecisionRequest, admin: AdminDep, lifecycle: LifecycleDep
) -> APIResponse[EventResponse]:
    """Approve or reject a pending event."""
    event = lifecycle.transition(event_id, request.decision, acting_admin_id=admin.id)
    return APIResponse(data=event_to_response(event))
