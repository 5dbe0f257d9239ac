"""Student registration endpoints."""

from fastapi import APIRouter, status

from campushub.api.dependencies import LedgerDep, StoreDep, StudentDep
from campushub.api.models import (
    APIResponse,
    EventResponse,
    RegistrationStatusResponse,
    event_to_response,
)
from campushub.ledger import RegistrationLedger
from campushub.store import CampusStore

router = APIRouter(tags=["registrations"])


def _status(
    store: CampusStore, ledger: RegistrationLedger, event_id: str, student_id: str
) -> RegistrationStatusResponse:
    return RegistrationStatusResponse(
        event_id=event_id,
        registered=ledger.is_registered(event_id, student_id),
        registrations=store.count_registrations(event_id),
    )


@router.get(
    "/events/{event_id}/registration",
    response_model=APIResponse[RegistrationStatusResponse],
)
def get_registration(
    event_id: str, student: StudentDep, ledger: LedgerDep, store: StoreDep
) -> APIResponse[RegistrationStatusResponse]:
    """Check whether the signed-in student is registered."""
    return APIResponse(data=_status(store, ledger, event_id, student.id))


@router.post(
    "/events/{event_id}/registration",
    response_model=APIResponse[RegistrationStatusResponse],
    status_code=status.HTTP_201_CREATED,
)
def register_for_event(
    event_id: str, student: StudentDep, ledger: LedgerDep, store: StoreDep
) -> APIResponse[RegistrationStatusResponse]:
    """Register the signed-in student for an approved event."""
    ledger.register(event_id, student.id)
    return APIResponse(data=_status(store, ledger, event_id, student.id))


@router.delete(
    "/events/{event_id}/registration",
    response_model=APIResponse[RegistrationStatusResponse],
)
def cancel_registration(
    event_id: str, student: StudentDep, ledger: LedgerDep, store: StoreDep
) -> APIResponse[RegistrationStatusResponse]:
    """Cancel a registration. Cancelling twice is fine."""
    ledger.cancel(event_id, student.id)
    return APIResponse(data=_status(store, ledger, event_id, student.id))


@router.get("/registrations", response_model=APIResponse[list[EventResponse]])
def list_registrations(
    student: StudentDep, ledger: LedgerDep
) -> APIResponse[list[EventResponse]]:
    """List the events the signed-in student is registered for."""
    events = ledger.list_for_student(student.id)
    return APIResponse(data=[event_to_response(e) for e in events])
