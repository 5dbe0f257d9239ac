"""Venue endpoints."""

from fastapi import APIRouter

from campushub.api.dependencies import SignedInDep, StoreDep
from campushub.api.models import APIResponse, VenueResponse

router = APIRouter(prefix="/venues", tags=["venues"])


@router.get("", response_model=APIResponse[list[VenueResponse]])
def list_venues(_profile: SignedInDep, store: StoreDep) -> APIResponse[list[VenueResponse]]:
    """List venues for the event form."""
    venues = store.list_venues()
    return APIResponse(data=[VenueResponse.model_validate(v) for v in venues])
