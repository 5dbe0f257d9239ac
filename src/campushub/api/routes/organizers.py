"""Organizer account review endpoints."""

from fastapi import APIRouter

from campushub.api.dependencies import AdminDep, ApprovalsDep
from campushub.api.models import (
    APIResponse,
    DecisionRequest,
    ProfileResponse,
    profile_to_response,
)

router = APIRouter(prefix="/organizers", tags=["organizers"])


@router.get("/pending", response_model=APIResponse[list[ProfileResponse]])
def list_pending_organizers(
    _admin: AdminDep, approvals: ApprovalsDep
) -> APIResponse[list[ProfileResponse]]:
    """List organizer accounts awaiting approval, oldest first."""
    profiles = approvals.list_pending()
    return APIResponse(data=[profile_to_response(p) for p in profiles])


@router.post("/{profile_id}/decision", response_model=APIResponse[ProfileResponse])
async def decide_organizer(
    profile_id: str, request: DecisionRequest, admin: AdminDep, approvals: ApprovalsDep
) -> APIResponse[ProfileResponse]:
    """Approve or reject an organizer account."""
    profile = await approvals.decide(profile_id, request.decision, acting_admin_id=admin.id)
    return APIResponse(data=profile_to_response(profile))
