"""Route guard endpoint for client-side navigation."""

from fastapi import APIRouter, Query

from campushub.api.dependencies import RouteGuardDep, SessionManagerDep
from campushub.api.models import APIResponse, GuardResponse, guard_to_response

router = APIRouter(prefix="/navigation", tags=["navigation"])


@router.get("/resolve", response_model=APIResponse[GuardResponse])
def resolve_route(
    manager: SessionManagerDep,
    guard: RouteGuardDep,
    path: str = Query(..., description="Client route, e.g. /dashboard/student"),
) -> APIResponse[GuardResponse]:
    """Decide whether a client route may render for the current session.

    ``hold`` means the session is still resolving and the client should
    render nothing yet rather than redirect.
    """
    decision = guard.resolve(manager.state, path)
    return APIResponse(data=guard_to_response(path, decision))
