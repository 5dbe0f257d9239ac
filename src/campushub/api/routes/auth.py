"""Sign-in, registration and session endpoints."""

from fastapi import APIRouter, status

from campushub.api.dependencies import SessionManagerDep
from campushub.api.models import (
    APIResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    SessionResponse,
    profile_to_response,
    session_to_response,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login/{role}", response_model=APIResponse[SessionResponse])
async def login(
    role: str, credentials: LoginRequest, manager: SessionManagerDep
) -> APIResponse[SessionResponse]:
    """Sign in with the role chosen on the login page."""
    state = await manager.sign_in(credentials.email, credentials.password, role)
    return APIResponse(data=session_to_response(state))


@router.post(
    "/register/{role}",
    response_model=APIResponse[ProfileResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    role: str, request: RegisterRequest, manager: SessionManagerDep
) -> APIResponse[ProfileResponse]:
    """Create a student or organizer account. Admin registration always fails."""
    profile = await manager.register(request.email, request.password, role, request.name)
    return APIResponse(data=profile_to_response(profile))


@router.post("/logout", response_model=APIResponse[SessionResponse])
async def logout(manager: SessionManagerDep) -> APIResponse[SessionResponse]:
    """Sign out. Succeeds even when nobody is signed in."""
    await manager.sign_out()
    return APIResponse(data=session_to_response(manager.state))


@router.get("/session", response_model=APIResponse[SessionResponse])
def get_session(manager: SessionManagerDep) -> APIResponse[SessionResponse]:
    """Get the current session."""
    return APIResponse(data=session_to_response(manager.state))
