"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Callable, Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from campushub.exceptions import AccessDeniedError, SessionResolvingError
from campushub.identity import IdentityStore  # noqa: TC001
from campushub.ledger import RegistrationLedger
from campushub.lifecycle import EventLifecycle
from campushub.notices import NoticeBoard
from campushub.session import (
    GuardAction,
    OrganizerApprovals,
    RouteGuard,
    SessionManager,
    SessionStore,
    StoreProfileRepository,
    dashboard_path,
)
from campushub.store import CampusStore, Profile, Role

# Global CampusStore instance (initialized on app startup)
_store: CampusStore | None = None


def init_store(db_path: str = "campushub.db") -> CampusStore:
    """Initialize the global CampusStore instance."""
    global _store  # noqa: PLW0603
    _store = CampusStore(db_path)
    return _store


def close_store() -> None:
    """Close the global CampusStore instance."""
    global _store  # noqa: PLW0603
    if _store is not None:
        _store.close()
        _store = None


def get_store() -> Generator[CampusStore, None, None]:
    """Dependency that provides the CampusStore instance."""
    if _store is None:
        raise RuntimeError("CampusStore not initialized. Call init_store() first.")
    yield _store


StoreDep = Annotated[CampusStore, Depends(get_store)]

# Global NoticeBoard instance
_notice_board: NoticeBoard | None = None


def init_notice_board() -> NoticeBoard:
    """Initialize the global NoticeBoard instance."""
    global _notice_board  # noqa: PLW0603
    _notice_board = NoticeBoard()
    return _notice_board


def close_notice_board() -> None:
    global _notice_board  # noqa: PLW0603
    _notice_board = None


def get_notice_board() -> Generator[NoticeBoard, None, None]:
    """Dependency that provides the NoticeBoard instance."""
    if _notice_board is None:
        raise RuntimeError("NoticeBoard not initialized. Call init_notice_board() first.")
    yield _notice_board


NoticeBoardDep = Annotated[NoticeBoard, Depends(get_notice_board)]

# Global SessionManager instance, the one session of this process
_session_manager: SessionManager | None = None


def init_session_manager(
    identity_store: IdentityStore,
    store: CampusStore,
    notices: NoticeBoard | None = None,
) -> SessionManager:
    """Initialize the global SessionManager instance.

    ``initialize()`` still has to be awaited before guard decisions are
    trusted.
    """
    global _session_manager  # noqa: PLW0603
    _session_manager = SessionManager(
        identity_store=identity_store,
        profiles=StoreProfileRepository(store),
        session_store=SessionStore(),
        notices=notices,
    )
    return _session_manager


def close_session_manager() -> None:
    """Release the SessionManager's identity-store subscription."""
    global _session_manager  # noqa: PLW0603
    if _session_manager is not None:
        _session_manager.close()
        _session_manager = None


def get_session_manager() -> Generator[SessionManager, None, None]:
    """Dependency that provides the SessionManager instance."""
    if _session_manager is None:
        raise RuntimeError("SessionManager not initialized. Call init_session_manager() first.")
    yield _session_manager


SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]


# Services built per request from the globals above


def get_lifecycle(store: StoreDep, notices: NoticeBoardDep) -> EventLifecycle:
    return EventLifecycle(store, notices)


def get_ledger(store: StoreDep) -> RegistrationLedger:
    return RegistrationLedger(store)


def get_approvals(store: StoreDep, notices: NoticeBoardDep) -> OrganizerApprovals:
    return OrganizerApprovals(store, notices)


def get_route_guard() -> RouteGuard:
    return RouteGuard()


LifecycleDep = Annotated[EventLifecycle, Depends(get_lifecycle)]
LedgerDep = Annotated[RegistrationLedger, Depends(get_ledger)]
ApprovalsDep = Annotated[OrganizerApprovals, Depends(get_approvals)]
RouteGuardDep = Annotated[RouteGuard, Depends(get_route_guard)]


# Role-gated access


def require_role(role: Role) -> Callable[[SessionManager, RouteGuard], Profile]:
    """Build a dependency admitting only sessions the guard allows on ``role``'s dashboard.

    Raises (from the dependency):
        SessionResolvingError: While the session is still loading.
        AccessDeniedError: Carrying the login path to redirect to.
    """
    path = dashboard_path(role)

    def dependency(manager: SessionManagerDep, guard: RouteGuardDep) -> Profile:
        state = manager.state
        decision = guard.resolve(state, path)
        if decision.action == GuardAction.HOLD:
            raise SessionResolvingError()
        if decision.action != GuardAction.ALLOW or state.profile is None:
            raise AccessDeniedError(
                f"Sign in as {role.value} to continue", redirect_to=decision.location
            )
        return state.profile

    return dependency


def require_signed_in(manager: SessionManagerDep) -> Profile:
    """Dependency admitting any session with a resolved profile."""
    state = manager.state
    if state.resolving:
        raise SessionResolvingError()
    if state.profile is None:
        raise AccessDeniedError("Sign in to continue", redirect_to="/")
    return state.profile


StudentDep = Annotated[Profile, Depends(require_role(Role.STUDENT))]
OrganizerDep = Annotated[Profile, Depends(require_role(Role.ORGANIZER))]
AdminDep = Annotated[Profile, Depends(require_role(Role.ADMIN))]
SignedInDep = Annotated[Profile, Depends(require_signed_in)]
