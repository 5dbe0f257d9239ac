"""Session component - sign-in, role gating and route guarding."""

from campushub.session.accounts import AccountCreator
from campushub.session.approvals import OrganizerApprovals
from campushub.session.exceptions import ApprovalError, ProfileFetchError, RegistrationError
from campushub.session.gate import RoleApprovalGate
from campushub.session.guard import RouteGuard
from campushub.session.manager import SessionManager, dashboard_path, login_path, parse_role
from campushub.session.models import (
    DENY_PENDING_APPROVAL,
    DENY_ROLE_MISMATCH,
    SIGNED_OUT,
    GateDecision,
    GuardAction,
    GuardDecision,
    SessionState,
)
from campushub.session.repository import ProfileRepository, StoreProfileRepository
from campushub.session.store import SessionStore

__all__ = [
    "AccountCreator",
    "ApprovalError",
    "DENY_PENDING_APPROVAL",
    "DENY_ROLE_MISMATCH",
    "GateDecision",
    "GuardAction",
    "GuardDecision",
    "OrganizerApprovals",
    "ProfileFetchError",
    "ProfileRepository",
    "RegistrationError",
    "RoleApprovalGate",
    "RouteGuard",
    "SIGNED_OUT",
    "SessionManager",
    "SessionState",
    "SessionStore",
    "StoreProfileRepository",
    "dashboard_path",
    "login_path",
    "parse_role",
]
