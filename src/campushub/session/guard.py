"""RouteGuard - maps (session, requested path) to a navigation decision."""

from __future__ import annotations

import logging

from campushub.session.gate import RoleApprovalGate
from campushub.session.models import GuardAction, GuardDecision, SessionState
from campushub.store.models import Role

logger = logging.getLogger(__name__)

PUBLIC_SECTIONS = ("login", "register")
DASHBOARD_SECTION = "dashboard"


def _split(path: str) -> list[str]:
    path = path.split("?", 1)[0].split("#", 1)[0]
    return [part for part in path.strip().split("/") if part]


class RouteGuard:
    """Decides whether a route may render for the current session.

    ``/``, ``/login/{role}`` and ``/register/{role}`` are public.
    ``/dashboard/{role}`` needs a profile the gate admits for that role;
    while the session is still resolving the decision is held rather than
    redirected. Everything else is not found.
    """

    def __init__(self, gate: RoleApprovalGate | None = None) -> None:
        self._gate = gate or RoleApprovalGate()

    def resolve(self, state: SessionState, path: str) -> GuardDecision:
        parts = _split(path)
        if not parts:
            return GuardDecision(GuardAction.ALLOW)
        if len(parts) != 2:
            return GuardDecision(GuardAction.NOT_FOUND)

        section, role_name = parts
        try:
            role = Role(role_name)
        except ValueError:
            return GuardDecision(GuardAction.NOT_FOUND)

        if section in PUBLIC_SECTIONS:
            return GuardDecision(GuardAction.ALLOW)
        if section != DASHBOARD_SECTION:
            return GuardDecision(GuardAction.NOT_FOUND)

        if state.resolving:
            return GuardDecision(GuardAction.HOLD)

        login = f"/login/{role.value}"
        if state.profile is None:
            return GuardDecision(GuardAction.REDIRECT, login)
        decision = self._gate.evaluate(state.profile, role)
        if not decision.allowed:
            logger.debug("Redirecting %s from %s: %s", state.profile.id, path, decision.reason)
            return GuardDecision(GuardAction.REDIRECT, login)
        return GuardDecision(GuardAction.ALLOW)
