"""Role approval gate - may an identity act in the role it claimed?"""

from __future__ import annotations

from typing import TYPE_CHECKING

from campushub.session.models import (
    DENY_PENDING_APPROVAL,
    DENY_ROLE_MISMATCH,
    GateDecision,
)
from campushub.store.models import ApprovalStatus, Role

if TYPE_CHECKING:
    from campushub.store import Profile


class RoleApprovalGate:
    """Pure decision on a (profile, claimed role) pair.

    Students and admins pass once the role matches; organizers additionally
    need an approved profile.
    """

    def evaluate(self, profile: Profile, claimed_role: Role | str) -> GateDecision:
        claimed = Role(claimed_role)
        if profile.profile_role != claimed:
            return GateDecision.deny(DENY_ROLE_MISMATCH)
        if claimed == Role.ORGANIZER and profile.profile_approval != ApprovalStatus.APPROVED:
            return GateDecision.deny(DENY_PENDING_APPROVAL)
        return GateDecision.allow()
