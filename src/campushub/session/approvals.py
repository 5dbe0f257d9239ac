"""Admin workflow for reviewing organizer accounts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from campushub.exceptions import ReferenceNotFoundError, ValidationError
from campushub.session.repository import ProfileRepository, StoreProfileRepository
from campushub.store.models import ApprovalStatus, Role

if TYPE_CHECKING:
    from campushub.notices import NoticeBoard
    from campushub.store import CampusStore, Profile

logger = logging.getLogger(__name__)

DECISIONS = (ApprovalStatus.APPROVED, ApprovalStatus.REJECTED)


class OrganizerApprovals:
    """Lists pending organizers and records admin decisions on them.

    Listing reads the store directly; decisions go through the profile
    repository.
    """

    def __init__(
        self,
        store: CampusStore,
        notices: NoticeBoard | None = None,
        profiles: ProfileRepository | None = None,
    ) -> None:
        self._store = store
        self._notices = notices
        self._profiles = profiles or StoreProfileRepository(store)

    def list_pending(self) -> list[Profile]:
        """Organizer profiles awaiting review, oldest first."""
        return self._store.list_profiles(
            role=Role.ORGANIZER, approval_status=ApprovalStatus.PENDING
        )

    async def decide(
        self,
        profile_id: str,
        decision: ApprovalStatus | str,
        acting_admin_id: str,
    ) -> Profile:
        """Approve or reject an organizer.

        Reapplying the current status is a no-op. Switching an already
        decided organizer to the other outcome is allowed.

        Args:
            profile_id: The organizer's profile ID.
            decision: ``approved`` or ``rejected``.
            acting_admin_id: Profile ID of the admin taking the decision.

        Returns:
            The updated profile.

        Raises:
            ValidationError: If the decision is invalid or the profile is
                not an organizer.
            ReferenceNotFoundError: If the profile doesn't exist.
            ServiceError: If the profile store is unavailable.
        """
        try:
            status = ApprovalStatus(decision)
        except ValueError:
            status = None
        if status not in DECISIONS:
            raise ValidationError({"decision": "Decision must be 'approved' or 'rejected'"})

        profile = await self._profiles.get(profile_id)
        if profile is None:
            raise ReferenceNotFoundError("profile", profile_id)
        if profile.profile_role != Role.ORGANIZER:
            raise ValidationError({"profile_id": "Only organizer accounts need approval"})

        if profile.profile_approval == status:
            logger.info("Organizer %s already %s", profile_id, status.value)
            return profile

        updated = await self._profiles.update(profile_id, approval_status=status)
        logger.info(
            "Organizer %s %s by admin %s (was %s)",
            profile_id,
            status.value,
            acting_admin_id,
            profile.approval_status,
        )
        if self._notices is not None:
            self._notices.emit_organizer_decided(profile_id, status.value)
        return updated
