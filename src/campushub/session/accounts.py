"""AccountCreator - identity and profile creation as one logical step."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from campushub.exceptions import ValidationError
from campushub.logging import mask_email
from campushub.store.models import ApprovalStatus, Profile, Role

if TYPE_CHECKING:
    from campushub.identity import IdentityStore
    from campushub.session.repository import ProfileRepository

logger = logging.getLogger(__name__)


class AccountCreator:
    """Creates an identity, then its profile.

    The two live in separate stores. When the profile insert fails the
    freshly created identity is deleted again; if that cleanup fails too it
    is logged and the profile error is what the caller sees. An identity
    that already has a profile belongs to an existing account and is kept.
    """

    def __init__(self, identity_store: IdentityStore, profiles: ProfileRepository) -> None:
        self._identity = identity_store
        self._profiles = profiles

    async def create(self, email: str, password: str, role: Role | str, name: str) -> Profile:
        """Create an account.

        Organizer profiles always start ``pending``; every other role starts
        with no approval status.

        Raises:
            AuthError: If the identity store refuses the credentials.
            ValidationError: If the identity already has a profile.
            Exception: Whatever the profile insert raised, after cleanup.
        """
        role = Role(role)
        session = await self._identity.sign_up(email, password)
        identity_id = session.identity.id

        approval = ApprovalStatus.PENDING if role == Role.ORGANIZER else ApprovalStatus.NONE
        profile = Profile(id=identity_id, name=name, role=role, approval_status=approval)
        try:
            created = await self._profiles.insert(profile)
        except ValidationError:
            logger.warning("Identity %s already has a profile", identity_id)
            raise
        except Exception:
            logger.exception("Profile creation failed for identity %s", identity_id)
            await self._remove_orphan(identity_id)
            raise

        logger.info(
            "Created %s account %s for %s", role.value, identity_id, mask_email(email)
        )
        return created

    async def _remove_orphan(self, identity_id: str) -> None:
        try:
            await self._identity.delete_identity(identity_id)
        except Exception:
            logger.exception("Could not remove orphaned identity %s", identity_id)
        else:
            logger.info("Removed orphaned identity %s", identity_id)
