"""Profile repository contract used by the session layer."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy.exc import SQLAlchemyError

from campushub.exceptions import ReferenceNotFoundError, ServiceError, ValidationError
from campushub.store.exceptions import ProfileExistsError, ProfileNotFoundError

if TYPE_CHECKING:
    from campushub.store import CampusStore, Profile

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Async access to profiles."""

    async def get(self, profile_id: str) -> Profile | None:
        """Return the profile, or None if it doesn't exist."""
        ...

    async def insert(self, profile: Profile) -> Profile:
        """Store a new profile.

        Raises:
            ValidationError: A profile with this ID already exists.
        """
        ...

    async def update(self, profile_id: str, **fields: Any) -> Profile:
        """Partially update a profile.

        Raises:
            ReferenceNotFoundError: No profile with this ID.
        """
        ...


class StoreProfileRepository:
    """ProfileRepository over the synchronous CampusStore.

    Store calls run in a worker thread. Database failures become
    ServiceError and store lookups map onto the shared CampusHub errors.
    """

    def __init__(self, store: CampusStore) -> None:
        self._store = store

    async def get(self, profile_id: str) -> Profile | None:
        try:
            return await asyncio.to_thread(self._store.get_profile, profile_id)
        except SQLAlchemyError as e:
            logger.exception("Profile lookup failed for %s", profile_id)
            raise ServiceError() from e

    async def insert(self, profile: Profile) -> Profile:
        try:
            return await asyncio.to_thread(self._store.create_profile, profile)
        except ProfileExistsError as e:
            raise ValidationError(
                {"email": "An account already exists for this identity"}
            ) from e
        except SQLAlchemyError as e:
            logger.exception("Profile insert failed for %s", profile.id)
            raise ServiceError() from e

    async def update(self, profile_id: str, **fields: Any) -> Profile:
        try:
            return await asyncio.to_thread(
                lambda: self._store.update_profile(profile_id, **fields)
            )
        except ProfileNotFoundError as e:
            raise ReferenceNotFoundError("profile", profile_id) from e
        except SQLAlchemyError as e:
            logger.exception("Profile update failed for %s", profile_id)
            raise ServiceError() from e
