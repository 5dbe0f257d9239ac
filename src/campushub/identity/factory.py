"""Build the configured identity store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from campushub.config import IdentityBackend
from campushub.identity.hosted import HostedIdentityStore
from campushub.identity.local import LocalIdentityStore

if TYPE_CHECKING:
    from campushub.config import Settings
    from campushub.identity.protocol import IdentityStore
    from campushub.store import CampusStore

logger = logging.getLogger(__name__)


def create_identity_store(settings: Settings, store: CampusStore) -> IdentityStore:
    """Return the identity store selected by ``settings.identity_backend``."""
    if settings.identity_backend == IdentityBackend.HOSTED:
        logger.info("Using hosted identity store at %s", settings.auth_url)
        return HostedIdentityStore(
            base_url=settings.auth_url or "",
            anon_key=settings.auth_anon_key or "",
            service_key=settings.auth_service_key,
            session_file=settings.session_file,
            timeout=settings.auth_timeout,
        )
    logger.info("Using local identity store")
    return LocalIdentityStore(store)
