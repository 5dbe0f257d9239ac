"""LocalIdentityStore - credentials kept in the campus database."""

from __future__ import annotations

import asyncio
import logging
import secrets
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from campushub.exceptions import ServiceError
from campushub.identity.exceptions import AuthError
from campushub.identity.feed import ChangeFeed
from campushub.identity.models import AuthChange, Identity, IdentitySession
from campushub.logging import mask_email
from campushub.store import CredentialExistsError, CredentialNotFoundError

if TYPE_CHECKING:
    from campushub.identity.models import ChangeCallback, Subscription
    from campushub.store import CampusStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


class LocalIdentityStore:
    """Identity store backed by the ``credentials`` table.

    Sessions live in memory for the lifetime of the process; there is at
    most one current session.
    """

    def __init__(self, store: CampusStore) -> None:
        self._store = store
        self._feed = ChangeFeed()
        self._session: IdentitySession | None = None

    async def _call(self, fn: Callable[..., T], *args: object) -> T:
        try:
            return await asyncio.to_thread(fn, *args)
        except SQLAlchemyError as e:
            logger.exception("Credential store failure")
            raise ServiceError() from e

    def _start_session(self, identity: Identity) -> IdentitySession:
        self._session = IdentitySession(
            identity=identity,
            access_token=secrets.token_urlsafe(32),
        )
        self._feed.notify(AuthChange.SIGNED_IN, self._session)
        return self._session

    async def sign_in(self, email: str, password: str) -> IdentitySession:
        email = normalize_email(email)
        try:
            credential = await self._call(self._store.get_credential_by_email, email)
        except CredentialNotFoundError as e:
            logger.info("Sign-in rejected for %s: unknown email", mask_email(email))
            raise AuthError() from e

        if not check_password_hash(credential.password_hash, password):
            logger.info("Sign-in rejected for %s: bad password", mask_email(email))
            raise AuthError()

        return self._start_session(Identity(id=credential.id, email=credential.email))

    async def sign_up(self, email: str, password: str) -> IdentitySession:
        email = normalize_email(email)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")

        password_hash = generate_password_hash(password)
        try:
            credential = await self._call(self._store.create_credential, email, password_hash)
        except CredentialExistsError as e:
            raise AuthError("User already registered") from e

        logger.info("Created identity %s for %s", credential.id, mask_email(email))
        return self._start_session(Identity(id=credential.id, email=credential.email))

    async def sign_out(self) -> None:
        if self._session is None:
            return
        self._session = None
        self._feed.notify(AuthChange.SIGNED_OUT, None)

    async def current_session(self) -> IdentitySession | None:
        return self._session

    async def delete_identity(self, identity_id: str) -> None:
        removed = await self._call(self._store.delete_credential, identity_id)
        logger.info("Deleted identity %s (existed=%s)", identity_id, removed)
        if self._session is not None and self._session.identity.id == identity_id:
            await self.sign_out()

    def on_change(self, callback: ChangeCallback) -> Subscription:
        return self._feed.subscribe(callback)

    async def aclose(self) -> None:
        """Drop the in-memory session. There is no transport to release."""
        self._session = None
