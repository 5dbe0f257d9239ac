"""Interface every identity store implements."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from campushub.identity.models import ChangeCallback, IdentitySession, Subscription


class IdentityStore(Protocol):
    """Holds credentials and issues sessions.

    Implementations notify ``on_change`` listeners after every successful
    sign-in, sign-up and sign-out, whichever caller triggered it.
    """

    async def sign_in(self, email: str, password: str) -> IdentitySession:
        """Check credentials and start a session.

        Raises:
            AuthError: If the credentials are rejected.
            ServiceError: If the store cannot be reached.
        """
        ...

    async def sign_up(self, email: str, password: str) -> IdentitySession:
        """Create credentials and start a session for them.

        Raises:
            AuthError: If the email is taken or the password is refused.
            ServiceError: If the store cannot be reached.
        """
        ...

    async def sign_out(self) -> None:
        """End the current session. No-op without one."""
        ...

    async def current_session(self) -> IdentitySession | None:
        """Return the live session, if any."""
        ...

    async def delete_identity(self, identity_id: str) -> None:
        """Remove an identity. Used to clean up after a failed registration."""
        ...

    def on_change(self, callback: ChangeCallback) -> Subscription:
        """Register a listener for SIGNED_IN / SIGNED_OUT notifications."""
        ...

    async def aclose(self) -> None:
        """Release transport resources."""
        ...
