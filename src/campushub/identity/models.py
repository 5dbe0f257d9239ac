"""Data models for the identity layer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class AuthChange(StrEnum):
    """Identity store notifications."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


@dataclass(frozen=True)
class Identity:
    """An authenticated external identity.

    Attributes:
        id: Stable identity id, shared with the matching Profile.
        email: Email address the identity signed in with.
    """

    id: str
    email: str


@dataclass(frozen=True)
class IdentitySession:
    """A session issued by an identity store.

    ``access_token`` is None when the store created the identity but did not
    start a session (e.g. pending email confirmation).
    """

    identity: Identity
    access_token: str | None = None
    refresh_token: str | None = None
    expires_at: datetime | None = None


ChangeCallback = Callable[[AuthChange, IdentitySession | None], None]


class Subscription:
    """Handle for a change-feed listener. Unsubscribing twice is harmless."""

    def __init__(self, cancel: Callable[[], None]) -> None:
        self._cancel: Callable[[], None] | None = cancel

    @property
    def active(self) -> bool:
        return self._cancel is not None

    def unsubscribe(self) -> None:
        if self._cancel is not None:
            cancel, self._cancel = self._cancel, None
            cancel()
