"""Data models for the session layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from campushub.store.models import Role

if TYPE_CHECKING:
    from campushub.identity import Identity
    from campushub.store import Profile


@dataclass(frozen=True)
class SessionState:
    """Who is signed in, as published to the rest of the application.

    ``identity`` set with ``profile`` None means the profile is still
    being resolved; nothing may be decided from that state.
    """

    identity: Identity | None = None
    profile: Profile | None = None
    loading: bool = True

    @property
    def role(self) -> Role | None:
        return self.profile.profile_role if self.profile is not None else None

    @property
    def resolving(self) -> bool:
        return self.loading or (self.identity is not None and self.profile is None)

    def fingerprint(self) -> tuple[object, ...]:
        """Comparable snapshot used to drop no-op publishes."""
        profile = self.profile
        return (
            self.identity,
            None
            if profile is None
            else (profile.id, profile.name, profile.role, profile.approval_status),
            self.loading,
        )


SIGNED_OUT = SessionState(identity=None, profile=None, loading=False)


DENY_ROLE_MISMATCH = "role mismatch"
DENY_PENDING_APPROVAL = "pending approval"


@dataclass(frozen=True)
class GateDecision:
    """Outcome of the role approval gate."""

    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> GateDecision:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> GateDecision:
        return cls(allowed=False, reason=reason)


class GuardAction(StrEnum):
    """What the client should do with a requested route."""

    ALLOW = "allow"
    REDIRECT = "redirect"
    HOLD = "hold"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class GuardDecision:
    """Outcome of the route guard."""

    action: GuardAction
    location: str | None = None
