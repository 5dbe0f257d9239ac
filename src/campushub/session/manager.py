"""SessionManager - who is signed in, and in which role.

The manager is the only writer of the SessionStore. It reconciles two
sources of session changes: its own direct calls (initialize, sign in,
sign out, register) and the identity store's change notifications.

Every resolution is stamped with an epoch. Signing out bumps the epoch,
so a profile fetch that started before the sign-out is discarded instead
of republishing a stale identity.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import replace
from typing import TYPE_CHECKING

from campushub.exceptions import CampusHubError, ServiceError, ValidationError
from campushub.identity import AuthChange, AuthError, IdentitySession
from campushub.identity.local import MIN_PASSWORD_LENGTH
from campushub.logging import mask_email
from campushub.notices import ToastLevel
from campushub.session.accounts import AccountCreator
from campushub.session.exceptions import ApprovalError, ProfileFetchError, RegistrationError
from campushub.session.gate import RoleApprovalGate
from campushub.session.models import (
    DENY_PENDING_APPROVAL,
    DENY_ROLE_MISMATCH,
    SIGNED_OUT,
    SessionState,
)
from campushub.store.models import Role

if TYPE_CHECKING:
    from campushub.identity import Identity, IdentityStore
    from campushub.notices import NoticeBoard
    from campushub.session.repository import ProfileRepository
    from campushub.session.store import SessionStore
    from campushub.store import Profile

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

DENIAL_MESSAGES = {
    DENY_ROLE_MISMATCH: "This account is not registered for the selected role",
    DENY_PENDING_APPROVAL: "Your organizer account has not been approved by an admin",
}


def dashboard_path(role: Role | str) -> str:
    return f"/dashboard/{Role(role).value}"


def login_path(role: Role | str) -> str:
    return f"/login/{Role(role).value}"


def parse_role(role: Role | str) -> Role:
    """Parse a role name, raising ValidationError for unknown roles."""
    try:
        return Role(str(role).strip().lower())
    except ValueError as e:
        raise ValidationError({"role": f"Unknown role '{role}'"}) from e


class SessionManager:
    """Single source of truth for the current session.

    Attributes are injected; nothing here reads module-level state. The
    identity-store subscription is created on construction and released
    by ``close()``.
    """

    def __init__(
        self,
        identity_store: IdentityStore,
        profiles: ProfileRepository,
        session_store: SessionStore,
        notices: NoticeBoard | None = None,
        gate: RoleApprovalGate | None = None,
        accounts: AccountCreator | None = None,
    ) -> None:
        self._identity = identity_store
        self._profiles = profiles
        self._sessions = session_store
        self._notices = notices
        self._gate = gate or RoleApprovalGate()
        self._accounts = accounts or AccountCreator(identity_store, profiles)

        self._epoch = 0
        self._direct_calls = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._subscription = identity_store.on_change(self._on_identity_change)

    @property
    def state(self) -> SessionState:
        return self._sessions.state

    @property
    def closed(self) -> bool:
        return not self._subscription.active

    # Publishing and side effects

    def _publish(self, state: SessionState) -> None:
        if not self._sessions.publish(state):
            return
        logger.debug(
            "Session published: identity=%s role=%s loading=%s",
            state.identity.id if state.identity else None,
            state.role,
            state.loading,
        )
        if self._notices is not None and not state.resolving:
            self._notices.emit_session_changed(
                state.identity.id if state.identity else None,
                state.role.value if state.role else None,
            )

    def _navigate(self, path: str) -> None:
        if self._notices is not None:
            self._notices.emit_navigate(path)

    def _toast(self, title: str, description: str, level: ToastLevel = ToastLevel.INFO) -> None:
        if self._notices is not None:
            self._notices.emit_toast(title, description, level)

    # Identity store notifications

    def _on_identity_change(self, change: AuthChange, session: IdentitySession | None) -> None:
        if change == AuthChange.SIGNED_OUT:
            self._epoch += 1
            if self._direct_calls:
                logger.debug("SIGNED_OUT absorbed by in-flight call")
                return
            was_signed_in = self.state.identity is not None
            self._publish(SIGNED_OUT)
            if was_signed_in:
                logger.info("Signed out by identity store")
                self._navigate("/")
            return

        if self._direct_calls:
            logger.debug("SIGNED_IN absorbed by in-flight call")
            return
        if session is None:
            return
        current = self.state
        if current.identity == session.identity and current.profile is not None:
            return

        self._epoch += 1
        epoch = self._epoch
        self._publish(SessionState(identity=session.identity, profile=None, loading=False))
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("SIGNED_IN for %s outside an event loop", session.identity.id)
            return
        task = loop.create_task(self._resolve_notified(session.identity, epoch))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _resolve_notified(self, identity: Identity, epoch: int) -> None:
        try:
            profile = await self._profiles.get(identity.id)
        except ServiceError:
            logger.exception("Profile fetch failed for %s", identity.id)
            return
        if epoch != self._epoch:
            logger.info("Discarding stale profile fetch for %s", identity.id)
            return
        if profile is None:
            logger.warning("Identity %s has no profile; signing out", identity.id)
            await self._end_external_session()
            self._publish(SIGNED_OUT)
            return
        self._publish(SessionState(identity=identity, profile=profile, loading=False))

    # Direct operations

    async def initialize(self) -> SessionState:
        """Resolve the session left behind by a previous run.

        Never raises. Always ends with ``loading`` False. A profile that
        can't be loaded leaves the identity published without a profile; an
        identity that has no profile at all is signed out.
        """
        self._direct_calls += 1
        epoch = self._epoch
        try:
            state = await self._restore()
        finally:
            self._direct_calls -= 1

        if epoch != self._epoch:
            logger.info("Session ended while initializing")
            state = SIGNED_OUT
        self._publish(state)
        return self.state

    async def _restore(self) -> SessionState:
        try:
            session = await self._identity.current_session()
        except CampusHubError:
            logger.exception("Could not query the identity store")
            return SIGNED_OUT
        if session is None:
            logger.info("No existing session")
            return SIGNED_OUT

        identity = session.identity
        try:
            profile = await self._profiles.get(identity.id)
        except CampusHubError:
            logger.exception("Profile fetch failed for %s", identity.id)
            profile = None
        else:
            if profile is None:
                logger.warning("Restored identity %s has no profile; signing out", identity.id)
                await self._end_external_session()
                return SIGNED_OUT
            logger.info("Restored session for %s as %s", identity.id, profile.role)
        return SessionState(identity=identity, profile=profile, loading=False)

    async def sign_in(self, email: str, password: str, claimed_role: Role | str) -> SessionState:
        """Authenticate and enter ``claimed_role``.

        Raises:
            ValidationError: Unknown role.
            AuthError: Bad credentials, or the session ended mid-sign-in.
            ApprovalError: The role gate refused the claimed role.
            ProfileFetchError: The profile couldn't be loaded.
            ServiceError: The identity store is unreachable.
        """
        previous = self.state
        self._direct_calls += 1
        try:
            role = parse_role(claimed_role)
            self._epoch += 1
            epoch = self._epoch
            self._publish(replace(previous, loading=True))
            try:
                session = await self._identity.sign_in(email, password)
            except CampusHubError:
                self._publish(replace(previous, loading=False))
                raise
            profile = await self._admit(session.identity, role, epoch)
        except CampusHubError as e:
            logger.info("Sign-in as %s failed for %s: %s", claimed_role, mask_email(email), e)
            self._toast("Sign in failed", e.message, ToastLevel.ERROR)
            raise
        finally:
            self._direct_calls -= 1

        self._publish(SessionState(identity=session.identity, profile=profile, loading=False))
        logger.info("Signed in %s as %s", session.identity.id, role.value)
        self._navigate(dashboard_path(role))
        self._toast("Welcome back", f"Signed in as {profile.name}", ToastLevel.SUCCESS)
        return self.state

    async def _admit(self, identity: Identity, role: Role, epoch: int) -> Profile:
        """Fetch the profile and apply the gate; end the session on refusal."""
        try:
            try:
                profile = await self._profiles.get(identity.id)
            except ServiceError as e:
                raise ProfileFetchError() from e
            if profile is None:
                raise ProfileFetchError("No profile exists for this account")

            decision = self._gate.evaluate(profile, role)
            if not decision.allowed:
                raise ApprovalError(decision.reason, DENIAL_MESSAGES.get(decision.reason))
            if epoch != self._epoch:
                raise AuthError("Session ended before sign-in completed")
        except CampusHubError:
            await self._end_external_session()
            self._publish(SIGNED_OUT)
            raise
        return profile

    async def _end_external_session(self) -> None:
        self._epoch += 1
        try:
            await self._identity.sign_out()
        except ServiceError:
            logger.exception("Could not terminate the identity session")

    async def sign_out(self) -> None:
        """End the session. Without an active session this does nothing."""
        if self.state.identity is None and await self._identity.current_session() is None:
            return

        identity = self.state.identity
        self._direct_calls += 1
        self._epoch += 1
        try:
            await self._identity.sign_out()
        finally:
            self._direct_calls -= 1
            self._publish(SIGNED_OUT)

        logger.info("Signed out %s", identity.id if identity else "restored session")
        self._navigate("/")
        self._toast("Signed out", "You have been signed out")

    async def register(self, email: str, password: str, role: Role | str, name: str) -> Profile:
        """Create an account for self-service roles.

        The sign-up session is ended afterwards, also when creating the
        account failed; the new account signs in through the approval gate
        like any other.

        Raises:
            RegistrationError: ``role`` is admin.
            ValidationError: Unknown role or invalid input.
            AuthError: The identity store refused the credentials.
        """
        try:
            parsed = parse_role(role)
            if parsed == Role.ADMIN:
                raise RegistrationError("role not open for self-service registration")
            validate_registration(email, password, name)

            self._direct_calls += 1
            try:
                before = self.state.identity
                try:
                    profile = await self._accounts.create(email, password, parsed, name.strip())
                except Exception:
                    await self._discard_signup_session(before)
                    raise
                ended = await self._end_signup_session(profile.id)
            finally:
                self._direct_calls -= 1
        except CampusHubError as e:
            logger.info("Registration as %s failed for %s: %s", role, mask_email(email), e)
            self._toast("Registration failed", e.message, ToastLevel.ERROR)
            raise

        if ended:
            self._publish(SIGNED_OUT)
        self._navigate(login_path(parsed))
        if parsed == Role.ORGANIZER:
            self._toast(
                "Account created",
                "Your organizer account is pending approval by an admin",
                ToastLevel.SUCCESS,
            )
        else:
            self._toast("Account created", "Please sign in", ToastLevel.SUCCESS)
        return profile

    async def _discard_signup_session(self, before: Identity | None) -> None:
        """End a session a failed sign-up left behind."""
        try:
            current = await self._identity.current_session()
        except CampusHubError:
            logger.exception("Could not query the identity store after a failed sign-up")
            return
        if current is None:
            return
        if before is not None and current.identity.id == before.id:
            return
        logger.warning(
            "Ending sign-up session of %s after failed registration", current.identity.id
        )
        await self._end_external_session()

    async def _end_signup_session(self, identity_id: str) -> bool:
        current = await self._identity.current_session()
        if current is None or current.identity.id != identity_id:
            return False
        self._epoch += 1
        await self._identity.sign_out()
        return True

    def close(self) -> None:
        """Release the identity-store subscription and pending fetches."""
        self._subscription.unsubscribe()
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()


def validate_registration(email: str, password: str, name: str) -> None:
    errors: dict[str, str] = {}
    if not name or not name.strip():
        errors["name"] = "Name is required"
    if not EMAIL_PATTERN.match((email or "").strip()):
        errors["email"] = "Enter a valid email address"
    if len(password or "") < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if errors:
        raise ValidationError(errors)
