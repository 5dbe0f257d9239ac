"""Fakes for the session layer's collaborators."""

import asyncio
from typing import Any

import pytest

from campushub.exceptions import ServiceError
from campushub.identity import (
    AuthChange,
    AuthError,
    ChangeFeed,
    Identity,
    IdentitySession,
)
from campushub.notices import NoticeBoard
from campushub.session import SessionManager, SessionStore
from campushub.store import ApprovalStatus, Profile, Role


class FakeIdentityStore:
    """In-memory identity store that records calls."""

    def __init__(self) -> None:
        self.accounts: dict[str, tuple[str, str]] = {}
        self.session: IdentitySession | None = None
        self.calls: list[str] = []
        self.fail_delete = False
        self.fail_sign_out = False
        self._feed = ChangeFeed()
        self._next_id = 0

    def add_account(self, email: str, password: str = "secret1", identity_id: str | None = None):
        self._next_id += 1
        identity_id = identity_id or f"id-{self._next_id}"
        self.accounts[email] = (identity_id, password)
        return Identity(id=identity_id, email=email)

    def start_session(self, identity: Identity, notify: bool = True) -> IdentitySession:
        self.session = IdentitySession(identity=identity, access_token=f"token-{identity.id}")
        if notify:
            self._feed.notify(AuthChange.SIGNED_IN, self.session)
        return self.session

    def end_session(self) -> None:
        """Sign out as if another tab did it."""
        self.session = None
        self._feed.notify(AuthChange.SIGNED_OUT, None)

    async def sign_in(self, email: str, password: str) -> IdentitySession:
        self.calls.append("sign_in")
        account = self.accounts.get(email)
        if account is None or account[1] != password:
            raise AuthError()
        return self.start_session(Identity(id=account[0], email=email))

    async def sign_up(self, email: str, password: str) -> IdentitySession:
        self.calls.append("sign_up")
        if email in self.accounts:
            raise AuthError("User already registered")
        return self.start_session(self.add_account(email, password))

    async def sign_out(self) -> None:
        self.calls.append("sign_out")
        if self.fail_sign_out:
            raise ServiceError()
        if self.session is None:
            return
        self.end_session()

    async def current_session(self) -> IdentitySession | None:
        return self.session

    async def delete_identity(self, identity_id: str) -> None:
        self.calls.append("delete_identity")
        if self.fail_delete:
            raise ServiceError("delete failed")
        self.accounts = {k: v for k, v in self.accounts.items() if v[0] != identity_id}
        if self.session is not None and self.session.identity.id == identity_id:
            self.end_session()

    def on_change(self, callback):
        return self._feed.subscribe(callback)

    @property
    def listener_count(self) -> int:
        return self._feed.listener_count

    async def aclose(self) -> None:
        pass


class FakeProfileRepository:
    """In-memory profile repository with controllable failures and delays."""

    def __init__(self) -> None:
        self.profiles: dict[str, Profile] = {}
        self.fail_get: Exception | None = None
        self.fail_insert: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.get_started = asyncio.Event()

    def add(
        self,
        profile_id: str,
        role: Role,
        approval: ApprovalStatus | None = None,
        name: str = "Test User",
    ) -> Profile:
        profile = Profile(id=profile_id, name=name, role=role, approval_status=approval)
        self.profiles[profile_id] = profile
        return profile

    async def get(self, profile_id: str) -> Profile | None:
        self.get_started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_get is not None:
            raise self.fail_get
        return self.profiles.get(profile_id)

    async def insert(self, profile: Profile) -> Profile:
        if self.fail_insert is not None:
            raise self.fail_insert
        self.profiles[profile.id] = profile
        return profile

    async def update(self, profile_id: str, **fields: Any) -> Profile:
        profile = self.profiles[profile_id]
        for name, value in fields.items():
            setattr(profile, name, str(value))
        return profile


@pytest.fixture
def identity() -> FakeIdentityStore:
    return FakeIdentityStore()


@pytest.fixture
def profiles() -> FakeProfileRepository:
    return FakeProfileRepository()


@pytest.fixture
def sessions() -> SessionStore:
    return SessionStore()


@pytest.fixture
def notices() -> NoticeBoard:
    return NoticeBoard()


@pytest.fixture
def manager(identity, profiles, sessions, notices):
    m = SessionManager(identity, profiles, sessions, notices=notices)
    yield m
    m.close()


@pytest.fixture
def drain():
    """Return everything queued for a NoticeBoard subscriber so far."""

    def _drain(subscriber) -> list:
        queued = []
        while not subscriber.queue.empty():
            queued.append(subscriber.queue.get_nowait())
        return queued

    return _drain
