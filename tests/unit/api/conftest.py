"""Fixtures for route tests: a real session manager over an in-memory store."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from werkzeug.security import generate_password_hash

from campushub.api.app import register_exception_handlers
from campushub.api.dependencies import get_notice_board, get_session_manager, get_store
from campushub.api.routes import auth, events, navigation, organizers, registrations, venues
from campushub.identity import LocalIdentityStore
from campushub.notices import NoticeBoard
from campushub.session import SIGNED_OUT, SessionManager, SessionStore, StoreProfileRepository
from campushub.store import CampusStore, Profile, Role

PASSWORD = "secret1"


@pytest.fixture
def board() -> NoticeBoard:
    return NoticeBoard()


@pytest.fixture
def manager(store: CampusStore, board: NoticeBoard):
    """Session manager that has already resolved to signed out."""
    m = SessionManager(
        identity_store=LocalIdentityStore(store),
        profiles=StoreProfileRepository(store),
        session_store=SessionStore(SIGNED_OUT),
        notices=board,
    )
    yield m
    m.close()


@pytest.fixture
def app(store: CampusStore, board: NoticeBoard, manager: SessionManager):
    """Create a test FastAPI app with overridden dependencies."""
    app = FastAPI()

    def override_get_store():
        yield store

    def override_get_notice_board():
        yield board

    def override_get_session_manager():
        yield manager

    app.dependency_overrides[get_store] = override_get_store
    app.dependency_overrides[get_notice_board] = override_get_notice_board
    app.dependency_overrides[get_session_manager] = override_get_session_manager

    register_exception_handlers(app)
    for module in (auth, navigation, venues, events, registrations, organizers):
        app.include_router(module.router, prefix="/api/v1")

    return app


@pytest.fixture
def client(app: FastAPI):
    """Create a test client."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def provision(store: CampusStore):
    """Factory creating a credential and its profile directly in the store."""

    def _provision(email: str, role: Role | str, approval: str | None = None) -> Profile:
        credential = store.create_credential(email, generate_password_hash(PASSWORD))
        name = email.split("@")[0].title()
        return store.create_profile(
            Profile(id=credential.id, name=name, role=role, approval_status=approval)
        )

    return _provision


@pytest.fixture
def login(client: TestClient, provision):
    """Factory provisioning an account and signing it in through the API."""

    def _login(role: Role | str, approval: str | None = None, email: str | None = None) -> Profile:
        role = Role(role)
        email = email or f"{role.value}@x.com"
        profile = provision(email, role, approval)
        response = client.post(
            f"/api/v1/auth/login/{role.value}", json={"email": email, "password": PASSWORD}
        )
        assert response.status_code == 200, response.text
        return profile

    return _login
