"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from campushub import __version__
from campushub.api.dependencies import (
    close_notice_board,
    close_session_manager,
    close_store,
    init_notice_board,
    init_session_manager,
    init_store,
)
from campushub.api.models import APIResponse
from campushub.api.routes import (
    auth,
    events,
    navigation,
    notices,
    organizers,
    registrations,
    venues,
)
from campushub.config import Settings
from campushub.exceptions import (
    AccessDeniedError,
    CampusHubError,
    ReferenceNotFoundError,
    ServiceError,
    SessionResolvingError,
    ValidationError,
)
from campushub.identity import AuthError, create_identity_store
from campushub.ledger import AlreadyRegisteredError, EventNotApprovedError
from campushub.lifecycle import InvalidTransitionError
from campushub.session import ApprovalError, ProfileFetchError, RegistrationError
from campushub.store import StoreError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[CampusHubError], int] = {
    ValidationError: 422,
    ReferenceNotFoundError: status.HTTP_404_NOT_FOUND,
    ServiceError: status.HTTP_503_SERVICE_UNAVAILABLE,
    AccessDeniedError: status.HTTP_403_FORBIDDEN,
    SessionResolvingError: status.HTTP_409_CONFLICT,
    AuthError: status.HTTP_401_UNAUTHORIZED,
    ApprovalError: status.HTTP_403_FORBIDDEN,
    RegistrationError: status.HTTP_403_FORBIDDEN,
    ProfileFetchError: status.HTTP_502_BAD_GATEWAY,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    AlreadyRegisteredError: status.HTTP_409_CONFLICT,
    EventNotApprovedError: status.HTTP_409_CONFLICT,
}


def _error_details(exc: CampusHubError) -> dict[str, Any] | None:
    if isinstance(exc, ValidationError):
        return {"fields": exc.errors}
    if isinstance(exc, AccessDeniedError) and exc.redirect_to:
        return {"redirect_to": exc.redirect_to}
    if isinstance(exc, ApprovalError):
        return {"reason": exc.reason}
    return None


def _error_response(status_code: int, message: str, details: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message, details=details).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    # Startup
    store = init_store(settings.db_path)
    notice_board = init_notice_board()
    identity_store = create_identity_store(settings, store)
    manager = init_session_manager(identity_store, store, notice_board)
    await manager.initialize()

    yield
    # Shutdown
    close_session_manager()
    await identity_store.aclose()
    close_notice_board()
    close_store()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="CampusHub API",
        description="REST API for CampusHub - campus event management",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings or Settings.from_env()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router, prefix="/api/v1")
    app.include_router(navigation.router, prefix="/api/v1")
    app.include_router(venues.router, prefix="/api/v1")
    app.include_router(events.router, prefix="/api/v1")
    app.include_router(registrations.router, prefix="/api/v1")
    app.include_router(organizers.router, prefix="/api/v1")
    app.include_router(notices.router, prefix="/api/v1")

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to JSON error responses."""

    @app.exception_handler(CampusHubError)
    async def campushub_error_handler(_request: Request, exc: CampusHubError) -> JSONResponse:
        status_code = next(
            (code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        return _error_response(status_code, exc.message, _error_details(exc))

    @app.exception_handler(StoreError)
    async def store_error_handler(_request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Unmapped store error: %s", exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error("Database error: %s", exc)
        return _error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE, ServiceError.default_message
        )
