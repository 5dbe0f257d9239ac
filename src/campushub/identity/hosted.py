"""HostedIdentityStore - client for a GoTrue-compatible hosted auth service."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx

from campushub.exceptions import ServiceError
from campushub.identity.exceptions import AuthError
from campushub.identity.feed import ChangeFeed
from campushub.identity.models import AuthChange, Identity, IdentitySession
from campushub.logging import mask_email, sanitize_for_log

if TYPE_CHECKING:
    from campushub.identity.models import ChangeCallback, Subscription

logger = logging.getLogger(__name__)


class HostedIdentityStore:
    """Identity store talking to a hosted auth REST API.

    The current session is kept in memory and, when ``session_file`` is set,
    persisted as JSON so a restarted process can pick it up again.
    """

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        service_key: str | None = None,
        session_file: str | Path | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Root URL of the service, e.g. ``https://xyz.example.co``
            anon_key: Public API key sent as the ``apikey`` header
            service_key: Privileged key used only by :meth:`delete_identity`
            session_file: Optional JSON file for session persistence
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.service_key = service_key
        self.session_file = Path(session_file) if session_file is not None else None
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None
        self._feed = ChangeFeed()
        self._session: IdentitySession | None = None
        self._restored = False

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=f"{self.base_url}/auth/v1",
                headers={"apikey": self.anon_key, "Content-Type": "application/json"},
                timeout=self.timeout,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        token: str | None = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            response = await self.client.request(
                method, path, json=json_body, params=params, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error("Auth service request %s %s failed: %s", method, path, e)
            raise ServiceError() from e

        if response.status_code >= 500:
            logger.error(
                "Auth service returned %d for %s %s: %s",
                response.status_code,
                method,
                path,
                sanitize_for_log(response.text[:500]),
            )
            raise ServiceError()
        return response

    @staticmethod
    def _error_message(response: httpx.Response, default: str) -> str:
        try:
            body = response.json()
        except ValueError:
            return default
        for key in ("error_description", "msg", "message"):
            if isinstance(body, dict) and body.get(key):
                return str(body[key])
        return default

    @staticmethod
    def _parse_session(body: dict[str, Any]) -> IdentitySession:
        user = body.get("user") or body
        if "id" not in user:
            raise ServiceError("Auth service returned no user")
        expires_at = None
        if body.get("expires_in"):
            expires_at = datetime.now(UTC) + timedelta(seconds=int(body["expires_in"]))
        return IdentitySession(
            identity=Identity(id=str(user["id"]), email=str(user.get("email") or "")),
            access_token=body.get("access_token"),
            refresh_token=body.get("refresh_token"),
            expires_at=expires_at,
        )

    def _set_session(self, session: IdentitySession | None) -> None:
        self._session = session
        if self.session_file is None:
            return
        if session is None:
            self.session_file.unlink(missing_ok=True)
            return
        self.session_file.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "access_token": session.access_token,
            "refresh_token": session.refresh_token,
            "expires_at": session.expires_at.isoformat() if session.expires_at else None,
            "user": {"id": session.identity.id, "email": session.identity.email},
        }
        self.session_file.write_text(json.dumps(payload), encoding="utf-8")

    def _load_session_file(self) -> IdentitySession | None:
        if self.session_file is None or not self.session_file.exists():
            return None
        try:
            payload = json.loads(self.session_file.read_text(encoding="utf-8"))
            expires_raw = payload.get("expires_at")
            return IdentitySession(
                identity=Identity(id=payload["user"]["id"], email=payload["user"]["email"]),
                access_token=payload["access_token"],
                refresh_token=payload.get("refresh_token"),
                expires_at=datetime.fromisoformat(expires_raw) if expires_raw else None,
            )
        except (ValueError, KeyError, TypeError):
            logger.warning("Ignoring unreadable session file %s", self.session_file)
            return None

    async def sign_in(self, email: str, password: str) -> IdentitySession:
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json_body={"email": email.strip().lower(), "password": password},
        )
        if response.status_code != 200:
            logger.info("Sign-in rejected for %s (%d)", mask_email(email), response.status_code)
            raise AuthError(self._error_message(response, AuthError.default_message))

        session = self._parse_session(response.json())
        self._set_session(session)
        self._feed.notify(AuthChange.SIGNED_IN, session)
        return session

    async def sign_up(self, email: str, password: str) -> IdentitySession:
        response = await self._request(
            "POST",
            "/signup",
            json_body={"email": email.strip().lower(), "password": password},
        )
        if response.status_code not in (200, 201):
            raise AuthError(self._error_message(response, "Could not create account"))

        session = self._parse_session(response.json())
        logger.info("Created identity %s for %s", session.identity.id, mask_email(email))
        if session.access_token:
            self._set_session(session)
            self._feed.notify(AuthChange.SIGNED_IN, session)
        return session

    async def sign_out(self) -> None:
        session = self._session
        if session is None:
            return
        try:
            if session.access_token:
                response = await self._request("POST", "/logout", token=session.access_token)
                if response.status_code not in (200, 204, 401, 404):
                    logger.warning(
                        "Logout returned %d, clearing session anyway", response.status_code
                    )
        except ServiceError:
            logger.warning("Logout request failed, clearing local session")
        finally:
            self._set_session(None)
            self._feed.notify(AuthChange.SIGNED_OUT, None)

    async def _refresh(self, session: IdentitySession) -> IdentitySession | None:
        if not session.refresh_token:
            return None
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "refresh_token"},
            json_body={"refresh_token": session.refresh_token},
        )
        if response.status_code != 200:
            return None
        return self._parse_session(response.json())

    async def current_session(self) -> IdentitySession | None:
        if self._session is not None or self._restored:
            return self._session

        self._restored = True
        stored = self._load_session_file()
        if stored is None:
            return None

        response = await self._request("GET", "/user", token=stored.access_token)
        if response.status_code == 200:
            self._session = stored
            return stored

        refreshed = await self._refresh(stored)
        if refreshed is None:
            logger.info("Stored session for %s expired", stored.identity.id)
            self._set_session(None)
            return None
        self._set_session(refreshed)
        return refreshed

    async def delete_identity(self, identity_id: str) -> None:
        if not self.service_key:
            raise ServiceError("Deleting identities requires a service key")
        response = await self._request(
            "DELETE", f"/admin/users/{identity_id}", token=self.service_key
        )
        if response.status_code not in (200, 204, 404):
            raise ServiceError(f"Could not delete identity (status {response.status_code})")
        if self._session is not None and self._session.identity.id == identity_id:
            self._set_session(None)
            self._feed.notify(AuthChange.SIGNED_OUT, None)

    def on_change(self, callback: ChangeCallback) -> Subscription:
        return self._feed.subscribe(callback)
