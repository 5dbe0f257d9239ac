"""Runtime configuration for CampusHub.

Settings are read from ``CAMPUSHUB_*`` environment variables. Logging has its
own overrides in :mod:`campushub.logging`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


class IdentityBackend(StrEnum):
    """Which identity store implementation backs the session layer."""

    LOCAL = "local"
    HOSTED = "hosted"


DEFAULT_DB_PATH = "campushub.db"
DEFAULT_AUTH_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Attributes:
        db_path: SQLite database path. ``:memory:`` for an in-memory store.
        identity_backend: ``local`` keeps credentials in the database,
            ``hosted`` talks to a GoTrue-compatible auth service.
        auth_url: Base URL of the hosted auth service.
        auth_anon_key: Public API key sent with every hosted auth request.
        auth_service_key: Privileged key, only needed to delete orphaned
            identities after a failed registration.
        session_file: Where the hosted backend persists its session between
            runs. ``None`` keeps the session in memory only.
        auth_timeout: Timeout in seconds for hosted auth requests.
    """

    db_path: str = DEFAULT_DB_PATH
    identity_backend: IdentityBackend = IdentityBackend.LOCAL
    auth_url: str | None = None
    auth_anon_key: str | None = None
    auth_service_key: str | None = None
    session_file: Path | None = None
    auth_timeout: float = DEFAULT_AUTH_TIMEOUT

    def __post_init__(self) -> None:
        if self.identity_backend == IdentityBackend.HOSTED and (
            not self.auth_url or not self.auth_anon_key
        ):
            raise ConfigError(
                "Hosted identity backend requires CAMPUSHUB_AUTH_URL and CAMPUSHUB_AUTH_ANON_KEY"
            )
        if self.auth_timeout <= 0:
            raise ConfigError("auth_timeout must be positive")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Parsed settings.

        Raises:
            ConfigError: If a value cannot be parsed.
        """
        env = os.environ if environ is None else environ

        backend_raw = env.get("CAMPUSHUB_IDENTITY_BACKEND", IdentityBackend.LOCAL.value)
        try:
            backend = IdentityBackend(backend_raw.lower())
        except ValueError as e:
            raise ConfigError(f"Unknown identity backend: {backend_raw!r}") from e

        timeout_raw = env.get("CAMPUSHUB_AUTH_TIMEOUT")
        if timeout_raw is None:
            timeout = DEFAULT_AUTH_TIMEOUT
        else:
            try:
                timeout = float(timeout_raw)
            except ValueError as e:
                raise ConfigError(f"CAMPUSHUB_AUTH_TIMEOUT is not a number: {timeout_raw!r}") from e

        session_file = env.get("CAMPUSHUB_SESSION_FILE")

        return cls(
            db_path=env.get("CAMPUSHUB_DB_PATH", DEFAULT_DB_PATH),
            identity_backend=backend,
            auth_url=env.get("CAMPUSHUB_AUTH_URL") or None,
            auth_anon_key=env.get("CAMPUSHUB_AUTH_ANON_KEY") or None,
            auth_service_key=env.get("CAMPUSHUB_AUTH_SERVICE_KEY") or None,
            session_file=Path(session_file) if session_file else None,
            auth_timeout=timeout,
        )
