"""Logging setup for CampusHub.

Everything logs below the ``campushub`` logger. ``setup_logging`` attaches a
rotating file handler (and a console handler) to it once, at process start;
library code only ever calls ``logging.getLogger(__name__)``.

Environment overrides:
    CAMPUSHUB_LOG_DIR: Directory for ``campushub.log``.
    CAMPUSHUB_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "campushub"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LogConfig:
    """Resolved logging options."""

    log_dir: Path = Path("logs")
    log_file: str = "campushub.log"
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5
    level: str = "INFO"

    @property
    def path(self) -> Path:
        return self.log_dir / self.log_file

    @property
    def numeric_level(self) -> int:
        value = logging.getLevelName(self.level.upper())
        return value if isinstance(value, int) else logging.INFO


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = LogConfig.log_file,
    max_bytes: int = LogConfig.max_bytes,
    backup_count: int = LogConfig.backup_count,
    level: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the ``campushub`` logger.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_dir: Directory for the log file, created if missing. Falls back to
            ``CAMPUSHUB_LOG_DIR``, then ``./logs``.
        log_file: File name inside ``log_dir``.
        max_bytes: Size at which the file is rotated.
        backup_count: Rotated files to keep.
        level: Level name. Falls back to ``CAMPUSHUB_LOG_LEVEL``, then INFO.
        console: Also log to stderr.

    Returns:
        The ``campushub`` logger.
    """
    config = LogConfig(
        log_dir=Path(log_dir or os.environ.get("CAMPUSHUB_LOG_DIR") or LogConfig.log_dir),
        log_file=log_file,
        max_bytes=max_bytes,
        backup_count=backup_count,
        level=level or os.environ.get("CAMPUSHUB_LOG_LEVEL") or LogConfig.level,
    )
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(config.numeric_level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            config.path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setLevel(config.numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("Logging to %s at %s", config.path, config.level.upper())
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a component, e.g. ``get_logger("ledger")`` -> ``campushub.ledger``."""
    prefix = f"{ROOT_LOGGER}."
    return logging.getLogger(name if name.startswith(prefix) else prefix + name)


def mask_email(email: str) -> str:
    """Hide all but the first character of the local part: ``j***@x.com``."""
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


_REDACTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"Bearer [a-zA-Z0-9._-]+"), "Bearer [REDACTED]"),
    (re.compile(r"eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+"), "[JWT]"),
    (re.compile(r"(\"?password\"?\s*[=:]\s*)\"?[^\s,\"}]+\"?"), r"\1[REDACTED]"),
    (re.compile(r"(apikey|token)=[a-zA-Z0-9._-]+"), r"\1=[REDACTED]"),
)


def sanitize_for_log(text: str) -> str:
    """Redact access tokens, JWTs, passwords and API keys from ``text``."""
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text
