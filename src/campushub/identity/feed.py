"""Push channel for identity store notifications."""

from __future__ import annotations

import logging
from uuid import uuid4

from campushub.identity.models import AuthChange, ChangeCallback, IdentitySession, Subscription

logger = logging.getLogger(__name__)


class ChangeFeed:
    """Delivers SIGNED_IN / SIGNED_OUT notifications to listeners.

    Listeners are called synchronously in subscription order. A failing
    listener is logged and does not stop delivery to the others.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, ChangeCallback] = {}

    def subscribe(self, callback: ChangeCallback) -> Subscription:
        key = str(uuid4())
        self._listeners[key] = callback
        return Subscription(lambda: self._listeners.pop(key, None))

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def notify(self, change: AuthChange, session: IdentitySession | None) -> None:
        for callback in list(self._listeners.values()):
            try:
                callback(change, session)
            except Exception:
                logger.exception("Identity change listener failed on %s", change.value)
