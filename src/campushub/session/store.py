"""SessionStore - the single published Session of this process."""

from __future__ import annotations

import logging
from collections.abc import Callable
from uuid import uuid4

from campushub.identity.models import Subscription
from campushub.session.models import SessionState

logger = logging.getLogger(__name__)

SessionObserver = Callable[[SessionState], None]


class SessionStore:
    """Holds the current SessionState and fans changes out to observers.

    Only the SessionManager publishes; everything else reads ``state`` or
    subscribes. Publishing a state equal to the current one is dropped.
    """

    def __init__(self, initial: SessionState | None = None) -> None:
        self._state = initial if initial is not None else SessionState()
        self._observers: dict[str, SessionObserver] = {}

    @property
    def state(self) -> SessionState:
        return self._state

    def publish(self, state: SessionState) -> bool:
        """Replace the current state.

        Returns:
            False if ``state`` matched the current state and nothing changed.
        """
        if state.fingerprint() == self._state.fingerprint():
            return False
        self._state = state
        for observer in list(self._observers.values()):
            try:
                observer(state)
            except Exception:
                logger.exception("Session observer failed")
        return True

    def subscribe(self, observer: SessionObserver) -> Subscription:
        key = str(uuid4())
        self._observers[key] = observer
        return Subscription(lambda: self._observers.pop(key, None))
