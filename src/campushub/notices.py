"""Notice board - in-process channel for navigation, toasts and domain notices.

Notices are streamed to clients as Server-Sent Events.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4


class NoticeType(str, Enum):
    """Types of notices that can be emitted."""

    SESSION_CHANGED = "session_changed"
    NAVIGATE = "navigate"
    TOAST = "toast"
    EVENT_SUBMITTED = "event_submitted"
    EVENT_DECIDED = "event_decided"
    ORGANIZER_DECIDED = "organizer_decided"
    HEARTBEAT = "heartbeat"


class ToastLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


def _timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@dataclass
class Notice:
    """A notice to be sent via SSE."""

    notice_type: NoticeType
    data: dict[str, Any]
    audience: str | None = None  # role name, None means everyone

    def to_sse(self) -> str:
        """Convert to SSE format."""
        return f"event: {self.notice_type.value}\ndata: {json.dumps(self.data)}\n\n"


@dataclass
class Subscriber:
    """A subscriber to the notice stream."""

    id: str
    queue: asyncio.Queue[Notice]
    role: str | None = None  # None means receive notices for every audience
    loop: asyncio.AbstractEventLoop | None = None

    @classmethod
    def create(cls, role: str | None = None) -> Subscriber:
        """Create a new subscriber bound to the running loop, if any."""
        try:
            loop: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        return cls(id=str(uuid4()), queue=asyncio.Queue(), role=role, loop=loop)

    def wants(self, notice: Notice) -> bool:
        return self.role is None or notice.audience is None or self.role == notice.audience


@dataclass
class NoticeBoard:
    """Fan-out of notices to subscribers."""

    _subscribers: dict[str, Subscriber] = field(default_factory=dict)
    _heartbeat_interval: int = 30  # seconds

    def subscribe(self, role: str | None = None) -> Subscriber:
        """Subscribe a client to notices.

        Args:
            role: Only receive notices addressed to this role (plus
                  notices addressed to everyone). None means all notices.

        Returns:
            Subscriber instance for receiving notices.
        """
        subscriber = Subscriber.create(role)
        self._subscribers[subscriber.id] = subscriber
        return subscriber

    def unsubscribe(self, subscriber_id: str) -> None:
        """Unsubscribe a client. Unknown ids are ignored."""
        self._subscribers.pop(subscriber_id, None)

    async def emit(self, notice: Notice) -> None:
        """Emit a notice to all matching subscribers."""
        for subscriber in list(self._subscribers.values()):
            if subscriber.wants(notice):
                await subscriber.queue.put(notice)

    def emit_sync(self, notice: Notice) -> None:
        """Emit a notice from synchronous code, possibly on a worker thread."""
        try:
            running: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        for subscriber in list(self._subscribers.values()):
            if not subscriber.wants(notice):
                continue
            loop = subscriber.loop
            if loop is None or loop is running or loop.is_closed():
                subscriber.queue.put_nowait(notice)
            else:
                loop.call_soon_threadsafe(subscriber.queue.put_nowait, notice)

    @property
    def subscriber_count(self) -> int:
        """Get the number of active subscribers."""
        return len(self._subscribers)

    # Convenience methods for emitting specific notice types

    def emit_session_changed(self, user_id: str | None, role: str | None) -> None:
        self.emit_sync(
            Notice(
                notice_type=NoticeType.SESSION_CHANGED,
                data={"user_id": user_id, "role": role},
            )
        )

    def emit_navigate(self, path: str) -> None:
        """Ask the client to navigate to ``path``."""
        self.emit_sync(Notice(notice_type=NoticeType.NAVIGATE, data={"path": path}))

    def emit_toast(
        self,
        title: str,
        description: str,
        level: ToastLevel = ToastLevel.INFO,
    ) -> None:
        """Show a user-visible message."""
        self.emit_sync(
            Notice(
                notice_type=NoticeType.TOAST,
                data={"title": title, "description": description, "level": level.value},
            )
        )

    def emit_event_submitted(self, event_id: str, organizer_id: str, title: str) -> None:
        self.emit_sync(
            Notice(
                notice_type=NoticeType.EVENT_SUBMITTED,
                audience="admin",
                data={"event_id": event_id, "organizer_id": organizer_id, "title": title},
            )
        )

    def emit_event_decided(self, event_id: str, status: str, reviewed_by: str) -> None:
        self.emit_sync(
            Notice(
                notice_type=NoticeType.EVENT_DECIDED,
                data={"event_id": event_id, "status": status, "reviewed_by": reviewed_by},
            )
        )

    def emit_organizer_decided(self, profile_id: str, approval_status: str) -> None:
        self.emit_sync(
            Notice(
                notice_type=NoticeType.ORGANIZER_DECIDED,
                audience="organizer",
                data={"profile_id": profile_id, "approval_status": approval_status},
            )
        )

    def create_heartbeat(self) -> Notice:
        """Create a heartbeat notice."""
        return Notice(notice_type=NoticeType.HEARTBEAT, data={"timestamp": _timestamp()})
