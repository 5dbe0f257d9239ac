"""SQLAlchemy models for the campus store."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class Role(StrEnum):
    """Role a profile operates in."""

    STUDENT = "student"
    ORGANIZER = "organizer"
    ADMIN = "admin"


class ApprovalStatus(StrEnum):
    """Approval state of a profile. Only meaningful for organizers."""

    NONE = "none"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EventStatus(StrEnum):
    """Event lifecycle state."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current UTC time, naive, as stored by SQLite."""
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Credential(Base):
    """Credential model - email/password pairs for the local identity store."""

    __tablename__ = "credentials"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    def __init__(
        self,
        email: str,
        password_hash: str,
        id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.email = email
        self.password_hash = password_hash

    def __repr__(self) -> str:
        return f"<Credential(id={self.id!r})>"


class Profile(Base):
    """Profile model - role and approval status of an identity."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    approval_status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    def __init__(
        self,
        id: str,
        name: str,
        role: str,
        approval_status: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id
        self.name = name
        self.role = Role(role).value
        self.approval_status = (
            ApprovalStatus(approval_status).value
            if approval_status is not None
            else ApprovalStatus.NONE.value
        )

    @property
    def profile_role(self) -> Role:
        """Get role as Role enum."""
        return Role(self.role)

    @property
    def profile_approval(self) -> ApprovalStatus:
        """Get approval_status as ApprovalStatus enum."""
        return ApprovalStatus(self.approval_status)

    def __repr__(self) -> str:
        return (
            f"<Profile(id={self.id!r}, role={self.role!r}, "
            f"approval_status={self.approval_status!r})>"
        )


class Venue(Base):
    """Venue model - read-only reference data for events."""

    __tablename__ = "venues"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)

    def __init__(
        self,
        name: str,
        capacity: int,
        location: str,
        id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.name = name
        self.capacity = capacity
        self.location = location

    def __repr__(self) -> str:
        return f"<Venue(id={self.id!r}, name={self.name!r})>"


class Event(Base):
    """Event model - an organizer's proposal and its review outcome."""

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[str] = mapped_column(String(32), nullable=False)
    time: Mapped[str] = mapped_column(String(32), nullable=False)
    venue_id: Mapped[str] = mapped_column(String(36), ForeignKey("venues.id"), nullable=False)
    organizer_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    reviewed_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    venue: Mapped[Venue] = relationship("Venue", lazy="joined")

    def __init__(
        self,
        title: str,
        description: str,
        date: str,
        time: str,
        venue_id: str,
        organizer_id: str,
        id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.title = title
        self.description = description
        self.date = date
        self.time = time
        self.venue_id = venue_id
        self.organizer_id = organizer_id
        # Status is never taken from the caller
        self.status = EventStatus.PENDING.value

    @property
    def event_status(self) -> EventStatus:
        """Get status as EventStatus enum."""
        return EventStatus(self.status)

    @property
    def venue_name(self) -> str | None:
        """Name of the event's venue, if loaded."""
        return self.venue.name if self.venue is not None else None

    def __repr__(self) -> str:
        return f"<Event(id={self.id!r}, title={self.title!r}, status={self.status!r})>"


class Registration(Base):
    """Registration model - a student's seat at an approved event."""

    __tablename__ = "registrations"
    __table_args__ = (UniqueConstraint("event_id", "student_id", name="uq_registration_pair"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    )
    student_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    def __init__(
        self,
        event_id: str,
        student_id: str,
        id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.event_id = event_id
        self.student_id = student_id

    def __repr__(self) -> str:
        return (
            f"<Registration(event_id={self.event_id!r}, student_id={self.student_id!r})>"
        )
