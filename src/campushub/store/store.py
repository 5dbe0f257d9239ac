"""CampusStore - persistence API for profiles, venues, events and registrations."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError

from campushub.store.database import Database
from campushub.store.exceptions import (
    CredentialExistsError,
    CredentialNotFoundError,
    DuplicateRegistrationError,
    EventNotFoundError,
    EventNotPendingError,
    ProfileExistsError,
    ProfileNotFoundError,
    VenueNotFoundError,
)
from campushub.store.models import (
    Credential,
    Event,
    EventStatus,
    Profile,
    Registration,
    Venue,
    utcnow,
)

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = frozenset({"name", "role", "approval_status"})


class CampusStore:
    """Main API for campus store operations.

    Every method opens its own short transaction. Uniqueness constraints in
    the schema are the final authority for concurrent writers.
    """

    def __init__(self, db_path: str = "campushub.db") -> None:
        """Open the store, creating tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Credential Operations ---

    def create_credential(self, email: str, password_hash: str) -> Credential:
        """Store a new credential.

        Args:
            email: Normalized (lower-cased) email address
            password_hash: Salted password hash

        Returns:
            Created Credential with generated ID

        Raises:
            CredentialExistsError: If the email is already registered
        """
        credential = Credential(email=email, password_hash=password_hash)
        try:
            with self._db.session_scope() as session:
                session.add(credential)
        except IntegrityError as e:
            raise CredentialExistsError("A credential with this email already exists") from e
        return credential

    def get_credential_by_email(self, email: str) -> Credential:
        """Get a credential by email.

        Raises:
            CredentialNotFoundError: If no credential has this email
        """
        with self._db.session_scope() as session:
            stmt = select(Credential).where(Credential.email == email)
            credential = session.execute(stmt).scalar_one_or_none()
        if credential is None:
            raise CredentialNotFoundError("No credential for this email")
        return credential

    def get_credential(self, credential_id: str) -> Credential:
        """Get a credential by ID.

        Raises:
            CredentialNotFoundError: If it doesn't exist
        """
        with self._db.session_scope() as session:
            credential = session.get(Credential, credential_id)
        if credential is None:
            raise CredentialNotFoundError(f"Credential with id '{credential_id}' not found")
        return credential

    def delete_credential(self, credential_id: str) -> bool:
        """Delete a credential.

        Returns:
            True if a credential was removed
        """
        with self._db.session_scope() as session:
            result = session.execute(delete(Credential).where(Credential.id == credential_id))
        return result.rowcount > 0

    # --- Profile Operations ---

    def create_profile(self, profile: Profile) -> Profile:
        """Insert a profile.

        Raises:
            ProfileExistsError: If a profile with the same ID exists
        """
        try:
            with self._db.session_scope() as session:
                session.add(profile)
        except IntegrityError as e:
            raise ProfileExistsError(f"Profile with id '{profile.id}' already exists") from e
        logger.debug("Created profile %s (role=%s)", profile.id, profile.role)
        return profile

    def get_profile(self, profile_id: str) -> Profile | None:
        """Get a profile by ID, or None if it doesn't exist."""
        with self._db.session_scope() as session:
            return session.get(Profile, profile_id)

    def update_profile(self, profile_id: str, **fields: Any) -> Profile:
        """Update profile fields (partial update).

        Args:
            profile_id: The profile's ID
            **fields: Any of name, role, approval_status

        Returns:
            The updated Profile

        Raises:
            ProfileNotFoundError: If the profile doesn't exist
            ValueError: If an unknown field is given
        """
        unknown = set(fields) - _PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

        with self._db.session_scope() as session:
            profile = session.get(Profile, profile_id)
            if profile is None:
                raise ProfileNotFoundError(f"Profile with id '{profile_id}' not found")
            for name, value in fields.items():
                setattr(profile, name, str(value))
            session.flush()
        return profile

    def list_profiles(
        self,
        role: str | None = None,
        approval_status: str | None = None,
    ) -> list[Profile]:
        """List profiles, optionally filtered, oldest first."""
        with self._db.session_scope() as session:
            stmt = select(Profile)
            if role is not None:
                stmt = stmt.where(Profile.role == str(role))
            if approval_status is not None:
                stmt = stmt.where(Profile.approval_status == str(approval_status))
            stmt = stmt.order_by(Profile.created_at)
            return list(session.execute(stmt).scalars().all())

    # --- Venue Operations ---

    def create_venue(self, name: str, capacity: int, location: str) -> Venue:
        """Create a venue.

        Raises:
            ValueError: If capacity is negative
        """
        if capacity < 0:
            raise ValueError("Venue capacity cannot be negative")
        venue = Venue(name=name, capacity=capacity, location=location)
        with self._db.session_scope() as session:
            session.add(venue)
        return venue

    def get_venue(self, venue_id: str) -> Venue:
        """Get a venue by ID.

        Raises:
            VenueNotFoundError: If the venue doesn't exist
        """
        with self._db.session_scope() as session:
            venue = session.get(Venue, venue_id)
        if venue is None:
            raise VenueNotFoundError(f"Venue with id '{venue_id}' not found")
        return venue

    def list_venues(self) -> list[Venue]:
        """List all venues ordered by name."""
        with self._db.session_scope() as session:
            return list(session.execute(select(Venue).order_by(Venue.name)).scalars().all())

    # --- Event Operations ---

    def create_event(
        self,
        title: str,
        description: str,
        date: str,
        time: str,
        venue_id: str,
        organizer_id: str,
    ) -> Event:
        """Create an event in PENDING state.

        Raises:
            VenueNotFoundError: If the venue doesn't exist
        """
        with self._db.session_scope() as session:
            venue = session.get(Venue, venue_id)
            if venue is None:
                raise VenueNotFoundError(f"Venue with id '{venue_id}' not found")
            event = Event(
                title=title,
                description=description,
                date=date,
                time=time,
                venue_id=venue_id,
                organizer_id=organizer_id,
            )
            event.venue = venue
            session.add(event)
        return event

    def get_event(self, event_id: str) -> Event:
        """Get an event by ID.

        Raises:
            EventNotFoundError: If the event doesn't exist
        """
        with self._db.session_scope() as session:
            event = session.get(Event, event_id)
        if event is None:
            raise EventNotFoundError(f"Event with id '{event_id}' not found")
        return event

    def list_events(
        self,
        organizer_id: str | None = None,
        status: EventStatus | str | None = None,
        oldest_first: bool = False,
    ) -> list[Event]:
        """List events, newest first unless ``oldest_first``."""
        with self._db.session_scope() as session:
            stmt = select(Event)
            if organizer_id is not None:
                stmt = stmt.where(Event.organizer_id == organizer_id)
            if status is not None:
                stmt = stmt.where(Event.status == str(status))
            order = Event.created_at if oldest_first else Event.created_at.desc()
            stmt = stmt.order_by(order)
            return list(session.execute(stmt).scalars().unique().all())

    def list_events_by_schedule(self, status: EventStatus | str) -> list[Event]:
        """List events with the given status by date, then time."""
        with self._db.session_scope() as session:
            stmt = (
                select(Event)
                .where(Event.status == str(status))
                .order_by(Event.date, Event.time, Event.title)
            )
            return list(session.execute(stmt).scalars().unique().all())

    def decide_event(self, event_id: str, status: EventStatus, reviewed_by: str) -> Event:
        """Move a PENDING event to a decided status.

        The update is conditional on the stored status still being PENDING,
        so of two concurrent decisions only one succeeds.

        Raises:
            EventNotFoundError: If the event doesn't exist
            EventNotPendingError: If the event was already decided
        """
        with self._db.session_scope() as session:
            now = utcnow()
            result = session.execute(
                update(Event)
                .where(Event.id == event_id, Event.status == EventStatus.PENDING.value)
                .values(
                    status=status.value,
                    reviewed_by=reviewed_by,
                    reviewed_at=now,
                    updated_at=now,
                )
            )
            if result.rowcount == 0:
                current = session.get(Event, event_id)
                if current is None:
                    raise EventNotFoundError(f"Event with id '{event_id}' not found")
                raise EventNotPendingError(
                    f"Event '{event_id}' is already {current.status}"
                )
        return self.get_event(event_id)

    # --- Registration Operations ---

    def create_registration(self, event_id: str, student_id: str) -> Registration:
        """Insert a registration.

        Raises:
            DuplicateRegistrationError: If the (event, student) pair exists
        """
        registration = Registration(event_id=event_id, student_id=student_id)
        try:
            with self._db.session_scope() as session:
                session.add(registration)
        except IntegrityError as e:
            if "UNIQUE constraint failed" in str(e):
                raise DuplicateRegistrationError(
                    f"Student '{student_id}' is already registered for event '{event_id}'"
                ) from e
            raise EventNotFoundError(f"Event with id '{event_id}' not found") from e
        return registration

    def find_registration(self, event_id: str, student_id: str) -> Registration | None:
        """Get the registration for a pair, or None."""
        with self._db.session_scope() as session:
            stmt = select(Registration).where(
                Registration.event_id == event_id,
                Registration.student_id == student_id,
            )
            return session.execute(stmt).scalar_one_or_none()

    def delete_registration(self, event_id: str, student_id: str) -> bool:
        """Delete the registration for a pair.

        Returns:
            True if a registration was removed
        """
        with self._db.session_scope() as session:
            result = session.execute(
                delete(Registration).where(
                    Registration.event_id == event_id,
                    Registration.student_id == student_id,
                )
            )
        return result.rowcount > 0

    def count_registrations(self, event_id: str) -> int:
        """Number of registrations for an event."""
        with self._db.session_scope() as session:
            stmt = (
                select(func.count())
                .select_from(Registration)
                .where(Registration.event_id == event_id)
            )
            return session.execute(stmt).scalar_one()

    def list_registered_events(self, student_id: str) -> list[Event]:
        """Events the student holds a registration for, by date then time."""
        with self._db.session_scope() as session:
            stmt = (
                select(Event)
                .join(Registration, Registration.event_id == Event.id)
                .where(Registration.student_id == student_id)
                .order_by(Event.date, Event.time)
            )
            return list(session.execute(stmt).scalars().unique().all())
