"""Registration service - submission, lookup and manual additions.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Run every store call through the resilient executor
- Return domain models, validation messages as data, or domain errors
"""

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime

from django.utils import timezone

from sponsorships.domain import (
    Actor,
    AvailableDate,
    Contact,
    EventId,
    Money,
    Registration,
    RegistrationAllocator,
    RegistrationDate,
    RegistrationDateDetail,
    RegistrationId,
    SelectionState,
)
from sponsorships.domain.errors import (
    InvalidRegistrationIdError,
    NotAuthenticatedError,
    RegistrationNotFoundError,
)
from sponsorships.stores.interfaces import RegistrationStore
from sponsorships.stores.resilience import ResilientExecutor

logger = logging.getLogger(__name__)

IdGenerator = Callable[[], uuid.UUID]


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a wizard submission; ``violations`` non-empty means nothing was written."""

    violations: tuple[str, ...] = ()
    registration: Registration | None = None
    dates: tuple[RegistrationDate, ...] = ()
    total: Money | None = None

    @property
    def ok(self) -> bool:
        return not self.violations


@dataclass(frozen=True)
class ManualAdditionResult:
    """Outcome of a manual addition; ``errors`` non-empty means nothing was written."""

    errors: tuple[str, ...] = ()
    created: tuple[RegistrationDate, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class RegistrationLookup:
    registration: Registration
    dates: tuple[RegistrationDateDetail, ...] = ()


class RegistrationService:
    """Service for persisting and extending registrations."""

    def __init__(
        self,
        store: RegistrationStore,
        executor: ResilientExecutor,
        new_id: IdGenerator = uuid.uuid4,
        now: Callable[[], datetime] = timezone.now,
        today: Callable[[], date] = timezone.localdate,
    ) -> None:
        self._store = store
        self._executor = executor
        self._new_id = new_id
        self._now = now
        self._today = today

    @staticmethod
    def parse_registration_id(value: str) -> RegistrationId:
        """Raises InvalidRegistrationIdError if ``value`` is not a UUID."""
        try:
            return RegistrationId.from_string(value)
        except (ValueError, TypeError, AttributeError):
            raise InvalidRegistrationIdError() from None

    def submit(
        self,
        contact: Contact,
        state: SelectionState,
        allocator: RegistrationAllocator,
    ) -> SubmissionResult:
        """Validate both wizard steps, then persist the registration atomically."""
        violations = allocator.validate_plan_step(state) + allocator.validate_supplemental_step(
            state
        )
        if violations:
            return SubmissionResult(violations=tuple(violations))

        registration = Registration(
            id=RegistrationId(self._new_id()),
            contact=contact,
            sponsorship_type=state.plan_id,
        )
        rows = []
        for allocation in allocator.finalize(state).values():
            if allocation.dates:
                rows.extend(
                    self._row(registration.id, allocation.event_id, day)
                    for day in allocation.dates
                )
            else:
                rows.append(
                    self._row(
                        registration.id,
                        allocation.event_id,
                        None,
                        quantity=allocation.quantity,
                    )
                )

        def persist():
            with self._store.atomic():
                # A retry after a lost commit acknowledgement finds the rows.
                existing = self._store.get_registration(registration.id)
                if existing is not None:
                    return existing, tuple(self._store.list_registration_dates(existing.id))
                created = self._store.create_registration(registration)
                written = tuple(self._store.create_registration_date(row) for row in rows)
            return created, written

        created, written = self._executor.run_action(
            persist, "Registration submission", write=True
        )
        logger.info(
            "Registration %s created with %d date rows (plan=%s)",
            created.id,
            len(written),
            state.plan_id or "none",
        )
        return SubmissionResult(
            registration=created, dates=written, total=allocator.compute_total(state)
        )

    def get_registration(self, registration_id: str) -> Registration:
        """Return a registration by ID.

        Raises:
            InvalidRegistrationIdError: If the registration_id is not a valid UUID.
            RegistrationNotFoundError: If the registration does not exist.
        """
        rid = self.parse_registration_id(registration_id)
        registration = self._executor.run_action(
            lambda: self._store.get_registration(rid), "Loading registration"
        )
        if registration is None:
            raise RegistrationNotFoundError(registration_id)
        return registration

    def lookup(self, registration_id: str) -> RegistrationLookup:
        """Return a registration with its dates, event names and date titles.

        Raises:
            InvalidRegistrationIdError: If the registration_id is not a valid UUID.
            RegistrationNotFoundError: If the registration does not exist.
        """
        rid = self.parse_registration_id(registration_id)

        def load():
            registration = self._store.get_registration(rid)
            if registration is None:
                return None
            return RegistrationLookup(
                registration=registration,
                dates=tuple(self._store.list_registration_date_details(rid)),
            )

        found = self._executor.run_action(load, "Loading registration dates")
        if found is None:
            raise RegistrationNotFoundError(registration_id)
        return found

    def search(
        self,
        query: str | None = None,
        on_date: date | None = None,
        year: int | None = None,
    ) -> list[Registration]:
        """Registrations matching every given criterion, newest first."""
        query = (query or "").strip() or None
        return self._executor.run_action(
            lambda: self._store.search_registrations(query, on_date, year),
            "Searching registrations",
        )

    def list_available_dates(self, registration_id: str, year: int) -> list[AvailableDate]:
        """Event dates of ``year`` from today on that the registration lacks."""
        registration = self.get_registration(registration_id)
        return self._available(registration.id, year)

    def add_manual_dates(
        self,
        actor: Actor | None,
        registration_id: str,
        year: int,
        selections: Iterable[tuple[EventId, date]],
        notes: str,
    ) -> ManualAdditionResult:
        """Append admin-chosen dates to an existing registration.

        Existing rows are never changed. Each new row carries the notes, the
        acting admin's id and a server timestamp.

        Raises:
            NotAuthenticatedError: If there is no acting admin.
            InvalidRegistrationIdError: If the registration_id is not a valid UUID.
            RegistrationNotFoundError: If the registration does not exist.
        """
        if actor is None:
            raise NotAuthenticatedError()
        registration = self.get_registration(registration_id)

        pairs = list(dict.fromkeys(selections))
        errors = []
        if not notes or not notes.strip():
            errors.append("Notes are required when adding dates manually.")
        if not pairs:
            errors.append("Select at least one date to add.")
        available = {(a.event_id, a.date) for a in self._available(registration.id, year)}
        for event_id, day in pairs:
            if (event_id, day) not in available:
                errors.append(
                    f"{day.isoformat()} for {event_id} is not available "
                    f"for this registration in {year}."
                )
        if errors:
            return ManualAdditionResult(errors=tuple(errors))

        stamp = self._now()
        rows = [
            self._row(
                registration.id,
                event_id,
                day,
                notes=notes.strip(),
                created_by=actor.id,
                created_at=stamp,
            )
            for event_id, day in pairs
        ]

        def persist():
            with self._store.atomic():
                recorded = {
                    row.id: row for row in self._store.list_registration_dates(registration.id)
                }
                return tuple(
                    recorded.get(row.id) or self._store.create_registration_date(row)
                    for row in rows
                )

        created = self._executor.run_action(persist, "Adding registration dates", write=True)
        logger.info(
            "Admin %s added %d dates to registration %s",
            actor.id,
            len(created),
            registration.id,
        )
        return ManualAdditionResult(created=created)

    def _available(self, registration_id: RegistrationId, year: int) -> list[AvailableDate]:
        today = self._today()
        return self._executor.run_action(
            lambda: self._store.list_available_dates_for_registration(
                registration_id, year, today
            ),
            "Loading available dates",
        )

    def _row(
        self,
        registration_id: RegistrationId,
        event_id: EventId,
        day: date | None,
        quantity: int = 1,
        notes: str | None = None,
        created_by: str | None = None,
        created_at: datetime | None = None,
    ) -> RegistrationDate:
        return RegistrationDate(
            id=self._new_id(),
            registration_id=registration_id,
            event_id=event_id,
            date=day,
            quantity=quantity,
            notes=notes,
            created_by=created_by,
            created_at=created_at,
        )
