"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date

from sponsorships.domain import (
    AvailableDate,
    Event,
    EventDate,
    EventId,
    Registration,
    RegistrationDate,
    RegistrationDateDetail,
    RegistrationId,
)


class CatalogStore(ABC):
    """Interface for reading the event catalog."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by sort_order ascending."""
        ...

    @abstractmethod
    def list_event_dates(self, event_id: EventId) -> list[EventDate]:
        """Return the dates of an event ordered by date ascending."""
        ...


class RegistrationStore(ABC):
    """Interface for registration persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager; writes inside it commit all or none."""
        ...

    @abstractmethod
    def get_registration(self, registration_id: RegistrationId) -> Registration | None:
        """Return a registration by ID, or None if not found."""
        ...

    @abstractmethod
    def list_registration_dates(
        self, registration_id: RegistrationId
    ) -> list[RegistrationDate]:
        """Return every date row recorded against a registration."""
        ...

    @abstractmethod
    def list_registration_date_details(
        self, registration_id: RegistrationId
    ) -> list[RegistrationDateDetail]:
        """Return date rows joined with event names and date titles,
        ordered by event sort_order then date."""
        ...

    @abstractmethod
    def create_registration(self, registration: Registration) -> Registration:
        """Insert a registration and return it with its creation timestamp."""
        ...

    @abstractmethod
    def create_registration_date(self, row: RegistrationDate) -> RegistrationDate:
        """Insert one registration date row."""
        ...

    @abstractmethod
    def list_available_dates_for_registration(
        self, registration_id: RegistrationId, year: int, today: date
    ) -> list[AvailableDate]:
        """Return event dates in ``year``, on or after ``today``, whose
        (event, date) pair is not yet recorded against the registration,
        ordered by date ascending."""
        ...

    @abstractmethod
    def search_registrations(
        self,
        query: str | None = None,
        on_date: date | None = None,
        year: int | None = None,
    ) -> list[Registration]:
        """Return registrations matching every given criterion, newest first.

        ``query`` matches part of a first or last name, email or phone
        (case-insensitive). ``on_date`` and ``year`` match registrations with
        at least one date row on that day or in that year. No criteria
        returns every registration.
        """
        ...
