"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in sponsorships/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from sponsorships.domain.value_objects import (
    NO_LIMIT,
    EventId,
    Limit,
    Money,
    RegistrationId,
)


@dataclass(frozen=True)
class Event:
    """Domain representation of a sponsorable Event."""

    id: EventId
    name: str
    individual_cost: Money
    all_cost: Money
    individual_upto: int
    date_selection_required: bool
    sort_order: int = 0


@dataclass(frozen=True)
class EventDate:
    """A calendar date on which an Event takes place."""

    id: UUID
    event_id: EventId
    date: date
    title: str | None = None


@dataclass(frozen=True)
class SponsorshipPlan:
    """A static sponsorship package with a per-event date allotment."""

    id: str
    name: str
    price: Money
    limits: dict[EventId, Limit]
    eligible_events: tuple[EventId, ...]
    auto_select: tuple[EventId, ...] = ()

    def limit_for(self, event_id: EventId) -> Limit:
        return self.limits.get(event_id, NO_LIMIT)


@dataclass(frozen=True)
class Contact:
    """Contact details captured in the first wizard step."""

    first_name: str
    spouse_first_name: str
    last_name: str
    address: str
    phone: str
    email: str


@dataclass(frozen=True)
class Registration:
    """Domain representation of a submitted Registration."""

    id: RegistrationId
    contact: Contact
    sponsorship_type: str | None
    created_at: datetime | None = None


@dataclass(frozen=True)
class RegistrationDate:
    """One allocated date (or quantity row) of a Registration."""

    id: UUID
    registration_id: RegistrationId
    event_id: EventId
    date: date | None
    quantity: int = 1
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class RegistrationDateDetail:
    """A RegistrationDate joined with its event name and date title."""

    event_id: EventId
    event_name: str
    date: date | None
    quantity: int
    date_title: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class AvailableDate:
    """An EventDate a registration could still be extended with."""

    event_date_id: UUID
    event_id: EventId
    event_name: str
    date: date
    date_title: str | None
    price: Money


@dataclass(frozen=True)
class Allocation:
    """Final deduplicated per-event selection, ready for persistence.

    Date events carry their sorted dates with an implied quantity of one each.
    Quantity-only events carry no dates and a single quantity (possibly
    ``ALL_UNITS``).
    """

    event_id: EventId
    dates: tuple[date, ...] = ()
    quantity: int = 1


@dataclass(frozen=True)
class Actor:
    """The authenticated administrator performing an operation."""

    id: str
    email: str = ""
