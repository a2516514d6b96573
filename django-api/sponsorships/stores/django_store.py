"""Django ORM implementation of the catalog and registration stores."""

from contextlib import AbstractContextManager
from datetime import date

from django.db import transaction
from django.db.models import Exists, OuterRef, Q

from sponsorships import models
from sponsorships.domain import (
    AvailableDate,
    Contact,
    Event,
    EventDate,
    EventId,
    Money,
    Registration,
    RegistrationDate,
    RegistrationDateDetail,
    RegistrationId,
)
from sponsorships.stores.interfaces import CatalogStore, RegistrationStore


def _to_event(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        name=row.name,
        individual_cost=Money(row.individual_cost),
        all_cost=Money(row.all_cost),
        individual_upto=row.individual_upto,
        date_selection_required=row.date_selection_required,
        sort_order=row.sort_order,
    )


def _to_registration(row: models.Registration) -> Registration:
    return Registration(
        id=RegistrationId(row.id),
        contact=Contact(
            first_name=row.first_name,
            spouse_first_name=row.spouse_first_name,
            last_name=row.last_name,
            address=row.address,
            phone=row.phone,
            email=row.email,
        ),
        sponsorship_type=row.sponsorship_type or None,
        created_at=row.created_at,
    )


def _to_registration_date(row: models.RegistrationDate) -> RegistrationDate:
    return RegistrationDate(
        id=row.id,
        registration_id=RegistrationId(row.registration_id),
        event_id=EventId(row.event_id),
        date=row.date,
        quantity=row.quantity,
        notes=row.notes,
        created_by=row.created_by,
        created_at=row.created_at,
    )


class DjangoCatalogStore(CatalogStore):
    """Event catalog backed by the Django ORM."""

    def list_events(self) -> list[Event]:
        return [_to_event(row) for row in models.Event.objects.order_by("sort_order")]

    def list_event_dates(self, event_id: EventId) -> list[EventDate]:
        rows = models.EventDate.objects.filter(event_id=event_id.value).order_by("date")
        return [
            EventDate(
                id=row.id,
                event_id=EventId(row.event_id),
                date=row.date,
                title=row.title or None,
            )
            for row in rows
        ]


class DjangoRegistrationStore(RegistrationStore):
    """Registrations backed by the Django ORM."""

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic()

    def get_registration(self, registration_id: RegistrationId) -> Registration | None:
        row = models.Registration.objects.filter(pk=registration_id.value).first()
        return _to_registration(row) if row else None

    def list_registration_dates(
        self, registration_id: RegistrationId
    ) -> list[RegistrationDate]:
        rows = models.RegistrationDate.objects.filter(
            registration_id=registration_id.value
        )
        return [_to_registration_date(row) for row in rows]

    def list_registration_date_details(
        self, registration_id: RegistrationId
    ) -> list[RegistrationDateDetail]:
        rows = (
            models.RegistrationDate.objects.filter(registration_id=registration_id.value)
            .select_related("event")
            .order_by("event__sort_order", "date")
        )
        titles = {
            (row.event_id, row.date): row.title
            for row in models.EventDate.objects.filter(
                event_id__in={row.event_id for row in rows}
            )
        }
        return [
            RegistrationDateDetail(
                event_id=EventId(row.event_id),
                event_name=row.event.name,
                date=row.date,
                quantity=row.quantity,
                date_title=titles.get((row.event_id, row.date)) or None,
                notes=row.notes,
            )
            for row in rows
        ]

    def create_registration(self, registration: Registration) -> Registration:
        contact = registration.contact
        row = models.Registration.objects.create(
            id=registration.id.value,
            first_name=contact.first_name,
            spouse_first_name=contact.spouse_first_name,
            last_name=contact.last_name,
            address=contact.address,
            phone=contact.phone,
            email=contact.email,
            sponsorship_type=registration.sponsorship_type,
        )
        return _to_registration(row)

    def create_registration_date(self, row: RegistrationDate) -> RegistrationDate:
        created = models.RegistrationDate.objects.create(
            id=row.id,
            registration_id=row.registration_id.value,
            event_id=row.event_id.value,
            date=row.date,
            quantity=row.quantity,
            notes=row.notes,
            created_by=row.created_by,
            created_at=row.created_at,
        )
        return _to_registration_date(created)

    def list_available_dates_for_registration(
        self, registration_id: RegistrationId, year: int, today: date
    ) -> list[AvailableDate]:
        already_recorded = models.RegistrationDate.objects.filter(
            registration_id=registration_id.value,
            event_id=OuterRef("event_id"),
            date=OuterRef("date"),
        )
        rows = (
            models.EventDate.objects.filter(date__year=year, date__gte=today)
            .exclude(Exists(already_recorded))
            .select_related("event")
            .order_by("date", "event__sort_order")
        )
        return [
            AvailableDate(
                event_date_id=row.id,
                event_id=EventId(row.event_id),
                event_name=row.event.name,
                date=row.date,
                date_title=row.title or None,
                price=Money(row.event.individual_cost),
            )
            for row in rows
        ]

    def search_registrations(
        self,
        query: str | None = None,
        on_date: date | None = None,
        year: int | None = None,
    ) -> list[Registration]:
        rows = models.Registration.objects.all()
        if query:
            rows = rows.filter(
                Q(first_name__icontains=query)
                | Q(last_name__icontains=query)
                | Q(email__icontains=query)
                | Q(phone__icontains=query)
            )
        if on_date is not None:
            rows = rows.filter(dates__date=on_date)
        if year is not None:
            rows = rows.filter(dates__date__year=year)
        return [_to_registration(row) for row in rows.distinct().order_by("-created_at")]
