"""Integration tests for the Django ORM stores."""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from sponsorships import models
from sponsorships.domain import (
    Contact,
    EventId,
    Money,
    Registration,
    RegistrationDate,
    RegistrationId,
)
from sponsorships.stores import DjangoCatalogStore, DjangoRegistrationStore

pytestmark = pytest.mark.django_db

TODAY = date(2026, 10, 19)


@pytest.fixture
def events():
    sabha = models.Event.objects.create(
        id="event_c",
        name="Weekly Sabha",
        individual_cost=Decimal("200"),
        all_cost=Decimal("900"),
        individual_upto=5,
        sort_order=3,
    )
    samaiya = models.Event.objects.create(
        id="event_a",
        name="Samaiya",
        individual_cost=Decimal("500"),
        all_cost=Decimal("2000"),
        individual_upto=5,
        sort_order=1,
    )
    for day, title in [
        (date(2026, 10, 4), None),
        (date(2026, 11, 8), "Diwali Sabha"),
        (date(2026, 11, 22), None),
        (date(2027, 1, 3), None),
    ]:
        models.EventDate.objects.create(event=sabha, date=day, title=title)
    for day in [date(2026, 11, 8), date(2026, 12, 6)]:
        models.EventDate.objects.create(event=samaiya, date=day)
    return samaiya, sabha


@pytest.fixture
def registration():
    return models.Registration.objects.create(
        first_name="Ravi",
        last_name="Patel",
        email="ravi@example.com",
        sponsorship_type="gold",
    )


class TestDjangoCatalogStore:
    """Tests for DjangoCatalogStore."""

    def test_events_in_display_order(self, events):
        listed = DjangoCatalogStore().list_events()

        assert [e.id for e in listed] == [EventId("event_a"), EventId("event_c")]
        assert listed[1].individual_cost == Money(Decimal("200"))
        assert listed[1].date_selection_required

    def test_dates_in_date_order(self, events):
        dates = DjangoCatalogStore().list_event_dates(EventId("event_c"))

        assert [d.date for d in dates] == [
            date(2026, 10, 4),
            date(2026, 11, 8),
            date(2026, 11, 22),
            date(2027, 1, 3),
        ]
        assert dates[1].title == "Diwali Sabha"
        assert dates[0].title is None


class TestDjangoRegistrationStore:
    """Tests for DjangoRegistrationStore."""

    def test_create_and_get_registration(self, events):
        store = DjangoRegistrationStore()
        registration = Registration(
            id=RegistrationId(uuid.uuid4()),
            contact=Contact("Ravi", "", "Patel", "", "", "ravi@example.com"),
            sponsorship_type=None,
        )

        store.create_registration(registration)
        found = store.get_registration(registration.id)

        assert found.contact == registration.contact
        assert found.sponsorship_type is None
        assert found.created_at is not None

    def test_get_missing_registration(self):
        assert DjangoRegistrationStore().get_registration(RegistrationId(uuid.uuid4())) is None

    def test_quantity_row_without_date(self, events, registration):
        store = DjangoRegistrationStore()
        rid = RegistrationId(registration.id)

        store.create_registration_date(
            RegistrationDate(
                id=uuid.uuid4(),
                registration_id=rid,
                event_id=EventId("event_a"),
                date=None,
                quantity=-1,
            )
        )

        (row,) = store.list_registration_dates(rid)
        assert row.date is None
        assert row.quantity == -1

    def test_date_details_carry_titles(self, events, registration):
        samaiya, sabha = events
        models.RegistrationDate.objects.create(
            registration=registration, event=sabha, date=date(2026, 11, 8), notes="Paid"
        )
        models.RegistrationDate.objects.create(
            registration=registration, event=samaiya, date=date(2026, 12, 6)
        )

        details = DjangoRegistrationStore().list_registration_date_details(
            RegistrationId(registration.id)
        )

        assert [(d.event_name, d.date) for d in details] == [
            ("Samaiya", date(2026, 12, 6)),
            ("Weekly Sabha", date(2026, 11, 8)),
        ]
        assert details[0].date_title is None
        assert details[1].date_title == "Diwali Sabha"
        assert details[1].notes == "Paid"

    def test_available_dates_exclude_past_other_years_and_recorded(self, events, registration):
        samaiya, sabha = events
        models.RegistrationDate.objects.create(
            registration=registration, event=sabha, date=date(2026, 11, 22)
        )

        available = DjangoRegistrationStore().list_available_dates_for_registration(
            RegistrationId(registration.id), 2026, TODAY
        )

        assert [(a.event_id.value, a.date) for a in available] == [
            ("event_a", date(2026, 11, 8)),
            ("event_c", date(2026, 11, 8)),
            ("event_a", date(2026, 12, 6)),
        ]
        assert available[1].date_title == "Diwali Sabha"
        assert available[1].price == Money(Decimal("200"))

    def test_other_registrations_do_not_hide_dates(self, events, registration):
        samaiya, _ = events
        other = models.Registration.objects.create(
            first_name="Asha", last_name="Shah", email="asha@example.com"
        )
        models.RegistrationDate.objects.create(
            registration=other, event=samaiya, date=date(2026, 12, 6)
        )

        available = DjangoRegistrationStore().list_available_dates_for_registration(
            RegistrationId(registration.id), 2026, TODAY
        )

        assert (EventId("event_a"), date(2026, 12, 6)) in {
            (a.event_id, a.date) for a in available
        }

    def test_atomic_rolls_back_on_error(self, events, registration):
        store = DjangoRegistrationStore()
        rid = RegistrationId(registration.id)

        with pytest.raises(RuntimeError):
            with store.atomic():
                store.create_registration_date(
                    RegistrationDate(
                        id=uuid.uuid4(),
                        registration_id=rid,
                        event_id=EventId("event_c"),
                        date=date(2026, 11, 8),
                    )
                )
                raise RuntimeError("disk I/O error")

        assert store.list_registration_dates(rid) == []


class TestSearchRegistrations:
    """Tests for DjangoRegistrationStore.search_registrations."""

    @pytest.fixture
    def people(self, events):
        samaiya, sabha = events

        def create(first, last, email, phone, created, dated):
            row = models.Registration.objects.create(
                first_name=first, last_name=last, email=email, phone=phone
            )
            # auto_now_add ignores values passed to create.
            models.Registration.objects.filter(pk=row.pk).update(created_at=created)
            for event, day in dated:
                models.RegistrationDate.objects.create(registration=row, event=event, date=day)
            return row.id

        return {
            "ravi": create(
                "Ravi",
                "Patel",
                "ravi@example.com",
                "555-0100",
                datetime(2026, 9, 1, tzinfo=timezone.utc),
                [(sabha, date(2026, 11, 8)), (samaiya, date(2026, 11, 8))],
            ),
            "asha": create(
                "Asha",
                "Shah",
                "asha@example.org",
                "555-0199",
                datetime(2026, 9, 5, tzinfo=timezone.utc),
                [(sabha, date(2027, 1, 3))],
            ),
            "nikhil": create(
                "Nikhil",
                "Patelia",
                "nik@example.net",
                "777-0001",
                datetime(2026, 9, 3, tzinfo=timezone.utc),
                [],
            ),
        }

    def search(self, **criteria):
        return [r.id.value for r in DjangoRegistrationStore().search_registrations(**criteria)]

    def test_no_criteria_lists_newest_first(self, people):
        assert self.search() == [people["asha"], people["nikhil"], people["ravi"]]

    def test_query_matches_names_case_insensitively(self, people):
        assert self.search(query="pAtEl") == [people["nikhil"], people["ravi"]]

    def test_query_matches_email_and_phone(self, people):
        assert self.search(query="example.org") == [people["asha"]]
        assert self.search(query="0199") == [people["asha"]]

    def test_date_matches_any_row_once(self, people):
        """Ravi has two rows on the date but is listed once."""
        assert self.search(on_date=date(2026, 11, 8)) == [people["ravi"]]

    def test_year(self, people):
        assert self.search(year=2027) == [people["asha"]]
        assert self.search(year=2026) == [people["ravi"]]

    def test_criteria_combine(self, people):
        assert self.search(query="patel", year=2026) == [people["ravi"]]
        assert self.search(query="shah", on_date=date(2026, 11, 8)) == []
