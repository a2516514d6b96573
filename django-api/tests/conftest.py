"""Pytest configuration and shared fixtures."""

import uuid
from datetime import date
from decimal import Decimal
from itertools import count

import pytest
from rest_framework.test import APIClient

from sponsorships.domain import (
    Catalog,
    Event,
    EventId,
    Money,
    RegistrationAllocator,
)
from sponsorships.stores.interfaces import RegistrationStore

SAMAIYA = EventId("event_a")
LADIES = EventId("event_b")
SABHA = EventId("event_c")
PRASAD = EventId("event_d")


def make_event(event_id, name, cost, all_cost, upto=5, dated=True, order=0):
    return Event(
        id=event_id,
        name=name,
        individual_cost=Money(Decimal(cost)),
        all_cost=Money(Decimal(all_cost)),
        individual_upto=upto,
        date_selection_required=dated,
        sort_order=order,
    )


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def inline_db_operations(settings):
    """Run store calls on the test thread so they share its transaction."""
    settings.SPONSORSHIPS_DB_RESILIENCE = {
        "MAX_RETRIES": 3,
        "RETRY_DELAY": 0,
        "TIMEOUT": None,
        "WAKE_UP_ATTEMPTS": 1,
        "WAKE_UP_DELAY": 0,
    }


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(
        events=(
            make_event(SAMAIYA, "Samaiya", "500", "2000", order=1),
            make_event(LADIES, "Ladies Gathering", "300", "1200", order=2),
            make_event(SABHA, "Weekly Sabha", "200", "900", order=3),
            make_event(PRASAD, "Prasad Offering", "50", "1000", dated=False, order=4),
        ),
        available_dates={
            SAMAIYA: (date(2026, 11, 1), date(2026, 12, 6), date(2027, 1, 10)),
            LADIES: (date(2026, 11, 15), date(2026, 12, 20)),
            SABHA: (
                date(2026, 11, 8),
                date(2026, 11, 22),
                date(2026, 12, 13),
                date(2027, 1, 3),
                date(2027, 1, 17),
            ),
        },
    )


@pytest.fixture
def allocator(catalog) -> RegistrationAllocator:
    return RegistrationAllocator(catalog)


@pytest.fixture
def sequential_ids():
    """Deterministic UUID generator."""
    counter = count(1)
    return lambda: uuid.UUID(int=next(counter))


class _Snapshot:
    def __init__(self, store):
        self._store = store

    def __enter__(self):
        self._saved = (dict(self._store.registrations), list(self._store.rows))
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self._store.registrations, self._store.rows = self._saved
        return False


class InMemoryRegistrationStore(RegistrationStore):
    """Dict-backed store; ``atomic`` rolls back on error."""

    def __init__(self, available=(), fail_on_row=None):
        self.registrations = {}
        self.rows = []
        self.available = list(available)
        self.available_calls = []
        self.search_calls = []
        self._fail_on_row = fail_on_row
        self._row_writes = 0

    def atomic(self):
        return _Snapshot(self)

    def get_registration(self, registration_id):
        return self.registrations.get(registration_id)

    def list_registration_dates(self, registration_id):
        return [row for row in self.rows if row.registration_id == registration_id]

    def list_registration_date_details(self, registration_id):
        return []

    def create_registration(self, registration):
        self.registrations[registration.id] = registration
        return registration

    def create_registration_date(self, row):
        self._row_writes += 1
        if self._fail_on_row is not None and self._row_writes == self._fail_on_row:
            raise RuntimeError("disk I/O error")
        self.rows.append(row)
        return row

    def search_registrations(self, query=None, on_date=None, year=None):
        self.search_calls.append((query, on_date, year))
        return list(self.registrations.values())

    def list_available_dates_for_registration(self, registration_id, year, today):
        self.available_calls.append((registration_id, year, today))
        recorded = {
            (row.event_id, row.date)
            for row in self.rows
            if row.registration_id == registration_id
        }
        return [
            a
            for a in self.available
            if a.date.year == year and a.date >= today and (a.event_id, a.date) not in recorded
        ]


@pytest.fixture
def memory_store():
    return InMemoryRegistrationStore()


@pytest.fixture
def make_store():
    return InMemoryRegistrationStore
