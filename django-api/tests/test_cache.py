"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

from datetime import date
from decimal import Decimal

import pytest
from django.core.cache import cache

from sponsorships import models
from sponsorships.services import CatalogService
from sponsorships.services.catalog_service import CATALOG_CACHE_KEY
from sponsorships.stores import DjangoCatalogStore
from sponsorships.stores.resilience import ResilientExecutor, RetryPolicy


class CountingStore(DjangoCatalogStore):
    def __init__(self):
        self.loads = 0

    def list_events(self):
        self.loads += 1
        return super().list_events()


@pytest.fixture
def event():
    return models.Event.objects.create(
        id="event_c",
        name="Weekly Sabha",
        individual_cost=Decimal("200"),
        all_cost=Decimal("900"),
        individual_upto=5,
    )


@pytest.fixture
def store():
    return CountingStore()


@pytest.fixture
def service(store):
    return CatalogService(store, ResilientExecutor(policy=RetryPolicy(timeout=None)))


@pytest.mark.django_db
class TestCatalogCache:
    """Tests for catalog caching."""

    def test_second_read_is_served_from_cache(self, event, service, store):
        """Listing twice hits the store once."""
        first = service.list_entries()
        second = service.list_entries()

        assert store.loads == 1
        assert first == second
        assert cache.get(CATALOG_CACHE_KEY) is not None

    def test_allocator_uses_cached_catalog(self, event, service, store):
        service.list_entries()
        allocator = service.get_allocator()

        assert store.loads == 1
        assert [e.name for e in allocator.catalog.events] == ["Weekly Sabha"]


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def test_event_save_invalidates_catalog(self, event, service, store):
        """Saving an event invalidates the catalog cache key."""
        service.list_entries()

        event.name = "Sunday Sabha"
        event.save()

        assert cache.get(CATALOG_CACHE_KEY) is None
        (entry,) = service.list_entries()
        assert entry.event.name == "Sunday Sabha"
        assert store.loads == 2

    def test_event_delete_invalidates_catalog(self, event, service):
        service.list_entries()

        event.delete()

        assert cache.get(CATALOG_CACHE_KEY) is None
        assert service.list_entries() == []

    def test_event_date_save_invalidates_catalog(self, event, service):
        """Adding a date to an event invalidates the catalog cache key."""
        service.list_entries()

        models.EventDate.objects.create(event=event, date=date(2026, 11, 8))

        (entry,) = service.list_entries()
        assert [d.date for d in entry.dates] == [date(2026, 11, 8)]

    def test_event_date_delete_invalidates_catalog(self, event, service):
        event_date = models.EventDate.objects.create(event=event, date=date(2026, 11, 8))
        service.list_entries()

        event_date.delete()

        (entry,) = service.list_entries()
        assert entry.dates == ()
