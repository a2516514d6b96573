"""Catalog service: events and their dates, cached between requests."""

import logging
from dataclasses import dataclass

from django.conf import settings
from django.core.cache import cache

from sponsorships.domain import (
    Catalog,
    Event,
    EventDate,
    PlanCatalog,
    RegistrationAllocator,
)
from sponsorships.stores.interfaces import CatalogStore
from sponsorships.stores.resilience import ResilientExecutor

logger = logging.getLogger(__name__)

CATALOG_CACHE_KEY = "sponsorships:catalog"


@dataclass(frozen=True)
class CatalogEntry:
    event: Event
    dates: tuple[EventDate, ...]


def invalidate_catalog_cache() -> None:
    cache.delete(CATALOG_CACHE_KEY)


class CatalogService:
    """Service for event catalog reads."""

    def __init__(
        self,
        store: CatalogStore,
        executor: ResilientExecutor,
        plans: PlanCatalog | None = None,
    ) -> None:
        self._store = store
        self._executor = executor
        self._plans = plans or PlanCatalog()

    @property
    def plans(self) -> PlanCatalog:
        return self._plans

    def list_entries(self) -> list[CatalogEntry]:
        """Return every event in sort order with its dates in date order."""
        entries = cache.get(CATALOG_CACHE_KEY)
        if entries is not None:
            return entries

        entries = self._executor.run_action(self._load, "Loading events")
        cache.set(
            CATALOG_CACHE_KEY,
            entries,
            getattr(settings, "SPONSORSHIPS_CATALOG_CACHE_TTL", 300),
        )
        logger.debug("Catalog cached with %d events", len(entries))
        return entries

    def get_catalog(self) -> Catalog:
        entries = self.list_entries()
        return Catalog(
            events=tuple(entry.event for entry in entries),
            available_dates={
                entry.event.id: tuple(d.date for d in entry.dates) for entry in entries
            },
        )

    def get_allocator(self) -> RegistrationAllocator:
        return RegistrationAllocator(self.get_catalog(), self._plans)

    def _load(self) -> list[CatalogEntry]:
        return [
            CatalogEntry(event=event, dates=tuple(self._store.list_event_dates(event.id)))
            for event in self._store.list_events()
        ]
