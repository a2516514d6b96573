"""Django signals for catalog cache invalidation."""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from sponsorships.models import Event, EventDate
from sponsorships.services.catalog_service import invalidate_catalog_cache


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate the catalog when an event is saved or deleted."""
    invalidate_catalog_cache()


@receiver([post_save, post_delete], sender=EventDate)
def invalidate_event_date_cache(sender, instance, **kwargs):
    """Invalidate the catalog when an event date is saved or deleted."""
    invalidate_catalog_cache()
