"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.db import models


class Event(models.Model):
    """Persistence model for sponsorable events."""

    id = models.CharField(primary_key=True, max_length=50)
    name = models.CharField(max_length=255)
    individual_cost = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    all_cost = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    individual_upto = models.PositiveIntegerField(default=0)
    date_selection_required = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["sort_order"]

    def __str__(self) -> str:
        return self.name


class EventDate(models.Model):
    """Persistence model for the calendar dates of an event."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="dates")
    date = models.DateField()
    title = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        ordering = ["date"]
        constraints = [
            models.UniqueConstraint(fields=["event", "date"], name="uniq_event_date"),
        ]
        indexes = [
            models.Index(fields=["event", "date"]),
        ]

    def __str__(self) -> str:
        return f"{self.event.name} - {self.date}"


class Registration(models.Model):
    """Persistence model for a sponsorship registration."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    first_name = models.CharField(max_length=255)
    spouse_first_name = models.CharField(max_length=255, blank=True)
    last_name = models.CharField(max_length=255)
    address = models.TextField(blank=True)
    phone = models.CharField(max_length=50, blank=True)
    email = models.EmailField(max_length=255)
    sponsorship_type = models.CharField(max_length=100, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"]),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"


class RegistrationDate(models.Model):
    """Persistence model for one allocated date or quantity of a registration."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    registration = models.ForeignKey(
        Registration, on_delete=models.CASCADE, related_name="dates"
    )
    event = models.ForeignKey(
        Event, on_delete=models.PROTECT, related_name="registration_dates"
    )
    date = models.DateField(blank=True, null=True)
    quantity = models.IntegerField(default=1)
    notes = models.TextField(blank=True, null=True)
    created_by = models.CharField(max_length=50, blank=True, null=True)
    created_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        indexes = [
            models.Index(fields=["registration"]),
            models.Index(fields=["event", "date"]),
        ]

    def __str__(self) -> str:
        return f"{self.event_id} - {self.date or self.quantity}"
