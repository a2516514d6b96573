"""Serializers for request parsing and for rendering domain models."""

from rest_framework import serializers

from sponsorships.domain import Contact, EventId
from sponsorships.domain.value_objects import dump_limit, parse_limit


# Request serializers


class PlanSelectionSerializer(serializers.Serializer):
    plan_id = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=100
    )


class DateToggleSerializer(serializers.Serializer):
    event_id = serializers.CharField(max_length=50)
    date = serializers.DateField()

    def to_internal_value(self, data):
        values = super().to_internal_value(data)
        values["event_id"] = EventId(values["event_id"])
        return values


class SupplementalLimitSerializer(serializers.Serializer):
    event_id = serializers.CharField(max_length=50)
    limit = serializers.CharField(max_length=10)

    def validate_limit(self, value):
        try:
            return parse_limit(value)
        except ValueError:
            raise serializers.ValidationError("Limit must be a non-negative number or ALL.")

    def validate_event_id(self, value):
        return EventId(value)


class ContactSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=255)
    spouse_first_name = serializers.CharField(max_length=255)
    last_name = serializers.CharField(max_length=255)
    address = serializers.CharField()
    phone = serializers.CharField(max_length=50)
    email = serializers.EmailField(max_length=255)

    def to_contact(self) -> Contact:
        return Contact(**self.validated_data)


class ManualAdditionSerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=1900, max_value=9999)
    selections = DateToggleSerializer(many=True, allow_empty=True)
    notes = serializers.CharField(allow_blank=True, trim_whitespace=False)

    def pairs(self):
        return [(s["event_id"], s["date"]) for s in self.validated_data["selections"]]


class RegistrationSearchSerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True, max_length=255)
    date = serializers.DateField(required=False)
    year = serializers.IntegerField(required=False, min_value=1900, max_value=9999)


# Response serializers


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()
    individual_cost = serializers.DecimalField(
        source="individual_cost.amount", max_digits=10, decimal_places=2
    )
    all_cost = serializers.DecimalField(
        source="all_cost.amount", max_digits=10, decimal_places=2
    )
    individual_upto = serializers.IntegerField()
    date_selection_required = serializers.BooleanField()
    sort_order = serializers.IntegerField()


class EventDateSerializer(serializers.Serializer):
    """Serializer for EventDate domain model."""

    id = serializers.UUIDField()
    date = serializers.DateField()
    title = serializers.CharField(allow_null=True)


class CatalogEntrySerializer(serializers.Serializer):
    event = EventSerializer()
    dates = EventDateSerializer(many=True)


class SponsorshipPlanSerializer(serializers.Serializer):
    """Serializer for SponsorshipPlan domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    price = serializers.DecimalField(source="price.amount", max_digits=10, decimal_places=2)
    limits = serializers.SerializerMethodField()
    eligible_events = serializers.SerializerMethodField()
    auto_select = serializers.SerializerMethodField()

    def get_limits(self, plan):
        return {str(event_id): dump_limit(limit) for event_id, limit in plan.limits.items()}

    def get_eligible_events(self, plan):
        return [str(event_id) for event_id in plan.eligible_events]

    def get_auto_select(self, plan):
        return [str(event_id) for event_id in plan.auto_select]


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model."""

    id = serializers.UUIDField(source="id.value")
    first_name = serializers.CharField(source="contact.first_name")
    spouse_first_name = serializers.CharField(source="contact.spouse_first_name")
    last_name = serializers.CharField(source="contact.last_name")
    address = serializers.CharField(source="contact.address")
    phone = serializers.CharField(source="contact.phone")
    email = serializers.CharField(source="contact.email")
    sponsorship_type = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)


class RegistrationDateSerializer(serializers.Serializer):
    """Serializer for RegistrationDate domain model."""

    id = serializers.UUIDField()
    event_id = serializers.CharField(source="event_id.value")
    date = serializers.DateField(allow_null=True)
    quantity = serializers.IntegerField()
    notes = serializers.CharField(allow_null=True)
    created_by = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)


class RegistrationDateDetailSerializer(serializers.Serializer):
    event_id = serializers.CharField(source="event_id.value")
    event_name = serializers.CharField()
    date = serializers.DateField(allow_null=True)
    date_title = serializers.CharField(allow_null=True)
    quantity = serializers.IntegerField()
    notes = serializers.CharField(allow_null=True)


class AvailableDateSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="event_date_id")
    event_id = serializers.CharField(source="event_id.value")
    event_name = serializers.CharField()
    date = serializers.DateField()
    date_title = serializers.CharField(allow_null=True)
    price = serializers.DecimalField(source="price.amount", max_digits=10, decimal_places=2)
