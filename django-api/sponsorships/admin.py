from django.contrib import admin

from sponsorships.models import Event, EventDate, Registration, RegistrationDate


class EventDateInline(admin.TabularInline):
    model = EventDate
    extra = 1


class RegistrationDateInline(admin.TabularInline):
    model = RegistrationDate
    extra = 0
    readonly_fields = ["created_at", "created_by"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "individual_cost",
        "all_cost",
        "individual_upto",
        "date_selection_required",
        "sort_order",
    ]
    list_editable = ["sort_order"]
    inlines = [EventDateInline]


@admin.register(EventDate)
class EventDateAdmin(admin.ModelAdmin):
    list_display = ["event", "date", "title"]
    list_filter = ["event"]
    date_hierarchy = "date"


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ["first_name", "last_name", "email", "phone", "sponsorship_type", "created_at"]
    search_fields = ["first_name", "last_name", "email", "phone"]
    list_filter = ["sponsorship_type"]
    inlines = [RegistrationDateInline]
