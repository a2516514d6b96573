from sponsorships.domain.allocator import Catalog, RegistrationAllocator
from sponsorships.domain.models import (
    Actor,
    Allocation,
    AvailableDate,
    Contact,
    Event,
    EventDate,
    Registration,
    RegistrationDate,
    RegistrationDateDetail,
    SponsorshipPlan,
)
from sponsorships.domain.plans import SPONSORSHIP_PLANS, PlanCatalog
from sponsorships.domain.selection import SelectionState, ToggleResult
from sponsorships.domain.value_objects import (
    ALL_UNITS,
    UNBOUNDED,
    EventId,
    Finite,
    Limit,
    Money,
    RegistrationId,
    Unbounded,
)

__all__ = [
    "Actor",
    "Allocation",
    "AvailableDate",
    "Catalog",
    "Contact",
    "Event",
    "EventDate",
    "PlanCatalog",
    "Registration",
    "RegistrationAllocator",
    "RegistrationDate",
    "RegistrationDateDetail",
    "SelectionState",
    "SponsorshipPlan",
    "SPONSORSHIP_PLANS",
    "ToggleResult",
    "ALL_UNITS",
    "UNBOUNDED",
    "EventId",
    "Finite",
    "Limit",
    "Money",
    "RegistrationId",
    "Unbounded",
]
