"""Static sponsorship plan catalog."""

from decimal import Decimal

from sponsorships.domain.errors import PlanNotFoundError
from sponsorships.domain.models import SponsorshipPlan
from sponsorships.domain.value_objects import UNBOUNDED, EventId, Finite, Money

SAMAIYA = EventId("event_a")
MAHILA_SAMAIYA = EventId("event_b")
SATSANG_SABHA = EventId("event_c")


def _plan(plan_id, name, price, limits, auto_select=()):
    return SponsorshipPlan(
        id=plan_id,
        name=name,
        price=Money(Decimal(price)),
        limits=limits,
        eligible_events=tuple(
            event_id for event_id, limit in limits.items() if not limit.is_zero
        ),
        auto_select=tuple(auto_select),
    )


SPONSORSHIP_PLANS: tuple[SponsorshipPlan, ...] = (
    _plan(
        "silver",
        "Annual Silver Sponsorship (1 Samaiya, 1 Mahila Samaiya, 4 Weekly Satsang Sabha)",
        "1751",
        {SAMAIYA: Finite(1), MAHILA_SAMAIYA: Finite(1), SATSANG_SABHA: Finite(4)},
    ),
    _plan(
        "gold",
        "Annual Gold Sponsorship (2 Samaiya, 2 Mahila Samaiya, 6 Weekly Satsang Sabha)",
        "2501",
        {SAMAIYA: Finite(2), MAHILA_SAMAIYA: Finite(2), SATSANG_SABHA: Finite(8)},
    ),
    _plan(
        "platinum",
        "Annual Platinum Sponsorship (3 Samaiya, 3 Mahila Samaiya, 8 Weekly Satsang Sabha)",
        "3501",
        {SAMAIYA: Finite(3), MAHILA_SAMAIYA: Finite(3), SATSANG_SABHA: Finite(8)},
    ),
    _plan(
        "all_sabha",
        "Annual Grand Sponsorships - All Weekly Satsang Sabha",
        "7501",
        {SAMAIYA: Finite(0), MAHILA_SAMAIYA: Finite(0), SATSANG_SABHA: UNBOUNDED},
        auto_select=[SATSANG_SABHA],
    ),
    _plan(
        "all_samaiya",
        "Annual Grand Sponsorships - All Samaiya",
        "5001",
        {SAMAIYA: UNBOUNDED, MAHILA_SAMAIYA: Finite(0), SATSANG_SABHA: Finite(0)},
        auto_select=[SAMAIYA],
    ),
    _plan(
        "all_sabha_samaiya",
        "Annual Grand Sponsorships - All Weekly Satsang Sabha & Samaiya",
        "11001",
        {SAMAIYA: UNBOUNDED, MAHILA_SAMAIYA: Finite(0), SATSANG_SABHA: UNBOUNDED},
        auto_select=[SAMAIYA, SATSANG_SABHA],
    ),
)


class PlanCatalog:
    """Lookup over a fixed set of sponsorship plans."""

    def __init__(self, plans: tuple[SponsorshipPlan, ...] = SPONSORSHIP_PLANS) -> None:
        self._plans = {plan.id: plan for plan in plans}

    def all(self) -> list[SponsorshipPlan]:
        return list(self._plans.values())

    def get(self, plan_id: str) -> SponsorshipPlan:
        """Return a plan by id.

        Raises:
            PlanNotFoundError: If no plan has this id.
        """
        try:
            return self._plans[plan_id]
        except KeyError:
            raise PlanNotFoundError(plan_id) from None

    def __contains__(self, plan_id: object) -> bool:
        return plan_id in self._plans
