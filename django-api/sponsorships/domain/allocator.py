"""Registration allocator: the wizard's selection, validation and pricing rules.

The wizard runs in three phases:

1. choose a sponsorship plan and pick dates against its per-event allotment
   (plan selections),
2. optionally buy extra units per event against a user-chosen limit
   (supplemental selections),
3. price the whole thing and produce the final per-event allocation.

Plan-step completion requires the allotment to be used exactly. Supplemental
completion requires at least as many dates as were paid for; more cannot be
selected because the toggle refuses once the limit is reached. A date never
belongs to both sets of the same event: the toggles refuse such a selection
up front rather than validation catching it later.

All operations are pure: they take a SelectionState and return a new one.
"""

from dataclasses import dataclass, field
from datetime import date

from sponsorships.domain.errors import EventNotFoundError, InvalidLimitError
from sponsorships.domain.models import Allocation, Event, SponsorshipPlan
from sponsorships.domain.plans import PlanCatalog
from sponsorships.domain.selection import SelectionState, ToggleResult
from sponsorships.domain.value_objects import (
    NO_LIMIT,
    EventId,
    Finite,
    Limit,
    Money,
    Unbounded,
)


@dataclass(frozen=True)
class Catalog:
    """Events in display order with their available dates in date order."""

    events: tuple[Event, ...]
    available_dates: dict[EventId, tuple[date, ...]] = field(default_factory=dict)

    def dates_for(self, event_id: EventId) -> tuple[date, ...]:
        return self.available_dates.get(event_id, ())


class RegistrationAllocator:
    """Applies wizard rules over an already-fetched catalog."""

    def __init__(self, catalog: Catalog, plans: PlanCatalog | None = None) -> None:
        self._catalog = catalog
        self._plans = plans or PlanCatalog()
        self._events = {event.id: event for event in catalog.events}

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def plans(self) -> PlanCatalog:
        return self._plans

    def _event(self, event_id: EventId) -> Event:
        try:
            return self._events[event_id]
        except KeyError:
            raise EventNotFoundError(str(event_id)) from None

    def _plan(self, state: SelectionState) -> SponsorshipPlan | None:
        if not state.plan_id:
            return None
        return self._plans.get(state.plan_id)

    def plan_limit(self, state: SelectionState, event_id: EventId) -> Limit:
        plan = self._plan(state)
        return plan.limit_for(event_id) if plan else NO_LIMIT

    def _supplemental_capacity(self, state: SelectionState, event_id: EventId) -> int:
        return len(self._catalog.dates_for(event_id)) - len(state.plan_dates(event_id))

    def reconcile(self, state: SelectionState) -> SelectionState:
        """Drop selections the current catalog no longer offers.

        A restored state may name events or dates that were removed since it
        was stored; those are dropped, everything else is kept in order.
        """

        def still_offered(selections):
            return {
                event_id: tuple(d for d in dates if d in self._catalog.dates_for(event_id))
                for event_id, dates in selections.items()
                if event_id in self._events
            }

        return SelectionState(
            plan_id=state.plan_id if state.plan_id in self._plans else None,
            plan_selections=still_offered(state.plan_selections),
            supplemental_selections=still_offered(state.supplemental_selections),
            supplemental_limits={
                event_id: limit
                for event_id, limit in state.supplemental_limits.items()
                if event_id in self._events
            },
        )

    # Phase 1: plan selections

    def select_plan(self, plan_id: str | None) -> SelectionState:
        """Start over with ``plan_id`` (or no plan).

        Events on the plan's auto-select list whose allotment is unbounded are
        pre-filled with every available date.

        Raises:
            PlanNotFoundError: If ``plan_id`` names no known plan.
        """
        if not plan_id:
            return SelectionState()

        plan = self._plans.get(plan_id)
        selections = {}
        for event_id in plan.auto_select:
            if event_id in self._events and isinstance(
                plan.limit_for(event_id), Unbounded
            ):
                selections[event_id] = self._catalog.dates_for(event_id)
        return SelectionState(plan_id=plan.id, plan_selections=selections)

    def toggle_plan_date(
        self, state: SelectionState, event_id: EventId, day: date
    ) -> ToggleResult:
        event = self._event(event_id)
        if self._plan(state) is None:
            return ToggleResult(
                state,
                "Please select a sponsorship plan first, "
                "or continue to individual selection.",
            )

        selected = state.plan_dates(event_id)
        if day in selected:
            return ToggleResult(
                state.with_plan_dates(
                    event_id, tuple(d for d in selected if d != day)
                )
            )

        available = self._catalog.dates_for(event_id)
        if day not in available:
            return ToggleResult(
                state, f"{day.isoformat()} is not an available date for {event.name}."
            )
        if day in state.supplemental_dates(event_id):
            return ToggleResult(
                state,
                f"{day.isoformat()} is already selected as an additional date "
                f"for {event.name}.",
            )

        limit = self.plan_limit(state, event_id)
        if limit.is_zero:
            return ToggleResult(
                state, f"{event.name} is not included in your sponsorship plan."
            )
        effective = limit.resolve(len(available))
        if len(selected) >= effective:
            return ToggleResult(
                state,
                f"You have reached the limit of {effective} days for {event.name}.",
            )
        return ToggleResult(state.with_plan_dates(event_id, selected + (day,)))

    def validate_plan_step(self, state: SelectionState) -> list[str]:
        """Return one message per event whose plan allotment is not used exactly."""
        violations = []
        for event in self._catalog.events:
            limit = self.plan_limit(state, event.id)
            if limit.is_zero:
                continue
            available = len(self._catalog.dates_for(event.id))
            selected = len(state.plan_dates(event.id))
            if isinstance(limit, Unbounded):
                if selected != available:
                    violations.append(
                        f"Please select all {available} dates for {event.name} "
                        f"({selected} selected)."
                    )
            else:
                required = min(limit.count, available)
                if selected != required:
                    violations.append(
                        f"Please select exactly {required} dates for {event.name} "
                        f"({selected} selected)."
                    )
        return violations

    # Phase 2: supplemental selections

    def set_supplemental_limit(
        self, state: SelectionState, event_id: EventId, limit: Limit
    ) -> SelectionState:
        """Set how many extra units of an event the user buys.

        Lowering the limit below the current selection keeps the dates that
        were added first and drops the most recently added ones. ``Unbounded``
        on a date event selects every available date not already claimed by
        the plan.

        Raises:
            EventNotFoundError: If the event is not in the catalog.
            InvalidLimitError: If a finite limit exceeds ``individual_upto``,
                or for a date event, the dates the plan leaves unclaimed.
        """
        event = self._event(event_id)
        if not event.date_selection_required:
            if isinstance(limit, Finite) and limit.count > event.individual_upto:
                raise InvalidLimitError(event.name, event.individual_upto)
            return state.with_supplemental(event_id, limit, ())

        upto = min(event.individual_upto, self._supplemental_capacity(state, event_id))
        if isinstance(limit, Finite) and limit.count > upto:
            raise InvalidLimitError(event.name, upto)

        current = state.supplemental_dates(event_id)
        if isinstance(limit, Unbounded):
            claimed = set(state.plan_dates(event_id)) | set(current)
            extra = tuple(
                d for d in self._catalog.dates_for(event_id) if d not in claimed
            )
            return state.with_supplemental(event_id, limit, current + extra)
        return state.with_supplemental(event_id, limit, current[: limit.count])

    def toggle_supplemental_date(
        self, state: SelectionState, event_id: EventId, day: date
    ) -> ToggleResult:
        event = self._event(event_id)
        if not event.date_selection_required:
            return ToggleResult(
                state, f"{event.name} does not require date selection."
            )
        limit = state.supplemental_limit(event_id)
        if limit.is_zero:
            return ToggleResult(state, f"Please set a limit for {event.name} first.")

        selected = state.supplemental_dates(event_id)
        if day in selected:
            return ToggleResult(
                state.with_supplemental(
                    event_id, limit, tuple(d for d in selected if d != day)
                )
            )

        if day not in self._catalog.dates_for(event_id):
            return ToggleResult(
                state, f"{day.isoformat()} is not an available date for {event.name}."
            )
        if day in state.plan_dates(event_id):
            return ToggleResult(
                state,
                f"{day.isoformat()} is already included in your sponsorship plan "
                f"for {event.name}.",
            )

        effective = limit.resolve(self._supplemental_capacity(state, event_id))
        if len(selected) >= effective:
            return ToggleResult(
                state,
                f"You have reached the limit of {effective} days for {event.name}.",
            )
        return ToggleResult(
            state.with_supplemental(event_id, limit, selected + (day,))
        )

    def validate_supplemental_step(self, state: SelectionState) -> list[str]:
        """Return one message per date event with fewer dates than paid for."""
        violations = []
        for event in self._catalog.events:
            limit = state.supplemental_limit(event.id)
            if limit.is_zero or not event.date_selection_required:
                continue
            required = limit.resolve(self._supplemental_capacity(state, event.id))
            selected = len(state.supplemental_dates(event.id))
            if selected < required:
                violations.append(
                    f"Please select {required} additional dates for {event.name} "
                    f"({selected} selected)."
                )
        return violations

    # Phase 3: pricing and allocation

    def compute_total(self, state: SelectionState) -> Money:
        plan = self._plan(state)
        total = plan.price if plan else Money.zero()
        for event in self._catalog.events:
            limit = state.supplemental_limit(event.id)
            if isinstance(limit, Unbounded):
                total = total + event.all_cost
            else:
                total = total + event.individual_cost.times(limit.count)
        return total

    def finalize(self, state: SelectionState) -> dict[EventId, Allocation]:
        """Merge both selection sets into one allocation per selected event."""
        allocations = {}
        for event in self._catalog.events:
            dates = sorted(
                set(state.plan_dates(event.id)) | set(state.supplemental_dates(event.id))
            )
            limit = state.supplemental_limit(event.id)
            if dates:
                allocations[event.id] = Allocation(event_id=event.id, dates=tuple(dates))
            elif not event.date_selection_required and not limit.is_zero:
                allocations[event.id] = Allocation(
                    event_id=event.id, quantity=limit.to_quantity()
                )
        return allocations
