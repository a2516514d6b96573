"""Per-session wizard selection state.

A SelectionState is an immutable snapshot. Allocator operations return a new
state and never modify the one they were given, so a state can be stored in a
session as plain data and restored between requests.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Self

from sponsorships.domain.value_objects import (
    NO_LIMIT,
    EventId,
    Limit,
    dump_limit,
    parse_limit,
)


@dataclass(frozen=True)
class SelectionState:
    """Plan selections, supplemental selections and supplemental limits.

    Dates are kept in the order they were added; that order decides which
    dates survive when a supplemental limit is lowered.
    """

    plan_id: str | None = None
    plan_selections: dict[EventId, tuple[date, ...]] = field(default_factory=dict)
    supplemental_selections: dict[EventId, tuple[date, ...]] = field(
        default_factory=dict
    )
    supplemental_limits: dict[EventId, Limit] = field(default_factory=dict)

    def plan_dates(self, event_id: EventId) -> tuple[date, ...]:
        return self.plan_selections.get(event_id, ())

    def supplemental_dates(self, event_id: EventId) -> tuple[date, ...]:
        return self.supplemental_selections.get(event_id, ())

    def supplemental_limit(self, event_id: EventId) -> Limit:
        return self.supplemental_limits.get(event_id, NO_LIMIT)

    def with_plan_dates(self, event_id: EventId, dates: tuple[date, ...]) -> Self:
        selections = dict(self.plan_selections)
        selections[event_id] = dates
        return type(self)(
            plan_id=self.plan_id,
            plan_selections=selections,
            supplemental_selections=dict(self.supplemental_selections),
            supplemental_limits=dict(self.supplemental_limits),
        )

    def with_supplemental(
        self, event_id: EventId, limit: Limit, dates: tuple[date, ...]
    ) -> Self:
        selections = dict(self.supplemental_selections)
        selections[event_id] = dates
        limits = dict(self.supplemental_limits)
        limits[event_id] = limit
        return type(self)(
            plan_id=self.plan_id,
            plan_selections=dict(self.plan_selections),
            supplemental_selections=selections,
            supplemental_limits=limits,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "plan_id": self.plan_id,
            "plan_selections": {
                str(event_id): [d.isoformat() for d in dates]
                for event_id, dates in self.plan_selections.items()
                if dates
            },
            "supplemental_selections": {
                str(event_id): [d.isoformat() for d in dates]
                for event_id, dates in self.supplemental_selections.items()
                if dates
            },
            "supplemental_limits": {
                str(event_id): dump_limit(limit)
                for event_id, limit in self.supplemental_limits.items()
                if not limit.is_zero
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Self:
        if not data:
            return cls()
        return cls(
            plan_id=data.get("plan_id") or None,
            plan_selections={
                EventId(event_id): tuple(date.fromisoformat(d) for d in dates)
                for event_id, dates in data.get("plan_selections", {}).items()
            },
            supplemental_selections={
                EventId(event_id): tuple(date.fromisoformat(d) for d in dates)
                for event_id, dates in data.get("supplemental_selections", {}).items()
            },
            supplemental_limits={
                EventId(event_id): parse_limit(raw)
                for event_id, raw in data.get("supplemental_limits", {}).items()
            },
        )


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of a date toggle; ``warning`` is set when it was rejected."""

    state: SelectionState
    warning: str | None = None

    @property
    def accepted(self) -> bool:
        return self.warning is None
