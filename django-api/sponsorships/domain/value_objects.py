"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Self
from uuid import UUID

# Persisted quantity meaning "all units of the event".
ALL_UNITS = -1


@dataclass(frozen=True)
class EventId:
    """Identifier for an Event (a short slug such as ``event_a``)."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("EventId cannot be blank")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RegistrationId:
    """Unique identifier for a Registration."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=Decimal("0"))

    def __add__(self, other: "Money") -> "Money":
        return Money(amount=self.amount + other.amount)

    def times(self, count: int) -> "Money":
        return Money(amount=self.amount * count)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Finite:
    """A capped limit; ``Finite(0)`` means not eligible."""

    count: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("Limit cannot be negative")

    @property
    def is_zero(self) -> bool:
        return self.count == 0

    def resolve(self, available: int) -> int:
        return self.count

    def to_quantity(self) -> int:
        return self.count

    def __str__(self) -> str:
        return str(self.count)


@dataclass(frozen=True)
class Unbounded:
    """A limit granting every available unit."""

    is_zero = False

    def resolve(self, available: int) -> int:
        return available

    def to_quantity(self) -> int:
        return ALL_UNITS

    def __str__(self) -> str:
        return "All"


Limit = Finite | Unbounded

NO_LIMIT = Finite(0)
UNBOUNDED = Unbounded()


def parse_limit(raw: int | str | None) -> Limit:
    """Parse a wire value (an integer or ``"ALL"``) into a Limit."""
    if raw is None:
        return NO_LIMIT
    if isinstance(raw, str):
        if raw.strip().upper() == "ALL":
            return UNBOUNDED
        if not raw.strip().lstrip("-").isdigit():
            raise ValueError(f"Invalid limit: {raw!r}")
        raw = int(raw)
    if isinstance(raw, bool):
        raise ValueError("Invalid limit")
    return Finite(count=raw)


def dump_limit(limit: Limit) -> int | str:
    """Inverse of :func:`parse_limit`."""
    if isinstance(limit, Unbounded):
        return "ALL"
    return limit.count
