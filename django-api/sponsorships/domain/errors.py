"""Domain error codes for the sponsorships module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    PLAN_NOT_FOUND = "PLAN_NOT_FOUND"
    REGISTRATION_NOT_FOUND = "REGISTRATION_NOT_FOUND"
    INVALID_REGISTRATION_ID = "INVALID_REGISTRATION_ID"
    INVALID_LIMIT = "INVALID_LIMIT"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not in the catalog."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        object.__setattr__(self, "event_id", event_id)


class PlanNotFoundError(DomainError):
    """Raised when a sponsorship plan id is unknown."""

    def __init__(self, plan_id: str) -> None:
        super().__init__(
            code=ErrorCode.PLAN_NOT_FOUND,
            message="Sponsorship plan not found",
        )
        object.__setattr__(self, "plan_id", plan_id)


class RegistrationNotFoundError(DomainError):
    """Raised when a registration does not exist."""

    def __init__(self, registration_id: str) -> None:
        super().__init__(
            code=ErrorCode.REGISTRATION_NOT_FOUND,
            message="Registration not found",
        )
        object.__setattr__(self, "registration_id", registration_id)


class InvalidRegistrationIdError(DomainError):
    """Raised when a registration ID is malformed."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_REGISTRATION_ID,
            message="Invalid registration ID format",
        )


class InvalidLimitError(DomainError):
    """Raised when a supplemental limit is outside what the event allows."""

    def __init__(self, event_name: str, upto: int) -> None:
        super().__init__(
            code=ErrorCode.INVALID_LIMIT,
            message=f"Limit for {event_name} must be between 0 and {upto}, or All",
        )


class NotAuthenticatedError(DomainError):
    """Raised when an admin-only operation has no acting user."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_AUTHENTICATED,
            message="User not authenticated",
        )


class DatabaseUnavailableError(DomainError):
    """Raised with a sanitized message when a database operation gives up."""

    def __init__(self, message: str) -> None:
        super().__init__(
            code=ErrorCode.DATABASE_UNAVAILABLE,
            message=message,
        )
