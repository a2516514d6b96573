"""Database health check and wake-up for auto-suspending database backends."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections

logger = logging.getLogger(__name__)

IDLE_MARKERS = (
    "timeout",
    "econnrefused",
    "connection",
    "cannot open server",
    "server was not found",
)


@dataclass(frozen=True)
class HealthStatus:
    is_healthy: bool
    is_idle: bool
    message: str
    last_checked: datetime
    response_time_ms: int | None = None

    def to_dict(self) -> dict:
        return {
            "is_healthy": self.is_healthy,
            "is_idle": self.is_idle,
            "message": self.message,
            "last_checked": self.last_checked.isoformat(),
            "response_time_ms": self.response_time_ms,
        }


def select_one(alias: str = DEFAULT_DB_ALIAS) -> None:
    """Run a trivial query, dropping the connection if it turns out broken."""
    connection = connections[alias]
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError:
        connection.close()
        raise


class DatabaseHealth:
    """Checks whether the database answers and nudges it awake if not."""

    def __init__(
        self,
        query: Callable[[], None] = select_one,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._query = query
        self._sleep = sleep
        self._clock = clock

    def check(self) -> HealthStatus:
        started = self._clock()
        try:
            self._query()
        except Exception as exc:
            elapsed = int((self._clock() - started) * 1000)
            is_idle = any(marker in str(exc).lower() for marker in IDLE_MARKERS)
            logger.warning("Database health check failed: %s", exc)
            return HealthStatus(
                is_healthy=False,
                is_idle=is_idle,
                message=(
                    "Database is idle or sleeping. Attempting to wake it up..."
                    if is_idle
                    else "Database error"
                ),
                last_checked=datetime.now(timezone.utc),
                response_time_ms=elapsed,
            )

        return HealthStatus(
            is_healthy=True,
            is_idle=False,
            message="Database is connected and responsive",
            last_checked=datetime.now(timezone.utc),
            response_time_ms=int((self._clock() - started) * 1000),
        )

    def wake_up(self, max_attempts: int = 3, delay: float = 2.0) -> HealthStatus:
        """Poll the database until it answers or ``max_attempts`` run out."""
        logger.info("Attempting to wake up database")
        status = None
        for attempt in range(1, max_attempts + 1):
            logger.info("Wake-up attempt %d of %d", attempt, max_attempts)
            status = self.check()
            if status.is_healthy:
                logger.info("Database is awake and responsive")
                return status
            if attempt < max_attempts:
                self._sleep(delay)

        return status or HealthStatus(
            is_healthy=False,
            is_idle=True,
            message="Failed to wake up database after multiple attempts",
            last_checked=datetime.now(timezone.utc),
        )
