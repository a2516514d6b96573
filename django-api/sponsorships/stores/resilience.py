"""Retrying executor for database operations against an auto-suspending database.

A serverless database that has gone idle answers its first queries with
connection or timeout errors until it has resumed. ``ResilientExecutor`` runs
one operation at a time and, on such an error, tries to wake the database
and runs the operation again, up to ``max_retries`` attempts in total:

    Attempting(n) --ok--------------------------------------> Done
    Attempting(n) --fatal-----------------------------------> Failed
    Attempting(n) --transient, n < max--> wake up, sleep --> Attempting(n + 1)
    Attempting(n) --transient, n = max----------------------> Failed (exhausted)

Errors are transient when their text contains one of ``TRANSIENT_MARKERS``
(case-insensitive). Everything else fails immediately.

Reads are raced against ``timeout`` on a worker thread and a late result is
dropped. Writes always run on the calling thread: an abandoned worker could
still commit after the caller gave up and retried. Their time bound is the
database's own statement timeout, and a write retried after a lost
acknowledgement must be idempotent.
"""

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from enum import Enum
from typing import Self, TypeVar

from django.conf import settings
from django.db import connections

from sponsorships.domain.errors import DatabaseUnavailableError, DomainError
from sponsorships.stores.health import DatabaseHealth

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_MARKERS = ("timeout", "connection", "econnrefused", "idle", "sleeping")

IDLE_MESSAGE = "Database is currently idle. Please refresh the page and try again."
UNREACHABLE_MESSAGE = "Unable to connect to database. Please try again in a moment."


class FailureKind(Enum):
    TRANSIENT = "transient"
    FATAL = "fatal"


def classify_failure(error: BaseException) -> FailureKind:
    message = str(error).lower()
    if any(marker in message for marker in TRANSIENT_MARKERS):
        return FailureKind.TRANSIENT
    return FailureKind.FATAL


class QueryTimeoutError(Exception):
    """The operation did not settle within the per-attempt timeout."""

    def __init__(self, timeout: float) -> None:
        super().__init__("Database operation timeout")
        self.timeout = timeout


class RetriesExhaustedError(Exception):
    """Every attempt failed with a transient error.

    The message names the operation and the attempt count only. The last
    driver error is kept on ``last_error`` and chained as ``__cause__``.
    """

    def __init__(self, name: str, attempts: int, last_error: BaseException) -> None:
        super().__init__(f"{name} failed after {attempts} attempts")
        self.name = name
        self.attempts = attempts
        self.last_error = last_error


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 3
    retry_delay: float = 2.0
    timeout: float | None = 30.0
    wake_up_attempts: int = 2
    wake_up_delay: float | None = None

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")

    @property
    def effective_wake_up_delay(self) -> float:
        if self.wake_up_delay is None:
            return self.retry_delay
        return self.wake_up_delay

    @classmethod
    def from_settings(cls) -> Self:
        """Build a policy from ``settings.SPONSORSHIPS_DB_RESILIENCE``."""
        conf = getattr(settings, "SPONSORSHIPS_DB_RESILIENCE", {})
        return cls(
            max_retries=conf.get("MAX_RETRIES", cls.max_retries),
            retry_delay=conf.get("RETRY_DELAY", cls.retry_delay),
            timeout=conf.get("TIMEOUT", cls.timeout),
            wake_up_attempts=conf.get("WAKE_UP_ATTEMPTS", cls.wake_up_attempts),
            wake_up_delay=conf.get("WAKE_UP_DELAY", cls.wake_up_delay),
        )


def sanitize_failure(error: BaseException, name: str) -> str:
    """Map a terminal failure to a message that is safe to show to users."""
    cause = error.last_error if isinstance(error, RetriesExhaustedError) else error
    text = f"{error} {cause}".lower()
    if "timeout" in text or "idle" in text or "sleeping" in text:
        return IDLE_MESSAGE
    if "connection" in text or "econnrefused" in text:
        return UNREACHABLE_MESSAGE
    if isinstance(error, RetriesExhaustedError):
        return str(error)
    return f"{name} failed: {type(error).__name__}"


def _run_in_worker(operation: Callable[[], T]) -> T:
    try:
        return operation()
    finally:
        # Django connections are per thread; release the worker's.
        connections.close_all()


class ResilientExecutor:
    """Runs database operations with timeout, idle detection and retries."""

    def __init__(
        self,
        health: DatabaseHealth | None = None,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._health = health or DatabaseHealth()
        self._policy = policy or RetryPolicy()
        self._sleep = sleep

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def execute(
        self,
        operation: Callable[[], T],
        name: str = "Database operation",
        write: bool = False,
    ) -> T:
        """Run ``operation``, retrying transient failures.

        ``write`` operations are never raced against the timeout.

        Raises:
            RetriesExhaustedError: If every attempt failed transiently.
            DomainError: Passed through untouched from the operation.
            Exception: Any fatal error from the operation, untouched.
        """
        policy = self._policy
        for attempt in range(1, policy.max_retries + 1):
            try:
                return self._attempt(operation, write)
            except DomainError:
                raise
            except Exception as exc:
                if classify_failure(exc) is FailureKind.FATAL:
                    logger.info("%s failed with a non-retryable error", name)
                    raise
                if attempt == policy.max_retries:
                    logger.error(
                        "%s failed after %d attempts: %s", name, attempt, exc
                    )
                    raise RetriesExhaustedError(name, attempt, exc) from exc

                logger.warning(
                    "Database appears idle (attempt %d/%d): %s - waking up database",
                    attempt,
                    policy.max_retries,
                    exc,
                )
                status = self._health.wake_up(
                    max_attempts=policy.wake_up_attempts,
                    delay=policy.effective_wake_up_delay,
                )
                if status.is_healthy:
                    logger.info("Database is awake, retrying %s", name)
                else:
                    logger.warning("Wake-up attempt %d failed", attempt)
                self._sleep(policy.retry_delay)

        raise AssertionError("unreachable")

    def run_action(
        self,
        operation: Callable[[], T],
        name: str = "Database operation",
        write: bool = False,
    ) -> T:
        """Like :meth:`execute`, but terminal failures become user-safe.

        Raises:
            DatabaseUnavailableError: With a sanitized message; the raw error
                is logged and chained.
            DomainError: Passed through untouched from the operation.
        """
        try:
            return self.execute(operation, name, write)
        except DomainError:
            raise
        except Exception as exc:
            logger.exception("%s failed", name)
            raise DatabaseUnavailableError(sanitize_failure(exc, name)) from exc

    def _attempt(self, operation: Callable[[], T], write: bool) -> T:
        timeout = self._policy.timeout
        if timeout is None or write:
            return operation()

        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="db-attempt")
        future = pool.submit(_run_in_worker, operation)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            future.cancel()
            raise QueryTimeoutError(timeout) from None
        finally:
            pool.shutdown(wait=False)


def get_executor() -> ResilientExecutor:
    """Executor configured from Django settings."""
    return ResilientExecutor(policy=RetryPolicy.from_settings())
