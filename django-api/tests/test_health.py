"""Tests for the database health check and wake-up."""

import pytest
from django.db import OperationalError

from sponsorships.stores.health import DatabaseHealth


class ScriptedQuery:
    """Fails with the given errors in order, then succeeds."""

    def __init__(self, errors=()):
        self.errors = list(errors)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)


def make_health(query, sleeps=None):
    sleeps = [] if sleeps is None else sleeps
    return DatabaseHealth(query=query, sleep=sleeps.append, clock=lambda: 0.0)


class TestCheck:
    """Tests for DatabaseHealth.check."""

    def test_healthy(self):
        status = make_health(ScriptedQuery()).check()

        assert status.is_healthy
        assert not status.is_idle
        assert status.message == "Database is connected and responsive"
        assert status.response_time_ms == 0

    def test_idle_failure(self):
        query = ScriptedQuery([OperationalError("Connection timeout expired")])

        status = make_health(query).check()

        assert not status.is_healthy
        assert status.is_idle
        assert status.message == "Database is idle or sleeping. Attempting to wake it up..."

    def test_other_failure_is_not_idle(self):
        query = ScriptedQuery([OperationalError("permission denied")])

        status = make_health(query).check()

        assert not status.is_healthy
        assert not status.is_idle
        assert status.message == "Database error"

    def test_to_dict(self):
        data = make_health(ScriptedQuery()).check().to_dict()
        assert set(data) == {
            "is_healthy",
            "is_idle",
            "message",
            "last_checked",
            "response_time_ms",
        }


class TestWakeUp:
    """Tests for DatabaseHealth.wake_up."""

    def test_returns_once_healthy(self):
        sleeps = []
        query = ScriptedQuery([OperationalError("timeout"), OperationalError("timeout")])

        status = make_health(query, sleeps).wake_up(max_attempts=5, delay=3.0)

        assert status.is_healthy
        assert query.calls == 3
        assert sleeps == [3.0, 3.0]

    def test_gives_up_after_max_attempts(self):
        sleeps = []
        query = ScriptedQuery([OperationalError("connection refused")] * 3)

        status = make_health(query, sleeps).wake_up(max_attempts=3, delay=1.0)

        assert not status.is_healthy
        assert status.is_idle
        assert query.calls == 3
        assert sleeps == [1.0, 1.0]


@pytest.mark.django_db
class TestAgainstDatabase:
    """The default query runs against the configured database."""

    def test_select_one(self):
        assert DatabaseHealth().check().is_healthy
