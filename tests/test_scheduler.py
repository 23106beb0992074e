"""Tests for the daily reminder scheduler.

**Feature: invers-wealth**
"""

from datetime import date, datetime, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from invers.models import NotificationSettings
from invers.notify import BaseNotifier, NotificationError, ReminderScheduler, SchedulerState


class FakeNotifier(BaseNotifier):
    """Records deliveries; permission answers are scripted."""

    def __init__(self, permission="granted", answer="granted", fail=False):
        self._permission = permission
        self._answer = answer
        self._fail = fail
        self.requests = 0
        self.delivered: list[tuple[str, str]] = []

    def permission(self):
        return self._permission

    def request_permission(self):
        self.requests += 1
        self._permission = self._answer
        return self._permission

    def deliver(self, title, body):
        if self._fail:
            raise NotificationError("blocked")
        self.delivered.append((title, body))


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def poll_day(scheduler: ReminderScheduler, clock: FakeClock, day: date, step_seconds: int = 30) -> list[datetime]:
    """Tick every step across one day; return the times that attempted."""
    attempts = []
    clock.now = datetime(day.year, day.month, day.day, 0, 0, 15)
    end = clock.now + timedelta(days=1)
    while clock.now < end:
        if scheduler.tick():
            attempts.append(clock.now)
        clock.now += timedelta(seconds=step_seconds)
    return attempts


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 3, 1, 8, 0))


def make_scheduler(notifier, clock, time="09:00", enabled=True):
    return ReminderScheduler(notifier, NotificationSettings(enabled=enabled, time=time), clock)


class TestOncePerDay:
    """
    **Property 8: At Most One Reminder Per Day**

    *For any* target time, polling across consecutive days attempts
    exactly one reminder per day, at the first matching tick.
    """

    def test_one_attempt_per_day(self, clock):
        notifier = FakeNotifier()
        scheduler = make_scheduler(notifier, clock)

        first = poll_day(scheduler, clock, date(2025, 3, 1))
        second = poll_day(scheduler, clock, date(2025, 3, 2))

        assert first == [datetime(2025, 3, 1, 9, 0, 15)]
        assert second == [datetime(2025, 3, 2, 9, 0, 15)]
        assert len(notifier.delivered) == 2
        assert notifier.delivered[0][0] == ReminderScheduler.REMINDER_TITLE

    @given(
        hour=st.integers(0, 23),
        minute=st.integers(0, 59),
        step=st.sampled_from([10, 20, 30, 60]),
    )
    @settings(max_examples=50, deadline=None)
    def test_any_time_fires_once(self, hour, minute, step):
        clock = FakeClock(datetime(2025, 6, 1))
        notifier = FakeNotifier()
        scheduler = make_scheduler(notifier, clock, time=f"{hour:02d}:{minute:02d}")

        attempts = poll_day(scheduler, clock, date(2025, 6, 1), step_seconds=step)

        assert len(attempts) == 1
        assert (attempts[0].hour, attempts[0].minute) == (hour, minute)

    def test_state_transitions(self, clock):
        scheduler = make_scheduler(FakeNotifier(), clock, enabled=False)
        assert scheduler.state is SchedulerState.DISABLED

        scheduler.enable()
        assert scheduler.state is SchedulerState.ARMED

        clock.now = datetime(2025, 3, 1, 9, 0)
        scheduler.tick()
        assert scheduler.state is SchedulerState.FIRED_TODAY
        assert scheduler.last_fired_date == date(2025, 3, 1)

        # Midnight rollover re-arms through the date check alone
        clock.now = datetime(2025, 3, 2, 0, 0, 5)
        assert scheduler.state is SchedulerState.ARMED

        scheduler.disable()
        assert scheduler.state is SchedulerState.DISABLED

    def test_disabled_never_fires(self, clock):
        notifier = FakeNotifier()
        scheduler = make_scheduler(notifier, clock, enabled=False)
        assert poll_day(scheduler, clock, date(2025, 3, 1)) == []
        assert notifier.delivered == []

    def test_changing_time_same_day_does_not_refire(self, clock):
        scheduler = make_scheduler(FakeNotifier(), clock)
        assert scheduler.tick(datetime(2025, 3, 1, 9, 0)) is True
        scheduler.set_time("10:00")
        assert scheduler.tick(datetime(2025, 3, 1, 10, 0)) is False

    @pytest.mark.parametrize("bad", ["9:00", "24:00", "12:60", "noon", ""])
    def test_invalid_time_rejected(self, clock, bad):
        scheduler = make_scheduler(FakeNotifier(), clock)
        with pytest.raises(ValueError):
            scheduler.set_time(bad)
        assert scheduler.settings.time == "09:00"


class TestPermission:
    def test_undetermined_permission_is_requested(self, clock):
        notifier = FakeNotifier(permission="undetermined", answer="granted")
        scheduler = make_scheduler(notifier, clock)

        assert scheduler.tick(datetime(2025, 3, 1, 9, 0)) is True

        assert notifier.requests == 1
        assert len(notifier.delivered) == 1

    def test_denied_skips_delivery_but_marks_day(self, clock):
        notifier = FakeNotifier(permission="denied")
        scheduler = make_scheduler(notifier, clock)

        assert scheduler.tick(datetime(2025, 3, 1, 9, 0)) is True
        assert scheduler.tick(datetime(2025, 3, 1, 9, 0, 30)) is False

        assert notifier.delivered == []
        assert notifier.requests == 0
        assert scheduler.last_fired_date == date(2025, 3, 1)

    def test_request_denied_marks_day(self, clock):
        notifier = FakeNotifier(permission="undetermined", answer="denied")
        scheduler = make_scheduler(notifier, clock)

        scheduler.tick(datetime(2025, 3, 1, 9, 0))

        assert notifier.delivered == []
        assert scheduler.state is SchedulerState.FIRED_TODAY

    def test_delivery_error_is_not_raised(self, clock):
        notifier = FakeNotifier(fail=True)
        scheduler = make_scheduler(notifier, clock)
        assert scheduler.tick(datetime(2025, 3, 1, 9, 0)) is True
        assert scheduler.last_fired_date == date(2025, 3, 1)


class TestManualTest:
    def test_send_test_ignores_time_and_keeps_date(self, clock):
        notifier = FakeNotifier()
        scheduler = make_scheduler(notifier, clock)

        assert scheduler.send_test() is True

        assert notifier.delivered == [(ReminderScheduler.TEST_TITLE, ReminderScheduler.TEST_BODY)]
        assert scheduler.last_fired_date is None
        assert scheduler.tick(datetime(2025, 3, 1, 9, 0)) is True

    def test_send_test_works_while_disabled(self, clock):
        notifier = FakeNotifier()
        assert make_scheduler(notifier, clock, enabled=False).send_test() is True

    def test_send_test_denied(self, clock):
        notifier = FakeNotifier(permission="undetermined", answer="denied")
        assert make_scheduler(notifier, clock).send_test() is False
        assert notifier.requests == 1
