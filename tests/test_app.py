"""Tests for the application session.

**Feature: invers-wealth**
"""

import random
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from invers.app import InversApp
from invers.db import KeyValueStore, SnapshotAdapter
from invers.feeds import PriceFeedSimulator
from invers.models import MonthlyReport
from invers.models.profile import MAX_IMAGE_BYTES
from invers.notify import BaseNotifier, SchedulerState


class RecordingNotifier(BaseNotifier):
    def __init__(self, permission="granted"):
        self._permission = permission
        self.requests = 0
        self.delivered = []

    def permission(self):
        return self._permission

    def request_permission(self):
        self.requests += 1
        self._permission = "granted"
        return self._permission

    def deliver(self, title, body):
        self.delivered.append(title)


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def db_path():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "invers.db"


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 3, 1, 8, 59, 0))


def make_app(db_path, clock, notifier=None, quota_bytes=None):
    adapter = SnapshotAdapter(KeyValueStore(db_path, quota_bytes=quota_bytes))
    feed = PriceFeedSimulator(rng=random.Random(0), clock=clock)
    return InversApp(adapter, notifier or RecordingNotifier(), feed=feed, clock=clock)


class TestPersistOnMutation:
    def test_state_survives_restart(self, db_path, clock):
        app = make_app(db_path, clock)
        app.toggle_day(0, 1)
        app.toggle_day(0, 2)
        app.update_report(0, "profit", "500")
        app.update_report(0, "loss", 100)
        app.save_report(0)
        app.update_report(1, "profit", 1000)
        app.set_profile_name("Asha")
        app.set_dark_mode(True)
        app.set_color_theme("pink")
        app.enable_notifications()
        app.set_notification_time("21:30")

        restarted = make_app(db_path, clock)

        assert restarted.snapshot() == app.snapshot()
        assert restarted.ledger.contributed_days(0) == [1, 2]
        assert restarted.report(0) == MonthlyReport(profit=500, loss=100, locked=True)
        assert restarted.net_balance().net == 400
        assert restarted.profile.name == "Asha"
        assert restarted.theme.color_key == "pink"
        assert restarted.scheduler.settings.enabled is True
        assert restarted.scheduler.settings.time == "21:30"

    def test_stats_follow_ledger(self, db_path, clock):
        app = make_app(db_path, clock)
        for day in range(1, 6):
            app.toggle_day(2, day)
        stats = app.stats()
        assert stats.total_days == 5
        assert stats.invested_btc == 500
        assert stats.units_btc == pytest.approx(500 / app.quote.btc)

    def test_day_outside_planner_year_rejected(self, db_path, clock):
        app = make_app(db_path, clock)
        with pytest.raises(ValueError):
            app.toggle_day(1, 29)  # 2025 is not a leap year
        assert app.ledger.total_days() == 0

    def test_locked_report_edit_is_silent(self, db_path, clock):
        app = make_app(db_path, clock)
        app.update_report(4, "note", "done")
        app.save_report(4)
        assert app.update_report(4, "note", "changed") is False
        assert app.report(4).note == "done"

    def test_rejected_multi_field_edit_persists_nothing(self, db_path, clock):
        app = make_app(db_path, clock)
        with pytest.raises(ValueError):
            app.update_report_fields(2, {"profit": "500", "loss": "-5"})
        assert app.report(2) is None
        assert make_app(db_path, clock).report(2) is None

        assert app.update_report_fields(2, {"profit": "500", "loss": "5"}) is True
        assert make_app(db_path, clock).report(2) == MonthlyReport(profit=500, loss=5)

    def test_unknown_color_rejected(self, db_path, clock):
        app = make_app(db_path, clock)
        with pytest.raises(ValueError):
            app.set_color_theme("purple")
        assert app.theme.color_key == "green"

    def test_write_failure_keeps_memory_state(self, db_path, clock):
        app = make_app(db_path, clock, quota_bytes=400)
        app.toggle_day(0, 1)
        assert app.last_save_ok is True

        app.set_profile_name("x" * 1000)

        assert app.last_save_ok is False
        assert app.profile.name == "x" * 1000
        app.toggle_day(0, 2)
        assert app.ledger.total_days() == 2
        assert make_app(db_path, clock).ledger.total_days() == 1


class TestProfileImage:
    def test_image_accepted(self, db_path, clock):
        app = make_app(db_path, clock)
        assert app.set_profile_image(b"\x89PNG....", "image/png") is True
        assert app.profile.image.startswith("data:image/png;base64,")
        assert make_app(db_path, clock).profile.image == app.profile.image

    def test_oversized_image_rejected(self, db_path, clock):
        app = make_app(db_path, clock)
        before = app.snapshot()
        assert app.set_profile_image(b"\0" * (MAX_IMAGE_BYTES + 1)) is False
        assert app.snapshot() == before

    def test_image_at_cap_accepted(self, db_path, clock):
        app = make_app(db_path, clock)
        assert app.set_profile_image(b"\0" * MAX_IMAGE_BYTES) is True


class TestTimers:
    def test_prices_tick_on_loop(self, db_path, clock):
        app = make_app(db_path, clock)
        app.start()
        first = app.quote

        clock.now += timedelta(seconds=3)
        app.run_pending()

        assert app.quote != first
        app.stop()
        assert app.loop.timers == []

    def test_reminder_only_polled_when_enabled(self, db_path, clock):
        notifier = RecordingNotifier()
        app = make_app(db_path, clock, notifier)
        app.start()
        assert [timer.name for timer in app.loop.timers] == ["prices"]

        app.enable_notifications()
        assert sorted(timer.name for timer in app.loop.timers) == ["prices", "reminder"]

        # Reminder at 09:00; clock starts 08:59:00
        for _ in range(6):
            clock.now += timedelta(seconds=30)
            app.run_pending()
        assert notifier.delivered == ["Invers Wealth Reminder"]
        assert app.scheduler.state is SchedulerState.FIRED_TODAY

        app.disable_notifications()
        assert [timer.name for timer in app.loop.timers] == ["prices"]
        app.stop()

    def test_enabled_on_load_starts_polling(self, db_path, clock):
        make_app(db_path, clock).enable_notifications()
        app = make_app(db_path, clock)
        app.start()
        assert sorted(timer.name for timer in app.loop.timers) == ["prices", "reminder"]
        app.stop()

    def test_enable_requests_undetermined_permission(self, db_path, clock):
        notifier = RecordingNotifier(permission="undetermined")
        app = make_app(db_path, clock, notifier)
        app.enable_notifications()
        assert notifier.requests == 1

    def test_test_notification(self, db_path, clock):
        notifier = RecordingNotifier()
        app = make_app(db_path, clock, notifier)
        assert app.test_notification() is True
        assert notifier.delivered == ["Invers Wealth Test"]
        assert app.scheduler.last_fired_date is None
