"""Application session: owns state, applies actions, persists.

InversApp holds the in-memory authoritative copy of everything the user
can change. Each action mutates that copy and then writes the full
snapshot through the SnapshotAdapter. A failed write is logged by the
adapter and leaves the in-memory state as it is.
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from invers.db import SnapshotAdapter
from invers.feeds import PriceFeedSimulator
from invers.ledger import LedgerStore, days_in_month
from invers.models import (
    ImageTooLargeError,
    MonthlyReport,
    PriceQuote,
    Profile,
    Snapshot,
    ThemePreference,
)
from invers.models.profile import THEME_COLORS
from invers.notify import BaseNotifier, ReminderScheduler
from invers.reports import MonthlyReportManager
from invers.runtime import CooperativeLoop, PeriodicTimer
from invers.stats import NetBalance, PortfolioStats, compute_stats, net_balance

logger = logging.getLogger(__name__)


class InversApp:
    """A running Invers Wealth session."""

    def __init__(
        self,
        adapter: SnapshotAdapter,
        notifier: BaseNotifier,
        feed: Optional[PriceFeedSimulator] = None,
        clock: Callable[[], datetime] = datetime.now,
        year: Optional[int] = None,
        poll_seconds: float = ReminderScheduler.POLL_SECONDS,
    ):
        """Load the stored snapshot and set up timers.

        Args:
            adapter: Snapshot persistence.
            notifier: Notification capability for reminders.
            feed: Price simulator; a default one is created if omitted.
            clock: Wall clock shared by all components.
            year: Calendar year of the planner; defaults to the clock's year.
            poll_seconds: Reminder polling cadence.
        """
        self._adapter = adapter
        self._notifier = notifier
        self._clock = clock

        snapshot = adapter.load()
        self.ledger = LedgerStore.from_dict(snapshot.ledger)
        self.reports = MonthlyReportManager.from_dict(snapshot.reports)
        self._profile = snapshot.profile
        self._theme = snapshot.theme
        self.scheduler = ReminderScheduler(notifier, snapshot.notification, clock)

        self.feed = feed or PriceFeedSimulator(clock=clock)
        self.year = year or clock().year
        self.last_save_ok = True

        self.loop = CooperativeLoop(clock=clock)
        self._price_timer = PeriodicTimer("prices", self.feed.interval, lambda now: self.feed.tick())
        self._reminder_timer = PeriodicTimer("reminder", poll_seconds, self.scheduler.tick)
        self._started = False

    # ==================== Lifecycle ====================

    def start(self) -> None:
        """Start the price feed timer and, if enabled, reminder polling."""
        if self._started:
            return
        self._started = True
        self.loop.add(self._price_timer)
        if self.scheduler.settings.enabled:
            self.loop.add(self._reminder_timer)

    def stop(self) -> None:
        """Cancel both timers."""
        self.loop.stop()
        self.loop.remove(self._price_timer)
        self.loop.remove(self._reminder_timer)
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def run_pending(self, now: Optional[datetime] = None) -> int:
        """Fire any due timers."""
        return self.loop.run_pending(now)

    # ==================== State ====================

    @property
    def profile(self) -> Profile:
        return self._profile

    @property
    def theme(self) -> ThemePreference:
        return self._theme

    @property
    def quote(self) -> PriceQuote:
        return self.feed.current

    def snapshot(self) -> Snapshot:
        """Current state as a Snapshot."""
        return Snapshot(
            ledger=self.ledger.to_dict(),
            reports=self.reports.to_dict(),
            profile=self._profile,
            theme=self._theme,
            notification=self.scheduler.settings,
        )

    def stats(self) -> PortfolioStats:
        """Contribution stats against the latest quote."""
        return compute_stats(self.ledger, self.feed.current)

    def net_balance(self) -> NetBalance:
        """Profit/loss over locked reports."""
        return net_balance(self.reports.to_dict())

    def days_in_month(self, month_index: int) -> int:
        return days_in_month(month_index, self.year)

    # ==================== Ledger ====================

    def toggle_day(self, month_index: int, day: int) -> bool:
        """Flip a day's contribution flag.

        Returns:
            The new flag value.

        Raises:
            ValueError: If the day does not exist in the planner year.
        """
        if day > self.days_in_month(month_index):
            raise ValueError(f"Day {day} does not exist in month {month_index + 1} of {self.year}")
        value = self.ledger.toggle(month_index, day)
        self._persist()
        return value

    # ==================== Reports ====================

    def update_report(
        self, month_index: int, field: str, value: Union[float, int, str, None]
    ) -> bool:
        """Edit a draft report field; locked reports are left untouched."""
        changed = self.reports.update(month_index, field, value)
        if changed:
            self._persist()
        return changed

    def update_report_fields(
        self, month_index: int, changes: dict[str, Union[float, int, str, None]]
    ) -> bool:
        """Edit several draft report fields, all or nothing, with one save."""
        changed = self.reports.update_many(month_index, changes)
        if changed:
            self._persist()
        return changed

    def save_report(self, month_index: int) -> bool:
        """Lock a month's report."""
        locked = self.reports.save(month_index)
        if locked:
            self._persist()
        return locked

    def delete_report(self, month_index: int) -> bool:
        """Delete a month's report, locked or not."""
        deleted = self.reports.delete(month_index)
        if deleted:
            self._persist()
        return deleted

    def report(self, month_index: int) -> Optional[MonthlyReport]:
        return self.reports.get(month_index)

    # ==================== Profile & theme ====================

    def set_profile_name(self, name: str) -> None:
        self._profile = self._profile.model_copy(update={"name": name})
        self._persist()

    def set_profile_image(self, payload: bytes, mime_type: str = "image/png") -> bool:
        """Set the profile image.

        Oversized images are rejected with a warning and change nothing.

        Returns:
            True if the image was accepted.
        """
        try:
            self._profile = self._profile.with_image(payload, mime_type)
        except ImageTooLargeError as e:
            logger.warning("%s", e)
            return False
        self._persist()
        return True

    def clear_profile_image(self) -> None:
        self._profile = self._profile.model_copy(update={"image": None})
        self._persist()

    def set_dark_mode(self, dark: bool) -> None:
        self._theme = self._theme.model_copy(update={"dark": dark})
        self._persist()

    def set_color_theme(self, color_key: str) -> None:
        """Pick the accent color.

        Raises:
            ValueError: If the color is not one of THEME_COLORS.
        """
        if color_key not in THEME_COLORS:
            raise ValueError(f"Unknown color theme {color_key!r}; choose from {', '.join(THEME_COLORS)}")
        self._theme = self._theme.model_copy(update={"color_key": color_key})
        self._persist()

    # ==================== Reminders ====================

    def enable_notifications(self) -> None:
        """Turn reminders on and start polling if the session is running."""
        if self._notifier.permission() == "undetermined":
            self._notifier.request_permission()
        self.scheduler.enable()
        if self._started and not self._reminder_timer.active:
            self.loop.add(self._reminder_timer)
        self._persist()

    def disable_notifications(self) -> None:
        """Turn reminders off and cancel polling."""
        self.scheduler.disable()
        self.loop.remove(self._reminder_timer)
        self._persist()

    def set_notification_time(self, time: str) -> None:
        """Change the reminder time (HH:MM).

        Raises:
            ValueError: If the time is not HH:MM.
        """
        self.scheduler.set_time(time)
        if self.scheduler.settings.enabled and self._notifier.permission() == "undetermined":
            self._notifier.request_permission()
        self._persist()

    def test_notification(self) -> bool:
        """Send a test reminder now."""
        return self.scheduler.send_test()

    # ==================== Persistence ====================

    def _persist(self) -> bool:
        self.last_save_ok = self._adapter.save(self.snapshot())
        return self.last_save_ok
