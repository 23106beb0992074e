"""Once-a-day reminder scheduler.

The scheduler is polled on a fixed cadence. When the wall clock reads the
configured HH:MM and no reminder has been attempted for today's date, it
attempts delivery through the notifier and records the date, so at most
one reminder is attempted per calendar day. The date check alone re-arms
the scheduler after midnight.
"""

import logging
from datetime import date, datetime
from enum import Enum
from typing import Callable, Optional

from invers.models import NotificationSettings
from invers.notify.base import BaseNotifier, NotificationError

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    """Reminder scheduler states."""

    DISABLED = "disabled"
    ARMED = "armed"
    FIRED_TODAY = "fired_today"


class ReminderScheduler:
    """Polling state machine for the daily reminder."""

    POLL_SECONDS = 30.0

    REMINDER_TITLE = "Invers Wealth Reminder"
    REMINDER_BODY = "Time to track your daily investments! 🚀"
    TEST_TITLE = "Invers Wealth Test"
    TEST_BODY = "This is how your reminder will look! 🔔"

    def __init__(
        self,
        notifier: BaseNotifier,
        settings: Optional[NotificationSettings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the scheduler.

        Args:
            notifier: Notification capability.
            settings: Reminder settings; defaults to disabled at 09:00.
            clock: Wall clock, injectable for tests.
        """
        self._notifier = notifier
        self._settings = settings or NotificationSettings()
        self._clock = clock
        self._last_fired_date: Optional[date] = None

    @property
    def notifier(self) -> BaseNotifier:
        return self._notifier

    @property
    def settings(self) -> NotificationSettings:
        """Current reminder settings."""
        return self._settings

    @property
    def last_fired_date(self) -> Optional[date]:
        """Date of the last reminder attempt in this process."""
        return self._last_fired_date

    @property
    def state(self) -> SchedulerState:
        """Current state relative to the clock's date."""
        if not self._settings.enabled:
            return SchedulerState.DISABLED
        if self._last_fired_date == self._clock().date():
            return SchedulerState.FIRED_TODAY
        return SchedulerState.ARMED

    def enable(self) -> None:
        """Turn reminders on."""
        self._settings = self._settings.model_copy(update={"enabled": True})

    def disable(self) -> None:
        """Turn reminders off."""
        self._settings = self._settings.model_copy(update={"enabled": False})

    def set_time(self, time: str) -> None:
        """Change the reminder time.

        Args:
            time: 24-hour time as HH:MM.

        Raises:
            ValueError: If the time is not HH:MM.
        """
        self._settings = NotificationSettings(enabled=self._settings.enabled, time=time)

    def tick(self, now: Optional[datetime] = None) -> bool:
        """Poll once.

        Args:
            now: Current time; read from the clock if omitted.

        Returns:
            True if a reminder was attempted on this tick.
        """
        if not self._settings.enabled:
            return False

        now = now or self._clock()
        if now.strftime("%H:%M") != self._settings.time:
            return False
        if self._last_fired_date == now.date():
            return False

        delivered = self._attempt(self.REMINDER_TITLE, self.REMINDER_BODY)
        # Recorded even when skipped so the day is not retried
        self._last_fired_date = now.date()
        if delivered:
            logger.info("Sent daily reminder for %s", now.date().isoformat())
        return True

    def send_test(self) -> bool:
        """Attempt an immediate test notification.

        Ignores the configured time and does not count as today's
        reminder.

        Returns:
            True if the notification was delivered.
        """
        return self._attempt(self.TEST_TITLE, self.TEST_BODY)

    def _attempt(self, title: str, body: str) -> bool:
        """Check permission and deliver if granted."""
        permission = self._notifier.permission()
        if permission == "undetermined":
            permission = self._notifier.request_permission()

        if permission != "granted":
            logger.info("Notification permission %s, skipping %r", permission, title)
            return False

        try:
            self._notifier.deliver(title, body)
        except NotificationError as e:
            logger.warning("System notification blocked: %s", e)
            return False
        return True
