"""Daily reminder notifications."""

from invers.notify.base import BaseNotifier, NotificationError, Permission
from invers.notify.scheduler import ReminderScheduler, SchedulerState

__all__ = [
    "BaseNotifier",
    "NotificationError",
    "Permission",
    "ReminderScheduler",
    "SchedulerState",
]
