"""Data models for Invers Wealth."""

from invers.models.notification import NotificationSettings
from invers.models.profile import ImageTooLargeError, Profile, ThemePreference
from invers.models.quote import PriceQuote
from invers.models.report import MonthlyReport
from invers.models.snapshot import Snapshot

__all__ = [
    "ImageTooLargeError",
    "MonthlyReport",
    "NotificationSettings",
    "PriceQuote",
    "Profile",
    "Snapshot",
    "ThemePreference",
]
