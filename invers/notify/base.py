"""Base notifier interface for Invers Wealth."""

from abc import ABC, abstractmethod
from typing import Literal

Permission = Literal["undetermined", "granted", "denied"]

PERMISSIONS: tuple[Permission, ...] = ("undetermined", "granted", "denied")


class NotificationError(Exception):
    """Raised when a notifier fails to show a notification."""


class BaseNotifier(ABC):
    """Abstract notification capability.

    Delivery is gated by a user-granted permission. Implementations
    report the current permission, may ask the user for it, and show
    notifications once it is granted.
    """

    @abstractmethod
    def permission(self) -> Permission:
        """Get the current permission without prompting.

        Returns:
            'undetermined', 'granted' or 'denied'.
        """
        pass

    @abstractmethod
    def request_permission(self) -> Permission:
        """Ask the user for permission.

        Returns:
            The permission after the request.
        """
        pass

    @abstractmethod
    def deliver(self, title: str, body: str) -> None:
        """Show a notification.

        Args:
            title: Notification title.
            body: Notification text.

        Raises:
            NotificationError: If the notification could not be shown.
        """
        pass
