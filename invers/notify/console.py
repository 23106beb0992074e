"""Terminal notifier: rings the bell and prints a panel."""

from typing import Callable, Optional

import click
from rich.console import Console
from rich.panel import Panel

from invers.notify.base import PERMISSIONS, BaseNotifier, NotificationError, Permission


class ConsoleNotifier(BaseNotifier):
    """Shows reminders in the terminal.

    Permission is asked once with a yes/no prompt and reported through
    ``on_permission_change`` so the caller can remember the answer.
    """

    def __init__(
        self,
        console: Console,
        permission: Permission = "undetermined",
        on_permission_change: Optional[Callable[[Permission], None]] = None,
        prompt: Callable[[str], bool] = click.confirm,
    ):
        if permission not in PERMISSIONS:
            raise ValueError(f"Unknown permission: {permission!r}")
        self._console = console
        self._permission: Permission = permission
        self._on_permission_change = on_permission_change
        self._prompt = prompt

    def permission(self) -> Permission:
        return self._permission

    def request_permission(self) -> Permission:
        if self._permission != "undetermined":
            return self._permission
        try:
            allowed = self._prompt("Allow Invers Wealth to show daily reminders?")
        except click.Abort:
            # Dismissed prompt leaves the decision open
            return self._permission
        self._permission = "granted" if allowed else "denied"
        if self._on_permission_change is not None:
            self._on_permission_change(self._permission)
        return self._permission

    def deliver(self, title: str, body: str) -> None:
        if self._permission != "granted":
            raise NotificationError(f"Permission is {self._permission}")
        self._console.bell()
        self._console.print(Panel(
            body,
            title=f"[bold]{title}[/bold]",
            border_style="yellow",
        ))
