"""Builds an InversApp from configuration for CLI commands."""

import random
from typing import Optional

import click
from rich.console import Console

from invers.app import InversApp
from invers.config import AppConfig, load_config, save_config
from invers.db import KeyValueStore, SnapshotAdapter
from invers.feeds import PriceFeedSimulator
from invers.ledger import MONTHS
from invers.notify.base import Permission
from invers.notify.console import ConsoleNotifier

console = Console()


class MonthType(click.ParamType):
    """Month given as 1-12 or by (abbreviated) name; converts to 0-11."""

    name = "month"

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            number = value
        else:
            text = str(value).strip()
            if text.isdigit():
                number = int(text)
            else:
                matches = [
                    i + 1 for i, month in enumerate(MONTHS)
                    if len(text) >= 3 and month.lower().startswith(text.lower())
                ]
                if len(matches) != 1:
                    self.fail(f"{value!r} is not a month name or number 1-12", param, ctx)
                number = matches[0]
        if not 1 <= number <= 12:
            self.fail(f"{value!r} is not a month number 1-12", param, ctx)
        return number - 1


MONTH = MonthType()


def _remember_permission(permission: Permission) -> None:
    """Persist the user's notification permission answer."""
    config = load_config()
    config.reminder.permission = permission
    save_config(config)


def get_app(config: Optional[AppConfig] = None) -> InversApp:
    """Create an app session from configuration.

    Args:
        config: Configuration; taken from the click context or loaded
            from disk if omitted.
    """
    if config is None:
        ctx = click.get_current_context(silent=True)
        if ctx is not None and ctx.obj:
            config = ctx.find_object(dict).get("config")
    config = config or load_config()

    store = KeyValueStore(config.storage.db_path, quota_bytes=config.storage.quota_bytes)
    adapter = SnapshotAdapter(store, key=config.storage.snapshot_key)
    notifier = ConsoleNotifier(
        console,
        permission=config.reminder.permission,
        on_permission_change=_remember_permission,
    )
    rng = random.Random(config.feed.seed) if config.feed.seed is not None else None
    feed = PriceFeedSimulator(
        btc=config.feed.btc_seed,
        gold=config.feed.gold_seed,
        interval=config.feed.interval_seconds,
        rng=rng,
    )
    return InversApp(
        adapter,
        notifier,
        feed=feed,
        year=config.calendar.year,
        poll_seconds=config.reminder.poll_seconds,
    )


def format_currency(value: float) -> str:
    """Rupee amount with thousands separators and no decimals."""
    sign = "-" if value < 0 else ""
    return f"{sign}₹{abs(value):,.0f}"
