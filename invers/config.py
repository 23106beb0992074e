"""Configuration for Invers Wealth.

Settings live in a TOML file, by default ``~/.config/invers/config.toml``
(override with ``INVERS_CONFIG``). Every key is optional.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

from invers.db.snapshots import DEFAULT_SNAPSHOT_KEY
from invers.notify.base import Permission

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "invers"


class StorageConfig(BaseModel):
    db_path: Path = Field(default=CONFIG_DIR / "invers.db", description="SQLite file")
    snapshot_key: str = Field(default=DEFAULT_SNAPSHOT_KEY, min_length=1)
    quota_bytes: Optional[int] = Field(default=5_000_000, gt=0)


class FeedConfig(BaseModel):
    interval_seconds: float = Field(default=3.0, gt=0)
    btc_seed: float = Field(default=8_500_000.0, gt=0)
    gold_seed: float = Field(default=7_200.0, gt=0)
    seed: Optional[int] = Field(default=None, description="Random seed for the simulator")


class ReminderConfig(BaseModel):
    poll_seconds: float = Field(default=30.0, gt=0)
    permission: Permission = Field(default="undetermined")


class CalendarConfig(BaseModel):
    year: Optional[int] = Field(
        default=None, ge=1900, le=9999, description="Planner year; current year if unset"
    )


class LoggingConfig(BaseModel):
    level: str = Field(default="WARNING")


class AppConfig(BaseModel):
    """Top-level configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    reminder: ReminderConfig = Field(default_factory=ReminderConfig)
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_config_path() -> Path:
    """Path of the configuration file."""
    override = os.environ.get("INVERS_CONFIG")
    return Path(override).expanduser() if override else CONFIG_DIR / "config.toml"


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration, falling back to defaults.

    Args:
        path: Config file; defaults to get_config_path().

    Returns:
        Parsed configuration. A missing or invalid file yields defaults.
    """
    path = path or get_config_path()
    if not path.exists():
        return AppConfig()

    try:
        return AppConfig.model_validate(toml.load(path))
    except (toml.TomlDecodeError, ValidationError, OSError) as e:
        logger.warning("Ignoring invalid config %s: %s", path, e)
        return AppConfig()


def save_config(config: AppConfig, path: Optional[Path] = None) -> Path:
    """Write configuration as TOML.

    Returns:
        Path the config was written to.
    """
    path = path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json", exclude_none=True)
    with open(path, "w") as f:
        toml.dump(data, f)
    return path
