"""Snapshot data model: the single unit of durable state."""

import re

from pydantic import BaseModel, Field, field_validator

from invers.models.notification import NotificationSettings
from invers.models.profile import Profile, ThemePreference
from invers.models.report import MonthlyReport

SNAPSHOT_VERSION = 4

LEDGER_KEY_PATTERN = re.compile(r"([0-9]|1[01])-([1-9]|[12][0-9]|3[01])")


class Snapshot(BaseModel):
    """Serialized union of all application state."""

    version: int = Field(default=SNAPSHOT_VERSION, description="Snapshot format version")
    ledger: dict[str, bool] = Field(
        default_factory=dict, description="'month-day' -> contributed flag"
    )
    reports: dict[int, MonthlyReport] = Field(
        default_factory=dict, description="Month index -> monthly report"
    )
    profile: Profile = Field(default_factory=Profile)
    theme: ThemePreference = Field(default_factory=ThemePreference)
    notification: NotificationSettings = Field(default_factory=NotificationSettings)

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("ledger")
    @classmethod
    def _ledger_keys(cls, value: dict[str, bool]) -> dict[str, bool]:
        for key in value:
            if not LEDGER_KEY_PATTERN.fullmatch(key):
                raise ValueError(f"Invalid ledger key: {key!r}")
        return value

    @field_validator("reports")
    @classmethod
    def _report_months(cls, value: dict[int, MonthlyReport]) -> dict[int, MonthlyReport]:
        for month_index in value:
            if not 0 <= month_index <= 11:
                raise ValueError(f"Invalid report month: {month_index}")
        return value

    def to_json(self) -> str:
        """Serialize to the on-disk JSON shape."""
        return self.model_dump_json(by_alias=True)
