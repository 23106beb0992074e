"""NotificationSettings data model."""

from pydantic import BaseModel, Field

# 24-hour HH:MM
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class NotificationSettings(BaseModel):
    """Persisted daily reminder configuration."""

    enabled: bool = Field(default=False, description="Whether reminders are on")
    time: str = Field(
        default="09:00", pattern=TIME_PATTERN, description="Reminder time (HH:MM)"
    )

    model_config = {"frozen": True}
