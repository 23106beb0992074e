"""MonthlyReport data model."""

from typing import Optional
from pydantic import BaseModel, Field


class MonthlyReport(BaseModel):
    """Represents a month's profit/loss note."""

    profit: Optional[float] = Field(default=None, ge=0, description="Profit booked this month")
    loss: Optional[float] = Field(default=None, ge=0, description="Loss booked this month")
    note: Optional[str] = Field(default=None, description="Free text note")
    locked: bool = Field(default=False, description="Whether the report is saved and frozen")

    model_config = {"frozen": True}
