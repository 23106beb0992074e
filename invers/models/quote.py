"""PriceQuote data model."""

from datetime import datetime
from pydantic import BaseModel, Field


class PriceQuote(BaseModel):
    """Current unit prices of the two tracked assets."""

    btc: float = Field(..., gt=0, description="Bitcoin unit price")
    gold: float = Field(..., gt=0, description="Gold unit price (per gram)")
    timestamp: datetime = Field(
        default_factory=datetime.now, description="Quote timestamp"
    )

    model_config = {"frozen": True}
