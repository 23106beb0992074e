"""Pure calculations over the ledger, reports and latest quote.

Nothing here holds state; callers recompute after every mutation.
"""

from pydantic import BaseModel, Field

from invers.ledger import LedgerStore
from invers.models import MonthlyReport, PriceQuote

# Fixed daily contributions in rupees
DAILY_BTC_AMOUNT = 100
DAILY_GOLD_AMOUNT = 10

YEARLY_GOAL_DAYS = 365


class PortfolioStats(BaseModel):
    """Aggregate contribution figures."""

    total_days: int = Field(..., ge=0, description="Days contributed")
    invested_btc: float = Field(..., ge=0, description="Rupees put into bitcoin")
    invested_gold: float = Field(..., ge=0, description="Rupees put into gold")
    units_btc: float = Field(..., ge=0, description="Estimated bitcoin held")
    units_gold: float = Field(..., ge=0, description="Estimated gold grams held")
    goal_progress: float = Field(
        ..., ge=0, le=1, description="Fraction of the yearly goal reached"
    )

    model_config = {"frozen": True}


class NetBalance(BaseModel):
    """Profit and loss totals over locked reports."""

    total_profit: float = Field(..., description="Sum of locked profits")
    total_loss: float = Field(..., description="Sum of locked losses")
    net: float = Field(..., description="Profit minus loss")
    months: int = Field(..., ge=0, description="Locked reports counted")

    model_config = {"frozen": True}


def compute_stats(ledger: LedgerStore, quote: PriceQuote) -> PortfolioStats:
    """Derive contribution totals and estimated holdings.

    Args:
        ledger: Contribution ledger.
        quote: Latest price quote.

    Returns:
        PortfolioStats for the current state.

    Raises:
        ValueError: If either price is not positive.
    """
    if quote.btc <= 0 or quote.gold <= 0:
        raise ValueError(f"Prices must be positive, got btc={quote.btc} gold={quote.gold}")

    total_days = ledger.total_days()
    invested_btc = total_days * DAILY_BTC_AMOUNT
    invested_gold = total_days * DAILY_GOLD_AMOUNT

    return PortfolioStats(
        total_days=total_days,
        invested_btc=invested_btc,
        invested_gold=invested_gold,
        units_btc=invested_btc / quote.btc,
        units_gold=invested_gold / quote.gold,
        goal_progress=min(total_days / YEARLY_GOAL_DAYS, 1.0),
    )


def net_balance(reports: dict[int, MonthlyReport]) -> NetBalance:
    """Sum profit and loss over locked reports only.

    Drafts are not final and never count.
    """
    locked = [report for report in reports.values() if report.locked]
    total_profit = sum(report.profit or 0.0 for report in locked)
    total_loss = sum(report.loss or 0.0 for report in locked)
    return NetBalance(
        total_profit=total_profit,
        total_loss=total_loss,
        net=total_profit - total_loss,
        months=len(locked),
    )
