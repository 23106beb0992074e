"""Derived portfolio statistics."""

from invers.stats.calculator import (
    DAILY_BTC_AMOUNT,
    DAILY_GOLD_AMOUNT,
    YEARLY_GOAL_DAYS,
    NetBalance,
    PortfolioStats,
    compute_stats,
    net_balance,
)

__all__ = [
    "DAILY_BTC_AMOUNT",
    "DAILY_GOLD_AMOUNT",
    "YEARLY_GOAL_DAYS",
    "NetBalance",
    "PortfolioStats",
    "compute_stats",
    "net_balance",
]
