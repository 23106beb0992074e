"""Day-contribution ledger."""

from invers.ledger.store import MONTHS, LedgerStore, days_in_month

__all__ = ["MONTHS", "LedgerStore", "days_in_month"]
