"""Property-based tests for portfolio statistics.

**Feature: invers-wealth**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from invers.ledger import LedgerStore
from invers.models import MonthlyReport, PriceQuote
from invers.stats import (
    DAILY_BTC_AMOUNT,
    DAILY_GOLD_AMOUNT,
    compute_stats,
    net_balance,
)

QUOTE = PriceQuote(btc=8_500_000.0, gold=7_200.0)

day_keys = st.tuples(st.integers(0, 11), st.integers(1, 31))
amounts = st.one_of(
    st.none(),
    st.floats(min_value=0, max_value=1e7, allow_nan=False, allow_infinity=False),
)
report_strategy = st.builds(
    MonthlyReport,
    profit=amounts,
    loss=amounts,
    note=st.none(),
    locked=st.booleans(),
)


class TestContributionStats:
    def test_five_days(self):
        ledger = LedgerStore()
        for month, day in [(0, 1), (0, 2), (3, 15), (7, 31), (11, 25)]:
            ledger.toggle(month, day)

        stats = compute_stats(ledger, QUOTE)

        assert stats.total_days == 5
        assert stats.invested_btc == 5 * DAILY_BTC_AMOUNT
        assert stats.invested_gold == 5 * DAILY_GOLD_AMOUNT
        assert stats.units_btc == pytest.approx(500 / 8_500_000)
        assert stats.units_gold == pytest.approx(50 / 7_200)

    @given(
        marked=st.lists(day_keys, max_size=40, unique=True),
        btc=st.floats(min_value=1, max_value=1e8),
        gold=st.floats(min_value=1, max_value=1e5),
    )
    @settings(max_examples=100)
    def test_units_are_invested_over_price(self, marked, btc, gold):
        ledger = LedgerStore()
        for month, day in marked:
            ledger.toggle(month, day)

        stats = compute_stats(ledger, PriceQuote(btc=btc, gold=gold))

        assert stats.total_days == len(marked)
        assert stats.units_btc == pytest.approx(stats.invested_btc / btc)
        assert stats.units_gold == pytest.approx(stats.invested_gold / gold)

    def test_goal_progress_capped(self):
        ledger = LedgerStore({f"{m}-{d}": True for m in range(12) for d in range(1, 32)})
        assert compute_stats(ledger, QUOTE).goal_progress == 1.0

    def test_empty_ledger(self):
        stats = compute_stats(LedgerStore(), QUOTE)
        assert stats.total_days == 0
        assert stats.units_btc == 0
        assert stats.goal_progress == 0

    def test_non_positive_price_rejected(self):
        bad = PriceQuote.model_construct(btc=0.0, gold=7_200.0)
        with pytest.raises(ValueError):
            compute_stats(LedgerStore({"0-1": True}), bad)


class TestNetBalance:
    """
    **Property 4: Net Balance Counts Locked Reports Only**

    *For any* set of reports, net equals sum(profit) - sum(loss) over the
    locked ones; drafts never contribute.
    """

    def test_drafts_excluded(self):
        reports = {
            0: MonthlyReport(profit=500, loss=100, locked=True),
            1: MonthlyReport(profit=0, loss=50, locked=True),
            2: MonthlyReport(profit=1000),
        }
        balance = net_balance(reports)
        assert balance.net == 350
        assert balance.total_profit == 500
        assert balance.total_loss == 150
        assert balance.months == 2

    @given(reports=st.dictionaries(st.integers(0, 11), report_strategy, max_size=12))
    @settings(max_examples=100)
    def test_net_matches_locked_sums(self, reports):
        locked = [r for r in reports.values() if r.locked]
        expected = sum(r.profit or 0 for r in locked) - sum(r.loss or 0 for r in locked)

        balance = net_balance(reports)

        assert balance.net == pytest.approx(expected)
        assert balance.months == len(locked)

    def test_no_reports(self):
        balance = net_balance({})
        assert (balance.total_profit, balance.total_loss, balance.net) == (0, 0, 0)
