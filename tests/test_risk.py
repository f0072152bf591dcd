"""Tests for the daily risk lock."""

from datetime import date, datetime, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from conftest import TODAY, make_trade
from tradejournal.clock import FixedClock
from tradejournal.errors import AuthorizationError, RiskLockedError
from tradejournal.risk import (
    DAILY_LOSS_LIMIT,
    assert_can_submit,
    evaluate_daily_risk,
    is_daily_limit_reached,
)

results = st.floats(min_value=-5, max_value=5, allow_nan=False, allow_infinity=False)


class TestDailyRiskSum:
    """
    *For any* set of trades dated on one day, total_r is the exact sum of rr
    and the lock engages iff the total is at or below -2R.
    """

    @given(st.lists(results, max_size=12))
    @settings(max_examples=50)
    def test_total_is_exact_sum(self, rrs):
        trades = [make_trade(rr=rr) for rr in rrs]
        risk = evaluate_daily_risk(trades, TODAY)

        assert risk.total_r == sum(rrs)
        assert risk.is_locked == (sum(rrs) <= -2.0)

    @given(st.lists(results, max_size=8))
    @settings(max_examples=25)
    def test_evaluation_is_idempotent(self, rrs):
        trades = [make_trade(rr=rr) for rr in rrs]
        assert evaluate_daily_risk(trades, TODAY) == evaluate_daily_risk(trades, TODAY)

    def test_no_trades_today(self):
        risk = evaluate_daily_risk([], TODAY)
        assert risk.total_r == 0
        assert risk.is_locked is False

    def test_exactly_minus_two_locks(self):
        trades = [make_trade(rr=-1.0), make_trade(rr=-1.0)]
        assert evaluate_daily_risk(trades, TODAY).is_locked is True

    def test_break_even_does_not_lock(self):
        trades = [make_trade(result='BreakEven', rr=0.0) for _ in range(5)]
        risk = evaluate_daily_risk(trades, TODAY)
        assert risk.total_r == 0
        assert not risk.is_locked

    def test_pending_and_reviewed_both_count(self):
        trades = [
            make_trade(rr=-1.0, is_reviewed=True, mentor_score=3),
            make_trade(rr=-1.5, is_reviewed=False),
        ]
        assert evaluate_daily_risk(trades, TODAY).is_locked

    def test_other_days_ignored(self):
        trades = [
            make_trade(rr=-3.0, trade_date=TODAY - timedelta(days=1)),
            make_trade(rr=-0.5),
        ]
        risk = evaluate_daily_risk(trades, TODAY)
        assert risk.total_r == -0.5
        assert not risk.is_locked

    def test_lock_scenario(self):
        trades = [make_trade(rr=1.5), make_trade(rr=-1.0), make_trade(rr=-1.2)]
        risk = evaluate_daily_risk(trades, TODAY)
        assert risk.total_r == pytest.approx(-0.7)
        assert risk.is_locked is False

        trades.append(make_trade(rr=-1.5))
        risk = evaluate_daily_risk(trades, TODAY)
        assert risk.total_r == pytest.approx(-2.2)
        assert risk.is_locked is True
        assert risk.display_r == -2.2

    def test_inconsistent_sign_is_summed_as_is(self):
        trades = [make_trade(result='Win', rr=-2.5)]
        assert evaluate_daily_risk(trades, TODAY).is_locked


class TestRiskGauge:
    def test_percentage(self):
        assert evaluate_daily_risk([make_trade(rr=1.0)], TODAY).percentage == 0
        assert evaluate_daily_risk([make_trade(rr=-1.0)], TODAY).percentage == 50
        assert evaluate_daily_risk([make_trade(rr=-4.0)], TODAY).percentage == 100

    def test_limit_helper(self):
        assert is_daily_limit_reached(DAILY_LOSS_LIMIT)
        assert not is_daily_limit_reached(-1.99)

    def test_custom_limit(self):
        risk = evaluate_daily_risk([make_trade(rr=-1.0)], TODAY, limit=-1.0)
        assert risk.is_locked

    def test_to_dict(self):
        data = evaluate_daily_risk([make_trade(rr=-1.26)], TODAY).to_dict()
        assert data['trade_date'] == '2024-03-15'
        assert data['total_r'] == -1.3
        assert data['is_locked'] is False


class TestSubmissionGuard:
    def test_locked_user_refused(self):
        trades = [make_trade(rr=-2.0)]
        with pytest.raises(RiskLockedError) as exc:
            assert_can_submit(trades, TODAY, user_id=1)
        assert isinstance(exc.value, AuthorizationError)

    def test_unlocked_user_allowed(self):
        risk = assert_can_submit([make_trade(rr=-1.0)], TODAY)
        assert risk.total_r == -1.0

    def test_lock_clears_at_ny_midnight(self):
        clock = FixedClock(datetime(2024, 3, 15, 23, 59))
        trades = [make_trade(rr=-2.5, trade_date=date(2024, 3, 15))]
        assert evaluate_daily_risk(trades, clock.today()).is_locked

        clock.advance(minutes=2)
        assert clock.today() == date(2024, 3, 16)
        assert not evaluate_daily_risk(trades, clock.today()).is_locked
