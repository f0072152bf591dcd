import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from .errors import RiskLockedError

logger = logging.getLogger(__name__)

DAILY_LOSS_LIMIT = -2.0


@dataclass(frozen=True)
class DailyRisk:
    trade_date: date
    total_r: float
    is_locked: bool
    limit: float = DAILY_LOSS_LIMIT

    @property
    def display_r(self):
        return round(self.total_r, 1)

    @property
    def percentage(self):
        # 0R = 0%, limit = 100%
        if self.total_r >= 0:
            return 0.0
        return min(abs(self.total_r) / abs(self.limit) * 100, 100.0)

    def to_dict(self):
        return {
            'trade_date': self.trade_date.isoformat(),
            'total_r': self.display_r,
            'is_locked': self.is_locked,
            'percentage': round(self.percentage, 1),
            'limit': self.limit,
        }


def is_daily_limit_reached(total_r, limit=DAILY_LOSS_LIMIT):
    return total_r <= limit


def evaluate_daily_risk(trades: Iterable, reference_date: date, limit: float = DAILY_LOSS_LIMIT) -> DailyRisk:
    """Sum one user's realized R for ``reference_date`` and decide the lock.

    Reviewed and pending trades both count. ``reference_date`` must be the
    market-timezone calendar date (see ``MarketClock.today``), not the
    caller's local date.
    """
    total_r = sum((t.rr or 0.0) for t in trades if t.trade_date == reference_date)
    return DailyRisk(
        trade_date=reference_date,
        total_r=total_r,
        is_locked=is_daily_limit_reached(total_r, limit),
        limit=limit,
    )


def assert_can_submit(trades: Iterable, reference_date: date, limit: float = DAILY_LOSS_LIMIT,
                      user_id: Optional[int] = None) -> DailyRisk:
    """Raise ``RiskLockedError`` if the user may not log another trade today."""
    risk = evaluate_daily_risk(trades, reference_date, limit)
    if risk.is_locked:
        logger.warning("Trade submission refused for user %s: %.2fR on %s", user_id, risk.total_r, reference_date)
        raise RiskLockedError(
            f"Daily loss limit reached ({risk.display_r}R). Trading is locked until New York midnight."
        )
    return risk
