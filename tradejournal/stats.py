"""Read-side aggregations over trade rows and profiles.

Everything here is a pure function over already-fetched collections. Empty
input always yields the zero/empty result.

Performance numbers count only approved trades (``is_reviewed``), with one
exception kept on purpose: ``monthly_breakdown`` counts every trade, pending
ones included, the way the analytics page has always shown it.
"""
from collections import OrderedDict
from dataclasses import dataclass, asdict
from datetime import date, datetime
from typing import List, Optional

from .enums import Outcome, Role, Session
from .risk import evaluate_daily_risk, DAILY_LOSS_LIMIT


def _is_win(trade):
    return trade.result == Outcome.WIN.value


def _is_loss(trade):
    return trade.result == Outcome.LOSE.value


def _rr(trade):
    return trade.rr or 0.0


def _win_rate(wins, count):
    return wins / count * 100 if count else 0.0


def _chronological(trades):
    return sorted(trades, key=lambda t: (t.trade_date, t.created_at or datetime.min))


def approved(trades):
    return [t for t in trades if t.is_reviewed]


def pending(trades):
    return [t for t in trades if not t.is_reviewed]


@dataclass
class UserStats:
    total_trades: int = 0
    total_r: float = 0.0
    win_rate: float = 0.0
    avg_score: float = 0.0
    pending_count: int = 0
    wins: int = 0
    losses: int = 0
    avg_win_r: float = 0.0
    max_win_streak: int = 0
    max_loss_streak: int = 0

    def to_dict(self):
        data = asdict(self)
        data['total_r'] = round(self.total_r, 1)
        data['win_rate'] = round(self.win_rate)
        data['avg_score'] = round(self.avg_score, 1)
        data['avg_win_r'] = round(self.avg_win_r, 2)
        return data


@dataclass
class SessionStats:
    session: str
    trade_count: int = 0
    win_rate: float = 0.0
    total_r: float = 0.0

    def to_dict(self):
        return {
            'session': self.session,
            'trade_count': self.trade_count,
            'win_rate': round(self.win_rate),
            'total_r': round(self.total_r, 1),
        }


@dataclass
class ProfilingStats:
    profiling: str
    count: int = 0
    win_rate: float = 0.0
    total_r: float = 0.0

    def to_dict(self):
        return {
            'profiling': self.profiling,
            'count': self.count,
            'win_rate': round(self.win_rate),
            'total_r': round(self.total_r, 1),
        }


@dataclass
class MonthlyStats:
    month: str
    trade_count: int = 0
    win_rate: float = 0.0
    total_r: float = 0.0

    def to_dict(self):
        return {
            'month': self.month,
            'trade_count': self.trade_count,
            'win_rate': round(self.win_rate),
            'total_r': round(self.total_r, 1),
        }


@dataclass
class LeaderboardEntry:
    user_id: int
    username: str
    total_trades: int = 0
    wins: int = 0
    win_rate: float = 0.0
    total_r: float = 0.0
    avg_score: float = 0.0

    def to_dict(self):
        data = asdict(self)
        data['win_rate'] = round(self.win_rate, 1)
        data['total_r'] = round(self.total_r, 1)
        data['avg_score'] = round(self.avg_score, 1)
        return data


@dataclass
class TeamStats:
    total_members: int = 0
    active_today: int = 0
    team_total_r: float = 0.0
    team_win_rate: float = 0.0
    locked_members: int = 0
    pending_reviews: int = 0

    def to_dict(self):
        data = asdict(self)
        data['team_total_r'] = round(self.team_total_r, 1)
        data['team_win_rate'] = round(self.team_win_rate)
        return data


@dataclass
class DailyPnL:
    day: date
    total_r: float = 0.0
    trades: int = 0
    wins: int = 0

    def to_dict(self):
        return {
            'date': self.day.isoformat(),
            'total_r': round(self.total_r, 1),
            'trades': self.trades,
            'wins': self.wins,
        }


@dataclass
class EquityPoint:
    trade_id: Optional[int]
    trade_date: date
    rr: float
    cumulative: float

    def to_dict(self):
        return {
            'trade_id': self.trade_id,
            'date': self.trade_date.isoformat(),
            'rr': self.rr,
            'cumulative': round(self.cumulative, 2),
        }


def _average_score(trades):
    scored = [t.mentor_score for t in trades if t.mentor_score is not None]
    return sum(scored) / len(scored) if scored else 0.0


def _streaks(trades):
    max_win = max_loss = current_win = current_loss = 0
    for t in _chronological(trades):
        if _is_win(t):
            current_win += 1
            current_loss = 0
        elif _is_loss(t):
            current_loss += 1
            current_win = 0
        else:
            current_win = current_loss = 0
        max_win = max(max_win, current_win)
        max_loss = max(max_loss, current_loss)
    return max_win, max_loss


def user_stats(trades) -> UserStats:
    trades = list(trades or [])
    done = approved(trades)
    wins = [t for t in done if _is_win(t)]
    max_win, max_loss = _streaks(done)

    return UserStats(
        total_trades=len(done),
        total_r=sum(_rr(t) for t in done),
        win_rate=_win_rate(len(wins), len(done)),
        avg_score=_average_score(done),
        pending_count=len(trades) - len(done),
        wins=len(wins),
        losses=sum(1 for t in done if _is_loss(t)),
        avg_win_r=sum(_rr(t) for t in wins) / len(wins) if wins else 0.0,
        max_win_streak=max_win,
        max_loss_streak=max_loss,
    )


def session_breakdown(trades) -> List[SessionStats]:
    done = approved(trades or [])
    breakdown = []
    for session in Session:
        in_session = [t for t in done if t.session == session.value]
        wins = sum(1 for t in in_session if _is_win(t))
        breakdown.append(SessionStats(
            session=session.value,
            trade_count=len(in_session),
            win_rate=_win_rate(wins, len(in_session)),
            total_r=sum(_rr(t) for t in in_session),
        ))
    return breakdown


def profiling_breakdown(trades) -> List[ProfilingStats]:
    grouped = OrderedDict()
    for t in approved(trades or []):
        grouped.setdefault(t.profiling, []).append(t)

    return [
        ProfilingStats(
            profiling=profiling,
            count=len(group),
            win_rate=_win_rate(sum(1 for t in group if _is_win(t)), len(group)),
            total_r=sum(_rr(t) for t in group),
        )
        for profiling, group in grouped.items()
    ]


def monthly_breakdown(trades, limit: Optional[int] = None) -> List[MonthlyStats]:
    """Per ``YYYY-MM`` totals, newest month first. Counts pending trades too."""
    grouped = {}
    for t in trades or []:
        month = t.trade_date.strftime('%Y-%m')
        grouped.setdefault(month, []).append(t)

    months = sorted(grouped, reverse=True)
    if limit is not None:
        months = months[:limit]

    return [
        MonthlyStats(
            month=month,
            trade_count=len(grouped[month]),
            win_rate=_win_rate(sum(1 for t in grouped[month] if _is_win(t)), len(grouped[month])),
            total_r=sum(_rr(t) for t in grouped[month]),
        )
        for month in months
    ]


def leaderboard(profiles, approved_trades) -> List[LeaderboardEntry]:
    by_user = {}
    for t in approved_trades or []:
        by_user.setdefault(t.user_id, []).append(t)

    entries = []
    for profile in profiles or []:
        if profile.role != Role.MEMBER.value:
            continue
        user_trades = by_user.get(profile.id, [])
        wins = sum(1 for t in user_trades if _is_win(t))
        entries.append(LeaderboardEntry(
            user_id=profile.id,
            username=profile.username or 'Unknown',
            total_trades=len(user_trades),
            wins=wins,
            win_rate=_win_rate(wins, len(user_trades)),
            total_r=sum(_rr(t) for t in user_trades),
            avg_score=_average_score(user_trades),
        ))

    # sorted() is stable: ties keep roster order
    return sorted(entries, key=lambda e: e.total_r, reverse=True)


def team_stats(profiles, trades, today: date, limit: float = DAILY_LOSS_LIMIT) -> TeamStats:
    profiles = list(profiles or [])
    trades = list(trades or [])
    todays = [t for t in trades if t.trade_date == today]

    by_user = {}
    for t in todays:
        by_user.setdefault(t.user_id, []).append(t)

    locked = sum(
        1 for p in profiles
        if evaluate_daily_risk(by_user.get(p.id, []), today, limit).is_locked
    )

    return TeamStats(
        total_members=sum(1 for p in profiles if p.is_active),
        active_today=len(by_user),
        team_total_r=sum(_rr(t) for t in todays),
        team_win_rate=_win_rate(sum(1 for t in todays if _is_win(t)), len(todays)),
        locked_members=locked,
        pending_reviews=len(pending(trades)),
    )


def review_queue(trades, exclude_user_id=None) -> list:
    """Unreviewed trades, oldest first, minus the reviewer's own."""
    queue = [
        t for t in trades or []
        if not t.is_reviewed and (exclude_user_id is None or t.user_id != exclude_user_id)
    ]
    return sorted(queue, key=lambda t: t.created_at or datetime.min)


def recently_reviewed(trades, exclude_user_id=None, limit: int = 10) -> list:
    done = [
        t for t in approved(trades or [])
        if exclude_user_id is None or t.user_id != exclude_user_id
    ]
    done.sort(key=lambda t: t.created_at or datetime.min, reverse=True)
    return done[:limit]


def best_trades(trades, limit: int = 9) -> list:
    picks = [
        t for t in approved(trades or [])
        if _is_win(t) and t.mentor_score is not None and t.mentor_score >= 4
    ]
    return picks[:limit]


def equity_curve(trades) -> List[EquityPoint]:
    cumulative = 0.0
    points = []
    for t in _chronological(approved(trades or [])):
        cumulative += _rr(t)
        points.append(EquityPoint(trade_id=t.id, trade_date=t.trade_date, rr=_rr(t), cumulative=cumulative))
    return points


def daily_pnl(trades, year: int, month: int) -> List[DailyPnL]:
    days = {}
    for t in trades or []:
        if t.trade_date.year != year or t.trade_date.month != month:
            continue
        entry = days.setdefault(t.trade_date, DailyPnL(day=t.trade_date))
        entry.total_r += _rr(t)
        entry.trades += 1
        if _is_win(t):
            entry.wins += 1
    return [days[d] for d in sorted(days)]
