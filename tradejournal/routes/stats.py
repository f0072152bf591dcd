from flask import Blueprint, request, jsonify

from ..errors import ValidationError
from ..risk import evaluate_daily_risk
from ..stats import (
    best_trades,
    daily_pnl,
    equity_curve,
    leaderboard,
    monthly_breakdown,
    profiling_breakdown,
    session_breakdown,
    team_stats,
    user_stats,
)
from .common import get_clock, get_store, login_required, loss_limit

stats_bp = Blueprint('stats', __name__, url_prefix='/api')

ANALYTICS_MONTHS = 6


@stats_bp.route('/stats/me', methods=['GET'])
@login_required
def my_stats(actor):
    trades = get_store().list_trades_by_user(actor.id)
    risk = evaluate_daily_risk(trades, get_clock().today(), loss_limit())

    payload = user_stats(trades).to_dict()
    payload.update(current_day_r=risk.display_r, is_locked=risk.is_locked)
    return jsonify(payload)


@stats_bp.route('/stats/analytics', methods=['GET'])
@login_required
def analytics(actor):
    trades = get_store().list_trades_by_user(actor.id)
    return jsonify({
        'stats': user_stats(trades).to_dict(),
        'sessions': [s.to_dict() for s in session_breakdown(trades)],
        'profiling': [p.to_dict() for p in profiling_breakdown(trades)],
        'monthly': [m.to_dict() for m in monthly_breakdown(trades, limit=ANALYTICS_MONTHS)],
        'equity': [p.to_dict() for p in equity_curve(trades)],
    })


@stats_bp.route('/stats/calendar', methods=['GET'])
@login_required
def calendar(actor):
    today = get_clock().today()
    try:
        year = int(request.args.get('year', today.year))
        month = int(request.args.get('month', today.month))
    except ValueError:
        raise ValidationError("year and month must be integers", field='month')
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12", field='month')

    days = daily_pnl(get_store().list_trades_by_user(actor.id), year, month)
    return jsonify({
        'year': year,
        'month': month,
        'days': [d.to_dict() for d in days],
        'total_r': round(sum(d.total_r for d in days), 1),
        'trades': sum(d.trades for d in days),
        'wins': sum(d.wins for d in days),
    })


@stats_bp.route('/leaderboard', methods=['GET'])
@login_required
def ranking(actor):
    store = get_store()
    entries = leaderboard(store.list_profiles(), store.list_approved_trades())
    return jsonify({'leaderboard': [e.to_dict() for e in entries]})


@stats_bp.route('/team', methods=['GET'])
@login_required
def team(actor):
    store = get_store()
    profiles = store.list_profiles()
    trades = store.list_all_trades()
    today = get_clock().today()

    entries = leaderboard(profiles, [t for t in trades if t.is_reviewed])
    return jsonify({
        'date': today.isoformat(),
        'stats': team_stats(profiles, trades, today, loss_limit()).to_dict(),
        'top3': [e.to_dict() for e in entries[:3]],
        'best_trades': [t.to_dict() for t in best_trades(trades)],
    })
