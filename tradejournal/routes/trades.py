import logging
from datetime import datetime

from flask import Blueprint, request, jsonify

from ..enums import ReviewStatus, entry_models_for
from ..errors import AuthorizationError
from ..review import resubmit
from ..risk import assert_can_submit, evaluate_daily_risk
from ..validation import clean_trade_fields
from .common import get_clock, get_store, login_required, loss_limit

logger = logging.getLogger(__name__)

trades_bp = Blueprint('trades', __name__, url_prefix='/api')


def _submitted_fields():
    return request.get_json(silent=True) or request.form.to_dict()


@trades_bp.route('/trades', methods=['GET'])
@login_required
def journal(actor):
    filters = {
        'session': request.args.get('session'),
        'pair': request.args.get('pair'),
        'result': request.args.get('result'),
        'status': request.args.get('status'),
        'date_from': request.args.get('date_from'),
        'date_to': request.args.get('date_to'),
    }

    # Bad dates are ignored rather than rejected
    for key in ('date_from', 'date_to'):
        if filters[key]:
            try:
                filters[key] = datetime.strptime(filters[key], '%Y-%m-%d').date()
            except ValueError:
                filters[key] = None

    trades = get_store().search_trades(actor.id, filters)
    return jsonify({
        'trades': [t.to_dict() for t in trades],
        'filters': {k: (v.isoformat() if hasattr(v, 'isoformat') else v) for k, v in filters.items()},
    })


@trades_bp.route('/trades', methods=['POST'])
@login_required
def add_trade(actor):
    store = get_store()
    today = get_clock().today()

    assert_can_submit(store.list_trades_by_user(actor.id), today, loss_limit(), user_id=actor.id)

    fields = clean_trade_fields(_submitted_fields())
    fields.update(
        user_id=actor.id,
        status=ReviewStatus.SUBMITTED.value,
        is_reviewed=False,
    )
    trade = store.insert_trade(fields)

    logger.info("Trade %s logged by user %s: %s %s %+.2fR", trade.id, actor.id, trade.pair, trade.result, trade.rr)
    return jsonify({'success': True, 'trade': trade.to_dict()}), 201


@trades_bp.route('/trades/<int:trade_id>', methods=['GET'])
@login_required
def trade_detail(actor, trade_id):
    trade = get_store().get_trade(trade_id)
    if not actor.owns(trade) and not actor.is_mentor:
        raise AuthorizationError("You can only view your own trades")
    return jsonify({'trade': trade.to_dict()})


@trades_bp.route('/trades/<int:trade_id>', methods=['PUT', 'PATCH'])
@login_required
def edit_trade(actor, trade_id):
    store = get_store()
    trade = store.get_trade(trade_id)
    resubmit(trade, actor, _submitted_fields())
    store.save(trade)
    return jsonify({'success': True, 'trade': trade.to_dict()})


@trades_bp.route('/risk', methods=['GET'])
@login_required
def daily_risk(actor):
    clock = get_clock()
    risk = evaluate_daily_risk(get_store().list_trades_by_user(actor.id), clock.today(), loss_limit())
    is_open, session = clock.market_session()

    payload = risk.to_dict()
    payload.update(
        reset_timer=clock.reset_timer(),
        market_open=is_open,
        market_session=session,
    )
    return jsonify(payload)


@trades_bp.route('/entry-models', methods=['GET'])
def entry_models():
    profiling = request.args.get('profiling')
    return jsonify({'profiling': profiling, 'entry_models': [m.value for m in entry_models_for(profiling)]})
