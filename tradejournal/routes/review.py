from flask import Blueprint, request, jsonify

from ..enums import ReviewStatus
from ..review import request_revision, submit_review
from ..stats import recently_reviewed, review_queue
from .common import get_store, login_required, mentor_required

review_bp = Blueprint('review', __name__, url_prefix='/api/review')


def _payload():
    return request.get_json(silent=True) or request.form.to_dict()


@review_bp.route('/queue', methods=['GET'])
@mentor_required
def queue(actor):
    trades = get_store().list_all_trades()
    pending = review_queue(trades, exclude_user_id=actor.id)
    return jsonify({
        'pending': [t.to_dict() for t in pending],
        'revision_count': sum(1 for t in pending if t.status == ReviewStatus.REVISION.value),
        'recently_reviewed': [t.to_dict() for t in recently_reviewed(trades, exclude_user_id=actor.id)],
    })


# Role checks live in the workflow so a member gets a 403 from it, not a 404.
@review_bp.route('/<int:trade_id>', methods=['POST'])
@login_required
def review_trade(actor, trade_id):
    data = _payload()
    store = get_store()
    trade = store.get_trade(trade_id)
    submit_review(trade, actor, data.get('score'), data.get('notes') or None)
    store.save(trade)
    return jsonify({'success': True, 'trade': trade.to_dict()})


@review_bp.route('/<int:trade_id>/revision', methods=['POST'])
@login_required
def revision(actor, trade_id):
    data = _payload()
    store = get_store()
    trade = store.get_trade(trade_id)
    request_revision(trade, actor, data.get('notes') or None)
    store.save(trade)
    return jsonify({'success': True, 'trade': trade.to_dict()})
