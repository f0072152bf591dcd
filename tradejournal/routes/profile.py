import logging

from flask import Blueprint, request, jsonify

from ..errors import AuthorizationError, ValidationError
from ..stats import user_stats
from .common import get_store, login_required, mentor_required

logger = logging.getLogger(__name__)

profile_bp = Blueprint('profile', __name__, url_prefix='/api')


@profile_bp.route('/profile', methods=['GET'])
@login_required
def profile(actor):
    return jsonify({'profile': get_store().get_profile(actor.id).to_dict()})


@profile_bp.route('/profile', methods=['PATCH', 'POST'])
@login_required
def update_settings(actor):
    data = request.get_json(silent=True) or request.form.to_dict()
    if 'role' in data or 'is_active' in data:
        raise AuthorizationError("Role and status are managed by mentors")

    username = (data.get('username') or '').strip()
    if not username:
        raise ValidationError("username is required", field='username')
    if len(username) > 80:
        raise ValidationError("username is too long", field='username')

    updated = get_store().update_profile(actor.id, {'username': username})
    return jsonify({'success': True, 'profile': updated.to_dict()})


@profile_bp.route('/admin/members', methods=['GET'])
@mentor_required
def members(actor):
    store = get_store()
    profiles = store.list_profiles()
    trades = store.list_all_trades()

    by_user = {}
    for t in trades:
        by_user.setdefault(t.user_id, []).append(t)

    rows = []
    for p in profiles:
        row = p.to_dict()
        row['stats'] = user_stats(by_user.get(p.id, [])).to_dict()
        rows.append(row)

    return jsonify({
        'members': rows,
        'active_count': sum(1 for p in profiles if p.is_active),
    })


@profile_bp.route('/admin/members/<int:profile_id>/toggle', methods=['POST'])
@mentor_required
def toggle_member(actor, profile_id):
    store = get_store()
    member = store.get_profile(profile_id)
    if member.is_mentor:
        raise AuthorizationError("Mentor accounts cannot be suspended")

    updated = store.update_profile(profile_id, {'is_active': not member.is_active})
    logger.info("Member %s %s by mentor %s", profile_id, 'reactivated' if updated.is_active else 'suspended', actor.id)
    return jsonify({'success': True, 'profile': updated.to_dict()})
