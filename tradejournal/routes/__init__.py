import logging

from flask import jsonify

from ..errors import JournalError
from .common import load_actor
from .trades import trades_bp
from .review import review_bp
from .stats import stats_bp
from .profile import profile_bp

logger = logging.getLogger(__name__)


def handle_journal_error(e):
    if e.status_code >= 500:
        logger.error("[api] %s", e.message)
    return jsonify(e.to_dict()), e.status_code


def register_routes(app):
    app.before_request(load_actor)
    app.register_error_handler(JournalError, handle_journal_error)

    app.register_blueprint(trades_bp)
    app.register_blueprint(review_bp)
    app.register_blueprint(stats_bp)
    app.register_blueprint(profile_bp)
