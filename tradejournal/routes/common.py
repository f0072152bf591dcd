from functools import wraps

from flask import current_app, g, session

from ..context import Actor
from ..errors import AuthenticationError, AuthorizationError, NotFoundError
from ..store import TradeStore


def get_store():
    if 'store' not in g:
        g.store = TradeStore()
    return g.store


def get_clock():
    return current_app.extensions['journal_clock']


def loss_limit():
    return current_app.config['DAILY_LOSS_LIMIT']


def load_actor():
    """Resolve the signed-session user id into a per-request ``Actor``."""
    g.actor = None
    user_id = session.get('user_id')
    if user_id is None:
        return
    try:
        profile = get_store().get_profile(user_id)
    except NotFoundError:
        session.pop('user_id', None)
        return
    g.actor = Actor.from_profile(profile)


def current_actor():
    actor = g.get('actor')
    if actor is None:
        raise AuthenticationError("Login required")
    if not actor.is_active:
        raise AuthorizationError("Account is suspended")
    return actor


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        return view(current_actor(), *args, **kwargs)
    return wrapper


def mentor_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        actor = current_actor()
        if not actor.is_mentor:
            raise AuthorizationError("Mentor access only")
        return view(actor, *args, **kwargs)
    return wrapper
