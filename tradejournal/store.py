import logging
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError

from . import db
from .errors import NotFoundError, TransientIOError, ValidationError
from .models import Profile, Trade

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ('username', 'role', 'is_active')


def _store_call(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("[store] %s failed: %s", func.__name__, e, exc_info=True)
            raise TransientIOError("Trade store is unavailable, try again") from e
    return wrapper


class TradeStore:
    """Thin query layer over the ``trades`` and ``profiles`` tables.

    Reads return fresh rows on every call; nothing is cached, so callers
    refetch after a write to see it.
    """

    def __init__(self, session=None):
        self.session = session or db.session

    # profiles

    @_store_call
    def list_profiles(self):
        return self.session.query(Profile).order_by(Profile.created_at.asc(), Profile.id.asc()).all()

    @_store_call
    def get_profile(self, profile_id):
        profile = self.session.get(Profile, profile_id)
        if profile is None:
            raise NotFoundError(f"Profile {profile_id} not found")
        return profile

    @_store_call
    def update_profile(self, profile_id, fields):
        for name in fields:
            if name not in PROFILE_FIELDS:
                raise ValidationError(f"Profile field {name!r} is not updatable", field=name)
        profile = self.get_profile(profile_id)
        for name, value in fields.items():
            setattr(profile, name, value)
        self.session.commit()
        return profile

    # trades

    @_store_call
    def list_trades_by_user(self, user_id, limit=None):
        query = self.session.query(Trade).filter_by(user_id=user_id).order_by(Trade.trade_date.desc(), Trade.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @_store_call
    def search_trades(self, user_id, filters):
        query = self.session.query(Trade).filter_by(user_id=user_id)

        for name in ('session', 'pair', 'result', 'status'):
            if filters.get(name):
                query = query.filter(getattr(Trade, name) == filters[name])
        if filters.get('date_from'):
            query = query.filter(Trade.trade_date >= filters['date_from'])
        if filters.get('date_to'):
            query = query.filter(Trade.trade_date <= filters['date_to'])

        return query.order_by(Trade.trade_date.desc(), Trade.id.desc()).all()

    @_store_call
    def list_all_trades(self, limit=None):
        query = self.session.query(Trade).order_by(Trade.created_at.desc(), Trade.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @_store_call
    def list_approved_trades(self):
        return self.session.query(Trade).filter(Trade.is_reviewed.is_(True)).all()

    @_store_call
    def get_trade(self, trade_id):
        trade = self.session.get(Trade, trade_id)
        if trade is None:
            raise NotFoundError(f"Trade {trade_id} not found")
        return trade

    @_store_call
    def insert_trade(self, fields):
        trade = Trade(**fields)
        self.session.add(trade)
        self.session.commit()
        return trade

    @_store_call
    def update_trade(self, trade_id, fields):
        trade = self.get_trade(trade_id)
        for name, value in fields.items():
            setattr(trade, name, value)
        self.session.commit()
        return trade

    @_store_call
    def save(self, obj):
        """Commit in-place changes made to a loaded row."""
        self.session.add(obj)
        self.session.commit()
        return obj
