import os

from .clock import NY_TIMEZONE
from .risk import DAILY_LOSS_LIMIT


def _env_float(name, default):
    raw = os.getenv(name)
    if raw in (None, ''):
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}")


def _loss_limit():
    limit = _env_float('DAILY_LOSS_LIMIT', DAILY_LOSS_LIMIT)
    # the lock compares a day's total against this, so it has to be a loss
    if not limit < 0:
        raise RuntimeError(f"DAILY_LOSS_LIMIT must be negative, got {limit!r}")
    return limit


def load_config():
    """Read settings from the environment (``.env`` is loaded by create_app)."""
    return {
        'SQLALCHEMY_DATABASE_URI': os.getenv('DATABASE_URL', 'sqlite:///trades.db'),
        'SECRET_KEY': os.getenv('SECRET_KEY', os.urandom(24)),
        'DAILY_LOSS_LIMIT': _loss_limit(),
        'MARKET_TIMEZONE': os.getenv('MARKET_TIMEZONE', NY_TIMEZONE),
        'LOG_LEVEL': os.getenv('LOG_LEVEL', 'INFO').upper(),
    }
