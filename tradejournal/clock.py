from datetime import datetime, date, timedelta

import pytz

NY_TIMEZONE = 'America/New_York'


class MarketClock:
    """Single source of "now" and "today" for the trading desk.

    Every day boundary in the journal (risk lock, team overview) is the local
    midnight of ``timezone``, regardless of where the viewer sits.
    """

    def __init__(self, timezone=NY_TIMEZONE):
        self.tz = pytz.timezone(timezone)

    def now(self) -> datetime:
        return datetime.now(pytz.utc).astimezone(self.tz)

    def today(self) -> date:
        return self.now().date()

    def time_until_midnight(self) -> timedelta:
        now = self.now()
        tomorrow = now.date() + timedelta(days=1)
        midnight = self.tz.localize(datetime(tomorrow.year, tomorrow.month, tomorrow.day))
        return midnight - now

    def reset_timer(self) -> str:
        remaining = int(self.time_until_midnight().total_seconds()) // 60
        hours, minutes = divmod(remaining, 60)
        return f"{hours:02d}:{minutes:02d} hrs"

    def market_session(self):
        """Return ``(is_open, session_name)`` for the current NY hour."""
        now = self.now()
        if now.weekday() >= 5:
            return False, None
        if 3 <= now.hour < 8:
            return True, 'London'
        if 8 <= now.hour < 17:
            return True, 'New York'
        return False, None


class FixedClock(MarketClock):
    """Clock pinned to one instant; used by tests and backfills."""

    def __init__(self, moment, timezone=NY_TIMEZONE):
        super().__init__(timezone)
        if moment.tzinfo is None:
            moment = self.tz.localize(moment)
        self._moment = moment.astimezone(self.tz)

    def now(self) -> datetime:
        return self._moment

    def advance(self, **delta):
        self._moment = (self._moment + timedelta(**delta)).astimezone(self.tz)
        return self._moment
