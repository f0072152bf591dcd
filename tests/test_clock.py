from datetime import date, datetime, timedelta

import pytz

from tradejournal.clock import FixedClock, MarketClock


def test_today_uses_new_york_date():
    # 02:30 UTC on the 16th is still the 15th in New York
    moment = pytz.utc.localize(datetime(2024, 3, 16, 2, 30))
    clock = FixedClock(moment)
    assert clock.today() == date(2024, 3, 15)


def test_naive_moment_is_new_york_local():
    clock = FixedClock(datetime(2024, 3, 15, 23, 0))
    assert clock.now().utcoffset() == timedelta(hours=-4)
    assert clock.today() == date(2024, 3, 15)


def test_reset_timer():
    clock = FixedClock(datetime(2024, 3, 15, 21, 45))
    assert clock.time_until_midnight() == timedelta(hours=2, minutes=15)
    assert clock.reset_timer() == '02:15 hrs'


def test_market_sessions():
    assert FixedClock(datetime(2024, 3, 15, 4, 0)).market_session() == (True, 'London')
    assert FixedClock(datetime(2024, 3, 15, 9, 30)).market_session() == (True, 'New York')
    assert FixedClock(datetime(2024, 3, 15, 18, 0)).market_session() == (False, None)
    # Saturday
    assert FixedClock(datetime(2024, 3, 16, 10, 0)).market_session() == (False, None)


def test_live_clock_is_timezone_aware():
    clock = MarketClock()
    assert clock.now().tzinfo is not None
    assert clock.today() == clock.now().date()
