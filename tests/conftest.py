import itertools
from datetime import date, datetime

import pytest

from tradejournal import create_app, db
from tradejournal.clock import FixedClock
from tradejournal.context import Actor
from tradejournal.models import Profile, Trade

# Friday 2024-03-15, 10:30 New York time (NY session open)
NOW = datetime(2024, 3, 15, 10, 30)
TODAY = date(2024, 3, 15)

_ids = itertools.count(1)


def make_trade(**overrides):
    """Build a detached Trade row with every column filled in."""
    fields = dict(
        id=next(_ids),
        user_id=1,
        created_at=datetime(2024, 3, 15, 9, 0),
        trade_date=TODAY,
        session='New York',
        pair='NQ',
        bias='Bullish',
        bias_daily='DNT',
        framework='OPR',
        profiling='6AM Reversal',
        entry_model='Entry Model 1 (DNT)',
        result='Win',
        rr=1.0,
        mood='Calm',
        image_url='https://img.example/chart.png',
        description=None,
        tags=None,
        status='submitted',
        is_reviewed=False,
        mentor_score=None,
        mentor_notes=None,
        reviewed_by=None,
        reviewed_at=None,
    )
    fields.update(overrides)
    return Trade(**fields)


def make_profile(id, role='member', username=None, is_active=True):
    return Profile(
        id=id,
        username=username or f"user{id}",
        role=role,
        is_active=is_active,
        created_at=datetime(2024, 1, 1),
    )


def trade_payload(**overrides):
    payload = {
        'trade_date': TODAY.isoformat(),
        'session': 'London',
        'pair': 'EU',
        'bias': 'Bearish',
        'bias_daily': 'DCM',
        'framework': 'IRL to ERL',
        'profiling': '10AM Continuation',
        'entry_model': 'Entry Model 2 (DCM)',
        'result': 'Lose',
        'rr': '-1',
        'mood': 'Anxious',
        'image_url': 'https://img.example/eu.png',
        'description': 'Faded the open',
        'tags': 'news, late entry',
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def member():
    return Actor(id=1, role='member', username='alice')


@pytest.fixture
def mentor():
    return Actor(id=99, role='mentor', username='coach')


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def app(clock):
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SECRET_KEY': 'test',
    })
    app.extensions['journal_clock'] = clock
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def seeded(app):
    """Two members and a mentor persisted in the test database."""
    profiles = [
        Profile(id=1, username='alice', role='member'),
        Profile(id=2, username='bob', role='member'),
        Profile(id=99, username='coach', role='mentor'),
    ]
    db.session.add_all(profiles)
    db.session.commit()
    return profiles


@pytest.fixture
def login(app):
    def _login(user_id):
        client = app.test_client()
        with client.session_transaction() as sess:
            sess['user_id'] = user_id
        return client

    return _login
