import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from dotenv import load_dotenv

db = SQLAlchemy()


def create_app(config=None):
    load_dotenv()

    from .config import load_config
    from .clock import MarketClock

    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    db.init_app(app)
    app.extensions['journal_clock'] = MarketClock(app.config['MARKET_TIMEZONE'])

    from .routes import register_routes
    register_routes(app)

    with app.app_context():
        db.create_all()

    return app
