import os
import sys
import pytest

# Ensure the project root (containing the `paytoplay` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from paytoplay import create_app, db, socketio

OWNER = 'owner.test'
CONTRACT = 'lottery.test'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    CONTRACT_ACCOUNT_ID = CONTRACT
    # One coin is one smallest unit, so the base unit is 1
    UNIT_DECIMALS = 0
    CURRENCY_SYMBOL = 'NEAR'
    DEFAULT_FEE_STRATEGY = 'quadratic'
    DEFAULT_WIN_CHANCE = 0.2
    PAYOUT_SETTLE_DELAY_SEC = 0
    LOTTERY_RANDOM_SEED = None
    CORS_ORIGINS = []


class ScriptedRandom:
    """Random source that replays queued draws, then always loses."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def queue(self, *values):
        self.values.extend(values)

    def random(self):
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return 0.999


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    application.extensions['lottery_randomness'] = ScriptedRandom()
    with application.app_context():
        # Ensure models are imported so tables are created
        import paytoplay.models  # noqa: F401
        db.create_all()
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def rng(flask_app):
    return flask_app.extensions['lottery_randomness']


@pytest.fixture()
def app_ctx(flask_app):
    # Only for service-level tests: HTTP tests must not share an app
    # context, or Flask-Login's cached user leaks between clients.
    with flask_app.app_context():
        yield flask_app
        db.session.remove()


@pytest.fixture()
def game(app_ctx):
    from paytoplay.services.lottery import game as game_service
    return game_service.create_game(OWNER)


@pytest.fixture()
def deployed(flask_app):
    from paytoplay.services.lottery import game as game_service
    with flask_app.app_context():
        game_service.create_game(OWNER)
    return flask_app


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def account_client(flask_app):
    """Factory for a test client logged in as a freshly registered account."""

    def _make(account_id, password='password'):
        c = flask_app.test_client()
        res = c.post('/register', json={'account_id': account_id, 'password': password})
        assert res.status_code == 201, res.get_json()
        return c

    return _make


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
