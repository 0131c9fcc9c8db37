import json
import os
import sys
import fakeredis
import pytest

# Ensure the backend root (containing the `arcade` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from arcade import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    REDIS_URL = 'redis://localhost:6379/15'
    JWT_SECRET = 'test-jwt-secret'
    JWT_ALGORITHM = 'HS256'
    JWT_EXP_SECONDS = 3600
    MONEY_RANKING_LIMIT = 100
    CURRENCY_DIVISOR = 100
    CORS_ORIGINS = ['http://localhost:5173']
    BCRYPT_LOG_ROUNDS = 4


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    # Swap the real client for an in-process fake; nothing connects to Redis
    application.extensions['redis'] = fakeredis.FakeRedis(decode_responses=True)
    # No app context stays pushed while tests run: each request gets its own,
    # so the bearer-token user is loaded fresh every time.
    with application.app_context():
        import arcade.models  # noqa: F401
        db.create_all()
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')


@pytest.fixture()
def in_app(flask_app):
    """Run a callable inside a fresh app context, e.g. ``in_app(repo.get_user, 'u1')``."""
    def _run(fn, *args, **kwargs):
        with flask_app.app_context():
            return fn(*args, **kwargs)
    return _run


@pytest.fixture()
def make_user(flask_app):
    """Create a user row directly and return its serialized form."""
    from arcade.models import User

    def _make(user_id, name=None, money=None, is_master=False, password='password', **fields):
        with flask_app.app_context():
            user = User(id=user_id, name=name or user_id, money=money, is_master=is_master, **fields)
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.to_dict()

    return _make


@pytest.fixture()
def auth_header(flask_app):
    """Bearer header for an existing user id."""
    from arcade.auth import create_token
    from arcade.models import User

    def _header(user_id):
        with flask_app.app_context():
            user = User.query.filter_by(id=user_id).first()
            return {'Authorization': f'Bearer {create_token(user)}'}

    return _header


@pytest.fixture()
def cached_user(flask_app):
    """Read a user back from the Redis mirror."""
    def _read(user_id):
        raw = flask_app.extensions['redis'].get(f'user:{user_id}')
        return json.loads(raw) if raw else None
    return _read


@pytest.fixture()
def cached_scores(flask_app):
    """Read a game's score records back from the Redis mirror."""
    def _read(game_id):
        raw = flask_app.extensions['redis'].hgetall(f'scores:{game_id}')
        return [json.loads(v) for v in raw.values()]
    return _read
