import os
import sys
import pytest

# Ensure the backend root (containing the `padel_tracker` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from padel_tracker import create_app, db, socketio
from padel_tracker.services import shutdown_session


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    TICK_INTERVAL_SEC = 1
    CALORIES_PER_HOUR = 500
    HISTORY_KEY = 'savedMatches'
    WORKOUT_SYNC_URL = ''


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import padel_tracker.models  # noqa: F401
        db.create_all()
        yield application
        shutdown_session(application)
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def session(flask_app):
    from padel_tracker.services import get_session
    return get_session(flask_app)


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
