import os
import sys
import pytest

# Ensure the backend root (containing the `pongserver` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from pongserver import create_app, socketio
from pongserver.services.game.coordinator import SessionCoordinator
from pongserver.services.game.events import RecordingSink
from pongserver.services.game.registry import RoomRegistry
from pongserver.services.game.settings import GameSettings


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:5173']
    SOCKETIO_NAMESPACE = '/'
    TICK_RATE = 60
    TICK_LOOP_AUTOSTART = True
    WINNING_SCORE = 3


@pytest.fixture()
def settings():
    return GameSettings(winning_score=3)


@pytest.fixture()
def registry(settings):
    return RoomRegistry(settings)


@pytest.fixture()
def sink():
    return RecordingSink()


@pytest.fixture()
def coordinator(registry, sink):
    return SessionCoordinator(registry, sink)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


def _sio_client(flask_app):
    return socketio.test_client(flask_app, flask_test_client=flask_app.test_client())


@pytest.fixture()
def host_client(flask_app):
    test_client = _sio_client(flask_app)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()


@pytest.fixture()
def guest_client(flask_app):
    test_client = _sio_client(flask_app)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()
