import os
import sys
import pytest

# Ensure the backend root (containing the `connect_four` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from connect_four import create_app, socketio
from connect_four.dispatch import IntentDispatcher
from connect_four.services.games.registry import SessionRegistry


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = ['http://localhost:5173']
    SOCKETIO_NAMESPACE = '/'
    BOARD_ROWS = 6
    BOARD_COLS = 7
    CONNECT_N = 4
    MAX_GAME_NAME_LENGTH = 64
    FINISHED_GAME_TTL_SEC = 0
    LOG_LEVEL = 'DEBUG'


class RecordingGateway:
    """Stands in for the socket.io gateway and keeps every outbound event."""

    def __init__(self):
        self.sent = []  # (handle, event, payload)
        self.broadcasts = []  # (event, payload)

    def send(self, handle, event, payload=None):
        self.sent.append((handle, event, payload))

    def broadcast(self, event, payload=None):
        self.broadcasts.append((event, payload))

    def events_for(self, handle):
        return [(event, payload) for h, event, payload in self.sent if h == handle]

    def names_for(self, handle):
        return [event for event, _ in self.events_for(handle)]


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    """Factory for connected Socket.IO test clients; all are disconnected on teardown."""
    created = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/',
        )
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        if test_client.is_connected('/'):
            test_client.disconnect(namespace='/')


@pytest.fixture()
def registry():
    return SessionRegistry()


@pytest.fixture()
def gateway():
    return RecordingGateway()


@pytest.fixture()
def dispatcher(registry, gateway):
    return IntentDispatcher(registry, gateway)
