import os
import random
import sys
import pytest

# Ensure the backend root (containing the `duel` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from config import Config
from duel import create_app, socketio
from duel.services.match import Lobby, ManualScheduler
from duel.services.match.catalog import parse_catalog


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    ALLOWED_ORIGINS = '*'
    MATCH_SEED = 7
    REVEAL_DELAY_MS = 1500
    RESOLVE_DELAY_MS = 2000


class FixedRandom(random.Random):
    """Deals the deck in catalog order and always lets seat 1 start."""

    def shuffle(self, x):
        pass

    def choice(self, seq):
        return seq[0]


def build_catalog(*columns, directions=None):
    """Build a catalog from per-card attribute dicts.

    ``build_catalog({'power': 5}, {'power': 3})`` yields cards c0, c1.
    Directions default to 'max' for every attribute.
    """
    names = list(columns[0].keys())
    directions = directions or {}
    return parse_catalog({
        'attributes': {name: {'direction': directions.get(name, 'max')} for name in names},
        'cards': [
            {'id': f'c{index}', 'name': f'Card {index}', 'attrs': attrs}
            for index, attrs in enumerate(columns)
        ],
    })


class Outbox:
    """Records everything a Lobby sends, in order."""

    def __init__(self):
        self.sent = []

    def __call__(self, sid, event, payload):
        self.sent.append((sid, event, payload))

    def events(self, sid=None, name=None):
        return [
            payload for to, event, payload in self.sent
            if (sid is None or to == sid) and (name is None or event == name)
        ]

    def states(self, sid):
        return self.events(sid, 'game:state')

    def clear(self):
        self.sent.clear()


@pytest.fixture()
def catalog_of():
    return build_catalog


@pytest.fixture()
def fixed_rng():
    return FixedRandom()


@pytest.fixture()
def outbox():
    return Outbox()


@pytest.fixture()
def make_lobby(outbox):
    def _make(catalog, rng=None):
        return Lobby(catalog, ManualScheduler(), send=outbox, rng=rng or FixedRandom())
    return _make


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
