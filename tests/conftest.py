import os
import sys
import threading
from types import SimpleNamespace

# Ensure project root is on sys.path for `import app`, `import services`, etc.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pytest

from app import create_app
from config import TestingConfig
from services import get_product


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def verume():
    return get_product('verume')


@pytest.fixture
def stripe_session():
    """Stand-in for the object returned by stripe.checkout.Session.create"""
    return SimpleNamespace(id='cs_test_123', url='https://pay.example/sess_123')


class FakeResponse:
    """Minimal requests.Response look-alike"""

    def __init__(self, status_code=200, data=None, text=None):
        self.status_code = status_code
        self._data = data
        self._text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._data is None:
            raise ValueError('No JSON body')
        return self._data


class FakeSession:
    """Records posts and answers with a canned response (or raises)"""

    def __init__(self, response=None, error=None, gate=None):
        self.response = response or FakeResponse(200, {'url': 'https://pay.example/sess_123'})
        self.error = error
        self.gate = gate
        self.calls = []
        self.entered = threading.Event()

    def post(self, url, json=None, timeout=None):
        self.calls.append({'url': url, 'json': json, 'timeout': timeout})
        self.entered.set()
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    return FakeSession
