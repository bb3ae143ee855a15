"""Shared test fixtures."""

import json

import pytest

from fixer_rates import FixerAPI


class FakeResponse:
    def __init__(self, content, read_error=None):
        self._content = content
        self._read_error = read_error
        self.status_code = 200

    @property
    def content(self):
        if self._read_error is not None:
            raise self._read_error
        return self._content


class FakeSession:
    """Stands in for :class:`requests.Session`, recording requested URLs."""

    def __init__(self):
        self.urls = []
        self.timeouts = []
        self.body = b'{"success": true}'
        self.error = None
        self.read_error = None

    def respond_with(self, payload):
        if isinstance(payload, (bytes, str)):
            self.body = payload.encode() if isinstance(payload, str) else payload
        else:
            self.body = json.dumps(payload).encode()

    def get(self, url, timeout=None):
        self.urls.append(url)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return FakeResponse(self.body, self.read_error)

    @property
    def last_url(self):
        return self.urls[-1]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def api(session):
    """A client with a fixed key and EUR base talking to the fake session."""
    return FixerAPI("test-key", base_currency="eur", session=session)
