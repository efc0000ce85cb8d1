"""Pytest configuration and shared fixtures."""

import json

import pytest

from itbit_sdk import ClientConfig, ItbitApiClient

TEST_KEY = "test-key"
TEST_SECRET = "test-secret"
TEST_NONCE = 1000
V1 = "https://api.test/v1"
V2 = "https://www.test/api/v2"


class MockResponse:
    """Stand-in for an aiohttp response used as an async context manager."""

    def __init__(self, status: int, body: bytes = b""):
        self.status = status
        self._body = body

    async def read(self) -> bytes:
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None


class MockSession:
    """Records requests and replays canned responses instead of the network."""

    def __init__(self, responses=None, error=None):
        self.calls = []
        self.closed = False
        self._responses = list(responses or [MockResponse(200, b"{}")])
        self._error = error

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": str(url), **kwargs})
        if self._error is not None:
            raise self._error
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]

    async def close(self):
        self.closed = True


def json_response(status: int, payload) -> MockResponse:
    return MockResponse(status, json.dumps(payload).encode("utf-8"))


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (run offline)")


@pytest.fixture
def config():
    return ClientConfig(key=TEST_KEY, secret=TEST_SECRET, server_v1=V1, server_v2=V2)


@pytest.fixture
def session():
    return MockSession()


@pytest.fixture
def client(config, session):
    return ItbitApiClient(config, session=session, nonce=TEST_NONCE)
