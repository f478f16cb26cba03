"""Shared fixtures: in-memory transports that record what the clients send."""

import pytest

from ed_discussion.clients.errors import TransportError
from ed_discussion.clients.transport import RawResponse


class FakeTransport:
    """Answers every request with a canned status and body"""

    def __init__(self, body: bytes = b"{}", status: int = 200, error: Exception = None):
        self.body = body
        self.status = status
        self.error = error
        self.calls = []
        self.closed = False

    def _answer(self, method, url, headers, params, body):
        self.calls.append(
            {"method": method, "url": url, "headers": headers, "params": params, "body": body}
        )
        if self.error is not None:
            raise TransportError(f"{method} {url} failed: {self.error}", url) from self.error
        return RawResponse(self.status, self.body, url)

    @property
    def last(self):
        return self.calls[-1]


class FakeAsyncTransport(FakeTransport):
    async def request(self, method, url, *, headers, params=None, body=None):
        return self._answer(method, url, headers, params, body)

    async def close(self):
        self.closed = True


class FakeSyncTransport(FakeTransport):
    def request(self, method, url, *, headers, params=None, body=None):
        return self._answer(method, url, headers, params, body)

    def close(self):
        self.closed = True


@pytest.fixture
def async_transport():
    return FakeAsyncTransport()


@pytest.fixture
def sync_transport():
    return FakeSyncTransport()
