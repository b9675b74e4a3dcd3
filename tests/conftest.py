import json
from collections import namedtuple

import pytest

import binance_v3.client
from binance_v3 import Client

SERVER_TIME = 1_700_000_000_000

Call = namedtuple("Call", ["method", "url", "headers"])


class FakeResponse:

    def __init__(self, body: str="{}", status: int=200, error: Exception=None):
        self.body = body
        self.status = status
        self.error = error
        self.released = False

    async def text(self) -> str:
        if self.error is not None:
            raise self.error
        return self.body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.released = True


class FakeSession:
    """Answers requests by URL path, and fails loudly on any other path.

    A route is either a response body, a :class:`FakeResponse`, or an
    exception to raise from the transport.

    """

    def __init__(self, routes: dict=None, server_time: int=SERVER_TIME):
        self.calls = []
        self.closed = False
        self.routes = {"/api/v3/time": json.dumps({"serverTime": server_time})}
        self.routes.update(routes or {})

    async def request(self, method, url, headers=None):
        self.calls.append(Call(method, url, headers))

        route = self.routes.get(url.path)

        if route is None:
            raise AssertionError(f"Unexpected request: {method} {url}")
        if isinstance(route, BaseException):
            raise route
        if isinstance(route, FakeResponse):
            return route
        return FakeResponse(route)

    @property
    def paths(self):
        return [c.url.path for c in self.calls]

    async def close(self):
        self.closed = True


@pytest.fixture
def fixed_clocks(monkeypatch):
    """Local clock 500ms ahead of `SERVER_TIME`, with a 200ms round trip.

    That makes the calibrated offset `500 + 100 + 1000 = 1600`.

    """

    readings = iter([10_000, 10_200])

    monkeypatch.setattr(binance_v3.client, "current_millis", lambda: SERVER_TIME + 500)
    monkeypatch.setattr(binance_v3.client, "monotonic_millis", lambda: next(readings))


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
async def client(session, fixed_clocks):
    client = await Client.create("key", "secret", session=session)
    yield client
    await client.close()


@pytest.fixture
async def public_client(session, fixed_clocks):
    client = await Client.create(session=session)
    yield client
    await client.close()
