"""
Pytest configuration and shared fixtures.

The backend directory is on sys.path (see pyproject.toml), so modules are
imported the same way the app imports them: ``services.cache``, ``errors``.
"""

import copy

import httpx
import pytest

from services.cache import CacheStore
from services.waqi_client import WaqiClient

DELHI_FEED = {
    "status": "ok",
    "data": {
        "aqi": 164,
        "iaqi": {"pm25": {"v": 89}},
        "city": {"name": "Delhi, India", "geo": [28.66667, 77.21667]},
        "dominentpol": "pm25",
    },
}

FULL_FEED = {
    "status": "ok",
    "data": {
        "aqi": 42,
        "idx": 5724,
        "iaqi": {
            "pm25": {"v": 42},
            "pm10": {"v": 18.5},
            "o3": {"v": 31.2},
            "no2": {"v": 12},
            "so2": {"v": 1.6},
            "co": {"v": 0.3},
            "t": {"v": 14},
            "w": {},
        },
        "city": {
            "name": "London",
            "geo": [51.5073509, -0.1277583],
            "url": "https://aqicn.org/city/london",
        },
        "dominentpol": "pm25",
        "time": {"s": "2026-10-19 09:00:00", "tz": "+01:00", "v": 1792400400, "iso": "2026-10-19T09:00:00+01:00"},
        "attributions": [
            {"name": "London Air Quality Network", "url": "https://www.londonair.org.uk/"},
            {"name": "World Air Quality Index Project"},
        ],
    },
}


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeWaqiClient:
    """Records calls and returns a canned document or raises a canned error."""

    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[str] = []

    async def fetch(self, city: str) -> dict:
        self.calls.append(city)
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.response)


class CountingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it sees."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def delhi_feed() -> dict:
    return copy.deepcopy(DELHI_FEED)


@pytest.fixture
def full_feed() -> dict:
    return copy.deepcopy(FULL_FEED)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> CacheStore:
    return CacheStore(clock=clock)


@pytest.fixture
def make_waqi_client():
    """Build a WaqiClient whose requests go to ``handler`` instead of the network."""

    def _make(handler, token: str | None = "test-token"):
        transport = CountingTransport(handler)
        return WaqiClient(token, "https://api.waqi.test", transport=transport), transport

    return _make


@pytest.fixture
def fake_client_cls():
    return FakeWaqiClient
