"""Shared test fixtures."""

from __future__ import annotations

import pytest

from groupme_api.api import GroupMeClient
from groupme_api.core import ClientConfig, RequestDispatcher, ResponseCache

TOKEN = "test-token"


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep GROUPME_* variables and .env files out of the tests."""
    for name in ("GROUPME_ACCESS_TOKEN", "GROUPME_TIMEOUT", "GROUPME_VERIFY_TLS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResponseCache(enabled=True, ttl_seconds=60, clock=clock)


@pytest.fixture
def dispatcher(cache):
    with RequestDispatcher(TOKEN, cache) as d:
        yield d


@pytest.fixture
def config():
    return ClientConfig(access_token=TOKEN)


@pytest.fixture
def client(config, clock):
    dispatcher = RequestDispatcher.from_config(
        config, ResponseCache(enabled=False, ttl_seconds=60, clock=clock)
    )
    with GroupMeClient(config=config, dispatcher=dispatcher) as c:
        yield c


def _envelope(response, code: int = 200, errors: list[str] | None = None) -> dict:
    return {"meta": {"code": code, "errors": errors or []}, "response": response}


@pytest.fixture
def envelope():
    """Build a GroupMe response body."""
    return _envelope
