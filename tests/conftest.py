"""Shared fixtures: a Semrush client wired to an in-memory HTTP transport."""

from typing import Callable

import httpx
import pytest

from semrush_mcp.core.clients.semrush import SemrushClient

TEST_KEY = "test-key"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def make_client():
    """Build a client whose every request is answered by ``handler``."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> tuple[SemrushClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        return SemrushClient(api_key=TEST_KEY, transport=transport), transport

    return factory


@pytest.fixture(autouse=True)
def isolate_semrush_env(monkeypatch):
    """Keep a developer's real key and .env file out of every test."""
    for key in ("SEMRUSH_API_KEY", "SEMRUSH_API_BASE", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("semrush_mcp.config.load_dotenv", lambda *_args, **_kwargs: False)
