"""
Shared pytest fixtures for the proxy test suites.
"""

from typing import Any, Callable, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from service_proxy.app.main import create_app

TEST_BASE_URL = "https://upstream.test/3"
TEST_TOKEN = "test-read-token"


class UpstreamRecorder:
    """Stands in for the TMDB API and keeps every request it receives."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._responder: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"page": 1, "results": []})
        )

    def respond_with(self, status_code: int, json: Any = None, content: Optional[bytes] = None):
        if content is not None:
            self._responder = lambda request: httpx.Response(status_code, content=content)
        else:
            self._responder = lambda request: httpx.Response(status_code, json=json)

    def fail_with(self, exc_factory: Callable[[httpx.Request], Exception]):
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_factory(request)

        self._responder = _raise

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def upstream():
    """Recording upstream double."""
    return UpstreamRecorder()


@pytest.fixture
def proxy_env(monkeypatch):
    """Process configuration pointing at the upstream double."""
    monkeypatch.setenv("TMDB_API_KEY", TEST_TOKEN)
    monkeypatch.setenv("TMDB_BASE_URL", TEST_BASE_URL)
    monkeypatch.setenv("CORS_ORIGIN", "http://localhost:5173")
    monkeypatch.delenv("TMDB_TIMEOUT_SECONDS", raising=False)


@pytest.fixture
def app(proxy_env, upstream):
    """Create FastAPI app instance wired to the upstream double."""
    return create_app(transport=upstream.transport())


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)
