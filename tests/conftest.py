"""Pytest fixtures for python-pusher-http tests."""

from __future__ import annotations

from typing import Any

import pytest

from pusher_http.config import PusherConfig
from pusher_http.crypto import HashlibPrimitive
from pusher_http.exceptions import TransportError, UnsupportedPrimitive
from pusher_http.transport import HttpResponse
from pusher_http.types import QueryParams

# Credentials from the service's published signing examples
APP_ID = "3"
APP_KEY = "278d425bdf160c739803"
APP_SECRET = "7ad3773142a6692b25b8"


class NoMD5Primitive(HashlibPrimitive):
    """Primitive for a runtime that only ships SHA-2 digests."""

    async def digest(self, algorithm: str, data: bytes) -> bytes:
        if algorithm == "md5":
            raise UnsupportedPrimitive(algorithm)
        return await super().digest(algorithm, data)


class BrokenPrimitive(HashlibPrimitive):
    """Primitive whose key import always fails."""

    async def import_signing_key(self, secret: bytes) -> Any:
        raise RuntimeError("key import rejected")


class FakeTransport:
    """Records requests and replays a canned response."""

    def __init__(self, response: HttpResponse | None = None, error: Exception | None = None) -> None:
        self.response = response or HttpResponse(status=200, text="{}")
        self.error = error
        self.requests: list[tuple[str, str, QueryParams, str | None]] = []
        self.closed = False

    async def request(
        self, method: str, path: str, params: QueryParams, body: str | None = None
    ) -> HttpResponse:
        self.requests.append((method, path, dict(params), body))
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PUSHER_* variables from the host out of the tests."""
    for name in ("APP_ID", "KEY", "SECRET", "CLUSTER", "USE_TLS", "HOST", "PORT"):
        monkeypatch.delenv(f"PUSHER_{name}", raising=False)


@pytest.fixture
def config() -> PusherConfig:
    """Create a test configuration."""
    return PusherConfig(
        app_id=APP_ID,
        key=APP_KEY,
        secret=APP_SECRET,
        cluster="eu",
        _env_file=None,
    )


@pytest.fixture
def credentials(config: PusherConfig):
    return config.credentials()


@pytest.fixture
def socket_id() -> str:
    """Sample socket ID for testing."""
    return "1234.1234"


@pytest.fixture
def timestamp() -> int:
    return 1353088179


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def no_md5_primitive() -> NoMD5Primitive:
    return NoMD5Primitive()
