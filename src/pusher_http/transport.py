"""HTTP transport for the Pusher REST API."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from .exceptions import HTTPError, TransportError
from .types import QueryParams

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Status and body of a completed HTTP call."""

    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """Parsed body; a body that is not JSON is a TransportError."""
        if not self.text:
            return {}
        try:
            return json.loads(self.text)
        except json.JSONDecodeError as e:
            raise TransportError(
                f"Invalid JSON response (HTTP {self.status}): {self.text[:100]!r}"
            ) from e

    def raise_for_status(self, what: str) -> None:
        """Raise HTTPError for a non-2xx status."""
        if not self.ok:
            detail = self.text or f"HTTP {self.status}"
            raise HTTPError(f"{what}: {detail}", status=self.status, body=self.text)


class HttpTransport:
    """
    Thin aiohttp wrapper that sends already-signed requests.

    Handles:
    - Lazy session creation inside the running event loop
    - Request timeouts
    - Mapping aiohttp failures to TransportError

    A session passed in by the caller is never closed by the transport.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    @property
    def is_closed(self) -> bool:
        return self._session is None or self._session.closed

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def request(
        self,
        method: str,
        path: str,
        params: QueryParams,
        body: str | None = None,
    ) -> HttpResponse:
        """Send a signed request and read the whole response body."""
        url = f"{self.base_url}{path}"
        session = self._get_session()
        logger.debug(f"{method} {path}")

        try:
            async with session.request(
                method,
                url,
                params=params,
                data=body.encode("utf-8") if body is not None else None,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                response = HttpResponse(status=resp.status, text=text)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{method} {path} error: {e}")
            raise TransportError(f"{method} {path} failed: {e}") from e

        if not response.ok:
            logger.error(f"{method} {path} failed status={response.status} body={response.text}")
        return response

    async def close(self) -> None:
        """Close the session if this transport created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None
