"""Type definitions for python-pusher-http."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, NotRequired, Protocol, TypeAlias, TypedDict

# Returns the current Unix time in seconds
Clock: TypeAlias = Callable[[], float]

# Query parameters sent with (and signed for) a REST call
QueryParams: TypeAlias = dict[str, str]


@dataclass(frozen=True)
class Credentials:
    """Application credentials. The secret is kept out of repr()."""

    app_id: str
    key: str
    secret: str = field(repr=False)


class AuthResponse(TypedDict):
    """Channel authorization token handed back to a subscribing client."""

    auth: str
    channel_data: NotRequired[str]


class PresenceMemberData(TypedDict):
    """Member data signed into a presence channel subscription."""

    user_id: str | int
    user_info: NotRequired[dict[str, Any]]


class ChannelInfo(TypedDict, total=False):
    """Channel attributes as reported by the HTTP API."""

    occupied: bool
    subscription_count: int
    user_count: int


class CryptoPrimitive(Protocol):
    """Awaitable HMAC/digest capabilities the signers depend on."""

    async def import_signing_key(self, secret: bytes) -> Any:
        """Prepare an HMAC-SHA256 key handle from raw secret bytes."""
        ...

    async def sign(self, key: Any, message: bytes) -> bytes:
        """Return the raw HMAC-SHA256 of message."""
        ...

    async def digest(self, algorithm: str, data: bytes) -> bytes:
        """Return the raw digest, or raise UnsupportedPrimitive."""
        ...
