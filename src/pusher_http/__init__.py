"""
python-pusher-http - Async client for the Pusher HTTP API.

Example:
    from pusher_http import PusherClient

    async def main():
        async with PusherClient() as pusher:
            await pusher.trigger("my-channel", "my-event", {"message": "hello"})
            token = await pusher.authorize_channel(socket_id, "private-orders")
"""

from pusher_http.auth import ChannelAuthorizer
from pusher_http.client import PusherClient
from pusher_http.config import PusherConfig
from pusher_http.crypto import HashlibPrimitive
from pusher_http.events import BatchEvent, TriggerOptions, TriggerResponse
from pusher_http.exceptions import (
    ConfigurationError,
    CryptoFailure,
    HTTPError,
    InvalidArgument,
    PusherError,
    TransportError,
    UnsupportedPrimitive,
)
from pusher_http.signing import RequestSigner, SignedRequest, build_event_signature
from pusher_http.types import (
    AuthResponse,
    ChannelInfo,
    Credentials,
    CryptoPrimitive,
    PresenceMemberData,
)

__version__ = "0.1.0"

__all__ = [
    # Main client
    "PusherClient",
    "PusherConfig",
    # Signing
    "RequestSigner",
    "SignedRequest",
    "build_event_signature",
    "ChannelAuthorizer",
    "HashlibPrimitive",
    # Events
    "TriggerOptions",
    "BatchEvent",
    "TriggerResponse",
    # Exceptions
    "PusherError",
    "ConfigurationError",
    "InvalidArgument",
    "UnsupportedPrimitive",
    "CryptoFailure",
    "TransportError",
    "HTTPError",
    # Types
    "AuthResponse",
    "ChannelInfo",
    "Credentials",
    "CryptoPrimitive",
    "PresenceMemberData",
]
