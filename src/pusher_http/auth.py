"""HMAC-SHA256 authorization for private/presence channels."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from .crypto import HashlibPrimitive, hmac_sha256_hex
from .events import validate_channel_name, validate_socket_id
from .exceptions import InvalidArgument
from .types import AuthResponse, CryptoPrimitive

logger = logging.getLogger(__name__)

PRESENCE_PREFIX = "presence-"


def serialize_channel_data(member_data: Mapping[str, Any]) -> str:
    """Compact JSON for presence member data, deterministic for a given input."""
    try:
        return json.dumps(dict(member_data), separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Presence data is not JSON serializable: {e}") from e


class ChannelAuthorizer:
    """
    Produces auth tokens for private/presence channel subscriptions.

    The signature is computed as:
        HMAC-SHA256(secret, f"{socket_id}:{channel}")

    For presence channels, member data is included:
        HMAC-SHA256(secret, f"{socket_id}:{channel}:{channel_data}")
    """

    def __init__(
        self,
        key: str,
        secret: str,
        primitive: CryptoPrimitive | None = None,
    ) -> None:
        self.key = key
        self._secret = secret
        self.primitive: CryptoPrimitive = primitive or HashlibPrimitive()

    def __repr__(self) -> str:
        return f"ChannelAuthorizer(key={self.key!r})"

    async def authorize(
        self,
        socket_id: str,
        channel: str,
        member_data: Mapping[str, Any] | None = None,
    ) -> AuthResponse:
        """
        Authorize a subscription, choosing the presence variant by channel prefix.

        Args:
            socket_id: Socket ID of the subscribing connection
            channel: Channel being subscribed to
            member_data: Member data for presence channels (must include 'user_id')

        Returns:
            Dict with 'auth' key, and 'channel_data' for presence channels
        """
        if channel.startswith(PRESENCE_PREFIX):
            return await self.authorize_presence(socket_id, channel, member_data)
        return await self.authorize_private(socket_id, channel)

    async def authorize_private(self, socket_id: str, channel: str) -> AuthResponse:
        """Auth token for a private channel."""
        self._check_subscription(socket_id, channel)

        string_to_sign = f"{socket_id}:{channel}"
        return {"auth": await self._sign(string_to_sign)}

    async def authorize_presence(
        self,
        socket_id: str,
        channel: str,
        member_data: Mapping[str, Any] | None,
    ) -> AuthResponse:
        """
        Auth token for a presence channel.

        The returned 'channel_data' is the exact string that was signed and
        must be forwarded to the client unchanged.
        """
        self._check_subscription(socket_id, channel)
        if not isinstance(member_data, Mapping):
            raise InvalidArgument("Presence channels require member data")
        user_id = member_data.get("user_id")
        if user_id is None or user_id == "":
            raise InvalidArgument("user_id is required in presence data")

        channel_data = serialize_channel_data(member_data)
        string_to_sign = f"{socket_id}:{channel}:{channel_data}"
        return {
            "auth": await self._sign(string_to_sign),
            "channel_data": channel_data,
        }

    @staticmethod
    def _check_subscription(socket_id: str, channel: str) -> None:
        validate_socket_id(socket_id)
        validate_channel_name(channel)

    async def _sign(self, message: str) -> str:
        """
        Generate HMAC-SHA256 signature.

        Returns:
            String in format "key:hex_digest"
        """
        signature = await hmac_sha256_hex(self.primitive, self._secret, message)
        logger.debug(f"Authorized subscription for key {self.key}")
        return f"{self.key}:{signature}"
