"""Main PusherClient class for the Pusher HTTP API."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping, Sequence
from typing import Any

import aiohttp
from pydantic import ValidationError

from .auth import ChannelAuthorizer
from .config import PusherConfig
from .crypto import HashlibPrimitive
from .events import (
    BatchEvent,
    Paths,
    TriggerOptions,
    TriggerResponse,
    build_batch_payload,
    validate_channel_name,
)
from .exceptions import ConfigurationError, InvalidArgument, TransportError
from .signing import RequestSigner, SignedRequest, build_event_signature
from .transport import HttpTransport
from .types import (
    AuthResponse,
    ChannelInfo,
    Clock,
    Credentials,
    CryptoPrimitive,
    PresenceMemberData,
    QueryParams,
)

logger = logging.getLogger(__name__)


class PusherClient:
    """
    Async client for the Pusher HTTP API.

    Example:
        async with PusherClient(app_id="1", key="k", secret="s", cluster="eu") as pusher:
            await pusher.trigger("my-channel", "my-event", {"message": "hi"})
    """

    def __init__(
        self,
        app_id: str | None = None,
        key: str | None = None,
        secret: str | None = None,
        cluster: str | None = None,
        *,
        config: PusherConfig | None = None,
        use_tls: bool | None = None,
        host: str | None = None,
        port: int | None = None,
        primitive: CryptoPrimitive | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: HttpTransport | None = None,
        clock: Clock = time.time,
    ) -> None:
        """
        Initialize the Pusher client.

        Args:
            app_id: Application ID (or use PUSHER_APP_ID env var)
            key: Application key (or use PUSHER_KEY env var)
            secret: Application secret (or use PUSHER_SECRET env var)
            cluster: Cluster name (default: 'mt1')
            config: Optional PusherConfig instance (overrides individual params)
            use_tls: Use HTTPS (default: True)
            host: Explicit API host, overriding the cluster host
            port: Explicit API port
            primitive: Crypto primitive (default: HashlibPrimitive)
            session: aiohttp session to reuse; not closed by the client
            transport: Pre-built transport (overrides session)
            clock: Source of Unix time for auth_timestamp
        """
        if config is not None:
            self._config = config
        else:
            # Build kwargs for config, only including non-None values
            config_kwargs: dict[str, Any] = {}
            if app_id is not None:
                config_kwargs["app_id"] = app_id
            if key is not None:
                config_kwargs["key"] = key
            if secret is not None:
                config_kwargs["secret"] = secret
            if cluster is not None:
                config_kwargs["cluster"] = cluster
            if use_tls is not None:
                config_kwargs["use_tls"] = use_tls
            if host is not None:
                config_kwargs["host"] = host
            if port is not None:
                config_kwargs["port"] = port

            try:
                self._config = PusherConfig(**config_kwargs)
            except ValidationError as e:
                fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
                raise ConfigurationError(f"Invalid Pusher configuration: {fields}") from e

        logging.basicConfig(level=getattr(logging, self._config.log_level.upper()))

        self._credentials = self._config.credentials()
        self._clock = clock

        primitive = primitive or HashlibPrimitive()
        self._signer = RequestSigner(primitive)
        self._authorizer = ChannelAuthorizer(
            self._credentials.key, self._credentials.secret, primitive
        )
        self._transport = transport or HttpTransport(
            self._config.build_base_url(),
            timeout=self._config.timeout,
            session=session,
        )

    @property
    def config(self) -> PusherConfig:
        return self._config

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def base_url(self) -> str:
        return self._config.build_base_url()

    async def trigger(
        self,
        channels: str | Sequence[str] | TriggerOptions,
        event: str | None = None,
        data: Any = None,
        socket_id: str | None = None,
    ) -> TriggerResponse:
        """
        Trigger an event on one or more channels.

        Either pass a TriggerOptions, or channels, event and data directly.

        Args:
            channels: Channel name, list of names, or a TriggerOptions
            event: Event name
            data: Event data; strings are sent as-is, other values JSON-encoded
            socket_id: Socket ID to exclude from receiving the event
        """
        if isinstance(channels, TriggerOptions):
            options = channels
        else:
            options = TriggerOptions(
                channels=channels if isinstance(channels, str) else list(channels),
                event=event or "",
                data=data,
                socket_id=socket_id,
            )

        body = json.dumps(options.to_payload())
        path = Paths.EVENTS.format(app_id=self._credentials.app_id)
        return await self._post(path, body)

    async def trigger_batch(
        self, events: Sequence[BatchEvent | Mapping[str, Any]]
    ) -> TriggerResponse:
        """
        Trigger multiple events in a single API call.

        Args:
            events: BatchEvent instances or mappings with channel, name, data
                and an optional socket_id
        """
        body = json.dumps(build_batch_payload(list(events)))
        path = Paths.BATCH_EVENTS.format(app_id=self._credentials.app_id)
        return await self._post(path, body)

    async def authorize_channel(self, socket_id: str, channel: str) -> AuthResponse:
        """Generate an auth token for a private channel subscription."""
        return await self._authorizer.authorize_private(socket_id, channel)

    async def authenticate_presence_channel(
        self,
        socket_id: str,
        channel: str,
        presence_data: PresenceMemberData | Mapping[str, Any],
    ) -> AuthResponse:
        """Generate an auth token and channel_data for a presence channel subscription."""
        return await self._authorizer.authorize_presence(socket_id, channel, presence_data)

    async def get_channel(
        self, channel: str, info: Sequence[str] | None = None
    ) -> ChannelInfo:
        """
        Get information about a channel.

        Args:
            channel: Channel name
            info: Attributes to include, e.g. ["subscription_count"]

        Raises:
            HTTPError: The API answered with a non-2xx status
            TransportError: The API could not be reached
        """
        validate_channel_name(channel)
        path = Paths.CHANNEL.format(app_id=self._credentials.app_id, channel=channel)
        params: QueryParams = {}
        if info:
            params["info"] = ",".join(info)
        return await self._get(path, params, "Failed to get channel info")

    async def get_channels(
        self,
        prefix: str | None = None,
        info: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """
        Get the list of occupied channels.

        Args:
            prefix: Only return channels whose name starts with this prefix
            info: Attributes to include for each channel, e.g. ["user_count"]
        """
        path = Paths.CHANNELS.format(app_id=self._credentials.app_id)
        params: QueryParams = {}
        if prefix:
            params["filter_by_prefix"] = prefix
        if info:
            params["info"] = ",".join(info)
        return await self._get(path, params, "Failed to get channels")

    async def get_channel_users(self, channel: str) -> dict[str, Any]:
        """Get the user IDs subscribed to a presence channel."""
        validate_channel_name(channel)
        if not channel.startswith("presence-"):
            raise InvalidArgument("Users can only be listed for presence channels")
        path = Paths.CHANNEL_USERS.format(app_id=self._credentials.app_id, channel=channel)
        return await self._get(path, {}, "Failed to get channel users")

    def _timestamp(self) -> int:
        return int(self._clock())

    async def _sign(
        self,
        method: str,
        path: str,
        body: str | None = None,
        params: QueryParams | None = None,
    ) -> SignedRequest:
        return await build_event_signature(
            self._signer,
            method,
            path,
            self._timestamp(),
            self._credentials,
            body=body,
            params=params,
        )

    async def _post(self, path: str, body: str) -> TriggerResponse:
        """Signed POST; transport failures become an unsuccessful TriggerResponse."""
        signed = await self._sign("POST", path, body=body)

        try:
            response = await self._transport.request("POST", path, signed.query_params, body)
        except TransportError as e:
            return TriggerResponse(
                success=False, error=str(e), body_md5_omitted=signed.body_md5_omitted
            )

        if not response.ok:
            return TriggerResponse(
                success=False,
                error=response.text or f"HTTP {response.status}",
                status=response.status,
                body_md5_omitted=signed.body_md5_omitted,
            )

        logger.info(f"POST {path} succeeded")
        return TriggerResponse(
            success=True,
            status=response.status,
            body_md5_omitted=signed.body_md5_omitted,
        )

    async def _get(self, path: str, params: QueryParams, what: str) -> Any:
        signed = await self._sign("GET", path, params=params)
        response = await self._transport.request("GET", path, signed.query_params)
        response.raise_for_status(what)
        return response.json()

    async def close(self) -> None:
        """Release the HTTP session."""
        await self._transport.close()

    async def __aenter__(self) -> "PusherClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()
