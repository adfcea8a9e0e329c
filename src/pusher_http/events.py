"""Event payload construction for the trigger endpoints."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import InvalidArgument

MAX_TRIGGER_CHANNELS = 100
MAX_CHANNEL_NAME_LENGTH = 200

CHANNEL_NAME_RE = re.compile(r"[-a-zA-Z0-9_=@,.;]+")
SOCKET_ID_RE = re.compile(r"\d+\.\d+")


class Paths:
    """HTTP API paths, relative to the base URL."""

    EVENTS = "/apps/{app_id}/events"
    BATCH_EVENTS = "/apps/{app_id}/batch_events"
    CHANNELS = "/apps/{app_id}/channels"
    CHANNEL = "/apps/{app_id}/channels/{channel}"
    CHANNEL_USERS = "/apps/{app_id}/channels/{channel}/users"


def validate_channel_name(channel: str) -> None:
    """Raise InvalidArgument unless channel is a legal channel name."""
    if not channel:
        raise InvalidArgument("Channel is required")
    if len(channel) > MAX_CHANNEL_NAME_LENGTH:
        raise InvalidArgument(
            f"Channel name longer than {MAX_CHANNEL_NAME_LENGTH} characters: {channel[:20]!r}..."
        )
    if not CHANNEL_NAME_RE.fullmatch(channel):
        raise InvalidArgument(f"Invalid channel name: {channel!r}")


def validate_socket_id(socket_id: str) -> None:
    if not socket_id:
        raise InvalidArgument("Socket ID is required")
    if not SOCKET_ID_RE.fullmatch(socket_id):
        raise InvalidArgument(f"Invalid socket ID: {socket_id!r}")


def serialize_event_data(data: Any) -> str:
    """Strings are sent as-is; anything else is JSON-encoded exactly once."""
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Event data is not JSON serializable: {e}") from e


@dataclass
class TriggerOptions:
    """A single event published to one or more channels."""

    channels: str | list[str]
    event: str
    data: Any = None
    socket_id: str | None = None

    @property
    def channel_list(self) -> list[str]:
        if isinstance(self.channels, str):
            return [self.channels]
        return list(self.channels)

    def to_payload(self) -> dict[str, Any]:
        """Request body for POST /events."""
        channels = self.channel_list
        if not channels or not all(channels):
            raise InvalidArgument("At least one non-empty channel is required")
        if len(channels) > MAX_TRIGGER_CHANNELS:
            raise InvalidArgument(
                f"Cannot trigger on more than {MAX_TRIGGER_CHANNELS} channels at once"
            )
        for channel in channels:
            validate_channel_name(channel)
        if not self.event:
            raise InvalidArgument("Event name is required")
        if self.socket_id:
            validate_socket_id(self.socket_id)

        payload: dict[str, Any] = {
            "name": self.event,
            "data": serialize_event_data(self.data),
            "channels": channels,
        }
        if self.socket_id:
            payload["socket_id"] = self.socket_id
        return payload


@dataclass
class BatchEvent:
    """One entry of a batch trigger."""

    channel: str
    name: str
    data: Any = None
    socket_id: str | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "BatchEvent":
        """Accept both socket_id and socketId spellings."""
        return cls(
            channel=raw.get("channel", ""),
            name=raw.get("name", ""),
            data=raw.get("data"),
            socket_id=raw.get("socket_id") or raw.get("socketId"),
        )

    def to_payload(self) -> dict[str, Any]:
        validate_channel_name(self.channel)
        if not self.name:
            raise InvalidArgument("Batch event name is required")
        if self.socket_id:
            validate_socket_id(self.socket_id)

        payload: dict[str, Any] = {
            "channel": self.channel,
            "name": self.name,
            "data": serialize_event_data(self.data),
        }
        if self.socket_id:
            payload["socket_id"] = self.socket_id
        return payload


def build_batch_payload(events: list[BatchEvent | Mapping[str, Any]]) -> dict[str, Any]:
    """Request body for POST /batch_events."""
    if not events:
        raise InvalidArgument("Batch must contain at least one event")
    batch = [
        (event if isinstance(event, BatchEvent) else BatchEvent.from_mapping(event)).to_payload()
        for event in events
    ]
    return {"batch": batch}


@dataclass
class TriggerResponse:
    """Outcome of a trigger call. Transport failures are reported here, not raised."""

    success: bool
    error: str | None = None
    status: int | None = None
    body_md5_omitted: bool = False
