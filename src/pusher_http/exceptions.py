"""Custom exceptions for python-pusher-http."""

from __future__ import annotations


class PusherError(Exception):
    """Base exception for all Pusher HTTP errors."""

    pass


class ConfigurationError(PusherError):
    """Missing or invalid credentials at construction time."""

    pass


class InvalidArgument(PusherError, ValueError):
    """Bad caller input, raised before any signing or network work."""

    pass


class UnsupportedPrimitive(PusherError):
    """The crypto primitive lacks the requested algorithm."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"Digest algorithm not supported: {algorithm}")
        self.algorithm = algorithm


class CryptoFailure(PusherError):
    """Key import or signing failed inside the crypto primitive."""

    pass


class TransportError(PusherError):
    """Failed to reach the HTTP API."""

    pass


class HTTPError(PusherError):
    """The HTTP API answered with a non-2xx status."""

    def __init__(self, message: str, status: int, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body
