"""Request signing for the Pusher HTTP API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from .crypto import HashlibPrimitive, compute_body_md5, hmac_sha256_hex
from .exceptions import InvalidArgument
from .types import Credentials, CryptoPrimitive, QueryParams

logger = logging.getLogger(__name__)

AUTH_VERSION = "1.0"
SIGNED_METHODS = frozenset({"GET", "POST"})
RESERVED_PARAMS = frozenset(
    {"auth_key", "auth_timestamp", "auth_version", "body_md5", "auth_signature"}
)


def build_auth_params(key: str, timestamp: int, body_md5: str | None = None) -> QueryParams:
    """Auth query parameters; body_md5 is left out entirely when None."""
    params: QueryParams = {
        "auth_key": key,
        "auth_timestamp": str(timestamp),
        "auth_version": AUTH_VERSION,
    }
    if body_md5:
        params["body_md5"] = body_md5
    return params


def canonical_query_string(params: Mapping[str, str]) -> str:
    """
    Join params as name=value pairs with '&', sorted by lower-cased name.

    auth_signature is never part of the signed string. Values are used
    verbatim, without URL encoding.
    """
    pairs = sorted(
        (name.lower(), str(value))
        for name, value in params.items()
        if name.lower() != "auth_signature"
    )
    return "&".join(f"{name}={value}" for name, value in pairs)


def string_to_sign(method: str, path: str, query_string: str) -> str:
    return f"{method}\n{path}\n{query_string}"


@dataclass(frozen=True)
class SignedRequest:
    """Everything the transport needs to send a signed REST call."""

    query_params: QueryParams
    signature: str
    string_to_sign: str
    body_md5_omitted: bool = False


class RequestSigner:
    """
    Signs REST calls with HMAC-SHA256.

    The string to sign is:
        f"{method}\\n{path}\\n{canonical_query_string}"

    where the query string holds auth_key, auth_timestamp, auth_version,
    body_md5 (write calls only) and any extra query parameters, sorted by
    name.
    """

    def __init__(self, primitive: CryptoPrimitive | None = None) -> None:
        self.primitive: CryptoPrimitive = primitive or HashlibPrimitive()

    def canonicalize(
        self,
        method: str,
        path: str,
        timestamp: int,
        key: str,
        body_md5: str | None = None,
        params: Mapping[str, str] | None = None,
    ) -> tuple[QueryParams, str]:
        """Validate inputs and return (unsigned query params, string to sign)."""
        if method not in SIGNED_METHODS:
            raise InvalidArgument(f"Unsupported HTTP method: {method!r}")
        if not path.startswith("/"):
            raise InvalidArgument(f"API path must start with '/': {path!r}")

        query = build_auth_params(key, timestamp, body_md5)
        for name, value in (params or {}).items():
            if name.lower() in RESERVED_PARAMS:
                raise InvalidArgument(f"Query parameter {name!r} is reserved for signing")
            query[name] = str(value)
        return query, string_to_sign(method, path, canonical_query_string(query))

    async def sign(
        self,
        method: str,
        path: str,
        timestamp: int,
        key: str,
        secret: str,
        body_md5: str | None = None,
        params: Mapping[str, str] | None = None,
    ) -> str:
        """
        Compute the auth_signature for a REST call.

        Args:
            method: "GET" or "POST"
            path: Absolute API path, e.g. "/apps/3/events"
            timestamp: Unix seconds at call time
            key: Application key (signed as auth_key)
            secret: Application secret (HMAC key)
            body_md5: Hex MD5 of the request body, for calls with a body
            params: Extra query parameters to sign (e.g. info)

        Returns:
            64-character lowercase hex signature
        """
        _, message = self.canonicalize(method, path, timestamp, key, body_md5, params)
        return await hmac_sha256_hex(self.primitive, secret, message)


async def build_event_signature(
    signer: RequestSigner,
    method: str,
    path: str,
    timestamp: int,
    credentials: Credentials,
    body: str | None = None,
    params: Mapping[str, str] | None = None,
) -> SignedRequest:
    """
    Sign a REST call and assemble its outgoing query parameters.

    When a body is given its MD5 is signed as body_md5. If the primitive
    cannot produce MD5 the field is dropped and the result is flagged with
    body_md5_omitted.
    """
    body_md5: str | None = None
    omitted = False
    if body is not None:
        body_md5 = await compute_body_md5(signer.primitive, body)
        omitted = body_md5 is None

    query, message = signer.canonicalize(
        method, path, timestamp, credentials.key, body_md5, params
    )
    signature = await hmac_sha256_hex(signer.primitive, credentials.secret, message)
    query["auth_signature"] = signature

    logger.debug(f"Signed {method} {path} at {timestamp}")
    return SignedRequest(
        query_params=query,
        signature=signature,
        string_to_sign=message,
        body_md5_omitted=omitted,
    )
