"""HMAC-SHA256 and body digest helpers over an injectable crypto primitive."""

from __future__ import annotations

import hashlib
import hmac
import logging
from dataclasses import dataclass, field
from typing import Any

from .exceptions import CryptoFailure, UnsupportedPrimitive
from .types import CryptoPrimitive

logger = logging.getLogger(__name__)

BODY_DIGEST_ALGORITHM = "md5"


@dataclass(frozen=True)
class HmacKey:
    """Key handle produced by HashlibPrimitive."""

    secret: bytes = field(repr=False)


class HashlibPrimitive:
    """
    Default crypto primitive backed by the standard hmac/hashlib modules.

    Digest algorithms missing from the running interpreter (for example
    MD5 on FIPS builds) are reported as UnsupportedPrimitive.
    """

    async def import_signing_key(self, secret: bytes) -> HmacKey:
        return HmacKey(secret)

    async def sign(self, key: HmacKey, message: bytes) -> bytes:
        return hmac.new(key.secret, message, hashlib.sha256).digest()

    async def digest(self, algorithm: str, data: bytes) -> bytes:
        try:
            hasher = hashlib.new(algorithm)
        except ValueError as e:
            raise UnsupportedPrimitive(algorithm) from e
        hasher.update(data)
        return hasher.digest()


def hex_encode(raw: bytes) -> str:
    """Lowercase, two-digit-per-byte hex."""
    return raw.hex()


async def hmac_sha256_hex(primitive: CryptoPrimitive, secret: str, message: str) -> str:
    """
    HMAC-SHA256 of message keyed with secret, as lowercase hex.

    Both strings are UTF-8 encoded. Any failure inside the primitive is
    raised as CryptoFailure.
    """
    try:
        key: Any = await primitive.import_signing_key(secret.encode("utf-8"))
        raw = await primitive.sign(key, message.encode("utf-8"))
    except CryptoFailure:
        raise
    except Exception as e:
        raise CryptoFailure(f"HMAC-SHA256 signing failed: {e}") from e
    return hex_encode(raw)


async def compute_body_md5(primitive: CryptoPrimitive, body: str) -> str | None:
    """
    Hex MD5 of a request body, or None when the primitive lacks MD5.

    A None result means body_md5 must be left out of both the string to
    sign and the outgoing query parameters.
    """
    try:
        raw = await primitive.digest(BODY_DIGEST_ALGORITHM, body.encode("utf-8"))
    except UnsupportedPrimitive:
        logger.warning("MD5 digest unavailable, sending request without body_md5")
        return None
    except CryptoFailure:
        raise
    except Exception as e:
        raise CryptoFailure(f"Body digest failed: {e}") from e
    return hex_encode(raw)
