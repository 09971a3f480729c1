"""
Order token codec.

Maps an order intent plus its timing metadata to a single URL-safe string
and back. The payload is canonical JSON (sorted keys, no whitespace)
encoded as unpadded base64url, so it never needs percent-encoding in a
query parameter or a hidden form field.

Integrity and expiry are not checked here, see ``authenticator``.
"""

import base64
import binascii
import re
from typing import Any, NamedTuple

import orjson
from pydantic import BaseModel, ConfigDict, StrictInt, ValidationError

from app.models.order import OrderIntent
from app.modules.checkout.errors import MalformedToken

BASE64URL_RE = re.compile(r"[A-Za-z0-9_-]+")


class DecodedPayload(NamedTuple):
    """Result of decoding a token payload."""

    intent: OrderIntent
    issued_at: int
    expires_at: int


class _Envelope(BaseModel):
    """Wire structure of the token payload."""

    model_config = ConfigDict(extra="forbid")

    iat: StrictInt
    exp: StrictInt
    intent: OrderIntent


def b64url_encode(data: bytes) -> str:
    """Encode bytes as unpadded base64url text."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text: str) -> bytes:
    """
    Decode unpadded base64url text.

    Raises:
        ValueError: If text is empty, has foreign characters or a bad length
    """
    if not text or not BASE64URL_RE.fullmatch(text):
        raise ValueError("not base64url text")
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except binascii.Error as e:
        raise ValueError("invalid base64url length") from e


def encode(intent: OrderIntent, issued_at: float, expires_at: float) -> str:
    """
    Encode an order intent with its issuance and expiry timestamps.

    Args:
        intent: Complete order intent
        issued_at: Unix time in seconds (truncated to whole seconds)
        expires_at: Unix time in seconds, strictly after issued_at once truncated

    Returns:
        Base64url payload text

    Raises:
        ValueError: If the timestamps are not ordered
    """
    issued_at = int(issued_at)
    expires_at = int(expires_at)
    if expires_at <= issued_at:
        raise ValueError("expires_at must be after issued_at")

    envelope: dict[str, Any] = {
        "iat": issued_at,
        "exp": expires_at,
        "intent": intent.model_dump(mode="json", exclude_none=True),
    }
    raw = orjson.dumps(envelope, option=orjson.OPT_SORT_KEYS)
    return b64url_encode(raw)


def decode(payload: str) -> DecodedPayload:
    """
    Decode payload text produced by ``encode``.

    Raises:
        MalformedToken: If the payload is not a well-formed envelope
    """
    try:
        raw = b64url_decode(payload)
    except ValueError as e:
        raise MalformedToken(str(e)) from e

    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise MalformedToken("payload is not JSON") from e

    if not isinstance(data, dict):
        raise MalformedToken("payload is not an object")

    try:
        envelope = _Envelope.model_validate(data)
    except ValidationError as e:
        raise MalformedToken(f"invalid envelope ({e.error_count()} errors)") from e

    if envelope.exp <= envelope.iat:
        raise MalformedToken("expiry precedes issuance")

    return DecodedPayload(
        intent=envelope.intent,
        issued_at=envelope.iat,
        expires_at=envelope.exp,
    )
