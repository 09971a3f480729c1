"""
Order Token Authenticator - HMAC-SHA256 signed order sessions.

Token format:
    <payload>.<tag>

where ``payload`` is the codec output and ``tag`` is
base64url(HMAC-SHA256(secret, payload)). Both parts are unpadded
base64url, so the whole token is URL-safe.

Security Note:
The tag is recomputed over the payload text and compared in constant
time before anything in the payload is trusted.
"""

import hashlib
import hmac
import time
from datetime import timedelta
from typing import Callable

from app.models.order import OrderIntent
from app.modules.checkout import codec
from app.modules.checkout.errors import ExpiredToken, MalformedToken, TamperedToken

TOKEN_SEPARATOR = "."


class OrderTokenAuthenticator:
    """
    Issues and verifies signed order-session tokens.

    Stateless: no record of issued tokens is kept, so instances are safe
    to share between concurrent requests.

    Usage:
        auth = OrderTokenAuthenticator(secret)
        token = auth.issue(intent, ttl=900)
        intent = auth.verify(token)  # raises OrderTokenError
    """

    def __init__(
        self,
        secret: str | bytes,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize authenticator.

        Args:
            secret: Shared signing secret
            clock: Returns current Unix time in seconds
        """
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not secret:
            raise ValueError("Signing secret must not be empty")

        self._secret = secret
        self._clock = clock

    def _sign(self, payload: str) -> str:
        """Compute integrity tag for payload text."""
        digest = hmac.new(
            self._secret,
            payload.encode("ascii"),
            hashlib.sha256,
        ).digest()
        return codec.b64url_encode(digest)

    def issue(self, intent: OrderIntent, ttl: float | timedelta) -> str:
        """
        Issue a token for an order intent.

        Args:
            intent: Buyer's checkout selection
            ttl: Lifetime in seconds, truncated to whole seconds

        Returns:
            Signed token string

        Raises:
            ValueError: If ttl is not a positive number of seconds
        """
        if isinstance(ttl, timedelta):
            ttl = ttl.total_seconds()
        ttl = int(ttl)
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")

        issued_at = int(self._clock())
        payload = codec.encode(intent, issued_at, issued_at + ttl)

        return f"{payload}{TOKEN_SEPARATOR}{self._sign(payload)}"

    def verify(self, token: str) -> OrderIntent:
        """
        Verify a token and return its order intent.

        Checks run in order: structure, integrity tag, payload
        decoding, expiry.

        Raises:
            MalformedToken: Token shape or payload is invalid
            TamperedToken: Integrity tag does not match
            ExpiredToken: Token lifetime has elapsed
        """
        if not isinstance(token, str):
            raise MalformedToken("token is not a string")

        parts = token.split(TOKEN_SEPARATOR)
        if len(parts) != 2:
            raise MalformedToken("wrong number of token parts")

        payload, tag = parts
        if not codec.BASE64URL_RE.fullmatch(payload) or not codec.BASE64URL_RE.fullmatch(tag):
            raise MalformedToken("invalid token characters")

        # Constant-time comparison to prevent timing attacks
        if not hmac.compare_digest(tag, self._sign(payload)):
            raise TamperedToken("integrity tag mismatch")

        decoded = codec.decode(payload)

        if self._clock() >= decoded.expires_at:
            raise ExpiredToken("token expired")

        return decoded.intent
