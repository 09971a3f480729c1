"""
Checkout Module - Stateless order sessions.

Features:
- Signed, time-bounded order-session tokens
- Order intent encoding and decoding
- Uniform rejection of malformed, tampered and expired tokens
"""

from app.modules.checkout.authenticator import OrderTokenAuthenticator
from app.modules.checkout.errors import (
    ExpiredToken,
    MalformedToken,
    OrderTokenError,
    TamperedToken,
)
from app.modules.checkout.service import (
    OrderSessionService,
    get_order_session_service,
    issue_order_token,
    verify_order_token,
)

__all__ = [
    "OrderTokenAuthenticator",
    "OrderSessionService",
    "get_order_session_service",
    "issue_order_token",
    "verify_order_token",
    "OrderTokenError",
    "MalformedToken",
    "TamperedToken",
    "ExpiredToken",
]
