"""
Order Session Service - stateless checkout sessions.

Carries the buyer's order intent across the payment redirect inside a
signed token instead of a server-side session store.
"""

from loguru import logger

from app.core.config import settings
from app.models.order import OrderIntent
from app.modules.checkout.authenticator import OrderTokenAuthenticator
from app.modules.checkout.errors import OrderTokenError


class OrderSessionService:
    """
    Issue and verify order-session tokens.

    Every verification failure (malformed, tampered, expired) is reported
    to callers as ``None``. The kind is only logged.

    Usage:
        sessions = get_order_session_service()
        token = sessions.issue_order_token(intent)
        intent = sessions.verify_order_token(token)
    """

    def __init__(
        self,
        authenticator: OrderTokenAuthenticator,
        default_ttl_seconds: int,
    ) -> None:
        self.authenticator = authenticator
        self.default_ttl_seconds = default_ttl_seconds

    def issue_order_token(
        self,
        intent: OrderIntent,
        ttl_seconds: float | None = None,
    ) -> str:
        """
        Issue a token for the checkout flow.

        Args:
            intent: Buyer's checkout selection
            ttl_seconds: Token lifetime (defaults to configured TTL)

        Returns:
            Signed token string
        """
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        token = self.authenticator.issue(intent, ttl)
        logger.info(f"Issued order session for {intent.product or intent.platform} (ttl={ttl}s)")
        return token

    def verify_order_token(self, token: str) -> OrderIntent | None:
        """Return the order intent, or None for any invalid or expired token."""
        try:
            return self.authenticator.verify(token)
        except OrderTokenError as e:
            logger.warning(f"Rejected order token: {type(e).__name__} ({e.reason})")
            return None


# Singleton instance
_order_session_service: OrderSessionService | None = None


def init_order_sessions() -> OrderSessionService:
    """Build the order session service from settings."""
    global _order_session_service
    _order_session_service = OrderSessionService(
        authenticator=OrderTokenAuthenticator(
            settings.session_secret.get_secret_value()
        ),
        default_ttl_seconds=settings.order_token_ttl_seconds,
    )
    return _order_session_service


def get_order_session_service() -> OrderSessionService:
    """Get or create order session service singleton."""
    if _order_session_service is None:
        return init_order_sessions()
    return _order_session_service


def issue_order_token(intent: OrderIntent, ttl_seconds: float | None = None) -> str:
    """Issue a token using the process-wide service."""
    return get_order_session_service().issue_order_token(intent, ttl_seconds)


def verify_order_token(token: str) -> OrderIntent | None:
    """Verify a token using the process-wide service."""
    return get_order_session_service().verify_order_token(token)
