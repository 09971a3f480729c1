"""
Order token verification errors.

These are internal diagnostics only. Callers outside the checkout module
see a single "invalid or expired" outcome.
"""


class OrderTokenError(Exception):
    """Base class for rejected order tokens."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class MalformedToken(OrderTokenError):
    """Token is not structurally parseable."""


class TamperedToken(OrderTokenError):
    """Integrity tag does not match the payload."""


class ExpiredToken(OrderTokenError):
    """Token lifetime has elapsed."""
