"""Pytest fixtures for order session tests.

SESSION_SECRET is required at import time, so it is set before the
application is imported.
"""

import os

from tests.support import TEST_SECRET, TEST_TTL_SECONDS, FakeClock

os.environ["SESSION_SECRET"] = TEST_SECRET

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.models.order import OrderIntent, Variant  # noqa: E402
from app.modules.checkout.authenticator import OrderTokenAuthenticator  # noqa: E402
from app.modules.checkout.service import (  # noqa: E402
    OrderSessionService,
    get_order_session_service,
)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def authenticator(clock: FakeClock) -> OrderTokenAuthenticator:
    return OrderTokenAuthenticator(TEST_SECRET, clock=clock)


@pytest.fixture
def sessions(authenticator: OrderTokenAuthenticator) -> OrderSessionService:
    return OrderSessionService(authenticator, default_ttl_seconds=TEST_TTL_SECONDS)


@pytest.fixture
def netflix_intent() -> OrderIntent:
    """The one-month Netflix account checkout."""
    return OrderIntent(
        product="netflix-account",
        variant=Variant(label="1 Month", duration="1 Month", price=Decimal("425")),
        email="a@b.com",
    )


@pytest.fixture
def freefire_intent() -> OrderIntent:
    """A game top-up referenced by platform and product type."""
    return OrderIntent(
        platform="Free Fire",
        product_type="Diamonds",
        variant=Variant(
            label="520 Diamonds",
            duration="Instant",
            price=Decimal("720.50"),
            original_price=Decimal("800"),
            discount_percentage=Decimal("10"),
        ),
        diamonds="520",
        phone="+9779800000000",
    )


@pytest.fixture
def client(sessions: OrderSessionService):
    """Test client with the order session service on a fake clock."""
    app.dependency_overrides[get_order_session_service] = lambda: sessions
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
