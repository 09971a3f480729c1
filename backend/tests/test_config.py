"""Tests for startup configuration."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings

from tests.support import TEST_SECRET


def test_loads_secret_from_environment() -> None:
    settings = Settings(_env_file=None)

    assert settings.session_secret.get_secret_value() == TEST_SECRET
    assert settings.order_token_ttl_seconds == 86400


def test_missing_secret_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SESSION_SECRET", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_short_secret_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SESSION_SECRET", "too-short")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_secret_is_not_rendered() -> None:
    settings = Settings(_env_file=None)

    assert TEST_SECRET not in repr(settings)


@pytest.mark.parametrize("ttl", ["0", "-60"])
def test_non_positive_ttl_is_rejected(monkeypatch: pytest.MonkeyPatch, ttl: str) -> None:
    monkeypatch.setenv("ORDER_TOKEN_TTL_SECONDS", ttl)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
