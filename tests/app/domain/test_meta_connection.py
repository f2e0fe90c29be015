"""Testes do registro de conexão Meta."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from app.domain.meta_connection import MetaConnection


@pytest.mark.parametrize(
    ("pixel_id", "access_token", "expected"),
    [("123", "tok", True), ("", "tok", False), ("123", "", False), ("  ", "tok", False)],
)
def test_is_configured(pixel_id: str, access_token: str, expected: bool) -> None:
    connection = MetaConnection(shop="loja.myshopify.com", pixel_id=pixel_id, access_token=access_token)
    assert connection.is_configured is expected


def test_without_expiry_never_expires() -> None:
    assert not MetaConnection(shop="s", pixel_id="1", access_token="t").is_expired()


def test_expired_token() -> None:
    connection = MetaConnection(
        shop="s",
        pixel_id="1",
        access_token="t",
        token_expires_at=datetime.now(UTC) - timedelta(minutes=1),
    )
    assert connection.is_expired()


def test_naive_expiry_treated_as_utc() -> None:
    now = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    connection = MetaConnection(
        shop="s",
        pixel_id="1",
        access_token="t",
        token_expires_at=datetime(2024, 1, 1, 13, 0),
    )
    assert not connection.is_expired(now)
    assert connection.is_expired(now + timedelta(hours=2))
