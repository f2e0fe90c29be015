"""Testes do logging JSON do relay (service, campos, correlation, fallback)."""

from __future__ import annotations

import json
import logging

import pytest

from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.services.event_builder import parse_money, parse_event_time
from config.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _last_json_line(capsys: pytest.CaptureFixture[str]) -> dict:
    return json.loads(capsys.readouterr().err.strip().splitlines()[-1])


def test_default_service_and_renamed_fields(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging()
    get_logger("api.connectors.meta_capi.http_client").info(
        "capi_events_sent", extra={"pixel_id": "PX1"}
    )

    output = _last_json_line(capsys)
    assert output["service"] == "capi_relay"
    assert output["message"] == "capi_events_sent"
    assert output["level"] == "INFO"
    assert output["logger"] == "api.connectors.meta_capi.http_client"
    assert output["pixel_id"] == "PX1"
    assert "levelname" not in output
    assert "name" not in output


def test_invalid_level_rejected() -> None:
    with pytest.raises(ValueError, match="LOG_LEVEL"):
        configure_logging(level="verbose")


def test_level_filters_debug(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level="info")
    get_logger("app.infra.stores").debug("dedupe_duplicate_detected")
    assert "dedupe_duplicate_detected" not in capsys.readouterr().err


def test_correlation_id_from_shopify_webhook_id(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(correlation_id_getter=get_correlation_id)
    token = set_correlation_id(correlation_id_from_headers({"x-shopify-webhook-id": "wh-123"}))
    try:
        get_logger("api.routes.shopify.webhook").info("webhook_received")
    finally:
        reset_correlation_id(token)

    assert _last_json_line(capsys)["correlation_id"] == "wh-123"


def test_explicit_correlation_id_wins(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(correlation_id_getter=lambda: "from-context")
    get_logger("x").info("webhook_processed", extra={"correlation_id": "explicit"})
    assert _last_json_line(capsys)["correlation_id"] == "explicit"


class TestBuilderFallbackLogs:
    def test_unparsable_money(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="app.services.event_builder")

        assert parse_money("R$ 10") == 0.0

        record = caplog.records[-1]
        assert record.getMessage() == "field_fallback_applied"
        assert record.fallback_used is True
        assert record.component == "event_builder.money"
        assert record.reason == "unparsable_money"
        assert "R$ 10" not in caplog.text

    def test_pre_epoch_timestamp(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="app.services.event_builder")

        parse_event_time("1900-01-01T00:00:00Z", build_ms=1_000)

        assert caplog.records[-1].reason == "pre_epoch_timestamp"
