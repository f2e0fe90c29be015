"""Testes da chave de deduplicação (event_id)."""

from __future__ import annotations

import re

from app.domain.conversion_event import EventName
from app.services.dedup_key import (
    EVENT_SUFFIXES,
    DedupEntity,
    make_dedup_key,
    make_page_view_key,
)


class TestMakeDedupKey:
    def test_format(self) -> None:
        key = make_dedup_key(
            DedupEntity.ORDER, 1001, EventName.PURCHASE, timestamp_ms=1704067200000
        )
        assert key == "shopify_order_1001_purchase_1704067200000"

    def test_same_inputs_same_key(self) -> None:
        args = (DedupEntity.CUSTOMER, "42", EventName.COMPLETE_REGISTRATION)
        assert make_dedup_key(*args, timestamp_ms=5) == make_dedup_key(*args, timestamp_ms=5)

    def test_checkout_and_purchase_of_same_order_differ(self) -> None:
        """Mesmo id em tipos de evento diferentes gera chaves diferentes."""
        purchase = make_dedup_key(
            DedupEntity.ORDER, "1001", EventName.PURCHASE, timestamp_ms=1000
        )
        checkout = make_dedup_key(
            DedupEntity.CHECKOUT, "1001", EventName.INITIATE_CHECKOUT, timestamp_ms=1000
        )
        assert purchase != checkout

    def test_timestamp_separates_occurrences(self) -> None:
        first = make_dedup_key(DedupEntity.ORDER, "1", EventName.PURCHASE, timestamp_ms=1)
        second = make_dedup_key(DedupEntity.ORDER, "1", EventName.PURCHASE, timestamp_ms=2)
        assert first != second

    def test_missing_id_becomes_unknown(self) -> None:
        key = make_dedup_key(DedupEntity.ORDER, None, EventName.PURCHASE, timestamp_ms=7)
        assert key == "shopify_order_unknown_purchase_7"

    def test_uses_clock_when_timestamp_absent(self) -> None:
        key = make_dedup_key(DedupEntity.ORDER, "1", EventName.PURCHASE)
        assert re.fullmatch(r"shopify_order_1_purchase_\d{13,}", key)

    def test_every_event_name_has_suffix(self) -> None:
        assert set(EVENT_SUFFIXES) == set(EventName)
        assert EVENT_SUFFIXES[EventName.COMPLETE_REGISTRATION] == "signup"


class TestMakePageViewKey:
    def test_random_component(self) -> None:
        first = make_page_view_key(timestamp_ms=10)
        second = make_page_view_key(timestamp_ms=10)
        assert first != second
        assert re.fullmatch(r"shopify_page_[0-9a-f]{8}_pageview_10", first)
