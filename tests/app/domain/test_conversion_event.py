"""Testes do modelo ConversionEvent e do formato de saída para a CAPI."""

from __future__ import annotations

import hashlib

import pytest
from pydantic import ValidationError

from app.domain.conversion_event import (
    ClientContext,
    CommerceData,
    ContentItem,
    ConversionEvent,
    EventName,
    UserIdentity,
)

DIGEST = hashlib.sha256(b"a@b.com").hexdigest()


class TestUserIdentity:
    def test_accepts_digest(self) -> None:
        assert UserIdentity(email=DIGEST).email == DIGEST

    @pytest.mark.parametrize("value", ["a@b.com", DIGEST.upper(), DIGEST[:-1]])
    def test_rejects_plaintext_and_malformed(self, value: str) -> None:
        with pytest.raises(ValidationError):
            UserIdentity(email=value)

    def test_capi_field_names(self) -> None:
        identity = UserIdentity(email=DIGEST, postal_code=DIGEST, external_id=DIGEST)
        assert identity.to_capi_fields() == {
            "em": [DIGEST],
            "zp": [DIGEST],
            "external_id": [DIGEST],
        }


class TestClientContext:
    def test_empty_values_dropped(self) -> None:
        context = ClientContext(ip_address="203.0.113.7", user_agent="")
        assert context.to_capi_fields() == {"client_ip_address": "203.0.113.7"}


class TestCommerceData:
    def test_num_items_must_match_contents(self) -> None:
        with pytest.raises(ValidationError):
            CommerceData(
                num_items=5,
                contents=(ContentItem(id="V1", quantity=2),),
            )

    def test_matching_contents(self) -> None:
        commerce = CommerceData(
            num_items=3,
            contents=(ContentItem(id="V1", quantity=2), ContentItem(id="V2", quantity=1)),
        )
        assert commerce.num_items == 3

    def test_negative_num_items_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CommerceData(num_items=-1)

    def test_none_fields_omitted(self) -> None:
        assert CommerceData(value=0.0, currency="BRL").to_capi_fields() == {
            "value": 0.0,
            "currency": "BRL",
        }


class TestConversionEvent:
    def test_minimal_payload(self) -> None:
        event = ConversionEvent(
            name=EventName.PAGE_VIEW,
            event_time=1704067200,
            dedup_key="shopify_page_x_pageview_1",
        )
        assert event.to_capi_payload() == {
            "event_name": "PageView",
            "event_time": 1704067200,
            "action_source": "website",
            "user_data": {},
            "event_id": "shopify_page_x_pageview_1",
        }

    def test_full_payload(self) -> None:
        event = ConversionEvent(
            name=EventName.PURCHASE,
            event_time=1,
            source_url="https://loja.example.com",
            identity=UserIdentity(email=DIGEST),
            context=ClientContext(user_agent="UA"),
            commerce=CommerceData(value=10.0, content_ids=("V1",)),
            dedup_key="k",
        )
        payload = event.to_capi_payload()

        assert payload["event_source_url"] == "https://loja.example.com"
        assert payload["user_data"] == {"em": [DIGEST], "client_user_agent": "UA"}
        assert payload["custom_data"] == {"value": 10.0, "content_ids": ["V1"]}

    def test_empty_dedup_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ConversionEvent(name=EventName.PURCHASE, event_time=1, dedup_key="")

    def test_immutable(self) -> None:
        event = ConversionEvent(name=EventName.PURCHASE, event_time=1, dedup_key="k")
        with pytest.raises(ValidationError):
            event.event_time = 2  # type: ignore[misc]
