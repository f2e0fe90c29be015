"""Testes de HMAC e parsing do webhook Shopify."""

from __future__ import annotations

import base64
import hashlib
import hmac

import pytest

from api.connectors.shopify.webhook import (
    InvalidJsonError,
    InvalidSignatureError,
    compute_shopify_hmac,
    extract_webhook_headers,
    parse_webhook_request,
    verify_shopify_hmac,
)

SECRET = "shpss_test_secret"
BODY = b'{"id": 42, "email": "a@b.com"}'


def _sign(body: bytes, secret: str = SECRET) -> str:
    digest = hmac.new(secret.encode(), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


class TestVerifyShopifyHmac:
    def test_compute_matches_reference(self) -> None:
        assert compute_shopify_hmac(BODY, SECRET) == _sign(BODY)

    def test_valid_signature(self) -> None:
        result = verify_shopify_hmac(BODY, {"x-shopify-hmac-sha256": _sign(BODY)}, SECRET)
        assert result.valid is True
        assert result.skipped is False

    def test_header_lookup_is_case_insensitive(self) -> None:
        result = verify_shopify_hmac(BODY, {"X-Shopify-Hmac-Sha256": _sign(BODY)}, SECRET)
        assert result.valid is True

    def test_wrong_secret(self) -> None:
        headers = {"x-shopify-hmac-sha256": _sign(BODY, "other")}
        result = verify_shopify_hmac(BODY, headers, SECRET)
        assert result.valid is False
        assert result.error == "signature_mismatch"

    def test_tampered_body(self) -> None:
        headers = {"x-shopify-hmac-sha256": _sign(BODY)}
        assert verify_shopify_hmac(BODY + b" ", headers, SECRET).valid is False

    def test_missing_header(self) -> None:
        result = verify_shopify_hmac(BODY, {}, SECRET)
        assert result.valid is False
        assert result.error == "missing_signature"

    @pytest.mark.parametrize("secret", [None, ""])
    def test_no_secret_skips(self, secret: str | None) -> None:
        result = verify_shopify_hmac(BODY, {}, secret)
        assert result.valid is True
        assert result.skipped is True


class TestParseWebhookRequest:
    def test_valid(self) -> None:
        payload, signature = parse_webhook_request(
            BODY, {"x-shopify-hmac-sha256": _sign(BODY)}, SECRET
        )
        assert payload == {"id": 42, "email": "a@b.com"}
        assert signature.valid is True

    def test_invalid_signature(self) -> None:
        with pytest.raises(InvalidSignatureError, match="signature_mismatch"):
            parse_webhook_request(BODY, {"x-shopify-hmac-sha256": "AAAA"}, SECRET)

    def test_invalid_json(self) -> None:
        with pytest.raises(InvalidJsonError, match="invalid_json"):
            parse_webhook_request(b"{not json", {}, None)

    def test_non_object_json(self) -> None:
        with pytest.raises(InvalidJsonError, match="payload_not_object"):
            parse_webhook_request(b"[1, 2]", {}, None)

    def test_empty_body_is_empty_object(self) -> None:
        payload, _ = parse_webhook_request(b"", {}, None)
        assert payload == {}


class TestExtractWebhookHeaders:
    def test_extracts_routing_headers(self) -> None:
        headers = extract_webhook_headers(
            {
                "x-shopify-topic": "orders/create",
                "x-shopify-shop-domain": " Loja.MyShopify.com ",
                "x-shopify-webhook-id": "wh-1",
            }
        )
        assert headers.topic == "orders/create"
        assert headers.shop_domain == "loja.myshopify.com"
        assert headers.webhook_id == "wh-1"

    def test_missing_headers(self) -> None:
        headers = extract_webhook_headers({})
        assert headers.topic is None
        assert headers.shop_domain is None
        assert headers.webhook_id is None
