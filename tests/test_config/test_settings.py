"""Testes das settings carregadas de variáveis de ambiente."""

from __future__ import annotations

import pytest

from config.settings import (
    BaseSettings,
    ConnectionStoreSettings,
    DedupeSettings,
    MetaCapiSettings,
    ShopifySettings,
)
from config.settings.base.connection_store import _load_connection_store_from_env
from config.settings.base.core import _load_base_from_env
from config.settings.base.dedupe import _load_dedupe_from_env
from config.settings.meta_capi import _load_from_env as _load_meta_capi_from_env
from config.settings.shopify import _load_from_env as _load_shopify_from_env

PRODUCTION = BaseSettings(environment="production", redis_url="redis://localhost:6379/0")
DEVELOPMENT = BaseSettings()


class TestBaseSettings:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("prod", "production"), ("STAGING", "staging"), ("whatever", "development")],
    )
    def test_environment_parsing(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: str
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", raw)
        assert _load_base_from_env().environment == expected

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.delenv("SERVICE_NAME", raising=False)
        settings = _load_base_from_env()
        assert settings.is_development
        assert settings.service_name == "capi-relay"
        assert settings.validate() == []


class TestMetaCapiSettings:
    def test_events_endpoint(self) -> None:
        settings = MetaCapiSettings()
        assert settings.get_events_endpoint("123") == "https://graph.facebook.com/v18.0/123/events"

    def test_events_endpoint_requires_pixel(self) -> None:
        with pytest.raises(ValueError):
            MetaCapiSettings().get_events_endpoint("")

    def test_load_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("META_GRAPH_API_VERSION", "v21.0")
        monkeypatch.setenv("META_CAPI_TIMEOUT_SECONDS", "5")
        monkeypatch.setenv("META_CAPI_TEST_EVENT_CODE", "TEST123")
        settings = _load_meta_capi_from_env()
        assert settings.api_version == "v21.0"
        assert settings.request_timeout_seconds == 5.0
        assert settings.test_event_code == "TEST123"

    def test_validate(self) -> None:
        settings = MetaCapiSettings(
            api_version="18.0",
            api_base_url="http://graph.facebook.com",
            request_timeout_seconds=0,
            pixel_id="123",
        )
        assert len(settings.validate()) == 4
        assert MetaCapiSettings().validate() == []


class TestShopifySettings:
    def test_secret_required_only_when_strict(self) -> None:
        assert ShopifySettings().validate(strict=False) == []
        assert ShopifySettings().validate(strict=True) == ["SHOPIFY_API_SECRET não configurado"]

    def test_dev_shop_lowercased(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHOPIFY_DEV_SHOP", "Loja.MyShopify.com")
        assert _load_shopify_from_env().dev_shop == "loja.myshopify.com"


class TestConnectionStoreSettings:
    def test_memory_forbidden_outside_development(self) -> None:
        assert ConnectionStoreSettings().validate(DEVELOPMENT) == []
        assert ConnectionStoreSettings().validate(PRODUCTION)

    def test_redis_requires_url(self) -> None:
        errors = ConnectionStoreSettings(backend="redis").validate(DEVELOPMENT)
        assert errors == ["CONNECTION_STORE_BACKEND=redis requer REDIS_URL configurado"]

    def test_unknown_backend_falls_back_to_memory(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONNECTION_STORE_BACKEND", "firestore")
        assert _load_connection_store_from_env().backend == "memory"


class TestDedupeSettings:
    def test_disabled_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("WEBHOOK_DEDUPE_ENABLED", raising=False)
        settings = _load_dedupe_from_env()
        assert settings.enabled is False
        assert settings.validate(PRODUCTION) == []

    def test_enabled_memory_in_production_is_error(self) -> None:
        assert DedupeSettings(enabled=True).validate(PRODUCTION)

    def test_enabled_redis_ok(self) -> None:
        settings = DedupeSettings(enabled=True, backend="redis", ttl_seconds=60)
        assert settings.validate(PRODUCTION) == []

    def test_ttl_must_be_positive(self) -> None:
        assert DedupeSettings(enabled=True, ttl_seconds=0).validate(DEVELOPMENT)
