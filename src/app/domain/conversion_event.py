"""ConversionEvent - evento de conversão padronizado para a CAPI da Meta.

Construído uma vez por entrega de webhook, imutável, enviado no máximo uma
vez e descartado. Campos de identidade só existem na forma de hash SHA-256;
PII em texto puro nunca sai do serviço.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_SHA256_HEX = re.compile(r"^[0-9a-f]{64}$")


class EventName(str, Enum):
    """Tipos de evento padrão aceitos pela CAPI."""

    PURCHASE = "Purchase"
    INITIATE_CHECKOUT = "InitiateCheckout"
    COMPLETE_REGISTRATION = "CompleteRegistration"
    ADD_TO_CART = "AddToCart"
    VIEW_CONTENT = "ViewContent"
    PAGE_VIEW = "PageView"


class ActionSource(str, Enum):
    """Canal onde o evento aconteceu."""

    WEBSITE = "website"
    EMAIL = "email"
    APP = "app"
    PHONE_CALL = "phone_call"
    CHAT = "chat"
    PHYSICAL_STORE = "physical_store"
    SYSTEM_GENERATED = "system_generated"


class UserIdentity(BaseModel):
    """Atributos de identidade, cada um opcional e já em hash."""

    model_config = ConfigDict(frozen=True)

    email: str | None = None
    phone: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = None
    country: str | None = None
    external_id: str | None = None

    @field_validator("*")
    @classmethod
    def _must_be_digest(cls, value: str | None) -> str | None:
        if value is not None and not _SHA256_HEX.match(value):
            raise ValueError("identity fields must be sha256 hex digests")
        return value

    def to_capi_fields(self) -> dict[str, list[str]]:
        """Mapeia para as chaves curtas de user_data (em, ph, fn, ...)."""
        mapping = {
            "em": self.email,
            "ph": self.phone,
            "fn": self.first_name,
            "ln": self.last_name,
            "ct": self.city,
            "st": self.region,
            "zp": self.postal_code,
            "country": self.country,
            "external_id": self.external_id,
        }
        return {key: [value] for key, value in mapping.items() if value is not None}


class ClientContext(BaseModel):
    """Contexto do cliente repassado sem transformação."""

    model_config = ConfigDict(frozen=True)

    ip_address: str | None = None
    user_agent: str | None = None
    fbc: str | None = None  # click id (cookie _fbc)
    fbp: str | None = None  # browser id (cookie _fbp)

    def to_capi_fields(self) -> dict[str, str]:
        mapping = {
            "client_ip_address": self.ip_address,
            "client_user_agent": self.user_agent,
            "fbc": self.fbc,
            "fbp": self.fbp,
        }
        return {key: value for key, value in mapping.items() if value}


class ContentItem(BaseModel):
    """Linha de item (identificador, quantidade, preço unitário)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0)
    item_price: float | None = None


class CommerceData(BaseModel):
    """Dados comerciais (custom_data) do evento."""

    model_config = ConfigDict(frozen=True)

    value: float | None = None
    currency: str | None = None
    content_type: Literal["product", "product_group", "registration"] | None = None
    content_ids: tuple[str, ...] | None = None
    content_name: str | None = None
    content_category: str | None = None
    num_items: int | None = Field(None, ge=0)
    order_id: str | None = None
    contents: tuple[ContentItem, ...] | None = None

    @model_validator(mode="after")
    def _num_items_matches_contents(self) -> CommerceData:
        if self.contents is not None and self.num_items is not None:
            total = sum(item.quantity for item in self.contents)
            if total != self.num_items:
                raise ValueError(
                    f"num_items ({self.num_items}) differs from contents quantity ({total})"
                )
        return self

    def to_capi_fields(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ConversionEvent(BaseModel):
    """Evento de conversão pronto para envio."""

    model_config = ConfigDict(frozen=True)

    name: EventName
    event_time: int = Field(..., ge=0, description="Epoch em segundos")
    action_source: ActionSource = ActionSource.WEBSITE
    source_url: str | None = None
    identity: UserIdentity = Field(default_factory=UserIdentity)
    context: ClientContext = Field(default_factory=ClientContext)
    commerce: CommerceData | None = None
    dedup_key: str = Field(..., min_length=1)

    def to_capi_payload(self) -> dict[str, Any]:
        """Serializa no formato de item de `data[]` da CAPI."""
        payload: dict[str, Any] = {
            "event_name": self.name.value,
            "event_time": self.event_time,
            "action_source": self.action_source.value,
            "user_data": {
                **self.identity.to_capi_fields(),
                **self.context.to_capi_fields(),
            },
            "event_id": self.dedup_key,
        }
        if self.source_url:
            payload["event_source_url"] = self.source_url
        if self.commerce is not None:
            payload["custom_data"] = self.commerce.to_capi_fields()
        return payload
