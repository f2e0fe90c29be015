"""Payloads de webhook da Shopify como variantes tipadas.

Cada tópico vira um modelo com schema explícito de campos opcionais.
Campos extras do webhook são ignorados; apenas o que o construtor de
eventos usa é declarado. A validação é tolerante: campo opcional com
formato inesperado vira None (ou lista vazia) em vez de rejeitar o
webhook. Valores monetários e quantidades ficam crus e são
interpretados pelo construtor de eventos, que aplica o fallback.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter

from app.domain.errors import MissingPayloadError, UnsupportedTopicError

Money = str | int | float


def _identifier(value: Any) -> int | str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | str):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _text(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int | float):
        return str(value)
    return None


def _raw_scalar(value: Any) -> Any:
    # Formatos não escalares viram texto e caem no fallback do parse
    if value is None or isinstance(value, str | int | float):
        return value
    return str(value)


def _mapping(value: Any) -> Any:
    return value if isinstance(value, Mapping) else None


def _mapping_list(value: Any) -> list[Any]:
    if not isinstance(value, list | tuple):
        return []
    return [item for item in value if isinstance(item, Mapping)]


Identifier = Annotated[int | str | None, BeforeValidator(_identifier)]
Text = Annotated[str | None, BeforeValidator(_text)]
RawMoney = Annotated[Money | None, BeforeValidator(_raw_scalar)]
RawQuantity = Annotated[int | float | str | None, BeforeValidator(_raw_scalar)]


class _ShopifyModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class Address(_ShopifyModel):
    city: Text = None
    province: Text = None
    zip: Text = None
    country: Text = None


class CustomerRecord(_ShopifyModel):
    """Cliente embutido em pedidos/checkouts, ou o próprio webhook de cliente."""

    id: Identifier = None
    email: Text = None
    phone: Text = None
    first_name: Text = None
    last_name: Text = None
    default_address: Annotated[Address | None, BeforeValidator(_mapping)] = None
    created_at: Text = None


class ClientDetails(_ShopifyModel):
    browser_ip: Text = None
    user_agent: Text = None


class LineItem(_ShopifyModel):
    id: Identifier = None
    variant_id: Identifier = None
    product_id: Identifier = None
    quantity: RawQuantity = None
    price: RawMoney = None


LineItems = Annotated[list[LineItem], BeforeValidator(_mapping_list)]
EmbeddedCustomer = Annotated[CustomerRecord | None, BeforeValidator(_mapping)]
EmbeddedClientDetails = Annotated[ClientDetails | None, BeforeValidator(_mapping)]


class OrderPayload(_ShopifyModel):
    """Webhook orders/create."""

    kind: Literal["order"] = "order"
    id: Identifier = None
    name: Text = None
    created_at: Text = None
    total_price: RawMoney = None
    currency: Text = None
    line_items: LineItems = Field(default_factory=list)
    customer: EmbeddedCustomer = None
    browser_ip: Text = None
    client_details: EmbeddedClientDetails = None
    landing_site_ref: Text = None


class CheckoutPayload(_ShopifyModel):
    """Webhook checkouts/create."""

    kind: Literal["checkout"] = "checkout"
    id: Identifier = None
    token: Text = None
    created_at: Text = None
    total_price: RawMoney = None
    currency: Text = None
    line_items: LineItems = Field(default_factory=list)
    customer: EmbeddedCustomer = None
    browser_ip: Text = None
    client_details: EmbeddedClientDetails = None
    landing_site_ref: Text = None


class CustomerPayload(CustomerRecord):
    """Webhook customers/create."""

    kind: Literal["customer"] = "customer"


TriggerPayload = Annotated[
    OrderPayload | CheckoutPayload | CustomerPayload,
    Field(discriminator="kind"),
]

TOPIC_KINDS: dict[str, str] = {
    "orders/create": "order",
    "checkouts/create": "checkout",
    "customers/create": "customer",
}

_trigger_adapter: TypeAdapter[OrderPayload | CheckoutPayload | CustomerPayload] = TypeAdapter(
    TriggerPayload
)


def parse_trigger_payload(
    topic: str,
    data: Mapping[str, Any] | None,
) -> OrderPayload | CheckoutPayload | CustomerPayload:
    """Valida o corpo do webhook contra o schema do tópico.

    Args:
        topic: Valor de X-Shopify-Topic (ex: "orders/create")
        data: JSON do webhook

    Returns:
        Variante tipada correspondente ao tópico.

    Raises:
        UnsupportedTopicError: Tópico sem evento de conversão.
        MissingPayloadError: Corpo ausente ou vazio.
    """
    kind = TOPIC_KINDS.get(topic)
    if kind is None:
        raise UnsupportedTopicError(f"unsupported_topic:{topic}")
    if not data:
        raise MissingPayloadError(f"empty_payload:{topic}")
    return _trigger_adapter.validate_python({**data, "kind": kind})
