"""Construção de ConversionEvent a partir de registros de origem.

Um registro de origem (pedido, checkout ou cliente) gera exatamente um
evento. Política de campos:
- campo opcional só é preenchido se o campo de origem existir;
- valor monetário malformado vira 0 (nunca bloqueia o envio);
- timestamp usa created_at quando parseável, senão o relógio atual;
- content id: variant_id > product_id > id do line item.

Único erro levantado: MissingPayloadError para registro ausente.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from app.domain.conversion_event import (
    ActionSource,
    ClientContext,
    CommerceData,
    ContentItem,
    ConversionEvent,
    EventName,
    UserIdentity,
)
from app.domain.errors import MissingPayloadError
from app.services.dedup_key import DedupEntity, make_dedup_key, make_page_view_key, now_ms
from app.services.pii import hash_optional
from config.logging import log_fallback

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.shopify_payloads import (
        CheckoutPayload,
        CustomerRecord,
        LineItem,
        Money,
        OrderPayload,
    )

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


@dataclass(frozen=True, slots=True)
class ClientData:
    """Contexto do cliente informado pela superfície de origem."""

    ip: str | None = None
    user_agent: str | None = None
    source_url: str | None = None
    fbc: str | None = None
    fbp: str | None = None

    def to_context(self) -> ClientContext:
        return ClientContext(
            ip_address=self.ip or None,
            user_agent=self.user_agent or None,
            fbc=self.fbc or None,
            fbp=self.fbp or None,
        )


# ──────────────────────────────────────────────────────────────
# Parsing tolerante
# ──────────────────────────────────────────────────────────────


def _to_decimal(raw: object) -> Decimal | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        amount = Decimal(str(raw).strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def parse_money(raw: object) -> float:
    """Converte valor decimal (string ou número) para float; inválido vira 0."""
    amount = _to_decimal(raw)
    if amount is None:
        log_fallback(logger, "event_builder.money", reason="unparsable_money")
        return 0.0
    return float(amount)


def parse_event_time(created_at: str | None, *, build_ms: int | None = None) -> int:
    """Epoch em segundos de created_at; relógio de construção se ausente/inválido."""
    if created_at:
        try:
            parsed = datetime.fromisoformat(created_at.strip().replace("Z", "+00:00"))
        except ValueError:
            log_fallback(logger, "event_builder.event_time", reason="unparsable_timestamp")
        else:
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=UTC)
            seconds = math.floor(parsed.timestamp())
            if seconds >= 0:
                return seconds
            log_fallback(logger, "event_builder.event_time", reason="pre_epoch_timestamp")
    ms = now_ms() if build_ms is None else build_ms
    return ms // 1000


def _line_item_id(item: LineItem) -> str | None:
    for raw in (item.variant_id, item.product_id, item.id):
        if raw:
            return str(raw)
    return None


def _quantity(item: LineItem) -> int:
    raw = item.quantity
    if raw is None:
        return 1
    quantity = _to_decimal(raw)
    if quantity is None or quantity != quantity.to_integral_value():
        log_fallback(logger, "event_builder.quantity", reason="unparsable_quantity")
        return 1
    # Quantidade zero ou negativa conta como 1
    return int(quantity) if quantity > 0 else 1


def extract_content_ids(line_items: Sequence[LineItem]) -> list[str]:
    """Ids de conteúdo na ordem dos itens, descartando itens sem id."""
    return [content_id for item in line_items if (content_id := _line_item_id(item))]


def count_items(line_items: Sequence[LineItem]) -> int:
    """Soma das quantidades de todos os itens (ausente = 1)."""
    return sum(_quantity(item) for item in line_items)


def build_contents(line_items: Sequence[LineItem]) -> list[ContentItem]:
    contents: list[ContentItem] = []
    for item in line_items:
        content_id = _line_item_id(item)
        if not content_id:
            continue
        contents.append(
            ContentItem(
                id=content_id,
                quantity=_quantity(item),
                item_price=parse_money(item.price) if item.price is not None else None,
            )
        )
    return contents


def _commerce_value(total_price: Money | None, contents: Sequence[ContentItem]) -> float | None:
    # total_price manda; sem ele, soma preço * quantidade dos itens com preço
    if total_price is not None:
        return parse_money(total_price)
    priced = [item for item in contents if item.item_price is not None]
    if not priced:
        return None
    total = sum(
        (Decimal(str(item.item_price)) * item.quantity for item in priced),
        start=_ZERO,
    )
    return float(total)


# ──────────────────────────────────────────────────────────────
# Identidade e contexto
# ──────────────────────────────────────────────────────────────


def build_user_identity(customer: CustomerRecord | None) -> UserIdentity:
    """Hash de cada atributo presente do cliente; ausentes são omitidos."""
    if customer is None:
        return UserIdentity()
    address = customer.default_address
    return UserIdentity(
        email=hash_optional(customer.email),
        phone=hash_optional(customer.phone),
        first_name=hash_optional(customer.first_name),
        last_name=hash_optional(customer.last_name),
        city=hash_optional(address.city if address else None),
        region=hash_optional(address.province if address else None),
        postal_code=hash_optional(address.zip if address else None),
        country=hash_optional(address.country if address else None),
        external_id=hash_optional(customer.id),
    )


def client_data_from(record: OrderPayload | CheckoutPayload) -> ClientData:
    """Extrai IP, user agent e URL de entrada de um pedido/checkout."""
    details = record.client_details
    return ClientData(
        ip=record.browser_ip or (details.browser_ip if details else None),
        user_agent=details.user_agent if details else None,
        source_url=record.landing_site_ref,
    )


# ──────────────────────────────────────────────────────────────
# Builders por tipo de evento
# ──────────────────────────────────────────────────────────────


def build_purchase(
    order: OrderPayload | None,
    customer: CustomerRecord | None = None,
    *,
    dedup_key: str | None = None,
    client: ClientData | None = None,
    build_ms: int | None = None,
) -> ConversionEvent:
    """Purchase a partir de orders/create."""
    if order is None:
        raise MissingPayloadError("order payload is required")
    build_ms = now_ms() if build_ms is None else build_ms
    customer = customer or order.customer
    client = client or client_data_from(order)

    contents = build_contents(order.line_items)
    order_id = str(order.id) if order.id else order.name
    commerce = CommerceData(
        value=_commerce_value(order.total_price, contents),
        currency=order.currency or None,
        content_type="product",
        content_ids=tuple(item.id for item in contents) if contents else None,
        num_items=sum(item.quantity for item in contents) if contents else None,
        order_id=order_id or None,
        contents=tuple(contents) if contents else None,
    )
    return ConversionEvent(
        name=EventName.PURCHASE,
        event_time=parse_event_time(order.created_at, build_ms=build_ms),
        action_source=ActionSource.WEBSITE,
        source_url=client.source_url or None,
        identity=build_user_identity(customer),
        context=client.to_context(),
        commerce=commerce,
        dedup_key=dedup_key
        or make_dedup_key(DedupEntity.ORDER, order.id, EventName.PURCHASE, timestamp_ms=build_ms),
    )


def build_initiate_checkout(
    checkout: CheckoutPayload | None,
    customer: CustomerRecord | None = None,
    *,
    dedup_key: str | None = None,
    client: ClientData | None = None,
    build_ms: int | None = None,
) -> ConversionEvent:
    """InitiateCheckout a partir de checkouts/create."""
    if checkout is None:
        raise MissingPayloadError("checkout payload is required")
    build_ms = now_ms() if build_ms is None else build_ms
    customer = customer or checkout.customer
    client = client or client_data_from(checkout)

    contents = build_contents(checkout.line_items)
    content_ids = extract_content_ids(checkout.line_items)
    commerce = CommerceData(
        value=_commerce_value(checkout.total_price, contents),
        currency=checkout.currency or None,
        content_type="product",
        content_ids=tuple(content_ids) if content_ids else None,
        num_items=count_items(checkout.line_items) if checkout.line_items else None,
    )
    return ConversionEvent(
        name=EventName.INITIATE_CHECKOUT,
        event_time=parse_event_time(checkout.created_at, build_ms=build_ms),
        source_url=client.source_url or None,
        identity=build_user_identity(customer),
        context=client.to_context(),
        commerce=commerce,
        dedup_key=dedup_key
        or make_dedup_key(
            DedupEntity.CHECKOUT,
            checkout.id or checkout.token,
            EventName.INITIATE_CHECKOUT,
            timestamp_ms=build_ms,
        ),
    )


def build_complete_registration(
    customer: CustomerRecord | None,
    *,
    dedup_key: str | None = None,
    client: ClientData | None = None,
    build_ms: int | None = None,
) -> ConversionEvent:
    """CompleteRegistration a partir de customers/create."""
    if customer is None:
        raise MissingPayloadError("customer payload is required")
    build_ms = now_ms() if build_ms is None else build_ms
    client = client or ClientData()
    return ConversionEvent(
        name=EventName.COMPLETE_REGISTRATION,
        event_time=parse_event_time(customer.created_at, build_ms=build_ms),
        source_url=client.source_url or None,
        identity=build_user_identity(customer),
        context=client.to_context(),
        commerce=CommerceData(content_type="registration"),
        dedup_key=dedup_key
        or make_dedup_key(
            DedupEntity.CUSTOMER,
            customer.id,
            EventName.COMPLETE_REGISTRATION,
            timestamp_ms=build_ms,
        ),
    )


def build_add_to_cart(
    product_id: str,
    variant_id: str | None,
    quantity: int,
    price: Money,
    currency: str | None,
    customer: CustomerRecord | None = None,
    *,
    dedup_key: str | None = None,
    client: ClientData | None = None,
    build_ms: int | None = None,
) -> ConversionEvent:
    """AddToCart com dados explícitos do produto (sem webhook de origem)."""
    build_ms = now_ms() if build_ms is None else build_ms
    client = client or ClientData()
    content_id = str(variant_id or product_id)
    unit_price = _to_decimal(price)
    if unit_price is None:
        log_fallback(logger, "event_builder.money", reason="unparsable_money")
        unit_price = _ZERO
    commerce = CommerceData(
        value=float(unit_price * quantity),
        currency=currency or None,
        content_type="product",
        content_ids=(content_id,),
        num_items=quantity,
        contents=(ContentItem(id=content_id, quantity=quantity, item_price=float(unit_price)),),
    )
    return ConversionEvent(
        name=EventName.ADD_TO_CART,
        event_time=build_ms // 1000,
        source_url=client.source_url or None,
        identity=build_user_identity(customer),
        context=client.to_context(),
        commerce=commerce,
        dedup_key=dedup_key
        or make_dedup_key(
            DedupEntity.PRODUCT,
            f"{product_id}_{variant_id}" if variant_id else product_id,
            EventName.ADD_TO_CART,
            timestamp_ms=build_ms,
        ),
    )


def build_view_content(
    product_id: str,
    content_name: str | None,
    content_category: str | None,
    value: Money | None,
    currency: str | None,
    customer: CustomerRecord | None = None,
    *,
    dedup_key: str | None = None,
    client: ClientData | None = None,
    build_ms: int | None = None,
) -> ConversionEvent:
    """ViewContent (página de produto)."""
    build_ms = now_ms() if build_ms is None else build_ms
    client = client or ClientData()
    commerce = CommerceData(
        value=parse_money(value) if value is not None else None,
        currency=currency or None,
        content_type="product",
        content_ids=(str(product_id),),
        content_name=content_name or None,
        content_category=content_category or None,
    )
    return ConversionEvent(
        name=EventName.VIEW_CONTENT,
        event_time=build_ms // 1000,
        source_url=client.source_url or None,
        identity=build_user_identity(customer),
        context=client.to_context(),
        commerce=commerce,
        dedup_key=dedup_key
        or make_dedup_key(
            DedupEntity.PRODUCT, product_id, EventName.VIEW_CONTENT, timestamp_ms=build_ms
        ),
    )


def build_page_view(
    url: str,
    customer: CustomerRecord | None = None,
    *,
    dedup_key: str | None = None,
    client: ClientData | None = None,
    build_ms: int | None = None,
) -> ConversionEvent:
    """PageView da URL informada."""
    build_ms = now_ms() if build_ms is None else build_ms
    client = client or ClientData()
    return ConversionEvent(
        name=EventName.PAGE_VIEW,
        event_time=build_ms // 1000,
        source_url=url or client.source_url or None,
        identity=build_user_identity(customer),
        context=client.to_context(),
        dedup_key=dedup_key or make_page_view_key(timestamp_ms=build_ms),
    )
