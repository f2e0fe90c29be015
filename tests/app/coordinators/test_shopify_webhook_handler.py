"""Testes do coordenador de webhook Shopify."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.coordinators.shopify import process_shopify_webhook
from app.domain.errors import UnsupportedTopicError
from app.domain.meta_connection import MetaConnection
from app.infra.stores import MemoryConnectionStore, MemoryDedupeStore
from app.use_cases.conversions import TrackingResult, TrackingStatus

SHOP = "loja.myshopify.com"


def _use_case() -> MagicMock:
    use_case = MagicMock()
    use_case.execute = AsyncMock(
        return_value=TrackingResult(status=TrackingStatus.SENT, event_name="Purchase")
    )
    return use_case


def _store(pixel_id: str = "PX1") -> MemoryConnectionStore:
    return MemoryConnectionStore(
        [MetaConnection(shop=SHOP, pixel_id=pixel_id, access_token="tok")]
    )


@pytest.mark.asyncio
async def test_runs_pipeline_with_connection(order_payload: dict) -> None:
    use_case = _use_case()

    outcome = await process_shopify_webhook(
        topic="orders/create",
        shop=SHOP,
        payload=order_payload,
        use_case=use_case,
        connection_store=_store(),
    )

    assert outcome.handled is True
    assert outcome.result is not None
    assert outcome.result.status is TrackingStatus.SENT
    trigger, connection = use_case.execute.await_args.args
    assert trigger.kind == "order"
    assert connection.pixel_id == "PX1"


@pytest.mark.asyncio
async def test_missing_shop_is_noop(order_payload: dict) -> None:
    use_case = _use_case()

    outcome = await process_shopify_webhook(
        topic="orders/create",
        shop=None,
        payload=order_payload,
        use_case=use_case,
        connection_store=_store(),
    )

    assert outcome.handled is False
    assert outcome.reason == "missing_shop"
    use_case.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_shop_is_noop(order_payload: dict) -> None:
    use_case = _use_case()

    outcome = await process_shopify_webhook(
        topic="orders/create",
        shop="outra.myshopify.com",
        payload=order_payload,
        use_case=use_case,
        connection_store=_store(),
    )

    assert outcome.reason == "connection_missing"
    use_case.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_empty_pixel_never_reaches_pipeline(order_payload: dict) -> None:
    use_case = _use_case()

    outcome = await process_shopify_webhook(
        topic="orders/create",
        shop=SHOP,
        payload=order_payload,
        use_case=use_case,
        connection_store=_store(pixel_id=""),
    )

    assert outcome.reason == "connection_missing"
    use_case.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_duplicate_delivery_ignored(customer_payload: dict) -> None:
    use_case = _use_case()
    dedupe = MemoryDedupeStore()
    kwargs = {
        "topic": "customers/create",
        "shop": SHOP,
        "payload": customer_payload,
        "use_case": use_case,
        "connection_store": _store(),
        "webhook_id": "b54557e4-bdd9-4b37-8a5f-bf7d70bcd043",
        "dedupe": dedupe,
    }

    first = await process_shopify_webhook(**kwargs)
    second = await process_shopify_webhook(**kwargs)

    assert first.handled is True
    assert second.handled is False
    assert second.reason == "duplicate"
    assert use_case.execute.await_count == 1


@pytest.mark.asyncio
async def test_dedupe_skipped_without_webhook_id(customer_payload: dict) -> None:
    use_case = _use_case()
    dedupe = MagicMock()
    dedupe.seen = AsyncMock(return_value=True)

    outcome = await process_shopify_webhook(
        topic="customers/create",
        shop=SHOP,
        payload=customer_payload,
        use_case=use_case,
        connection_store=_store(),
        dedupe=dedupe,
    )

    assert outcome.handled is True
    dedupe.seen.assert_not_awaited()


@pytest.mark.asyncio
async def test_malformed_optional_fields_still_run_pipeline(order_payload: dict) -> None:
    use_case = _use_case()

    outcome = await process_shopify_webhook(
        topic="orders/create",
        shop=SHOP,
        payload={**order_payload, "line_items": "nope", "created_at": 1704067200},
        use_case=use_case,
        connection_store=_store(),
    )

    assert outcome.handled is True
    trigger, _ = use_case.execute.await_args.args
    assert trigger.line_items == []
    assert trigger.created_at == "1704067200"


@pytest.mark.asyncio
async def test_unsupported_topic_raises() -> None:
    with pytest.raises(UnsupportedTopicError):
        await process_shopify_webhook(
            topic="products/update",
            shop=SHOP,
            payload={"id": 1},
            use_case=_use_case(),
            connection_store=_store(),
        )
