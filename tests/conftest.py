"""Configuração do pytest para o projeto capi-relay."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def order_payload() -> dict:
    """Webhook orders/create com campos típicos."""
    return {
        "id": 820982911946154508,
        "name": "#1001",
        "created_at": "2024-01-01T12:00:00-03:00",
        "total_price": "25.00",
        "currency": "BRL",
        "browser_ip": "203.0.113.7",
        "landing_site_ref": "https://loja.example.com/produtos/camiseta",
        "client_details": {"user_agent": "Mozilla/5.0"},
        "line_items": [
            {"id": 1, "variant_id": "V1", "product_id": "P1", "quantity": 2, "price": "10.00"},
            {"id": 2, "variant_id": "V2", "product_id": "P2", "quantity": 1, "price": "5.00"},
        ],
        "customer": {
            "id": 42,
            "email": " Cliente@Example.com ",
            "phone": "+5511999990000",
            "first_name": "Ana",
            "last_name": "Souza",
            "default_address": {
                "city": "São Paulo",
                "province": "SP",
                "zip": "01000-000",
                "country": "BR",
            },
        },
        "admin_graphql_api_id": "gid://shopify/Order/820982911946154508",
    }


@pytest.fixture
def checkout_payload() -> dict:
    """Webhook checkouts/create."""
    return {
        "id": 123456,
        "token": "chk_abc",
        "created_at": "2024-01-01T11:00:00Z",
        "total_price": "25.00",
        "currency": "BRL",
        "line_items": [
            {"variant_id": "V1", "quantity": 2, "price": "10.00"},
            {"variant_id": "V2", "quantity": 1, "price": "5.00"},
        ],
        "customer": {"id": 42, "email": "cliente@example.com"},
    }


@pytest.fixture
def customer_payload() -> dict:
    """Webhook customers/create."""
    return {"id": 42, "email": "A@B.com", "created_at": "2024-01-01T00:00:00Z"}
