"""Serviços de aplicação.

Funções puras do pipeline de conversão (sem IO direto): hashing de PII,
chaves de dedup e construção de eventos.
"""

from app.services.dedup_key import DedupEntity, make_dedup_key, make_page_view_key
from app.services.event_builder import (
    ClientData,
    build_add_to_cart,
    build_complete_registration,
    build_initiate_checkout,
    build_page_view,
    build_purchase,
    build_view_content,
)
from app.services.pii import hash_optional, hash_pii, normalize_pii

__all__ = [
    "ClientData",
    "DedupEntity",
    "build_add_to_cart",
    "build_complete_registration",
    "build_initiate_checkout",
    "build_page_view",
    "build_purchase",
    "build_view_content",
    "hash_optional",
    "hash_pii",
    "make_dedup_key",
    "make_page_view_key",
    "normalize_pii",
]
