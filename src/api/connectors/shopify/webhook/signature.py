"""Validação do HMAC de webhooks Shopify (X-Shopify-Hmac-Sha256)."""

from __future__ import annotations

import base64
import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

HMAC_HEADER = "x-shopify-hmac-sha256"


@dataclass(frozen=True)
class SignatureResult:
    """Resultado da verificação.

    Attributes:
        valid: True se o request pode ser processado
        skipped: True quando não há secret (apenas desenvolvimento)
        error: Motivo curto da rejeição
    """

    valid: bool
    skipped: bool = False
    error: str | None = None


def compute_shopify_hmac(raw_body: bytes, secret: str) -> str:
    """Base64 do HMAC-SHA256 do corpo bruto."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_shopify_hmac(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Confere o header HMAC contra o corpo bruto.

    Secret vazio desativa a verificação; a validação de settings impede
    isso fora de desenvolvimento.
    """
    if not secret:
        return SignatureResult(valid=True, skipped=True)

    received = _get_header(headers, HMAC_HEADER)
    if not received:
        return SignatureResult(valid=False, error="missing_signature")

    expected = compute_shopify_hmac(raw_body, secret)
    if not hmac.compare_digest(expected.encode("ascii"), received.strip().encode("ascii", "ignore")):
        return SignatureResult(valid=False, error="signature_mismatch")
    return SignatureResult(valid=True)


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    for key, candidate in headers.items():
        if key.lower() == name:
            return candidate
    return None
