"""Normalização e hash de PII antes de sair do serviço.

Regra da CAPI: cada atributo de identidade é enviado como SHA-256 hex
da forma normalizada (minúsculas, sem espaços nas bordas). Valor ausente
nunca é "hasheado": hash de string vazia viraria um falso sinal de
identidade compartilhado por todos os clientes sem o campo.
"""

from __future__ import annotations

import hashlib

DIGEST_LENGTH = 64


def normalize_pii(value: str) -> str:
    """Forma canônica usada antes do hash."""
    return value.strip().lower()


def hash_pii(value: str) -> str:
    """Retorna SHA-256 hex do valor normalizado.

    Raises:
        ValueError: Se o valor normalizado for vazio.
    """
    normalized = normalize_pii(value)
    if not normalized:
        raise ValueError("cannot hash empty PII value")
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def hash_optional(value: object | None) -> str | None:
    """Hash de campo opcional; None quando ausente ou vazio.

    Ids numéricos (ex: customer.id) são convertidos para string.
    """
    if value is None or isinstance(value, bool):
        return None
    text = str(value)
    if not text.strip():
        return None
    return hash_pii(text)
