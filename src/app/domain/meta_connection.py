"""MetaConnection - vínculo loja -> pixel, lido do store de conexões."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class MetaConnection:
    """Registro de conexão (somente leitura neste serviço).

    Attributes:
        shop: Domínio da loja (ex: loja.myshopify.com)
        pixel_id: Identificador de destino (pixel/dataset)
        access_token: Credencial da CAPI
        token_expires_at: Expiração do token, quando conhecida
    """

    shop: str
    pixel_id: str
    access_token: str
    token_expires_at: datetime | None = None

    @property
    def is_configured(self) -> bool:
        """True quando há pixel e token para envio."""
        return bool(self.pixel_id.strip() and self.access_token.strip())

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.token_expires_at is None:
            return False
        expires_at = self.token_expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return expires_at <= (now or datetime.now(UTC))
