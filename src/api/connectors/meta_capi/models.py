"""Modelos de resposta da Conversions API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CapiResponse(BaseModel):
    """Confirmação de recebimento de um lote de eventos."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    events_received: int = Field(..., ge=0)
    messages: list[str] = Field(default_factory=list)
    fbtrace_id: str = ""
