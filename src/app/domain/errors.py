"""Erros de domínio do pipeline de conversões."""

from __future__ import annotations


class ConversionPipelineError(Exception):
    """Base para erros do pipeline de conversões."""


class MissingPayloadError(ConversionPipelineError, ValueError):
    """Registro de origem ausente (webhook sem payload).

    Não deve ocorrer com o adapter corretamente ligado; sinaliza defeito.
    """


class UnsupportedTopicError(ConversionPipelineError, ValueError):
    """Tópico de webhook sem evento de conversão correspondente."""


class ConversionDeliveryError(ConversionPipelineError):
    """Falha ao entregar eventos à plataforma de anúncios.

    Implementada pelo conector de transporte; o caso de uso só conhece
    este contrato.
    """

    status_code: int | None = None
    fbtrace_id: str | None = None
