"""Use cases de eventos de conversão."""

from .track_conversion import TrackConversionUseCase, TrackingResult, TrackingStatus

__all__ = [
    "TrackConversionUseCase",
    "TrackingResult",
    "TrackingStatus",
]
