"""Prediction records and their persistence."""

from .store import (
    FirestorePredictionStore,
    MemoryPredictionStore,
    PredictionRecord,
    PredictionStore,
    create_store,
)

__all__ = [
    "FirestorePredictionStore",
    "MemoryPredictionStore",
    "PredictionRecord",
    "PredictionStore",
    "create_store",
]
