"""Image inference and cancer/non-cancer diagnosis."""

from .diagnosis import (
    CANCER,
    NON_CANCER,
    Diagnosis,
    PredictionError,
    classify,
    confidence_from_scores,
    diagnose,
    to_prediction_error,
)
from .engine import InferenceEngine, KerasInferenceEngine, load_engine

__all__ = [
    "CANCER",
    "NON_CANCER",
    "Diagnosis",
    "InferenceEngine",
    "KerasInferenceEngine",
    "PredictionError",
    "classify",
    "confidence_from_scores",
    "diagnose",
    "load_engine",
    "to_prediction_error",
]
