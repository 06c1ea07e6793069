"""Confidence thresholding and the public prediction error boundary."""

from dataclasses import dataclass
from typing import Sequence

import structlog

from .engine import InferenceEngine

logger = structlog.get_logger()

CANCER = "Cancer"
NON_CANCER = "Non-cancer"

SUGGESTIONS = {
    CANCER: "Segera periksa ke dokter!",
    NON_CANCER: "Penyakit kanker tidak terdeteksi.",
}

DEFAULT_THRESHOLD = 50.0

PREDICTION_ERROR_MESSAGE = "Terjadi kesalahan dalam melakukan prediksi"


class PredictionError(Exception):
    """User-facing prediction failure. Carries only the sanitized message."""

    def __init__(self, message: str = PREDICTION_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class Diagnosis:
    result: str
    suggestion: str
    confidence: float


def confidence_from_scores(scores: Sequence[float]) -> float:
    """Highest class score scaled to 0-100."""
    if len(scores) == 0:
        raise ValueError("model returned no scores")
    return max(scores) * 100


def classify(confidence: float, threshold: float = DEFAULT_THRESHOLD) -> Diagnosis:
    """Map a confidence to a result/suggestion pair.

    A confidence equal to the threshold is Non-cancer.
    """
    result = NON_CANCER if confidence <= threshold else CANCER
    return Diagnosis(result=result, suggestion=SUGGESTIONS[result], confidence=confidence)


def to_prediction_error(exc: BaseException) -> PredictionError:
    """Collapse an internal failure into the generic public error.

    The cause is logged here and nowhere else; the returned error exposes only
    PREDICTION_ERROR_MESSAGE.
    """
    if isinstance(exc, PredictionError):
        return exc
    logger.warning("predict.failed", error_type=type(exc).__name__, error=str(exc))
    return PredictionError()


def diagnose(
    engine: InferenceEngine, image: bytes, threshold: float = DEFAULT_THRESHOLD
) -> Diagnosis:
    """Score an image and classify it.

    Raises:
        PredictionError: on any decode, resize or inference failure.
    """
    try:
        scores = engine.predict_scores(image)
        confidence = confidence_from_scores(scores)
    except Exception as e:
        raise to_prediction_error(e) from e
    return classify(confidence, threshold)
