"""Pretrained image classifier wrapper.

The model is loaded once at startup and then only read: ``predict_scores``
never mutates engine state, so one instance is shared by every request.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import numpy as np
import structlog

logger = structlog.get_logger()

DEFAULT_INPUT_SIZE = 224


class InferenceEngine(ABC):
    """Abstract classifier: raw image bytes in, per-class scores out."""

    @abstractmethod
    def predict_scores(self, image: bytes) -> list[float]:
        """Return the flat per-class score array for one image."""


class KerasInferenceEngine(InferenceEngine):
    """Runs a loaded Keras model on JPEG images."""

    def __init__(self, model: Any, input_size: int = DEFAULT_INPUT_SIZE):
        self.model = model
        self.input_size = input_size

    def preprocess(self, image: bytes):
        """Decode, nearest-neighbour resize, add batch dim, cast to float32."""
        import tensorflow as tf

        tensor = tf.io.decode_jpeg(image, channels=3)
        tensor = tf.image.resize(
            tensor, [self.input_size, self.input_size], method="nearest"
        )
        tensor = tf.expand_dims(tensor, 0)
        return tf.cast(tensor, tf.float32)

    def predict_scores(self, image: bytes) -> list[float]:
        tensor = self.preprocess(image)
        prediction = self.model.predict(tensor, verbose=0)
        return [float(s) for s in np.ravel(prediction)]


def _resolve_model_path(model_url: str) -> Path:
    """Download remote models into the Keras cache; local paths pass through."""
    if model_url.startswith(("http://", "https://")):
        import tensorflow as tf

        fname = model_url.rstrip("/").rsplit("/", 1)[-1]
        logger.info("model.download", url=model_url)
        return Path(tf.keras.utils.get_file(fname, origin=model_url, cache_subdir="screening"))
    return Path(model_url).expanduser()


def load_engine(model_url: str | None, input_size: int = DEFAULT_INPUT_SIZE) -> KerasInferenceEngine:
    """Load the classifier from a local path or http(s) URL.

    Raises:
        ValueError: if no model location is configured.
    """
    if not model_url:
        raise ValueError("MODEL_URL is not configured")

    import tensorflow as tf

    path = _resolve_model_path(model_url)
    model = tf.keras.models.load_model(str(path), compile=False)
    logger.info("model.loaded", path=str(path), input_size=input_size)
    return KerasInferenceEngine(model, input_size=input_size)
