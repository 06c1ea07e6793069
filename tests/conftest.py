"""Shared test fixtures for the screening service."""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from inference.engine import InferenceEngine  # noqa: E402
from predictions.store import MemoryPredictionStore  # noqa: E402


class FakeEngine(InferenceEngine):
    """Returns fixed scores; empty or b"bad..." payloads fail like a bad JPEG."""

    def __init__(self, scores=None):
        self.scores = scores if scores is not None else [0.9]
        self.calls: list[bytes] = []

    def predict_scores(self, image: bytes) -> list[float]:
        self.calls.append(image)
        if not image or image.startswith(b"bad"):
            raise ValueError("Invalid JPEG data or crop window")
        return list(self.scores)


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def memory_store():
    return MemoryPredictionStore()


@pytest.fixture
def jpeg_bytes():
    """Stand-in upload body; the fake engine never decodes it."""
    return b"\xff\xd8\xff\xe0" + b"\x00" * 256 + b"\xff\xd9"
