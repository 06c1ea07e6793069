"""CLI command modules."""

from .predictions import history, predict
from .serve import serve

__all__ = [
    "history",
    "predict",
    "serve",
]
