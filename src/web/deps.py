"""Dependency injection for FastAPI routes.

The engine, store and config are created once in the app lifespan and kept
on ``app.state``; routes receive them through these dependencies.
"""

from fastapi import HTTPException, Request

from cli.config_models import ServiceConfig
from inference.engine import InferenceEngine
from predictions.store import PredictionStore


def get_config(request: Request) -> ServiceConfig:
    return request.app.state.config


def get_engine(request: Request) -> InferenceEngine:
    return request.app.state.engine


def get_store(request: Request) -> PredictionStore:
    return request.app.state.store


def require_multipart(request: Request) -> None:
    """Reject anything that is not multipart/form-data with 415."""
    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        raise HTTPException(status_code=415, detail="Unsupported Media Type")
