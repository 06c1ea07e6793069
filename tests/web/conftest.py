"""Shared fixtures for web API tests."""

import pytest
from fastapi.testclient import TestClient

from cli.config_models import ServiceConfig
from web.app import create_app


@pytest.fixture
def config():
    return ServiceConfig()


@pytest.fixture
def app(config, fake_engine, memory_store):
    return create_app(config, engine=fake_engine, store=memory_store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def upload(client):
    """POST an image to /predict as multipart/form-data."""

    def _upload(content: bytes, filename: str = "scan.jpg"):
        return client.post("/predict", files={"image": (filename, content, "image/jpeg")})

    return _upload
