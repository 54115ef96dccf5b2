# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.main import create_app

AUTH = {"X-API-Key": "test-key"}


@pytest.fixture
def app():
    return create_app(Settings(seed_products=True, environment="test"))


@pytest.fixture
def client(app):
    return TestClient(app)


def new_product(**overrides):
    body = {
        "name": "Desk Lamp",
        "description": "LED lamp with dimmer",
        "price": 35,
        "category": "Home",
    }
    body.update(overrides)
    return body
