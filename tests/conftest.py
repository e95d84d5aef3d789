import pytest
from fastapi.testclient import TestClient

from verify_backend.config import Settings
from verify_backend.main import create_app


@pytest.fixture
def make_client():
    def _make(**overrides) -> TestClient:
        return TestClient(create_app(Settings(**overrides)))

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
