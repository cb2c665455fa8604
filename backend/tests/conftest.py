# backend/tests/conftest.py

from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.security import create_access_token
from app.main import create_app


@pytest.fixture()
def settings() -> Settings:
    """Settings for an API backed by the in-memory store."""
    return Settings(
        USE_IN_MEMORY_STORE=True,
        JWT_SECRET_KEY="test-secret",
        ENVIRONMENT="test",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture()
def api_app(settings: Settings):
    return create_app(settings)


@pytest.fixture()
def client(api_app):
    # the context manager runs the lifespan, which opens the store
    with TestClient(api_app) as c:
        yield c


@pytest.fixture()
def store(client):
    return client.app.state.task_store


@pytest.fixture()
def auth_headers(settings: Settings) -> Callable[[str], Dict[str, str]]:
    def _headers(user_id: str) -> Dict[str, str]:
        token = create_access_token(user_id, settings)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def alice(auth_headers) -> Dict[str, str]:
    return auth_headers("alice")


@pytest.fixture()
def bob(auth_headers) -> Dict[str, str]:
    return auth_headers("bob")
