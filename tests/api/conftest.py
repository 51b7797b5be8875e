"""API test fixtures — TestClient over the real app factory with a mocked store."""

import pytest
from starlette.testclient import TestClient

from api.app import create_app
from core.config import StorageConfig


@pytest.fixture
def storage_config():
    return StorageConfig(
        database_url="postgresql://dashboard@localhost:5432/dashboard",
        database_password="test-password",
    )


@pytest.fixture
def app(storage_config, db, revalidated):
    """App wired to the mocked PostgresClient; revalidations are recorded."""
    return create_app(config=storage_config, postgres=db, revalidate=revalidated.append)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
