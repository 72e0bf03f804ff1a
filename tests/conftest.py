import os
import uuid
from pathlib import Path

import pytest

# Must be set before the app module reads its settings
os.environ["TESTING"] = "1"
os.environ["STATIC_DIR"] = str(Path(__file__).parent / "fixtures" / "public")

from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from appointment_api.api.deps import get_db
from appointment_api.main import app


@pytest.fixture
def mock_db():
    """A fresh in-memory database for each test."""
    return AsyncMongoMockClient()[f"appointments_test_{uuid.uuid4().hex}"]


@pytest.fixture
def client(mock_db):
    async def override_get_db():
        return mock_db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client
    app.dependency_overrides.clear()
