# tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from dashboard.auth.providers import hash_password
from dashboard.cache import ViewCache, get_view_cache
from dashboard.db.engine import get_engine
from dashboard.db.schema import metadata, users
from dashboard.main import app

TEST_PASSWORD = "123456"


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def view_cache():
    return ViewCache()


@pytest.fixture
def user(engine):
    row = {
        "id": "410544b2-4001-4271-9855-fec4b6a6442a",
        "name": "User",
        "email": "user@nextmail.com",
        "password": hash_password(TEST_PASSWORD, method="pbkdf2:sha256:1000"),
    }
    with engine.begin() as conn:
        conn.execute(users.insert().values(**row))
    return row


@pytest.fixture
def client(engine, view_cache):
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_view_cache] = lambda: view_cache
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
