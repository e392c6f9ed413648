"""
Shared fixtures for API tests.

Services are replaced with AsyncMocks through dependency overrides, so no
database is touched.
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from mathprep.api.main import create_app


@pytest.fixture
def app():
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def headers(user_id) -> dict:
    return {"X-User-ID": str(user_id)}


@pytest.fixture
def override(app):
    """Install an AsyncMock for a service factory and return it."""

    def _override(dependency) -> AsyncMock:
        service = AsyncMock()
        app.dependency_overrides[dependency] = lambda: service
        return service

    return _override


@pytest.fixture
def as_admin(app, user_id):
    from mathprep.api.deps.dependencies import require_admin

    app.dependency_overrides[require_admin] = lambda: user_id
    return user_id
