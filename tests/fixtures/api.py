"""Shared fixtures for API testing.

These fixtures provide a TestClient wired to a fresh Workspace for each test,
ensuring test isolation.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_workspace
from main import app
from tests.fixtures.workspace import FakeGenerator, HELLO_RESPONSE, create_workspace


@pytest.fixture
def fresh_workspace():
    """Provide a fresh Workspace with no model selected."""
    return create_workspace(generator=FakeGenerator(text=HELLO_RESPONSE), select_model=False)


@pytest.fixture
def client_with_workspace(fresh_workspace):
    """Provide a TestClient with a fresh Workspace injected.

    Uses FastAPI's dependency override system to inject the test workspace
    instead of the global one. The TestClient is not entered as a context
    manager, so the lifespan (and its real generation client) never runs.

    Yields:
        A tuple of (TestClient, Workspace) for testing.
    """
    app.dependency_overrides[get_workspace] = lambda: fresh_workspace

    client = TestClient(app, raise_server_exceptions=False)

    yield client, fresh_workspace

    app.dependency_overrides.clear()
