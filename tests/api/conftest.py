"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="function")
def client(editor_service):
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh editor service to avoid state contamination.
    """
    from main import app

    app.state.editor_service = editor_service
    app.state.config = {"engine": {"mosaic_workers": 2}, "environment": "test"}
    app.state.debug = False
    app.state.thumbnail_width = 64
    app.state.max_script_lines = 50

    # Create test client (no context manager to avoid running the lifespan)
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client

    app.state.editor_service = None
