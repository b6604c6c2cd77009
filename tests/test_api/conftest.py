"""Fixtures для API тестов.

NetBox credentials передаются через HTTP headers:
- X-NetBox-URL
- X-NetBox-Token

Требует: pip install fastapi uvicorn httpx
"""

import pytest

# Skip all API tests if fastapi not installed
pytest.importorskip("fastapi", reason="fastapi not installed, skipping API tests")

from fastapi.testclient import TestClient

from netbox_topology.api.main import app


@pytest.fixture
def client():
    """TestClient для API."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def netbox_headers():
    """Headers с NetBox credentials."""
    return {
        "X-NetBox-URL": "https://netbox.example.com",
        "X-NetBox-Token": "test-token",
    }
