import os
import sys
import pytest
from fastapi.testclient import TestClient

# Add the project root directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Now we can import from the thumbor_url package
from thumbor_url.main import app
from thumbor_url.services.thumbor import ThumborService


SERVER = "http://thumbor.example.com"
SECRET = "my-secret-key"
ORIGINAL = "http://images.example.com/llamas.jpg"


@pytest.fixture
def client():
    """Create a test client for the app."""
    return TestClient(app)


@pytest.fixture
def unsafe_service(monkeypatch):
    """Point the API at an unsigned thumbor service."""
    service = ThumborService(server=SERVER, secret="")
    monkeypatch.setattr("thumbor_url.api.thumbor.thumbor_service", service)
    monkeypatch.setattr("thumbor_url.api.health.thumbor_service", service)
    return service


@pytest.fixture
def signed_service(monkeypatch):
    """Point the API at a thumbor service with a security key."""
    service = ThumborService(server=SERVER, secret=SECRET)
    monkeypatch.setattr("thumbor_url.api.thumbor.thumbor_service", service)
    monkeypatch.setattr("thumbor_url.api.health.thumbor_service", service)
    return service
