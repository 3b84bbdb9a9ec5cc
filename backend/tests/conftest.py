"""Shared test configuration and pytest markers."""

import pytest

from config import settings
from services import gemini_client
from services.storage import reset_storage


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "property: hypothesis property-based checks"
    )


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """No real Gemini calls and fresh in-memory storage for every test."""
    monkeypatch.setattr(settings, "gemini_api_key", "")
    monkeypatch.setattr(settings, "storage_backend", "memory")
    gemini_client.reset_client()
    reset_storage()
    yield
    gemini_client.reset_client()
    reset_storage()
