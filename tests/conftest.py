"""
Shared test fixtures for boards-client tests.
Patches the config module so no test reads a real .env or logs HTTP traffic.
"""

import os
import sys

import pytest

# Add project root to path so imports work without installation
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state."""
    from boards_client import config

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "BOARDS_URL", "https://boards.example.com")
    monkeypatch.setattr(config, "BOARDS_TOKEN", "fake-token")
    monkeypatch.setattr(config, "HTTP_TIMEOUT_SECONDS", 30)
    monkeypatch.setattr(config, "HTTP_MAX_RESPONSE_BYTES", 5_000_000)
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "HTTP_LOG_SAMPLE_RATE", 1.0)
