"""Shared fixtures and configuration for all scoreboard tests."""

import pytest

import scoreboard.store as store_module
import scoreboard.ws as ws_module
from scoreboard.config import get_settings


@pytest.fixture(autouse=True)
def clear_store():
    """Clear the global store and feed subscribers before and after each test."""
    store_module.reset()
    ws_module.clients.clear()
    yield
    store_module.reset()
    ws_module.clients.clear()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Drop any SCOREBOARD_* variables and the cached settings."""
    for key in (
        "SCOREBOARD_DATA_FILE",
        "SCOREBOARD_ALLOWED_USERS",
        "SCOREBOARD_ADMIN_TOKEN",
        "SCOREBOARD_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from scoreboard.app import app

    with TestClient(app) as c:
        yield c
