"""Shared fixtures for App Relay Service tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import AsyncClient

from services.app_relay_service.config import AppRelaySettings
from services.app_relay_service.tests.test_provider import app_client, build_test_settings


@pytest.fixture
def test_settings() -> AppRelaySettings:
    return build_test_settings()


@pytest.fixture
async def client(test_settings: AppRelaySettings) -> AsyncIterator[AsyncClient]:
    """Create test client for the app built from test settings."""
    async with app_client(test_settings) as ac:
        yield ac
