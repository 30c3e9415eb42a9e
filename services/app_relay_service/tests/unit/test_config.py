"""Unit tests for App Relay Service settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from services.app_relay_service.config import AppRelaySettings


def test_defaults() -> None:
    settings = AppRelaySettings()

    assert settings.ROUTE_PREFIX == "/api/app"
    assert settings.UPSTREAM_TIMEOUT_SECONDS > 0


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("/api/app/", "/api/app"), ("/api/app", "/api/app"), (" /x// ", "/x")],
)
def test_route_prefix_normalized(raw: str, expected: str) -> None:
    assert AppRelaySettings(ROUTE_PREFIX=raw).ROUTE_PREFIX == expected


@pytest.mark.parametrize("raw", ["api/app", "/", ""])
def test_route_prefix_rejected(raw: str) -> None:
    with pytest.raises(ValidationError):
        AppRelaySettings(ROUTE_PREFIX=raw)


def test_unprefixed_environment_aliases(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGIN", "https://front.example")
    monkeypatch.setenv("CREATE_DIRECTORY_URL", "https://up.example/createDirectory.php")
    monkeypatch.setenv("VERIFICATION_URL", "https://up.example/verification.php")

    settings = AppRelaySettings()

    assert settings.ALLOWED_ORIGIN == "https://front.example"
    assert settings.CREATE_DIRECTORY_URL == "https://up.example/createDirectory.php"
    assert settings.VERIFICATION_URL == "https://up.example/verification.php"


def test_prefixed_environment_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_RELAY_ALLOWED_ORIGIN", "https://prefixed.example")
    monkeypatch.setenv("APP_RELAY_UPSTREAM_TIMEOUT_SECONDS", "5")

    settings = AppRelaySettings()

    assert settings.ALLOWED_ORIGIN == "https://prefixed.example"
    assert settings.UPSTREAM_TIMEOUT_SECONDS == 5.0
