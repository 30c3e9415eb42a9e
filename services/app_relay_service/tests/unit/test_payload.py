"""Unit tests for client body decoding."""

from __future__ import annotations

import pytest

from services.app_relay_service.api._payload import parse_client_payload


def test_empty_body_is_empty_mapping() -> None:
    assert parse_client_payload(b"") == {}


def test_json_object_is_parsed() -> None:
    assert parse_client_payload(b'{"directoryName":"foo","discordLink":null}') == {
        "directoryName": "foo",
        "discordLink": None,
    }


@pytest.mark.parametrize(
    "raw",
    [b"not valid json", b"{'single': 'quotes'}", b"   ", b'{"unterminated": ', b"NaN"],
)
def test_invalid_json_passes_through_as_text(raw: bytes) -> None:
    assert parse_client_payload(raw) == raw.decode()


def test_json_scalars_are_parsed() -> None:
    assert parse_client_payload(b"[1, 2]") == [1, 2]
    assert parse_client_payload(b"null") is None
    assert parse_client_payload(b"42") == 42


@pytest.mark.parametrize("depth", [2_000, 100_000])
def test_nesting_beyond_recursion_limit_passes_through(depth: int) -> None:
    raw = b"[" * depth + b"]" * depth

    assert parse_client_payload(raw) == raw.decode()
