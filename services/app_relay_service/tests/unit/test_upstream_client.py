"""Unit tests for the upstream relay client."""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import uuid4

import httpx
import pytest
from prometheus_client import CollectorRegistry
from respx import MockRouter

from services.app_relay_service.clients.upstream_client import (
    JSON_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
    UpstreamRelayClient,
    classify_content_type,
    serialize_payload,
)
from services.app_relay_service.metrics import RelayMetrics
from services.libs.relay_service_libs.error_handling import ErrorCode, RelayServiceError

TARGET_URL = "http://upstream.test/verification.php"
CORRELATION_ID = uuid4()


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
async def relay_client(registry: CollectorRegistry) -> AsyncIterator[UpstreamRelayClient]:
    """Create relay client with real httpx client for respx mocking."""
    async with httpx.AsyncClient() as http_client:
        yield UpstreamRelayClient(http_client, RelayMetrics(registry), "app_relay_service_test")


class TestClassifyContentType:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("application/json", JSON_CONTENT_TYPE),
            ("application/json; charset=ISO-8859-1", JSON_CONTENT_TYPE),
            ("Application/JSON", JSON_CONTENT_TYPE),
            ("application/problem+json", JSON_CONTENT_TYPE),
            ("text/html; charset=UTF-8", TEXT_CONTENT_TYPE),
            ("text/plain", TEXT_CONTENT_TYPE),
            ("text/x-json-ish", TEXT_CONTENT_TYPE),
            ("application/jsonl", TEXT_CONTENT_TYPE),
            ("", TEXT_CONTENT_TYPE),
            (None, TEXT_CONTENT_TYPE),
        ],
    )
    def test_classification(self, header: str | None, expected: str) -> None:
        assert classify_content_type(header) == expected


class TestSerializePayload:
    def test_mapping_is_compact_json(self) -> None:
        assert serialize_payload({"a": 1, "b": [True, None]}) == '{"a":1,"b":[true,null]}'

    def test_non_ascii_kept_literal(self) -> None:
        assert serialize_payload({"name": "kärna"}) == '{"name":"kärna"}'

    def test_string_sent_as_is(self) -> None:
        assert serialize_payload("not valid json") == "not valid json"

    def test_empty_mapping(self) -> None:
        assert serialize_payload({}) == "{}"


@pytest.mark.asyncio
async def test_relay_returns_upstream_outcome(
    relay_client: UpstreamRelayClient, respx_mock: MockRouter
) -> None:
    mock_route = respx_mock.post(TARGET_URL).mock(
        return_value=httpx.Response(
            201, content=b'{"id":7}', headers={"Content-Type": "application/json"}
        )
    )

    outcome = await relay_client.relay(
        TARGET_URL, {"code": "abc"}, correlation_id=CORRELATION_ID, target_name="verification"
    )

    assert outcome.status_code == 201
    assert outcome.content_type == JSON_CONTENT_TYPE
    assert outcome.body == '{"id":7}'

    request = mock_route.calls.last.request
    assert request.content == b'{"code":"abc"}'
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["X-Correlation-ID"] == str(CORRELATION_ID)


@pytest.mark.asyncio
async def test_relay_keeps_body_verbatim(
    relay_client: UpstreamRelayClient, respx_mock: MockRouter
) -> None:
    """Whitespace and key order in the upstream body are untouched."""
    body = '{ "b": 2,\n  "a": 1 }'
    respx_mock.post(TARGET_URL).mock(
        return_value=httpx.Response(
            200, content=body.encode(), headers={"Content-Type": "application/json"}
        )
    )

    outcome = await relay_client.relay(TARGET_URL, {}, correlation_id=CORRELATION_ID)

    assert outcome.body == body


@pytest.mark.asyncio
async def test_connection_error_raises_relay_error(
    relay_client: UpstreamRelayClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(TARGET_URL).mock(side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(RelayServiceError) as exc_info:
        await relay_client.relay(TARGET_URL, {}, correlation_id=CORRELATION_ID)

    error = exc_info.value
    assert error.error_code == ErrorCode.CONNECTION_ERROR.value
    assert error.correlation_id == str(CORRELATION_ID)
    assert error.error_detail.message == "Upstream request failed"
    assert error.error_detail.details["details"] == "connection refused"
    assert error.error_detail.details["target_url"] == TARGET_URL
    assert error.error_detail.details["error_type"] == "ConnectError"


@pytest.mark.asyncio
async def test_timeout_raises_timeout_error(
    relay_client: UpstreamRelayClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(TARGET_URL).mock(side_effect=httpx.ConnectTimeout("timed out"))

    with pytest.raises(RelayServiceError) as exc_info:
        await relay_client.relay(TARGET_URL, {}, correlation_id=CORRELATION_ID)

    assert exc_info.value.error_code == ErrorCode.TIMEOUT.value


@pytest.mark.asyncio
async def test_metrics_record_outcomes(
    relay_client: UpstreamRelayClient, registry: CollectorRegistry, respx_mock: MockRouter
) -> None:
    respx_mock.post(TARGET_URL).mock(
        side_effect=[
            httpx.Response(500, text="boom"),
            httpx.ConnectError("refused"),
        ]
    )

    await relay_client.relay(TARGET_URL, {}, correlation_id=CORRELATION_ID, target_name="t")
    with pytest.raises(RelayServiceError):
        await relay_client.relay(TARGET_URL, {}, correlation_id=CORRELATION_ID, target_name="t")

    relayed = registry.get_sample_value(
        "app_relay_upstream_calls_total",
        {"target": "t", "status_code": "500", "outcome": "relayed"},
    )
    unreachable = registry.get_sample_value(
        "app_relay_upstream_calls_total",
        {"target": "t", "status_code": "none", "outcome": "unreachable"},
    )
    assert relayed == 1.0
    assert unreachable == 1.0
