"""Upstream relay HTTP client.

Issues a single POST per call and hands the upstream's status and body back
untouched. Network-level failures are the only locally handled error.
"""

from __future__ import annotations

import json
import time
from uuid import UUID

import httpx

from services.app_relay_service.metrics import RelayMetrics
from services.app_relay_service.models import ParsedPayload, RelayOutcome
from services.libs.relay_service_libs.error_handling import raise_upstream_unreachable
from services.libs.relay_service_libs.logging_utils import create_service_logger

logger = create_service_logger("app_relay.upstream_client")

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


def serialize_payload(payload: ParsedPayload) -> str:
    """Render the outbound body; strings pass through unchanged."""
    if isinstance(payload, str):
        return payload
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def is_json_media_type(content_type: str | None) -> bool:
    """Check the media type of a Content-Type header value.

    Parameters are ignored. ``application/json`` and structured-syntax
    ``application/*+json`` types qualify; a type that merely contains
    "json" somewhere does not.
    """
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    main_type, _, subtype = media_type.partition("/")
    return main_type == "application" and (subtype == "json" or subtype.endswith("+json"))


def classify_content_type(content_type: str | None) -> str:
    return JSON_CONTENT_TYPE if is_json_media_type(content_type) else TEXT_CONTENT_TYPE


class UpstreamRelayClient:
    """HTTP client forwarding payloads to upstream endpoints."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        metrics: RelayMetrics,
        service_name: str,
    ) -> None:
        """Initialize with shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient instance
            metrics: Metrics container for upstream call accounting
            service_name: Service identity recorded on raised errors
        """
        self._client = http_client
        self._metrics = metrics
        self._service_name = service_name

    async def relay(
        self,
        target_url: str,
        payload: ParsedPayload,
        *,
        correlation_id: UUID,
        target_name: str = "upstream",
    ) -> RelayOutcome:
        """POST the payload to the upstream and capture its response.

        Non-2xx upstream statuses are not errors here; they are returned as-is.

        Raises:
            RelayServiceError: On connection failure, DNS failure or timeout
        """
        body = serialize_payload(payload)
        headers = {
            "Content-Type": "application/json",
            "X-Correlation-ID": str(correlation_id),
        }

        logger.debug(
            "Relaying request upstream",
            target=target_name,
            target_url=target_url,
            body_length=len(body),
        )

        started = time.perf_counter()
        try:
            with self._metrics.upstream_call_duration_seconds.labels(target=target_name).time():
                response = await self._client.post(target_url, content=body, headers=headers)
        except httpx.RequestError as e:
            timed_out = isinstance(e, httpx.TimeoutException)
            self._metrics.upstream_calls_total.labels(
                target=target_name,
                status_code="none",
                outcome="timeout" if timed_out else "unreachable",
            ).inc()
            logger.error(
                "Upstream request failed",
                target=target_name,
                target_url=target_url,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise_upstream_unreachable(
                service=self._service_name,
                operation=f"relay_{target_name}",
                target_url=target_url,
                reason=str(e) or type(e).__name__,
                correlation_id=correlation_id,
                timed_out=timed_out,
                error_type=type(e).__name__,
            )

        outcome = RelayOutcome(
            status_code=response.status_code,
            content_type=classify_content_type(response.headers.get("content-type")),
            body=response.text,
        )

        self._metrics.upstream_calls_total.labels(
            target=target_name,
            status_code=str(outcome.status_code),
            outcome="relayed",
        ).inc()
        logger.info(
            "Relayed upstream response",
            target=target_name,
            status_code=outcome.status_code,
            content_type=outcome.content_type,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )

        return outcome
