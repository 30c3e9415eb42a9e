"""Protocol definitions for App Relay Service.

Defines interfaces for the upstream relay used in dependency injection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from services.app_relay_service.models import ParsedPayload, RelayOutcome


class UpstreamRelayProtocol(Protocol):
    """Protocol for forwarding a payload to an upstream endpoint."""

    async def relay(
        self,
        target_url: str,
        payload: ParsedPayload,
        *,
        correlation_id: UUID,
        target_name: str = "upstream",
    ) -> RelayOutcome:
        """POST the payload to the target and capture its response.

        Args:
            target_url: Full URL of the upstream endpoint
            payload: Parsed client payload; strings are sent as-is
            correlation_id: Request correlation ID for tracing
            target_name: Short label used in logs and metrics

        Returns:
            RelayOutcome with the upstream status, classified content type and body

        Raises:
            RelayServiceError: When the upstream cannot be reached
        """
        ...
