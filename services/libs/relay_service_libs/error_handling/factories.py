"""
Factory functions that build an ErrorDetail and raise RelayServiceError.

Every factory is typed NoReturn so call sites read as control flow.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, NoReturn
from uuid import UUID

from services.libs.relay_service_libs.error_handling.models import ErrorCode, ErrorDetail
from services.libs.relay_service_libs.error_handling.relay_error import RelayServiceError

UPSTREAM_FAILURE_MESSAGE = "Upstream request failed"
NOT_FOUND_MESSAGE = "Not found"


def _raise(
    error_code: ErrorCode,
    *,
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    details: dict[str, Any],
) -> NoReturn:
    error_detail = ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc),
        service=service,
        operation=operation,
        details=details,
    )
    raise RelayServiceError(error_detail)


def raise_upstream_unreachable(
    service: str,
    operation: str,
    target_url: str,
    reason: str,
    correlation_id: UUID,
    *,
    timed_out: bool = False,
    **additional_context: Any,
) -> NoReturn:
    """Raise the error surfaced when the upstream could not be reached.

    Args:
        service: Service raising the error
        operation: Operation that failed
        target_url: Upstream URL the request was sent to
        reason: Human-readable failure message, exposed to the caller as ``details``
        correlation_id: Request correlation ID
        timed_out: True when the failure was a timeout rather than a connection error
        **additional_context: Extra fields recorded on the ErrorDetail
    """
    _raise(
        ErrorCode.TIMEOUT if timed_out else ErrorCode.CONNECTION_ERROR,
        service=service,
        operation=operation,
        message=UPSTREAM_FAILURE_MESSAGE,
        correlation_id=correlation_id,
        details={"details": reason, "target_url": target_url, **additional_context},
    )


def raise_route_not_found(
    service: str,
    operation: str,
    path: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise the error for a method and path combination with no route."""
    _raise(
        ErrorCode.RESOURCE_NOT_FOUND,
        service=service,
        operation=operation,
        message=NOT_FOUND_MESSAGE,
        correlation_id=correlation_id,
        details={"path": path, **additional_context},
    )
