"""Error handling utilities for the app relay service."""

from services.libs.relay_service_libs.error_handling.factories import (
    raise_route_not_found,
    raise_upstream_unreachable,
)
from services.libs.relay_service_libs.error_handling.models import ErrorCode, ErrorDetail
from services.libs.relay_service_libs.error_handling.relay_error import RelayServiceError

__all__ = [
    "ErrorCode",
    "ErrorDetail",
    "RelayServiceError",
    "raise_route_not_found",
    "raise_upstream_unreachable",
]
