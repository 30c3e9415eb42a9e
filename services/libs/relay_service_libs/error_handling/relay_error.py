"""Core exception type carrying a structured ErrorDetail."""

from __future__ import annotations

from typing import Any

from services.libs.relay_service_libs.error_handling.models import ErrorDetail


class RelayServiceError(Exception):
    """Exception wrapping an ErrorDetail.

    Raised through the factory functions and rendered to a JSON response by
    the FastAPI error handlers.
    """

    def __init__(self, error_detail: ErrorDetail) -> None:
        self.error_detail = error_detail
        super().__init__(f"[{error_detail.error_code.value}] {error_detail.message}")

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    def to_log_context(self) -> dict[str, Any]:
        """Flatten the error into keyword arguments for a structlog call."""
        return {
            "error_code": self.error_code,
            "correlation_id": self.correlation_id,
            "service": self.service,
            "operation": self.operation,
            **self.error_detail.details,
        }
