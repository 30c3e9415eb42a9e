"""App Relay Service middleware components."""

from __future__ import annotations

from uuid import UUID, uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from services.libs.relay_service_libs.error_handling.fastapi import error_response
from services.libs.relay_service_libs.logging_utils import (
    bind_request_context,
    create_service_logger,
)

logger = create_service_logger("app_relay.middleware")

ALLOWED_METHODS = "GET,POST,OPTIONS"
ALLOWED_HEADERS = "Content-Type,Authorization"


def build_cors_headers(allowed_origin: str) -> dict[str, str]:
    """Headers applied to every response the service produces."""
    return {
        "Access-Control-Allow-Origin": allowed_origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Cache-Control": "no-store",
    }


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Middleware to ensure every request has a correlation ID."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Extract or generate correlation ID and store in request state."""
        x_correlation_id = request.headers.get("X-Correlation-ID")
        if x_correlation_id:
            try:
                correlation_id = UUID(x_correlation_id)
            except ValueError:
                correlation_id = uuid4()
        else:
            correlation_id = uuid4()

        request.state.correlation_id = correlation_id
        bind_request_context(str(correlation_id), request.method, request.url.path)
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = str(correlation_id)
        return response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Answers every OPTIONS request and stamps CORS headers on all responses.

    Preflight is answered for any path, with or without an Origin header.
    Unhandled errors are rendered here as 500 so they carry the headers too;
    the application-level Exception handler runs outside this middleware.
    """

    def __init__(self, app: ASGIApp, allowed_origin: str = "*") -> None:
        super().__init__(app)
        self._headers = build_cors_headers(allowed_origin)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=self._headers)
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Unhandled error",
                method=request.method,
                path=request.url.path,
                error_type=type(e).__name__,
                exc_info=True,
            )
            response = error_response(500, {"error": "Internal server error"})
        response.headers.update(self._headers)
        return response
