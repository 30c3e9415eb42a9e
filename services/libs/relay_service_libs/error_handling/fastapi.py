"""
FastAPI integration for relay service error handling.

Renders RelayServiceError and Starlette HTTP exceptions as the service's
wire error body: ``{"error": <message>, ...exposed detail fields}``.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from services.libs.relay_service_libs.error_handling.factories import NOT_FOUND_MESSAGE
from services.libs.relay_service_libs.error_handling.models import ErrorCode
from services.libs.relay_service_libs.error_handling.relay_error import RelayServiceError
from services.libs.relay_service_libs.logging_utils import create_service_logger

logger = create_service_logger("relay_service_libs.error_handling")

JSON_MEDIA_TYPE = "application/json; charset=utf-8"

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.RESOURCE_NOT_FOUND: 404,
    ErrorCode.CONNECTION_ERROR: 502,
    ErrorCode.TIMEOUT: 502,
    ErrorCode.UNKNOWN_ERROR: 500,
}

# Detail fields that are part of the public response body; the rest stay in logs.
EXPOSED_DETAIL_FIELDS: dict[ErrorCode, tuple[str, ...]] = {
    ErrorCode.RESOURCE_NOT_FOUND: ("path",),
    ErrorCode.CONNECTION_ERROR: ("details",),
    ErrorCode.TIMEOUT: ("details",),
}


def error_response(status_code: int, content: dict[str, Any]) -> JSONResponse:
    """Build a JSON error response with an explicit UTF-8 charset."""
    return JSONResponse(status_code=status_code, content=content, media_type=JSON_MEDIA_TYPE)


def render_error_body(error: RelayServiceError) -> dict[str, Any]:
    detail = error.error_detail
    body: dict[str, Any] = {"error": detail.message}
    for field in EXPOSED_DETAIL_FIELDS.get(detail.error_code, ()):
        if field in detail.details:
            body[field] = detail.details[field]
    return body


def register_error_handlers(app: FastAPI) -> None:
    """Register the relay service exception handlers on a FastAPI app."""

    @app.exception_handler(RelayServiceError)
    async def handle_relay_service_error(
        request: Request, exc: RelayServiceError
    ) -> JSONResponse:
        status_code = ERROR_CODE_TO_STATUS.get(exc.error_detail.error_code, 500)
        log = logger.error if status_code >= 500 else logger.info
        log(
            "Request failed",
            **{
                **exc.to_log_context(),
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
            },
        )
        return error_response(status_code, render_error_body(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Unknown paths and unsupported methods share the not-found contract
        if exc.status_code in (404, 405):
            return error_response(404, {"error": NOT_FOUND_MESSAGE, "path": request.url.path})
        return error_response(exc.status_code, {"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error",
            method=request.method,
            path=request.url.path,
            error_type=type(exc).__name__,
            exc_info=True,
        )
        return error_response(500, {"error": "Internal server error"})
