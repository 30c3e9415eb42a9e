"""Catch-all route answering every unmatched method and path with 404."""

from __future__ import annotations

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from starlette.responses import Response

from services.app_relay_service.config import AppRelaySettings
from services.libs.relay_service_libs.error_handling import raise_route_not_found

router = APIRouter(route_class=DishkaRoute)

FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


@router.api_route(
    "/{_full_path:path}",
    methods=FALLBACK_METHODS,
    include_in_schema=False,
    response_model=None,
)
async def not_found(
    _full_path: str,
    request: Request,
    config: FromDishka[AppRelaySettings],
    correlation_id: FromDishka[UUID],
) -> Response:
    """Registered last so that any method and path without a route lands here."""
    raise_route_not_found(
        service=config.SERVICE_NAME,
        operation="route_request",
        path=request.url.path,
        correlation_id=correlation_id,
        method=request.method,
    )
