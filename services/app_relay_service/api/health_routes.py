"""Health and metrics routes for App Relay Service."""

from __future__ import annotations

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from services.app_relay_service.config import AppRelaySettings
from services.app_relay_service.models import StaticPage

router = APIRouter(route_class=DishkaRoute, tags=["Health"])


@router.get("/healthz")
async def health_check(
    page: FromDishka[StaticPage],
    config: FromDishka[AppRelaySettings],
) -> dict[str, str | dict]:
    """Report page availability and configured upstream targets.

    Upstreams are not contacted; their availability is only observed on relay.
    """
    checks = {"page_available": page.available}
    overall_status = "healthy" if all(checks.values()) else "degraded"

    return {
        "service": config.SERVICE_NAME,
        "status": overall_status,
        "message": f"App Relay Service is {overall_status}",
        "version": "0.1.0",
        "checks": checks,
        "dependencies": {
            "create_directory": {
                "url": config.CREATE_DIRECTORY_URL,
                "note": "Availability checked on request",
            },
            "verification": {
                "url": config.VERIFICATION_URL,
                "note": "Availability checked on request",
            },
        },
        "environment": config.ENVIRONMENT.value,
    }


@router.get("/metrics", response_class=PlainTextResponse)
async def metrics(registry: FromDishka[CollectorRegistry]) -> PlainTextResponse:
    """Prometheus metrics endpoint."""
    return PlainTextResponse(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)
