"""Relay routes for App Relay Service.

Forwards the two whitelisted POST endpoints to their upstream targets and
hands back the upstream status and body.
"""

from __future__ import annotations

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from starlette.responses import Response

from services.app_relay_service.api._payload import parse_client_payload
from services.app_relay_service.config import AppRelaySettings
from services.app_relay_service.models import RelayOutcome
from services.app_relay_service.protocols import UpstreamRelayProtocol

router = APIRouter(route_class=DishkaRoute)


def _to_response(outcome: RelayOutcome) -> Response:
    return Response(
        content=outcome.body,
        status_code=outcome.status_code,
        media_type=outcome.content_type,
    )


@router.post(
    "/create-directory",
    summary="Create Directory",
    description="Relay a create-directory request to the upstream create endpoint",
    response_description="Upstream status and body, passed through",
)
async def create_directory(
    request: Request,
    relay: FromDishka[UpstreamRelayProtocol],
    config: FromDishka[AppRelaySettings],
    correlation_id: FromDishka[UUID],
) -> Response:
    """Forward ``{directoryName, webhook, discordLink?}`` to the create endpoint.

    The body is not validated; whatever the client sent is forwarded.
    """
    payload = parse_client_payload(await request.body())
    outcome = await relay.relay(
        config.CREATE_DIRECTORY_URL,
        payload,
        correlation_id=correlation_id,
        target_name="create_directory",
    )
    return _to_response(outcome)


@router.post(
    "/verification",
    summary="Verification",
    description="Relay a verification request to the upstream verification endpoint",
    response_description="Upstream status and body, passed through",
)
async def verification(
    request: Request,
    relay: FromDishka[UpstreamRelayProtocol],
    config: FromDishka[AppRelaySettings],
    correlation_id: FromDishka[UUID],
) -> Response:
    """Forward an arbitrary JSON body to the verification endpoint."""
    payload = parse_client_payload(await request.body())
    outcome = await relay.relay(
        config.VERIFICATION_URL,
        payload,
        correlation_id=correlation_id,
        target_name="verification",
    )
    return _to_response(outcome)
