"""Dependency Injection providers for App Relay Service.

Provides Dishka DI container setup with APP-scoped infrastructure
and REQUEST-scoped context providers.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import UUID, uuid4

import httpx
from dishka import Provider, Scope, provide
from fastapi import Request
from prometheus_client import CollectorRegistry

from services.app_relay_service.clients.upstream_client import UpstreamRelayClient
from services.app_relay_service.config import AppRelaySettings
from services.app_relay_service.metrics import RelayMetrics
from services.app_relay_service.models import StaticPage
from services.app_relay_service.page import render_page
from services.app_relay_service.protocols import UpstreamRelayProtocol


class AppRelayProvider(Provider):
    """Infrastructure provider for App Relay Service.

    Provides APP-scoped dependencies: config, HTTP client, metrics, relay
    client and the rendered page.
    """

    scope = Scope.APP

    def __init__(self, settings: AppRelaySettings) -> None:
        super().__init__()
        self._settings = settings

    @provide
    def get_config(self) -> AppRelaySettings:
        """Provide the injected settings instance."""
        return self._settings

    @provide
    async def get_http_client(self, config: AppRelaySettings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client with connection pooling."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(
                config.UPSTREAM_TIMEOUT_SECONDS,
                connect=config.UPSTREAM_CONNECT_TIMEOUT_SECONDS,
            )
        ) as client:
            yield client

    @provide
    def get_metrics_registry(self) -> CollectorRegistry:
        """Provide a registry owned by this container."""
        return CollectorRegistry()

    @provide
    def get_metrics(self, registry: CollectorRegistry) -> RelayMetrics:
        return RelayMetrics(registry)

    @provide
    def provide_upstream_relay(
        self,
        http_client: httpx.AsyncClient,
        metrics: RelayMetrics,
        config: AppRelaySettings,
    ) -> UpstreamRelayProtocol:
        """Provide upstream relay client singleton."""
        return UpstreamRelayClient(http_client, metrics, config.SERVICE_NAME)

    @provide
    def provide_static_page(self, config: AppRelaySettings) -> StaticPage:
        """Render the page once per application."""
        return render_page(
            config.STATIC_DIR,
            config.ROUTE_PREFIX,
            config.INSPECTION_GUARD_ENABLED,
        )


class RequestContextProvider(Provider):
    """Request-scoped provider for correlation context.

    The Request itself is supplied to the container by FastapiProvider.
    """

    @provide(scope=Scope.REQUEST)
    def provide_correlation_id(self, request: Request) -> UUID:
        """Provide correlation ID from request state."""
        return getattr(request.state, "correlation_id", uuid4())
