"""App Relay Service - Static page serving and upstream relay.

Serves a single HTML page under the route prefix and relays two whitelisted
POST endpoints to their upstream targets.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from services.app_relay_service.api.fallback_routes import router as fallback_router
from services.app_relay_service.api.health_routes import router as health_router
from services.app_relay_service.api.page_routes import router as page_router
from services.app_relay_service.api.relay_routes import router as relay_router
from services.app_relay_service.config import AppRelaySettings, settings as default_settings
from services.app_relay_service.di import AppRelayProvider, RequestContextProvider
from services.app_relay_service.middleware import CORSHeadersMiddleware, CorrelationIDMiddleware
from services.libs.relay_service_libs.error_handling.fastapi import (
    register_error_handlers as register_fastapi_error_handlers,
)
from services.libs.relay_service_libs.logging_utils import create_service_logger

logger = create_service_logger("app_relay_service")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("App Relay Service started")
    yield
    await app.state.di_container.close()
    logger.info("App Relay Service shutdown completed")


def create_app(
    settings: AppRelaySettings | None = None,
    container: AsyncContainer | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to inject; defaults to the environment-derived instance
        container: Prebuilt DI container; built from the production providers if omitted
    """
    settings = settings or default_settings

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version="0.1.0",
        description="App Relay Service - Serves the app page and relays its API calls",
        docs_url="/docs" if settings.is_development() else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development() else None,
        redirect_slashes=False,
        lifespan=lifespan,
    )

    # Register error handlers
    register_fastapi_error_handlers(app)

    # CORS headers must land on every response, preflight included
    app.add_middleware(CORSHeadersMiddleware, allowed_origin=settings.ALLOWED_ORIGIN)

    # Correlation ID middleware is outermost
    app.add_middleware(CorrelationIDMiddleware)

    app.include_router(health_router)
    app.include_router(page_router, prefix=settings.ROUTE_PREFIX, tags=["Page"])
    app.include_router(relay_router, prefix=settings.ROUTE_PREFIX, tags=["Relay"])

    # Setup Dishka DI container
    if container is None:
        container = make_async_container(
            AppRelayProvider(settings),
            RequestContextProvider(),
            FastapiProvider(),
        )
    setup_dishka(container, app)
    app.state.di_container = container

    # Catch-all 404 must be registered after every real route
    app.include_router(fallback_router)

    return app


if __name__ == "__main__":
    import uvicorn

    from services.libs.relay_service_libs.logging_utils import configure_service_logging

    configure_service_logging(
        default_settings.SERVICE_NAME,
        environment=default_settings.ENVIRONMENT.value,
        log_level=default_settings.LOG_LEVEL,
    )
    uvicorn.run(
        create_app(default_settings),
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )
