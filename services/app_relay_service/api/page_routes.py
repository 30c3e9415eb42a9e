"""Page route for App Relay Service."""

from __future__ import annotations

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from fastapi.responses import HTMLResponse, JSONResponse

from services.app_relay_service.models import StaticPage

router = APIRouter(route_class=DishkaRoute)

HTML_CONTENT_TYPE = "text/html; charset=utf-8"


@router.get("", include_in_schema=False, response_model=None)
@router.get("/", include_in_schema=False, response_model=None)
async def serve_page(page: FromDishka[StaticPage]) -> HTMLResponse | JSONResponse:
    """Serve the page at the route prefix, with or without trailing slash."""
    if page.html is not None:
        return HTMLResponse(content=page.html, media_type=HTML_CONTENT_TYPE)
    return JSONResponse(
        status_code=503,
        content={"error": "Page not available", "source": page.source},
    )
