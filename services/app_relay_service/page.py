"""Rendering of the static page served at the route prefix."""

from __future__ import annotations

from pathlib import Path

from services.app_relay_service.models import StaticPage
from services.libs.relay_service_libs.logging_utils import create_service_logger

logger = create_service_logger("app_relay.page")

INDEX_FILE = "index.html"
GUARD_FILE = "inspection_guard.js"
GUARD_MARKER = "<!-- inspection-guard -->"
ROUTE_PREFIX_MARKER = "__ROUTE_PREFIX__"


def render_page(static_dir: Path, route_prefix: str, inspection_guard_enabled: bool) -> StaticPage:
    """Read index.html once and fill in its placeholders.

    The inspection guard script is inlined at the marker only when enabled;
    otherwise the marker is removed. A missing guard file disables the guard
    instead of failing the page.
    """
    index_path = static_dir / INDEX_FILE
    if not index_path.exists():
        logger.warning("Page not found", index_path=str(index_path))
        return StaticPage(html=None, source=str(index_path))

    html = index_path.read_text(encoding="utf-8").replace(ROUTE_PREFIX_MARKER, route_prefix)

    guard = ""
    if inspection_guard_enabled:
        guard_path = static_dir / GUARD_FILE
        if guard_path.exists():
            guard = f"<script>\n{guard_path.read_text(encoding='utf-8')}</script>"
        else:
            logger.warning("Inspection guard script not found", guard_path=str(guard_path))

    html = html.replace(GUARD_MARKER, guard)
    logger.info(
        "Rendered page",
        index_path=str(index_path),
        inspection_guard=bool(guard),
    )
    return StaticPage(html=html, source=str(index_path))
