"""Page routes: the SPA shell, its hydration payload, and server-side rendering."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from backend.models.page import PagePayload
from backend.services.pages import build_home_page, send_page, spa_renderer_for
from canvas.templates import TemplateRenderer

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def serve_home(request: Request) -> Response:
    """
    Serve the SPA shell for the home page.

    The canvas state is embedded for hydration; security, robots and caching
    headers come from the page flags.
    """
    page = build_home_page()
    return send_page(request, page, spa_renderer_for(page))


@router.get("/api/page", response_model=PagePayload)
async def get_home_state() -> PagePayload:
    """Hydration payload for the home page (Page.to_dict wire format)."""
    return PagePayload.from_page(build_home_page())


@router.post("/api/render", response_class=HTMLResponse)
async def render_page(request: Request, payload: PagePayload) -> Response:
    """
    Render a posted page server-side with the Mustache template renderer.

    Unregistered node names render as <div data-node="..."> wrappers.
    Validation errors in the payload → 422.
    """
    return send_page(request, payload.to_page(), TemplateRenderer())
