"""
Page service: builds the server's pages and sends them through canvas.

send_page() is the one place a canvas Response meets FastAPI: it wraps the
request in a StarletteExchange, applies compression settings, sends, and
returns the collected FastAPI response.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi import Response as HttpResponse

from backend.config import settings
from backend.services.exchange import StarletteExchange
from canvas.node import Node
from canvas.page import Page
from canvas.renderer import PageRenderer
from canvas.response import Response
from canvas.spa import SinglePageApplicationRenderer, generate_nonce

logger = logging.getLogger(__name__)


def build_home_page() -> Page:
    """The landing page: site metadata, strict CSP, a header and a content slot."""
    page = (
        Page()
        .set_title(settings.SITE_TITLE)
        .set_locale(settings.SITE_LOCALE)
        .set_meta("description", f"{settings.SITE_TITLE} home")
        .set_seo("og:title", settings.SITE_TITLE)
        .set_seo("og:type", "website")
        .use_strict_policy()
        .allow_script_from("'self'")
        .allow_style_from("'self'")
        .allow_image_from("'self'", "data:")
        .enable_csp()
        .force_https(settings.FORCE_HTTPS)
    )
    page.canvas.add_child(Node("header", {"title": settings.SITE_TITLE}))
    page.canvas.add_child(Node("main", {"slot": "content"}))
    return page


def spa_renderer_for(page: Page) -> SinglePageApplicationRenderer:
    """
    SPA renderer with a fresh nonce, allowed in the page's script-src so the
    inline hydration script passes the CSP.
    """
    nonce = generate_nonce()
    page.allow_script_from(f"'nonce-{nonce}'")
    return SinglePageApplicationRenderer(
        js_urls=settings.SPA_JS_URLS,
        css_urls=settings.SPA_CSS_URLS,
        mount_element=settings.SPA_MOUNT_ELEMENT,
        nonce=nonce,
    )


def send_page(request: Request, page: Page, renderer: PageRenderer, status_code: int = 200) -> HttpResponse:
    """Render page with renderer and return it as a FastAPI response."""
    exchange = StarletteExchange.from_request(request)
    response = (
        Response(renderer, page, exchange)
        .enable_compression(settings.COMPRESSION_ENABLED)
        .set_compression_level(settings.COMPRESSION_LEVEL)
        .set_status_code(status_code)
    )
    response.send()

    logger.info(
        "pages: sent %s %d (%d bytes, compressed=%s)",
        request.url.path,
        status_code,
        len(exchange.body),
        response.is_compressed,
    )
    return exchange.to_response()
