"""
Canvas: Single Page Application renderer

Emits a minimal HTML shell for a client-side app: document head built from
the page metadata, a mount element, the page state injected as JSON for
hydration, and the app's script bundles.

Exact output structure:
  <!DOCTYPE html>
  <html lang="{locale}">
  <head>
  <meta charset="{charset}">
  <meta name="viewport" ...>           (unless the page sets its own viewport)
  <title>{title}</title>
  <meta name=... content=...>          (one per meta tag)
  <meta property=... content=...>      (one per SEO tag)
  <link rel="stylesheet" href=...>     (one per CSS url)
  </head>
  <body>
  <div id="{mount_element}"></div>
  <script nonce="{nonce}">
  window.{state_variable} =
  {state json}
  ;
  </script>
  <script src=... nonce="{nonce}" defer></script>   (one per JS url)
  </body>
  </html>

A fresh nonce is drawn for every render unless one is fixed on the renderer.
The CSP header is built after rendering, so a host that wants the inline
script allowed draws the nonce up front:

    nonce = generate_nonce()
    page.allow_script_from(f"'nonce-{nonce}'").enable_csp()
    renderer = SinglePageApplicationRenderer(js_urls=[...], nonce=nonce)

The nonce used last is kept on ``last_nonce``.
"""

from __future__ import annotations

import base64
import json
import secrets
from dataclasses import dataclass, field
from html import escape as _html_escape
from typing import Any

from canvas.page import Page

NONCE_BYTES = 16


@dataclass
class SinglePageApplicationRenderer:
    """Renders the SPA shell for a page. Satisfies PageRenderer."""

    js_urls: list[str] = field(default_factory=list)
    css_urls: list[str] = field(default_factory=list)
    mount_element: str = "app"
    state_variable: str = "__PAGE_STATE__"
    include_viewport: bool = True
    nonce: str | None = None
    last_nonce: str | None = field(default=None, init=False)

    def generate_html(self, page: Page) -> list[str]:
        nonce = self.nonce or generate_nonce()
        self.last_nonce = nonce

        parts: list[str] = []
        parts.append("<!DOCTYPE html>")
        parts.append(f'<html lang="{escape(page.locale)}">')
        parts.append("<head>")
        parts.append(f'<meta charset="{escape(page.charset)}">')

        meta_tags = page.meta_tags
        if self.include_viewport and "viewport" not in meta_tags:
            parts.append('<meta name="viewport" content="width=device-width, initial-scale=1">')

        parts.append(f"<title>{escape(page.title)}</title>")

        for name, content in meta_tags.items():
            parts.append(f'<meta name="{escape(name)}" content="{escape(content)}">')

        for prop, content in page.seo_tags.items():
            parts.append(f'<meta property="{escape(prop)}" content="{escape(content)}">')

        for url in self.css_urls:
            parts.append(f'<link rel="stylesheet" href="{escape(url)}">')

        parts.append("</head>")
        parts.append("<body>")
        parts.append(f'<div id="{escape(self.mount_element)}"></div>')

        # Hydration state
        parts.append(f'<script nonce="{escape(nonce)}">')
        parts.append(f"window.{self.state_variable} = ")
        parts.append(state_json(build_page_state(page)))
        parts.append(";")
        parts.append("</script>")

        for url in self.js_urls:
            parts.append(f'<script src="{escape(url)}" nonce="{escape(nonce)}" defer></script>')

        parts.append("</body>")
        parts.append("</html>")
        return parts


def build_page_state(page: Page) -> dict[str, Any]:
    """The subset of the page the client app hydrates from."""
    return {
        "title": page.title,
        "locale": page.locale,
        "meta": page.meta_tags,
        "seo": page.seo_tags,
        "canvas": page.canvas.to_dict(),
    }


def state_json(state: dict[str, Any]) -> str:
    """Compact JSON that cannot close the surrounding <script> element."""
    return json.dumps(state, ensure_ascii=False, separators=(",", ":")).replace("</", "<\\/")


def generate_nonce() -> str:
    return base64.b64encode(secrets.token_bytes(NONCE_BYTES)).decode("ascii")


def escape(text: str) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)
