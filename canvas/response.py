"""
Canvas: Response

One Response per HTTP exchange: render the page through a PageRenderer,
join the fragments, gzip when the client accepts it, then emit status,
headers and body to the injected Exchange.

    response = Response(renderer, page, exchange).set_status_code(200)
    response.send()

Header synthesis is driven by page state:
  - CSP_ENABLED  → Content-Security-Policy (when the built policy is non-empty)
  - FORCE_HTTPS  → Strict-Transport-Security
  - NO_INDEX / NO_FOLLOW → X-Robots-Tag
  - NO_CACHE     → Cache-Control, Pragma, Expires

send() is single-use. Calling it twice on the same Response writes the
headers and body a second time; what the transport does with that is
undefined.
"""

from __future__ import annotations

import codecs
import gzip
import logging
from collections.abc import Mapping

from canvas.exchange import Exchange
from canvas.page import Page
from canvas.renderer import PageRenderer
from canvas.types import PageFlag

logger = logging.getLogger(__name__)

MIN_COMPRESSION_LEVEL = 1
MAX_COMPRESSION_LEVEL = 9
DEFAULT_COMPRESSION_LEVEL = 6

FALLBACK_CHARSET = "utf-8"

# Sent on every response
SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

HSTS_VALUE = "max-age=31536000; includeSubDomains"

NO_CACHE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class Response:
    """Renders a page and writes it, with derived headers, to an exchange."""

    def __init__(self, renderer: PageRenderer, page: Page, exchange: Exchange | None = None) -> None:
        self._renderer = renderer
        self._page = page
        self._exchange = exchange
        self._compression_enabled = True
        self._compression_level = DEFAULT_COMPRESSION_LEVEL
        self._supported_encodings: list[str] = ["gzip"]
        self._status_code = 200
        self._custom_headers: dict[str, str] = {}
        # Filled in by negotiation when the body gets compressed
        self._encoding_headers: dict[str, str] = {}

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def compression_level(self) -> int:
        return self._compression_level

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def custom_headers(self) -> dict[str, str]:
        return dict(self._custom_headers)

    def enable_compression(self, enabled: bool = True) -> Response:
        self._compression_enabled = enabled
        return self

    def set_compression_level(self, level: int) -> Response:
        """Set the gzip level, clamped into [1, 9]."""
        self._compression_level = max(MIN_COMPRESSION_LEVEL, min(MAX_COMPRESSION_LEVEL, level))
        return self

    def set_supported_encodings(self, encodings: list[str]) -> Response:
        self._supported_encodings = list(encodings)
        return self

    def set_status_code(self, code: int) -> Response:
        self._status_code = code
        return self

    def add_header(self, name: str, value: str) -> Response:
        self._custom_headers[name] = value
        return self

    def add_headers(self, headers: Mapping[str, str]) -> Response:
        for name, value in headers.items():
            self._custom_headers[name] = value
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> str | bytes:
        """
        Render the page.

        Returns the newline-joined fragments as a str, or gzip bytes when
        compression was negotiated with the client.
        """
        fragments = self._renderer.generate_html(self._page)
        output = "\n".join(fragments)
        return self._apply_compression(output)

    def send(self) -> None:
        """Render, then write status, headers and body to the exchange."""
        if self._exchange is None:
            raise ValueError("Response.send() needs an exchange to write to")

        output = self.render()
        body = output if isinstance(output, bytes) else self._encode(output)

        self._send_headers(len(body))
        self._exchange.write(body)

    @property
    def is_compressed(self) -> bool:
        """True once render() has produced a compressed body."""
        return bool(self._encoding_headers)

    # ------------------------------------------------------------------
    # Compression
    # ------------------------------------------------------------------

    def _apply_compression(self, output: str) -> str | bytes:
        self._encoding_headers = {}

        if not self._compression_enabled:
            return output

        encoding = self._negotiate_encoding()
        if encoding == "gzip":
            return gzip.compress(self._encode(output), compresslevel=self._compression_level, mtime=0)
        return output

    def _negotiate_encoding(self) -> str | None:
        if self._exchange is None:
            return None

        accept = self._exchange.request_header("Accept-Encoding")
        if accept is None:
            return None

        accept = accept.lower()
        for encoding in self._supported_encodings:
            if encoding == "gzip" and "gzip" in accept:
                self._encoding_headers = {
                    "Content-Encoding": "gzip",
                    "Vary": "Accept-Encoding",
                }
                logger.debug("response: negotiated gzip for accept-encoding %r", accept)
                return "gzip"

        logger.debug("response: no supported encoding in %r", accept)
        return None

    def _encode(self, output: str) -> bytes:
        charset = self._page.charset
        try:
            codecs.lookup(charset)
        except LookupError:
            logger.warning("response: unknown charset %r, encoding body as %s", charset, FALLBACK_CHARSET)
            charset = FALLBACK_CHARSET
        return output.encode(charset, errors="replace")

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def _send_headers(self, content_length: int) -> None:
        exchange = self._exchange
        assert exchange is not None

        exchange.set_status(self._status_code)
        exchange.set_header("Content-Type", f"text/html; charset={self._page.charset}")

        if not self._encoding_headers:
            exchange.set_header("Content-Length", str(content_length))

        for name, value in self._encoding_headers.items():
            exchange.set_header(name, value)

        for name, value in self.build_headers().items():
            exchange.set_header(name, value)

        for name, value in self._custom_headers.items():
            exchange.set_header(name, value)

    def build_headers(self) -> dict[str, str]:
        """Security, SEO and caching headers derived from the page, in emission order."""
        headers: dict[str, str] = {}

        # Security
        if self._page.is_csp_enabled():
            csp = self.build_csp_header()
            if csp:
                headers["Content-Security-Policy"] = csp

        if self._page.has_flag(PageFlag.FORCE_HTTPS):
            headers["Strict-Transport-Security"] = HSTS_VALUE

        headers.update(SECURITY_HEADERS)

        # SEO
        robots: list[str] = []
        if self._page.has_flag(PageFlag.NO_INDEX):
            robots.append("noindex")
        if self._page.has_flag(PageFlag.NO_FOLLOW):
            robots.append("nofollow")
        if robots:
            headers["X-Robots-Tag"] = ", ".join(robots)

        # Caching
        if self._page.has_flag(PageFlag.NO_CACHE):
            headers.update(NO_CACHE_HEADERS)

        return headers

    def build_csp_header(self) -> str:
        directives: list[str] = []
        for directive, value in self._page.csp.items():
            if isinstance(value, list):
                directives.append(f"{directive} {' '.join(value)}")
            elif value == "":
                directives.append(directive)
            else:
                directives.append(f"{directive} {value}")
        return "; ".join(directives)
